# src/auto_reload/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- picks a connectivity source (psutil by default, injectable for scripted runs),
- wires the monitor and the manager together.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..connectivity.monitor import ConnectivityMonitor, PsutilConnectivitySource
from ..core.ports import ConnectivitySource
from ..reload.manager import AutoRequestManager
from ..reload.policies import get_policy

logger = logging.getLogger(__name__)


def create_monitor(*, settings: Settings | None = None, source: ConnectivitySource | None = None) -> ConnectivityMonitor:
    if settings is None:
        settings = get_settings()
    if source is None:
        source = PsutilConnectivitySource(poll_interval_seconds=settings.poll_interval_seconds)
    return ConnectivityMonitor(source)


def create_manager(
        settings: Settings | None = None,
        *,
        source: ConnectivitySource | None = None,
) -> AutoRequestManager:
    """
    Build an AutoRequestManager from settings.

    Keeping settings and source injectable makes the wiring testable without real network state.
    Raises ValueError for an unknown policy or an invalid interval range.
    """
    if settings is None:
        settings = get_settings()

    monitor = create_monitor(settings=settings, source=source)
    manager = AutoRequestManager(
        monitor,
        min_reload_seconds=settings.min_interval_seconds,
        max_reload_seconds=settings.max_interval_seconds,
        usability_policy=get_policy(settings.usability_policy),
    )
    logger.debug(
        "Manager created min=%ss max=%ss policy=%s source=%s",
        settings.min_interval_seconds,
        settings.max_interval_seconds,
        settings.usability_policy,
        type(monitor.source).__name__,
    )
    return manager
