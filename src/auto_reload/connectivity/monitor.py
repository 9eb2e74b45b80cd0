# src/auto_reload/connectivity/monitor.py

from __future__ import annotations

"""
Connectivity monitor.

A thin adapter over a platform ConnectivitySource:
- check_current(): one-shot probe,
- listen(callback): subscribe to the change stream; every event is forwarded as-is.

No filtering or deduplication happens here; consumers classify events themselves.
"""

import asyncio
import contextlib
import logging
import re
import sys
from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from typing import Any

import psutil

from ..core.ports import ConnectivitySource
from .models import ConnectionKind, ConnectivityEvent

logger = logging.getLogger(__name__)

ConnectivityCallback = Callable[[ConnectivityEvent], None]

# Checked in this order; the first matching prefix wins.
_INTERFACE_PREFIXES: tuple[tuple[tuple[str, ...], ConnectionKind], ...] = (
    (("wl", "wifi", "wi-fi", "ath"), ConnectionKind.WIFI),
    (("wwan", "rmnet", "ppp", "ccmni", "pdp_ip"), ConnectionKind.MOBILE),
    (("eth", "en"), ConnectionKind.ETHERNET),
    (("tun", "tap", "wg", "utun", "ipsec"), ConnectionKind.VPN),
    (("bnep", "bt", "bluetooth"), ConnectionKind.BLUETOOTH),
)

_LOOPBACK_RE = re.compile(r"lo\d*|loopback.*")

# Report order for a multi-interface host.
_REPORT_ORDER = (
    ConnectionKind.WIFI,
    ConnectionKind.MOBILE,
    ConnectionKind.ETHERNET,
    ConnectionKind.VPN,
    ConnectionKind.BLUETOOTH,
    ConnectionKind.OTHER,
)


def classify_interface(name: str) -> ConnectionKind | None:
    """Map an interface name to a connection kind (None for loopback)."""
    low = name.strip().lower()
    if _LOOPBACK_RE.fullmatch(low):
        return None
    # Built-in Wi-Fi on macOS is en0; other en* ports are wired.
    if sys.platform == "darwin" and low == "en0":
        return ConnectionKind.WIFI
    for prefixes, kind in _INTERFACE_PREFIXES:
        if low.startswith(prefixes):
            return kind
    return ConnectionKind.OTHER


def classify_interfaces(stats: Mapping[str, Any]) -> ConnectivityEvent:
    """
    Convert psutil.net_if_stats() output into an ordered connectivity report.

    Only interfaces that are up count. An empty result is reported as [NONE].
    """
    found: set[ConnectionKind] = set()
    for name, st in stats.items():
        if not getattr(st, "isup", False):
            continue
        kind = classify_interface(name)
        if kind is not None:
            found.add(kind)

    if not found:
        return [ConnectionKind.NONE]
    return [k for k in _REPORT_ORDER if k in found]


class PsutilConnectivitySource:
    """
    Platform source backed by psutil network interface stats.

    The change stream polls every poll_interval_seconds and yields only when the
    report differs from the previous one (the first poll always yields).
    """

    def __init__(self, poll_interval_seconds: float = 2.0) -> None:
        self._poll_s = max(0.1, float(poll_interval_seconds))

    async def check_connectivity(self) -> ConnectivityEvent:
        stats = await asyncio.to_thread(psutil.net_if_stats)
        return classify_interfaces(stats)

    async def changes(self) -> AsyncIterator[ConnectivityEvent]:
        last: ConnectivityEvent | None = None
        while True:
            try:
                kinds = await self.check_connectivity()
            except Exception:
                logger.warning("psutil probe failed; will retry", exc_info=True)
            else:
                if kinds != last:
                    last = kinds
                    yield list(kinds)
            await asyncio.sleep(self._poll_s)


class StaticConnectivitySource:
    """Source with a fixed state: yields it once, then never changes."""

    def __init__(self, kinds: Iterable[ConnectionKind]) -> None:
        self._kinds = list(kinds) or [ConnectionKind.NONE]

    async def check_connectivity(self) -> ConnectivityEvent:
        return list(self._kinds)

    async def changes(self) -> AsyncIterator[ConnectivityEvent]:
        yield list(self._kinds)
        await asyncio.Event().wait()


class StreamSubscription:
    """Handle for a running listen() pump task."""

    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done()

    async def cancel(self) -> None:
        if self._task.done():
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task


class ConnectivityMonitor:
    """Adapter the reload manager talks to."""

    def __init__(self, source: ConnectivitySource) -> None:
        self._source = source

    @property
    def source(self) -> ConnectivitySource:
        return self._source

    async def check_current(self) -> ConnectivityEvent:
        return await self._source.check_connectivity()

    def listen(self, callback: ConnectivityCallback) -> StreamSubscription:
        """
        Forward every event of the change stream to callback, in order.

        Must be called from a running event loop. A raising callback is logged and
        the subscription keeps going; a failing stream ends the subscription.
        """
        task = asyncio.get_running_loop().create_task(
            self._pump(callback),
            name="auto_reload.connectivity",
        )
        logger.info("Connectivity subscription started.")
        return StreamSubscription(task)

    async def _pump(self, callback: ConnectivityCallback) -> None:
        stream = self._source.changes()
        try:
            async for kinds in stream:
                try:
                    callback(list(kinds))
                except Exception:
                    logger.exception("Connectivity callback failed kinds=%s", kinds)
        except Exception:
            logger.exception("Connectivity stream failed; subscription closed.")
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                with contextlib.suppress(Exception):
                    await aclose()
            logger.info("Connectivity subscription stopped.")
