# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio

from auto_reload.connectivity.manual import ManualConnectivitySource
from auto_reload.connectivity.models import ConnectionKind
from auto_reload.connectivity.monitor import ConnectivityMonitor
from auto_reload.reload.manager import AutoRequestManager

from .fakes import ControlledSleep


@pytest.fixture()
def source() -> ManualConnectivitySource:
    """Starts offline so nothing fires until a test emits a usable state."""
    return ManualConnectivitySource([ConnectionKind.NONE])


@pytest.fixture()
def sleep() -> ControlledSleep:
    return ControlledSleep()


@pytest_asyncio.fixture()
async def manager(source: ManualConnectivitySource, sleep: ControlledSleep) -> AsyncIterator[AutoRequestManager]:
    """
    Manager wired to the manual source and the controlled sleep, min=1 max=4.

    Always disposed at the end so no timer or subscription task outlives the test.
    """
    m = AutoRequestManager(
        ConnectivityMonitor(source),
        min_reload_seconds=1,
        max_reload_seconds=4,
        sleep=sleep,
    )
    yield m
    await m.dispose()


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
