# src/auto_reload/connectivity/manual.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable

from .models import ConnectionKind, ConnectivityEvent

logger = logging.getLogger(__name__)


class ManualConnectivitySource:
    """
    Connectivity source driven by code instead of the platform.

    - every changes() iterator starts with the current state
    - emit(kinds) updates the state and pushes it to every open iterator, in order
    """

    def __init__(self, initial: Iterable[ConnectionKind] = (ConnectionKind.NONE,)) -> None:
        self._current: ConnectivityEvent = list(initial) or [ConnectionKind.NONE]
        self._listeners: list[asyncio.Queue[ConnectivityEvent]] = []
        self.probe_calls = 0

    @property
    def current(self) -> ConnectivityEvent:
        return list(self._current)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def check_connectivity(self) -> ConnectivityEvent:
        self.probe_calls += 1
        return list(self._current)

    def emit(self, kinds: Iterable[ConnectionKind]) -> None:
        self._current = list(kinds)
        logger.debug("Manual connectivity -> %s", self._current)
        for q in self._listeners:
            q.put_nowait(list(self._current))

    async def changes(self) -> AsyncIterator[ConnectivityEvent]:
        q: asyncio.Queue[ConnectivityEvent] = asyncio.Queue()
        q.put_nowait(list(self._current))
        self._listeners.append(q)
        try:
            while True:
                yield await q.get()
        finally:
            self._listeners.remove(q)
