# src/auto_reload/reload/manager.py

from __future__ import annotations

"""
Automatic request manager.

A connectivity-gated retry queue that:
- keeps registered operations keyed by caller ids (first registration wins),
- waits for a usable connection before doing anything,
- retries every queued operation on one shared timer,
- doubles the timer period after each firing that leaves work queued.

All state lives on the event loop that owns the manager; nothing here is thread-safe.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType

from ..connectivity.models import ConnectivityEvent
from ..connectivity.monitor import ConnectivityMonitor
from ..core.ports import CompletionCallback, ConnectivitySubscription, Operation
from .backoff import DEFAULT_MAX_RELOAD_SECONDS, DEFAULT_MIN_RELOAD_SECONDS, ReloadBackoff
from .policies import UsabilityPolicy, first_match

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class AutoRequestManager:
    """
    Manager of automatic re-sending of requests.

    Each new attempt happens after a longer pause, from min_reload_seconds to
    max_reload_seconds, growing exponentially. The pause is shared by the whole
    queue and there is no retry ceiling: a failing operation is retried on every
    firing until it succeeds or the manager is disposed.
    """

    def __init__(
            self,
            monitor: ConnectivityMonitor,
            *,
            min_reload_seconds: float = DEFAULT_MIN_RELOAD_SECONDS,
            max_reload_seconds: float = DEFAULT_MAX_RELOAD_SECONDS,
            usability_policy: UsabilityPolicy = first_match,
            sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._monitor = monitor
        self._backoff = ReloadBackoff(min_reload_seconds, max_reload_seconds)
        self._is_usable = usability_policy
        self._sleep = sleep

        self._queue: dict[str, Operation] = {}
        self._callbacks: dict[str, CompletionCallback] = {}

        self._subscription: ConnectivitySubscription | None = None
        self._timer: asyncio.Task[None] | None = None
        self._draining: asyncio.Task[None] | None = None
        self._firing = False
        self._disposed = False

    # ---- introspection ----

    @property
    def pending_ids(self) -> tuple[str, ...]:
        return tuple(self._queue)

    def is_pending(self, id: str) -> bool:
        return id in self._queue

    @property
    def is_running(self) -> bool:
        """True while a reload cycle (timer) is in progress."""
        return self._timer is not None

    @property
    def current_interval(self) -> float:
        return self._backoff.current

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ---- public API ----

    async def register(
            self,
            id: str,
            operation: Operation,
            on_complete: CompletionCallback | None = None,
    ) -> None:
        """
        Register an operation for automatic reload.

        An id that is already queued keeps its first operation and callback.
        Returns once connectivity monitoring is primed; never waits for the operation.
        """
        if self._disposed:
            logger.warning("register(%s) ignored: manager is disposed", id)
            return

        if id in self._queue:
            logger.debug("Request %s already queued; keeping the first registration", id)
        else:
            self._queue[id] = operation
            if on_complete is not None:
                self._callbacks[id] = on_complete
            logger.debug("Request %s queued (pending=%d)", id, len(self._queue))

        await self._try_reload()

    async def dispose(self) -> None:
        """
        Drop all pending work, stop the timer and the connectivity subscription.

        Idempotent and terminal. An operation awaited by a firing in progress
        finishes on its own; its outcome is ignored.
        """
        if self._disposed:
            return
        self._disposed = True

        self._queue.clear()
        self._callbacks.clear()

        timer, self._timer = self._timer, None
        if timer is not None:
            if self._firing:
                # Let the awaited operation finish; the pass stops right after it.
                self._draining = timer
            else:
                timer.cancel()

        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            await subscription.cancel()

        logger.info("Auto request manager disposed.")

    async def __aenter__(self) -> AutoRequestManager:
        return self

    async def __aexit__(
            self,
            exc_type: type[BaseException] | None,
            exc: BaseException | None,
            tb: TracebackType | None,
    ) -> None:
        await self.dispose()

    # ---- connectivity ----

    async def _try_reload(self) -> None:
        kinds: ConnectivityEvent | None = None
        try:
            kinds = await self._monitor.check_current()
        except Exception:
            logger.warning("Connectivity probe failed; subscribing anyway", exc_info=True)

        if self._disposed:
            return
        if self._subscription is None:
            self._subscription = self._monitor.listen(self._on_connectivity)

        # Change streams stay silent on a steady connection, so the probe result
        # is the only trigger for work registered after the queue drained.
        if kinds is not None:
            self._on_connectivity(kinds)

    def _on_connectivity(self, kinds: ConnectivityEvent) -> None:
        if self._disposed:
            return
        if not self._is_usable(kinds):
            logger.debug("Connectivity %s is not usable; waiting", kinds)
            return
        if self._timer is not None:
            logger.debug("Connectivity %s: reload cycle already running", kinds)
            return

        logger.info("Connectivity %s is usable; starting reload cycle", kinds)
        self._backoff.reset()
        self._start_timer()

    # ---- timer ----

    def _start_timer(self) -> None:
        self._close_timer()
        period = self._backoff.advance()
        logger.info("Reload timer started period=%ss pending=%d", period, len(self._queue))
        self._timer = asyncio.get_running_loop().create_task(
            self._run_timer(period),
            name="auto_reload.timer",
        )

    def _close_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None and timer is not asyncio.current_task():
            timer.cancel()

    async def _run_timer(self, period: float) -> None:
        me = asyncio.current_task()
        try:
            while True:
                await self._sleep(period)
                if self._disposed or self._timer is not me:
                    return

                await self._fire()

                if self._disposed:
                    return
                if not self._queue:
                    logger.info("Reload queue drained; timer stopped")
                    return

                period = self._backoff.advance()
                logger.info("Reload rescheduled period=%ss pending=%d", period, len(self._queue))
        finally:
            if self._timer is me:
                self._timer = None

    async def _fire(self) -> None:
        # Snapshot: ids registered during the pass wait for the next firing.
        keys = list(self._queue)
        self._firing = True
        try:
            for key in keys:
                if self._disposed:
                    break
                operation = self._queue.get(key)
                if operation is None:
                    continue

                try:
                    await operation()
                except Exception:
                    # The item stays queued; the next firing retries it.
                    logger.exception("Unsuccessful attempt to execute request id=%s", key)
                    continue

                self._complete(key, operation)
        finally:
            self._firing = False

    def _complete(self, key: str, operation: Operation) -> None:
        if self._disposed or self._queue.get(key) is not operation:
            return

        del self._queue[key]
        callback = self._callbacks.pop(key, None)
        logger.info("Request %s completed (pending=%d)", key, len(self._queue))

        if callback is None:
            return
        try:
            callback(key)
        except Exception:
            logger.exception("on_complete callback failed id=%s", key)
