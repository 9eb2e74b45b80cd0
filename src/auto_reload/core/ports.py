# src/auto_reload/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the reload core.

The manager depends on Protocols instead of concrete implementations.
This keeps the platform connectivity facility swappable and makes testing easier:
tests drive the manager with a manual source instead of real network state.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Protocol

from ..connectivity.models import ConnectionKind

Operation = Callable[[], Awaitable[None]]
# Zero-argument coroutine function; raising means "not done yet, retry later".

CompletionCallback = Callable[[str], None]
# Called once with the id after the operation succeeded.


class ConnectivitySource(Protocol):
    """
    Platform-side port: where connection kinds come from.

    changes() must start with the current state and then yield on every transition.
    """

    async def check_connectivity(self) -> list[ConnectionKind]: ...

    def changes(self) -> AsyncIterator[list[ConnectionKind]]: ...


class ConnectivitySubscription(Protocol):
    @property
    def active(self) -> bool: ...

    async def cancel(self) -> None: ...


class AutoFutureManager(Protocol):
    """Caller-facing contract: register work for automatic reload, dispose when done."""

    async def register(
            self,
            id: str,
            operation: Operation,
            on_complete: CompletionCallback | None = None,
    ) -> None: ...

    async def dispose(self) -> None: ...
