# src/auto_reload/reload/backoff.py

from __future__ import annotations

DEFAULT_MIN_RELOAD_SECONDS = 1
DEFAULT_MAX_RELOAD_SECONDS = 1800


class ReloadBackoff:
    """
    Shared reload interval, doubling from min_seconds up to max_seconds.

    One instance serves the whole queue; there is no per-item state and no attempt limit.

    Usage:
        backoff.reset()            # fresh cycle: current = min
        period = backoff.advance() # period to use now; current doubles for next time
    """

    def __init__(
            self,
            min_seconds: float = DEFAULT_MIN_RELOAD_SECONDS,
            max_seconds: float = DEFAULT_MAX_RELOAD_SECONDS,
    ) -> None:
        if min_seconds < 1:
            raise ValueError(f"min_seconds must be >= 1, got {min_seconds}")
        if max_seconds < min_seconds:
            raise ValueError(f"max_seconds ({max_seconds}) must be >= min_seconds ({min_seconds})")
        self._min = min_seconds
        self._max = max_seconds
        self._current = min_seconds

    @property
    def min_seconds(self) -> float:
        return self._min

    @property
    def max_seconds(self) -> float:
        return self._max

    @property
    def current(self) -> float:
        """Interval the next (re)start will use."""
        return self._current

    def reset(self) -> None:
        self._current = self._min

    def advance(self) -> float:
        period = self._current
        self._current = min(self._current * 2, self._max)
        return period
