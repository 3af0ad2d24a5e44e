from __future__ import annotations

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


class ProcessingThrottle(Generic[T]):
    """
    Minimum-interval gate with a cached last result.

    ``admit()`` answers whether enough wall-clock time has passed since the
    last stored result; callers that are refused reuse :attr:`last`.

    Notes
    -----
    - The clock is expected to be monotonic, in seconds.
    - Nothing is scheduled: the gate is a plain timestamp comparison made
      on each call.
    """

    def __init__(self, min_interval_s: float = 0.05, clock: Clock | None = None) -> None:
        if min_interval_s < 0:
            raise ValueError("min_interval_s must be >= 0")
        self.min_interval_s = float(min_interval_s)
        self._clock: Clock = clock or time.monotonic
        self._last_time: Optional[float] = None
        self._last: Optional[T] = None

    def now(self) -> float:
        return float(self._clock())

    def admit(self, now: float | None = None) -> bool:
        """Return True when a fresh computation is allowed at ``now``."""
        if self._last is None or self._last_time is None:
            return True
        t = self.now() if now is None else float(now)
        return (t - self._last_time) >= self.min_interval_s

    def store(self, result: T, now: float) -> T:
        """Remember ``result`` as computed at ``now`` and return it."""
        self._last = result
        self._last_time = float(now)
        return result

    @property
    def last(self) -> Optional[T]:
        return self._last

    def reset(self) -> None:
        self._last = None
        self._last_time = None
