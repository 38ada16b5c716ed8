"""Clock - wall-clock source, tick counter, and tick period."""

import time
from typing import Callable


class Clock:
    def __init__(self, period: float = 1.0, now: Callable[[], float] = time.time) -> None:
        if period <= 0:
            raise ValueError("period must be positive")
        self._period = period
        self._now = now
        self._tick_number = 0

    @property
    def period(self) -> float:
        return self._period

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def now_ms(self) -> int:
        """Current wall-clock time in epoch milliseconds."""
        return int(self._now() * 1000)

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number
