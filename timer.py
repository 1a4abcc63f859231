from __future__ import annotations

import math
import time
from typing import Callable


class SessionTimer:
    """Wall-clock timer for a single practice attempt.

    Elapsed time is always ``now - started_at``; nothing is accumulated
    between ticks, so polling frequency has no effect on the result.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: float | None = None
        self._stopped_at: float | None = None

    @property
    def started_at(self) -> float | None:
        return self._started_at

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def start(self) -> float:
        self._started_at = self._clock()
        self._stopped_at = None
        return self._started_at

    def stop(self) -> int:
        if self.running:
            self._stopped_at = self._clock()
        return self.elapsed()

    def reset(self) -> None:
        self._started_at = None
        self._stopped_at = None

    def elapsed(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return max(0, math.floor(end - self._started_at))
