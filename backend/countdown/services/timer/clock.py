import time
from typing import Optional


class MonotonicClock:
    """Monotonic time source. Only differences between readings are meaningful."""

    def now(self) -> float:
        return time.monotonic()

    def elapsed(self, since: float, now: Optional[float] = None) -> float:
        if now is None:
            now = self.now()
        return max(0.0, now - since)
