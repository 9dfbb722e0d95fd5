"""
Pacing policy between messages within a cycle.
"""

import time
from typing import Callable


class Pacing:
    """Fixed minimum delay between consecutive gateway-heavy steps."""

    def __init__(self, interval_seconds: float, sleep: Callable[[float], None] = time.sleep):
        if interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")
        self.interval_seconds = interval_seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.interval_seconds > 0:
            self._sleep(self.interval_seconds)
