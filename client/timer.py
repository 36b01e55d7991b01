"""
Deadline timer for session expiry.

``threading.Timer`` takes a relative delay, and the platform caps how long a
single wait may block (``threading.TIMEOUT_MAX``). Session tokens can live
for weeks, so this timer targets an absolute wall-clock instant and waits
towards it in bounded chunks, re-reading the clock after each one.
"""

import threading
import time
from typing import Callable, Optional

Clock = Callable[[], float]


class DeadlineTimer(threading.Thread):
    """
    Run ``callback`` once the clock reaches ``deadline`` (epoch seconds).

    Each wait is at most ``max_delay`` seconds. ``cancel()`` stops the timer
    if the callback has not run yet.
    """

    def __init__(
        self,
        deadline: float,
        callback: Callable[[], None],
        max_delay: float = threading.TIMEOUT_MAX,
        clock: Optional[Clock] = None,
    ):
        if max_delay <= 0:
            raise ValueError("max_delay must be positive")
        super().__init__(daemon=True)
        self.deadline = deadline
        self.callback = callback
        self.max_delay = max_delay
        self._clock = clock or time.time
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop the timer if it hasn't fired yet."""
        self._cancelled.set()

    def remaining(self) -> float:
        return self.deadline - self._clock()

    def _wait(self, delay: float) -> bool:
        """Block for up to ``delay`` seconds; True if cancelled meanwhile."""
        return self._cancelled.wait(delay)

    def run(self) -> None:
        while not self.cancelled:
            remaining = self.remaining()
            if remaining <= 0:
                break
            if self._wait(min(remaining, self.max_delay)):
                return
        if not self.cancelled:
            self.callback()
