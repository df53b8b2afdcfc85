"""Pacing policies for the rewrite loop.

The rewrite providers enforce request-rate limits, so the pipeline pauses
after each written post. The pause is a blocking wait on the single
execution path; tests swap in a pacer that does not sleep.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import time
from typing import Callable


class Pacer(ABC):
    """Waits between successive rewrite calls."""

    @abstractmethod
    def wait(self) -> None:
        raise NotImplementedError


class FixedDelay(Pacer):
    """Sleep for a fixed number of seconds on every ``wait``."""

    def __init__(self, seconds: float, sleep: Callable[[float], None] = time.sleep):
        if seconds < 0:
            raise ValueError("Delay must be non-negative")
        self.seconds = seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.seconds:
            self._sleep(self.seconds)
