"""
Cooperative tick scheduling for the frame loop.

Exactly one periodic callback is active at a time (playback or calibration
sampling). Starting one cancels the other. The frame loop calls pump() once
per frame; nothing here uses threads or blocks.
"""

import enum
import time
from typing import Callable

from sensory_bars.config import DRAW_INTERVAL_MS


class TickMode(enum.Enum):
    IDLE = "idle"
    PLAYBACK = "playback"
    CALIBRATION = "calibration"


class TickScheduler:
    def __init__(self, interval_ms: float = DRAW_INTERVAL_MS, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            interval_ms: Period between ticks.
            clock: Returns the current time in seconds (injectable for tests).
        """
        self.interval = interval_ms / 1000.0
        self.clock = clock
        self.mode = TickMode.IDLE
        self.callback: Callable[[], None] | None = None
        self.next_due = 0.0
        self._generation = 0

    @property
    def running(self) -> bool:
        return self.mode is not TickMode.IDLE

    def start(self, mode: TickMode, callback: Callable[[], None], delay_ms: float = 0) -> None:
        """Replaces the active timer. The first tick fires after ``delay_ms``."""
        self._generation += 1
        self.mode = mode
        self.callback = callback
        self.next_due = self.clock() + delay_ms / 1000.0

    def stop(self) -> None:
        self._generation += 1
        self.mode = TickMode.IDLE
        self.callback = None

    def pump(self) -> bool:
        """Runs the active callback if it is due. Returns True if a tick ran."""
        if self.callback is None:
            return False
        now = self.clock()
        if now < self.next_due:
            return False

        generation = self._generation
        self.callback()

        # The callback may have stopped or replaced the timer
        if generation != self._generation:
            return True

        self.next_due += self.interval
        if self.next_due <= now:
            # Fell behind (slow frame): skip missed ticks instead of bursting
            self.next_due = now + self.interval
        return True
