"""
Updates-per-second counter for the playback loop.

Prints one summary line per wall-clock second while enabled; used to check
that the tick loop keeps up with DRAW_INTERVAL_MS on slow machines.
"""

import time
from typing import Callable


class TickMonitor:
    def __init__(self, enabled: bool = False, clock: Callable[[], float] = time.time):
        self.enabled = enabled
        self.clock = clock
        self.last_second = int(clock())
        self.updates_per_second = 0
        self.last_report: int | None = None

    def toggle(self) -> None:
        self.enabled = not self.enabled
        self.updates_per_second = 0
        self.last_second = int(self.clock())
        print(f"updates_per_second logging {'ON' if self.enabled else 'OFF'}")

    def tick(self) -> None:
        if not self.enabled:
            return
        self.updates_per_second += 1

        second = int(self.clock())
        if second != self.last_second:
            self.last_second = second
            self.last_report = self.updates_per_second
            print("updates_per_second", self.updates_per_second)
            self.updates_per_second = 0
