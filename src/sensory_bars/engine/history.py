import numpy as np

from sensory_bars.config import BIN_COUNT, HISTORY_DEPTH, ROTATION_STEP


class HistoryRing:
    """Fixed set of compensated spectra plus a cycling write cursor.

    The slot under the cursor holds the newest spectrum; the others hold the
    previous ones. All slots are drawn every frame (motion trail).
    """

    def __init__(self, depth: int = HISTORY_DEPTH, bin_count: int = BIN_COUNT):
        self.depth = depth
        self.slots = np.zeros((depth, bin_count), dtype=np.float64)
        self.index = 0

    def advance(self) -> bool:
        """Moves the cursor to the next slot. Returns True when it wraps to 0."""
        self.index += 1
        if self.index >= self.depth:
            self.index = 0
            return True
        return False

    @property
    def current(self) -> np.ndarray:
        return self.slots[self.index]

    def clear(self) -> None:
        self.slots[:] = 0.0


class RenderState:
    def __init__(self, step: int = ROTATION_STEP):
        self.rotation = 0
        self.step = step

    def rotate(self) -> None:
        """Advances the hue angle, wrapping at 360 degrees."""
        self.rotation += self.step
        if self.rotation >= 360:
            self.rotation = 0
