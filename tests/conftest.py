import math

import numpy as np
import pytest


class FakeSource:
    """Replays a list of spectra; None entries read as "not ready"."""

    def __init__(self, spectra=None, constant=None, bin_count=512):
        self.spectra = list(spectra or [])
        self.constant = constant
        self.bin_count = bin_count
        self.finished = False
        self.closed = False
        self.reads = 0

    def read_spectrum(self, out):
        self.reads += 1
        if self.spectra:
            spectrum = self.spectra.pop(0)
        elif self.constant is not None:
            spectrum = np.full(self.bin_count, self.constant, dtype=np.float64)
        else:
            spectrum = None

        if spectrum is None:
            out[:] = -math.inf
        else:
            out[:] = spectrum

    def close(self):
        self.closed = True


class RecordingSurface:
    def __init__(self, width=900, height=1032):
        self.width = width
        self.height = height
        self.clears = []
        self.rects = []

    def clear(self, color):
        self.clears.append(color)
        self.rects = []

    def fill_rect(self, x, y, w, h, color):
        self.rects.append((x, y, w, h, color))


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += ms / 1000.0


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def clock():
    return FakeClock()
