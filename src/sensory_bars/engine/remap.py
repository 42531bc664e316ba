"""Log-to-linear frequency remapping.

The display axis is "perceptual": bin i of the display reads raw bin
(i / n)^2 * n, which spreads the low raw bins (where most of the musical
information lives) over a much larger share of the bars. Positions are
fractional, so values are linearly interpolated between neighbouring bins.
"""

import math

import numpy as np
import numpy.typing as npt

from sensory_bars.config import BIN_COUNT


def perceptual_position(i: float, bin_count: int = BIN_COUNT) -> float:
    """Fractional raw-bin position of perceptual bin ``i``."""
    frac = i / bin_count
    return frac * frac * bin_count


def lerp(position: float, seq) -> float:
    """Linearly interpolates ``seq`` at a fractional index.

    The right neighbour is clamped to the last element, and integer positions
    return ``seq[k]`` unchanged.
    """
    k = math.floor(position)
    f = position - k
    if f == 0.0:
        return float(seq[k])
    right = k + 1 if k + 1 < len(seq) else k
    return float(seq[k] * (1.0 - f) + seq[right] * f)


class FrequencyRemapper:
    """Vectorised version of :func:`lerp` over all perceptual bins at once."""

    def __init__(self, bin_count: int = BIN_COUNT):
        self.bin_count = bin_count
        self.positions = (np.arange(bin_count, dtype=np.float64) / bin_count) ** 2 * bin_count

        self.left = np.floor(self.positions).astype(np.intp)
        self.frac = self.positions - self.left
        self.right = np.minimum(self.left + 1, bin_count - 1)

    def remap(self, seq: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Samples ``seq`` (raw bin order) at every perceptual position."""
        seq = np.asarray(seq, dtype=np.float64)
        return seq[self.left] * (1.0 - self.frac) + seq[self.right] * self.frac

    def compensate(self, raw, noise_floor, out=None) -> npt.NDArray[np.float64]:
        """Remapped ``raw`` minus remapped ``noise_floor``, both read at the same positions."""
        result = self.remap(raw) - self.remap(noise_floor)
        if out is None:
            return result
        out[:] = result
        return out
