import enum
import math

import numpy as np

from sensory_bars.config import BIN_COUNT, CALIBRATION_MARGIN_DB, CALIBRATION_SAMPLES


class CalibrationState(enum.Enum):
    IDLE = "idle"
    COLLECTING = "collecting"


def is_sentinel(spectrum) -> bool:
    """True if the spectrum is the source's "no data yet" reading (-inf at index 0)."""
    return math.isinf(spectrum[0]) and spectrum[0] < 0


class Calibrator:
    def __init__(
        self,
        bin_count: int = BIN_COUNT,
        sample_count: int = CALIBRATION_SAMPLES,
        margin_db: float = CALIBRATION_MARGIN_DB,
    ):
        """Averages raw spectra over a fixed window into a new noise floor.

        Args:
            bin_count: Length of each spectrum.
            sample_count: Number of valid spectra per calibration run.
            margin_db: Added to the average so quiet real signal survives subtraction.
        """
        self.bin_count = bin_count
        self.sample_count = sample_count
        self.margin_db = margin_db

        self.state = CalibrationState.IDLE
        self.accumulator = np.zeros(bin_count, dtype=np.float64)
        self.samples_collected = 0

    @property
    def in_calibration(self) -> bool:
        return self.state is CalibrationState.COLLECTING

    def begin(self) -> bool:
        """IDLE -> COLLECTING. Returns False (and changes nothing) if already collecting."""
        if self.in_calibration:
            return False
        self.accumulator[:] = 0.0
        self.samples_collected = 0
        self.state = CalibrationState.COLLECTING
        return True

    def add_sample(self, spectrum) -> bool:
        """
        Accumulates one raw spectrum.

        Returns:
            True once the window is complete and finish() should be called.
        """
        if not self.in_calibration or is_sentinel(spectrum):
            return False
        if self.samples_collected == 0:
            print("collecting ambient noise samples")

        self.accumulator += np.asarray(spectrum, dtype=np.float64)
        self.samples_collected += 1
        return self.samples_collected >= self.sample_count

    def finish(self) -> np.ndarray:
        """COLLECTING -> IDLE, returning the averaged floor plus margin."""
        floor = self.accumulator / self.sample_count + self.margin_db
        self.state = CalibrationState.IDLE
        print("ambient noise samples collected")
        return floor

    def cancel(self) -> None:
        self.state = CalibrationState.IDLE
