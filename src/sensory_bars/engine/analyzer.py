import numpy as np
import numpy.typing as npt
from scipy.signal import windows

from sensory_bars.config import FFT_SIZE, MIN_MAGNITUDE, SMOOTHING_TIME_CONSTANT


class SpectrumAnalyzer:
    def __init__(self, fft_size: int = FFT_SIZE, smoothing: float = SMOOTHING_TIME_CONSTANT):
        """Decibel spectrum of the most recent ``fft_size`` samples.

        Mirrors a Web Audio AnalyserNode: Blackman window, magnitude scaled by
        1 / fft_size, exponential smoothing over successive reads, output in dB.

        Args:
            fft_size: Samples per FFT; yields fft_size // 2 bins.
            smoothing: Weight of the previous spectrum (0.0 .. 1.0).
        """
        self.fft_size = fft_size
        self.bin_count = fft_size // 2
        self.smoothing = smoothing

        self.window = windows.blackman(fft_size, sym=False)
        self.audio_buffer = np.zeros(fft_size, dtype=np.float32)
        self.samples_seen = 0
        self.smoothed = np.zeros(self.bin_count, dtype=np.float64)

    @property
    def ready(self) -> bool:
        return self.samples_seen >= self.fft_size

    def push(self, new_samples: npt.NDArray[np.float32]) -> None:
        """Appends samples to the rolling time buffer."""
        n = len(new_samples)
        if n == 0:
            return
        if n >= self.fft_size:
            self.audio_buffer[:] = new_samples[-self.fft_size :]
        else:
            self.audio_buffer = np.roll(self.audio_buffer, -n)
            self.audio_buffer[-n:] = new_samples
        self.samples_seen += n

    def get_float_frequency_data(self, out: np.ndarray) -> None:
        """
        Writes the current spectrum (dB) into ``out``.

        Until a full buffer has been received, ``out`` is filled with -inf so
        callers can tell "no data yet" apart from silence.
        """
        if not self.ready:
            out[:] = -np.inf
            return

        spectrum = np.fft.rfft(self.audio_buffer * self.window)[: self.bin_count]
        magnitude = np.abs(spectrum) / self.fft_size

        self.smoothed = self.smoothing * self.smoothed + (1.0 - self.smoothing) * magnitude
        out[:] = 20.0 * np.log10(np.maximum(self.smoothed, MIN_MAGNITUDE))
