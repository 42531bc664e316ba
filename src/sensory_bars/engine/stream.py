import librosa
import numpy as np
import pyaudio

from sensory_bars.config import CHUNK, RATE
from sensory_bars.engine.analyzer import SpectrumAnalyzer


class MicSource:
    def __init__(self):
        self.analyzer = SpectrumAnalyzer()
        self.finished = False
        self.p = pyaudio.PyAudio()
        try:
            self.stream = self.p.open(
                format=pyaudio.paFloat32,
                channels=1,
                rate=RATE,
                input=True,
                frames_per_buffer=CHUNK,
            )
        except OSError:
            self.p.terminate()
            raise
        print(f"microphone stream opened @ {RATE} Hz")

    def read_spectrum(self, out: np.ndarray) -> None:
        """Drains whatever the device buffered (never blocks) and writes the spectrum into ``out``."""
        available = self.stream.get_read_available()
        if available > 0:
            raw_data = self.stream.read(available, exception_on_overflow=False)  # a dropped frame is better than a delayed frame
            self.analyzer.push(np.frombuffer(raw_data, dtype=np.float32))
        self.analyzer.get_float_frequency_data(out)

    def close(self):
        self.stream.stop_stream()
        self.stream.close()
        self.p.terminate()


class DemoSource:
    def __init__(self, path: str):
        """Plays a pre-recorded track and analyses what has been played so far."""
        samples, _ = librosa.load(path, sr=RATE, mono=True)
        self.samples = samples.astype(np.float32)
        self.position = 0  # advanced by the pyaudio callback thread
        self.consumed = 0
        self.finished = False
        self.analyzer = SpectrumAnalyzer()

        self.p = pyaudio.PyAudio()
        try:
            self.stream = self.p.open(
                format=pyaudio.paFloat32,
                channels=1,
                rate=RATE,
                output=True,
                frames_per_buffer=CHUNK,
                stream_callback=self._callback,
            )
        except OSError:
            self.p.terminate()
            raise
        print(f"demo track loaded: {path} ({len(self.samples) / RATE:.1f}s)")

    def _callback(self, in_data, frame_count, time_info, status):
        start = self.position
        chunk = self.samples[start : start + frame_count]
        self.position = start + len(chunk)
        if len(chunk) < frame_count:
            self.finished = True
            chunk = np.pad(chunk, (0, frame_count - len(chunk)))
            return chunk.tobytes(), pyaudio.paComplete
        return chunk.tobytes(), pyaudio.paContinue

    def read_spectrum(self, out: np.ndarray) -> None:
        position = self.position
        if position > self.consumed:
            self.analyzer.push(self.samples[max(self.consumed, position - self.analyzer.fft_size) : position])
            self.consumed = position
        self.analyzer.get_float_frequency_data(out)

    def close(self):
        self.stream.stop_stream()
        self.stream.close()
        self.p.terminate()
