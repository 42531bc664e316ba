# ============================================================================
# SPECTRUM ANALYSIS CONFIGURATION
# ============================================================================

FFT_SIZE = 1024
"""
Number of time-domain samples fed into each FFT.

Impact on Resolution:
  - Bin width = RATE / FFT_SIZE
  - 1024 @ 48kHz = ~47 Hz per bin (matches the hardware Sensory Bridge)
  - 2048 @ 48kHz = ~23 Hz per bin (finer, but the bar mapping below assumes 512 bins)

Watch Out For:
  - BIN_COUNT, BAR_STRIDE and BAR_OFFSET are tuned together with this value
  - Changing it invalidates any stored noise floor (length check fails, floor resets to zero)
"""

BIN_COUNT = FFT_SIZE // 2
"""
Number of raw frequency bins per spectrum (one decibel value each).
"""

SMOOTHING_TIME_CONSTANT = 0.2
"""
Exponential smoothing between successive spectra (0.0 .. 1.0).

  - 0.0: every frame stands alone (flickery)
  - 0.2: light smoothing, bars still snap to transients
  - 0.8: Web Audio default, feels sluggish for this display
"""

MIN_MAGNITUDE = 1e-9
"""
Linear magnitude floor applied before the decibel conversion (-180 dB).
Keeps silent bins finite so interpolation never mixes in -inf.
"""

# ============================================================================
# TIMING
# ============================================================================

DRAW_INTERVAL_MS = 16
"""
Period of the playback tick and of the calibration sampling tick, in ms.
~62 updates per second; the frame loop polls the scheduler once per frame.
"""

SETTLE_DELAY_MS = 500
"""
Settle time between a calibration request and the start of the sampling timer, in ms.
The first sample is taken one DRAW_INTERVAL_MS later.
Lets the audio pipeline settle after playback was stopped.
"""

FPS = 63
"""
Frame cap for the pygame loop. Must be at least 1000 / DRAW_INTERVAL_MS
for every tick to get its own frame.
"""

# ============================================================================
# NOISE CALIBRATION
# ============================================================================

CALIBRATION_SAMPLES = 128
"""
Number of valid spectra averaged into a new noise floor (~2 seconds).
"""

CALIBRATION_MARGIN_DB = 5.0
"""
Safety margin in dB added on top of the averaged ambient level.

Watch Out For:
  - Too small: hiss flickers through as faint bars
  - Too large: quiet but legitimate signal gets eaten
"""

# ============================================================================
# DISPLAY
# ============================================================================

HISTORY_DEPTH = 4
"""
Number of compensated spectra kept for the motion trail (one 1px stratum each).
"""

BAR_COUNT = 128
"""
Number of visual bars, bottom to top.
"""

BAR_STRIDE = 3
BAR_OFFSET = 30
"""
Bar i reads perceptual bin i * BAR_STRIDE + BAR_OFFSET.
Tuned by eye to fit the interesting band into BAR_COUNT bars; keep as is.
"""

BAR_SPACING = 8
"""
Vertical distance between bars in pixels.
"""

BAR_WIDTH_DIVISOR = 1.5
"""
Half width of a bar in pixels = |compensated dB| / BAR_WIDTH_DIVISOR.
"""

ROTATION_STEP = 4
"""
Hue degrees added every time the history ring wraps around.
"""

CANVAS_FILL = (0, 0, 0)
PROGRESS_COLOR = (100, 100, 100)

WINDOW_SIZE: tuple[int, int] = (900, 1032)
"""
Logical resolution (upscaled by SDL when required). The height fits
BAR_COUNT * BAR_SPACING plus a small margin.
"""

# ============================================================================
# AUDIO STREAM CONFIGURATION
# ============================================================================

RATE = 48000
"""
Sample rate in Hz for both microphone capture and demo playback.

Watch Out For:
  - Mismatch between config and device default causes silent input or distortion
"""

CHUNK = 1024
"""
Frames per pyaudio buffer. Reads never block: each tick drains whatever is buffered.
"""

# ============================================================================
# STORAGE & ASSETS
# ============================================================================

STORAGE_FILE = "sensory_bars_storage.json"
"""
Key/value file holding the calibrated noise floor (created in the working directory).
"""

NOISE_FLOOR_KEY = "ambient_noise_floor"
NOISE_FLOOR_LENGTH_KEY = "ambient_noise_floor_length"

DEMO_TRACK = "ogg/space-120280.ogg"
"""
Pre-recorded track played by the demo command. Any format librosa can decode works.
"""

LOG_UPS = False
"""
Print the number of playback ticks per second (performance check).
"""
