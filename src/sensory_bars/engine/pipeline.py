"""
Tick-driven spectral pipeline.

Per playback tick: raw spectrum -> noise compensation on the perceptual axis
-> history ring slot -> bar renderer. Per calibration tick: raw spectrum ->
calibration accumulator -> progress indicator. All state lives in one
PipelineContext and is only touched from tick callbacks and user commands,
which the frame loop serialises.
"""

import numpy as np

from sensory_bars.config import BIN_COUNT, CANVAS_FILL, LOG_UPS, SETTLE_DELAY_MS
from sensory_bars.engine.calibrator import Calibrator, is_sentinel
from sensory_bars.engine.history import HistoryRing, RenderState
from sensory_bars.engine.monitor import TickMonitor
from sensory_bars.engine.noise_floor import NoiseFloorStore
from sensory_bars.engine.remap import FrequencyRemapper
from sensory_bars.engine.scheduler import TickMode, TickScheduler
from sensory_bars.visualization.renderer import BarRenderer


class PipelineContext:
    """All mutable pipeline state, in one place."""

    def __init__(self, bin_count: int = BIN_COUNT, calibrator=None, scheduler=None):
        self.bin_count = bin_count
        self.frequency_data = np.zeros(bin_count, dtype=np.float64)
        self.noise_floor = np.zeros(bin_count, dtype=np.float64)
        self.history = HistoryRing(bin_count=bin_count)
        self.render_state = RenderState()
        self.calibrator = calibrator or Calibrator(bin_count=bin_count)
        self.scheduler = scheduler or TickScheduler()
        self.source = None


class Pipeline:
    def __init__(
        self,
        surface,
        store,
        mic_factory,
        demo_factory=None,
        context: PipelineContext | None = None,
        renderer: BarRenderer | None = None,
        monitor: TickMonitor | None = None,
        settle_delay_ms: float = SETTLE_DELAY_MS,
    ):
        """
        Args:
            surface: Draw surface with clear(color) and fill_rect(x, y, w, h, color).
            store: Key/value store for the noise floor.
            mic_factory: Returns a new microphone source (may raise OSError).
            demo_factory: Returns a new demo-track source, or None if no demo is available.
            context: Pipeline state; a fresh one is created when omitted.
            renderer: Bar renderer; defaults to one sized to the surface.
            monitor: Updates-per-second counter.
            settle_delay_ms: Wait before the first calibration sample.
        """
        self.surface = surface
        self.mic_factory = mic_factory
        self.demo_factory = demo_factory
        self.ctx = context or PipelineContext()
        self.renderer = renderer or BarRenderer(surface.width, surface.height)
        self.monitor = monitor or TickMonitor(enabled=LOG_UPS)
        self.settle_delay_ms = settle_delay_ms

        self.remapper = FrequencyRemapper(self.ctx.bin_count)
        self.noise_store = NoiseFloorStore(store, self.ctx.bin_count)
        self.noise_store.load(self.ctx.noise_floor)

        self.surface.clear(CANVAS_FILL)

    # --- User commands ---

    def start(self) -> bool:
        """Switches to the microphone and starts playback."""
        return self._switch_source(self.mic_factory, "microphone")

    def demo(self) -> bool:
        """Switches to the demo track; playback reverts to the microphone when it ends."""
        if self.demo_factory is None:
            print("No demo track configured")
            return False
        if self._switch_source(self.demo_factory, "demo"):
            return True
        print("Falling back to microphone")
        return self.start()

    def calibrate(self) -> bool:
        """Starts a noise-floor calibration run. Ignored while one is in progress."""
        ctx = self.ctx
        if not ctx.calibrator.begin():
            return False
        ctx.scheduler.stop()
        self.surface.clear(CANVAS_FILL)
        ctx.history.clear()
        # first sample one interval after the settle delay, as a timer started once it elapsed would
        first_tick_ms = self.settle_delay_ms + ctx.scheduler.interval * 1000.0
        ctx.scheduler.start(TickMode.CALIBRATION, self.calibration_tick, delay_ms=first_tick_ms)
        return True

    def update(self) -> bool:
        """Called once per frame; runs the active tick when it is due."""
        return self.ctx.scheduler.pump()

    def close(self) -> None:
        self.ctx.scheduler.stop()
        self._close_source()

    # --- Ticks ---

    def _read(self) -> np.ndarray | None:
        ctx = self.ctx
        if ctx.source is None:
            return None
        ctx.source.read_spectrum(ctx.frequency_data)
        if is_sentinel(ctx.frequency_data):
            return None
        return ctx.frequency_data

    def playback_tick(self) -> None:
        ctx = self.ctx
        if ctx.source is not None and ctx.source.finished:
            print("demo track ended")
            self.start()
            return

        raw = self._read()
        if raw is None:
            return

        self.surface.clear(CANVAS_FILL)
        self.monitor.tick()

        if ctx.history.advance():
            ctx.render_state.rotate()
        self.remapper.compensate(raw, ctx.noise_floor, out=ctx.history.current)

        self.renderer.draw_spectrum(self.surface, ctx.history.slots, ctx.render_state.rotation)

    def calibration_tick(self) -> None:
        ctx = self.ctx
        raw = self._read()
        if raw is None:
            return

        self.renderer.draw_calibration_progress(self.surface, ctx.calibrator.samples_collected)
        if not ctx.calibrator.add_sample(raw):
            return

        ctx.scheduler.stop()
        ctx.noise_floor[:] = ctx.calibrator.finish()
        self.noise_store.save(ctx.noise_floor)
        ctx.scheduler.start(TickMode.PLAYBACK, self.playback_tick)

    # --- Source management ---

    def _close_source(self) -> None:
        if self.ctx.source is not None:
            self.ctx.source.close()
            self.ctx.source = None

    def _switch_source(self, factory, name: str) -> bool:
        ctx = self.ctx
        ctx.scheduler.stop()
        if ctx.calibrator.in_calibration:
            print("calibration cancelled by source switch")
            ctx.calibrator.cancel()
        self._close_source()

        try:
            ctx.source = factory()
        except Exception as e:
            print(f"Error initializing {name} stream: {e}")
            return False

        print(f"started {name} stream")
        ctx.scheduler.start(TickMode.PLAYBACK, self.playback_tick)
        return True
