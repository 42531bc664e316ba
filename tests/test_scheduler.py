from sensory_bars.engine.scheduler import TickMode, TickScheduler


def test_runs_one_tick_per_interval(clock):
    sched = TickScheduler(interval_ms=16, clock=clock)
    calls = []
    sched.start(TickMode.PLAYBACK, lambda: calls.append(clock()))

    assert sched.pump()  # first tick is due immediately
    assert not sched.pump()
    clock.advance_ms(10)
    assert not sched.pump()
    clock.advance_ms(7)
    assert sched.pump()
    assert len(calls) == 2


def test_delay_before_first_tick(clock):
    sched = TickScheduler(interval_ms=16, clock=clock)
    calls = []
    sched.start(TickMode.CALIBRATION, lambda: calls.append(1), delay_ms=500)

    clock.advance_ms(499)
    assert not sched.pump()
    clock.advance_ms(2)
    assert sched.pump()
    assert sched.mode is TickMode.CALIBRATION


def test_slow_frame_does_not_burst(clock):
    sched = TickScheduler(interval_ms=16, clock=clock)
    calls = []
    sched.start(TickMode.PLAYBACK, lambda: calls.append(1))
    sched.pump()

    clock.advance_ms(200)
    assert sched.pump()
    assert not sched.pump()
    assert len(calls) == 2


def test_start_replaces_and_stop_cancels(clock):
    sched = TickScheduler(interval_ms=16, clock=clock)
    playback, calibration = [], []
    sched.start(TickMode.PLAYBACK, lambda: playback.append(1))
    sched.start(TickMode.CALIBRATION, lambda: calibration.append(1))

    sched.pump()
    assert playback == [] and calibration == [1]

    sched.stop()
    clock.advance_ms(100)
    assert not sched.pump()
    assert not sched.running


def test_callback_can_switch_timer(clock):
    sched = TickScheduler(interval_ms=16, clock=clock)
    seen = []

    def playback():
        seen.append("playback")

    def calibration():
        seen.append("calibration")
        sched.start(TickMode.PLAYBACK, playback)

    sched.start(TickMode.CALIBRATION, calibration)
    sched.pump()
    assert sched.mode is TickMode.PLAYBACK
    # new timer is due right away, not one interval after the old schedule
    sched.pump()
    assert seen == ["calibration", "playback"]


def test_frame_cap_leaves_room_for_every_tick():
    from sensory_bars.config import DRAW_INTERVAL_MS, FPS

    assert FPS >= 1000 / DRAW_INTERVAL_MS
