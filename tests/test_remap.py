"""Tests for the perceptual frequency remapping."""

import numpy as np

from sensory_bars.engine.remap import FrequencyRemapper, lerp, perceptual_position


def test_positions_start_at_zero_and_stay_in_range():
    positions = [perceptual_position(i, 512) for i in range(512)]
    assert positions[0] == 0.0
    assert positions[-1] < 512
    assert all(b >= a for a, b in zip(positions, positions[1:]))


def test_squared_warp_values():
    assert perceptual_position(256, 512) == 128.0
    assert perceptual_position(128, 512) == 32.0


def test_lerp_integer_position_is_exact():
    seq = [0.1, 7.3, -2.5, 11.0]
    for k, value in enumerate(seq):
        assert lerp(float(k), seq) == value


def test_lerp_interpolates_between_neighbours():
    assert lerp(1.25, [0.0, 4.0, 8.0]) == 5.0


def test_lerp_clamps_at_last_element():
    seq = [1.0, 2.0, 3.0]
    assert lerp(2.5, seq) == 3.0


def test_vectorised_remap_matches_scalar_lerp():
    rng = np.random.default_rng(seed=7)
    seq = rng.normal(size=512)
    remapper = FrequencyRemapper(512)

    expected = [lerp(perceptual_position(i, 512), seq) for i in range(512)]
    np.testing.assert_allclose(remapper.remap(seq), expected, rtol=0, atol=1e-12)


def test_compensate_subtracts_floor_on_same_positions():
    remapper = FrequencyRemapper(512)
    raw = np.linspace(-80.0, -20.0, 512)
    floor = raw - 3.0

    out = np.empty(512)
    result = remapper.compensate(raw, floor, out=out)

    assert result is out
    np.testing.assert_allclose(out, 3.0)
