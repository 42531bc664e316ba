import numpy as np
import pytest

from sensory_bars.visualization.renderer import (
    BarRenderer,
    bar_geometry,
    bar_hsl,
    hsl_to_rgb,
    round_half_up,
)


def test_round_half_up_matches_browser_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.49) == 0


def test_bar_geometry_for_ten_db():
    half_width, lightness = bar_geometry(10.0)
    assert half_width == pytest.approx(6.6667, abs=1e-3)
    assert lightness == 10
    assert bar_hsl(lightness, 36) == (136, 100, 10)


def test_negative_values_use_magnitude():
    half_width, lightness = bar_geometry(-7.6)
    assert half_width == pytest.approx(7.6 / 1.5)
    assert lightness == 8


def test_hsl_to_rgb_handles_out_of_range_values():
    assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
    assert hsl_to_rgb(360 + 120, 100, 50) == (0, 255, 0)
    assert hsl_to_rgb(30, 100, 250) == (255, 255, 255)
    assert hsl_to_rgb(30, 100, 0) == (0, 0, 0)


def test_draw_spectrum_geometry(surface):
    renderer = BarRenderer(surface.width, surface.height)
    slots = np.zeros((4, 512))
    slots[:, 30] = 3.0  # bar 0
    slots[2, 33] = -6.0  # bar 1, third stratum

    renderer.draw_spectrum(surface, slots, rotation=0)

    assert len(surface.rects) == 128 * 4
    center = surface.width / 2
    x, y, w, h, _ = surface.rects[0]
    assert (x, y, w, h) == (center - 2.0, surface.height, 4.0, 1)

    x, y, w, h, color = surface.rects[4 + 2]
    assert y == surface.height - 8 + 2
    assert w == pytest.approx(8.0)
    assert color == hsl_to_rgb(60, 100, 6)


def test_zero_spectrum_collapses_bars(surface):
    renderer = BarRenderer(surface.width, surface.height)
    renderer.draw_spectrum(surface, np.zeros((4, 512)), rotation=12)
    assert all(w == 0 for _, _, w, _, _ in surface.rects)
    assert all(x == surface.width / 2 for x, _, _, _, _ in surface.rects)


def test_calibration_progress_stacks_upwards(surface):
    renderer = BarRenderer(surface.width, surface.height)
    renderer.draw_calibration_progress(surface, 0)
    renderer.draw_calibration_progress(surface, 3)
    assert surface.rects == [
        (surface.width / 2 - 2, surface.height, 4, 4, (100, 100, 100)),
        (surface.width / 2 - 2, surface.height - 24, 4, 4, (100, 100, 100)),
    ]
