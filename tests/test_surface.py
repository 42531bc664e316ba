import pytest

pygame = pytest.importorskip("pygame")

from sensory_bars.visualization.surface import PygameSurface


def test_fill_rect_and_clear():
    target = PygameSurface(pygame.Surface((20, 10)))
    assert (target.width, target.height) == (20, 10)

    target.clear((0, 0, 0))
    target.fill_rect(3.7, 2.0, 4.4, 1, (255, 0, 0))

    assert target.surface.get_at((3, 2))[:3] == (255, 0, 0)
    assert target.surface.get_at((6, 2))[:3] == (255, 0, 0)
    assert target.surface.get_at((3, 3))[:3] == (0, 0, 0)


def test_zero_width_bar_draws_nothing():
    target = PygameSurface(pygame.Surface((20, 10)))
    target.clear((0, 0, 0))
    target.fill_rect(10.0, 5.0, 0.0, 1, (255, 255, 255))
    assert target.surface.get_at((10, 5))[:3] == (0, 0, 0)
