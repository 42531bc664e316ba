import colorsys
import math

from sensory_bars.config import (
    BAR_COUNT,
    BAR_OFFSET,
    BAR_SPACING,
    BAR_STRIDE,
    BAR_WIDTH_DIVISOR,
    PROGRESS_COLOR,
)


def round_half_up(x: float) -> int:
    """Rounds .5 towards +inf (Python's round() would round to even)."""
    return math.floor(x + 0.5)


def bar_geometry(v: float) -> tuple[float, int]:
    """Half width in pixels and lightness (percent) for a compensated dB value."""
    half_width = abs(v) / BAR_WIDTH_DIVISOR
    lightness = abs(round_half_up(v))
    return half_width, lightness


def bar_hsl(lightness: int, rotation: int) -> tuple[int, int, int]:
    return round_half_up(lightness * 10 + rotation), 100, lightness


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """CSS-style hsl() to an RGB tuple. Hue wraps, saturation/lightness clamp to 0..100."""
    s = max(0.0, min(100.0, s)) / 100.0
    l = max(0.0, min(100.0, l)) / 100.0
    rgb = colorsys.hls_to_rgb((h % 360) / 360.0, l, s)
    return (int(round(rgb[0] * 255)), int(round(rgb[1] * 255)), int(round(rgb[2] * 255)))


class BarRenderer:
    def __init__(
        self,
        width: int,
        height: int,
        bar_count: int = BAR_COUNT,
        stride: int = BAR_STRIDE,
        offset: int = BAR_OFFSET,
        spacing: int = BAR_SPACING,
    ):
        self.width = width
        self.height = height
        self.center = width / 2
        self.bar_count = bar_count
        self.stride = stride
        self.offset = offset
        self.spacing = spacing

    def bar_bin(self, bar_index: int) -> int:
        """Perceptual bin read by a bar."""
        return bar_index * self.stride + self.offset

    def draw_spectrum(self, surface, slots, rotation: int) -> None:
        """
        Draws every bar as one 1px stratum per history slot, mirrored around the center.

        Bars count up from the bottom edge, `spacing` pixels apart.
        """
        for i in range(self.bar_count):
            b = self.bar_bin(i)
            base_y = self.height - i * self.spacing
            for y, slot in enumerate(slots):
                half_width, lightness = bar_geometry(slot[b])
                color = hsl_to_rgb(*bar_hsl(lightness, rotation))
                surface.fill_rect(self.center - half_width, base_y + y, half_width * 2, 1, color)

    def draw_calibration_progress(self, surface, collected: int) -> None:
        """One small square per collected sample, stacked upwards."""
        surface.fill_rect(self.center - 2, self.height - collected * self.spacing, 4, 4, PROGRESS_COLOR)
