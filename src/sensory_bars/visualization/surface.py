import pygame


class PygameSurface:
    """Draw-surface adapter over a pygame.Surface (device pixels)."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        # Geometry is fixed at startup; SCALED keeps the logical size on resize/fullscreen
        self.width, self.height = surface.get_size()

    def clear(self, color) -> None:
        self.surface.fill(color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color) -> None:
        if w <= 0 or h <= 0:
            return
        self.surface.fill(color, pygame.Rect(int(x), int(y), max(1, int(w)), int(h)))
