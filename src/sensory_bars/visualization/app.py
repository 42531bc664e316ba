import argparse
import os
import sys

import pygame

from sensory_bars.config import DEMO_TRACK, FPS, LOG_UPS, STORAGE_FILE, WINDOW_SIZE
from sensory_bars.engine.monitor import TickMonitor
from sensory_bars.engine.pipeline import Pipeline
from sensory_bars.engine.storage import JsonFileStore
from sensory_bars.engine.stream import DemoSource, MicSource
from sensory_bars.visualization.surface import PygameSurface

os.environ["SDL_RENDER_SCALE_QUALITY"] = "2"  # upscaling quality (0-2)

WARNING_LINES = [
    "PHOTOSENSITIVITY WARNING",
    "",
    "This visualizer shows rapidly changing colours driven by sound.",
    "",
    "[ENTER] accept and start microphone",
    "[C] calibrate noise floor   [D] demo track",
    "[U] updates/s log   [F] fullscreen   [ESC] quit",
]


class SpectrumVisualizer:
    def __init__(self, storage_file: str = STORAGE_FILE, demo_track: str = DEMO_TRACK, log_ups: bool = LOG_UPS):
        # --- Screen Management ---
        self.is_fullscreen = False
        self.screen = pygame.display.set_mode(WINDOW_SIZE, pygame.SCALED | pygame.RESIZABLE)
        self.surface = PygameSurface(self.screen)
        self.clock = pygame.time.Clock()
        self.accepted = False

        # --- Engine Core ---
        self.pipeline = Pipeline(
            self.surface,
            JsonFileStore(storage_file),
            mic_factory=MicSource,
            demo_factory=lambda: DemoSource(demo_track),
            monitor=TickMonitor(enabled=log_ups),
        )

    def toggle_fullscreen(self):
        self.is_fullscreen = not self.is_fullscreen
        flags = pygame.SCALED | (pygame.FULLSCREEN if self.is_fullscreen else pygame.RESIZABLE)
        self.screen = pygame.display.set_mode(WINDOW_SIZE, flags)
        self.surface.surface = self.screen

    def draw_warning(self, font: pygame.font.Font) -> None:
        self.screen.fill((0, 0, 0))
        y = self.surface.height // 3
        for line in WARNING_LINES:
            img = font.render(line, True, (255, 200, 0) if line.isupper() else (220, 220, 220))
            self.screen.blit(img, img.get_rect(center=(self.surface.width // 2, y)))
            y += 28

    def accept_warning(self):
        self.accepted = True
        self.pipeline.start()

    def handle_events(self):
        """Handle system-level events and the user commands."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_f:
                    self.toggle_fullscreen()
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE) and not self.accepted:
                    self.accept_warning()
                elif not self.accepted:
                    continue
                elif event.key == pygame.K_c:
                    self.pipeline.calibrate()
                elif event.key == pygame.K_d:
                    self.pipeline.demo()
                elif event.key == pygame.K_u:
                    self.pipeline.monitor.toggle()
        return True

    def run(self, title="Sensory Bars"):
        """Centralized execution loop."""
        pygame.display.set_caption(title)
        font = pygame.font.SysFont("monospace", 18, bold=True)

        running = True
        try:
            while running:
                running = self.handle_events()

                if self.accepted:
                    # A tick that had no data leaves the previous frame on screen
                    self.pipeline.update()
                else:
                    self.draw_warning(font)

                pygame.display.flip()
                self.clock.tick(FPS)
        except KeyboardInterrupt:
            print("Shutting down visualizer...")
        finally:
            self.pipeline.close()
            pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Noise-compensated radial spectrum bars.")
    parser.add_argument("--storage", default=STORAGE_FILE, help="key/value file holding the noise floor")
    parser.add_argument("--demo-track", default=DEMO_TRACK, help="audio file played by the demo command")
    parser.add_argument("--log-ups", action="store_true", default=LOG_UPS, help="print updates per second")
    return parser.parse_args(argv)


def run(argv=None):
    """Standalone function to run the visualizer."""
    args = parse_args(argv)
    pygame.init()
    viz = SpectrumVisualizer(storage_file=args.storage, demo_track=args.demo_track, log_ups=args.log_ups)
    viz.run()
    sys.exit()


if __name__ == "__main__":
    run()
