"""Application window, event pump, and run loop."""

from __future__ import annotations

import logging
import random
import pygame

from .frame_loop import FrameLoop, compute_canvas_size
from .messages import SCORE_RESULT_EVENT, TRIGGER_FIREWORKS_EVENT
from .settings import AppSettings, SettingsManager
from .utils import CELEBRATION_COUNT, LOGGER_NAME, PAGE_COLOR, Size, coerce_number

logger = logging.getLogger(LOGGER_NAME)


class ScoreApp:
    """Hosts the score canvas in a resizable window and feeds it events."""

    def __init__(self, settings: AppSettings | None = None, rng: random.Random | None = None) -> None:
        pygame.init()
        pygame.font.init()

        self.settings = settings or SettingsManager().settings
        display = self.settings.display
        self.window = self._open_window((display.window_width, display.window_height))
        pygame.display.set_caption(display.title)
        self.clock = pygame.time.Clock()

        window_size = self.window.get_size()
        self.frame_loop = FrameLoop(
            self.settings,
            compute_canvas_size(window_size, window_size, display),
            rng,
        )
        self.running = False

    def _open_window(self, size: Size) -> pygame.Surface:
        if self.settings.display.fullscreen:
            try:
                return pygame.display.set_mode(size, pygame.FULLSCREEN)
            except pygame.error as exc:
                logger.warning("Fullscreen unavailable (%s), using a window", exc)
        return pygame.display.set_mode(size, pygame.RESIZABLE)

    def run(self) -> None:
        """Main event/render loop."""
        logger.info("Scoreworks started with a %dx%d canvas", *self.frame_loop.canvas_size)
        self.running = True
        self.frame_loop.request_redraw()
        while self.running:
            self.clock.tick(self.settings.display.fps)
            self.running = self.handle_events()
            if not self.running:
                break
            if self.frame_loop.step():
                self._present()

        logger.info("Scoreworks shutting down")
        pygame.quit()

    def handle_events(self) -> bool:
        """Dispatch queued events. Returns False once the app should quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == SCORE_RESULT_EVENT:
                self.frame_loop.handle_message(getattr(event, "payload", None))
            elif event.type == TRIGGER_FIREWORKS_EVENT:
                count = int(coerce_number(getattr(event, "count", CELEBRATION_COUNT)))
                self.frame_loop.trigger_fireworks(count)
            elif event.type == pygame.VIDEORESIZE:
                self._resize(event.size)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_f:
                    self.frame_loop.trigger_fireworks(self.settings.fireworks.celebration_count)
        return True

    def _resize(self, size: Size) -> None:
        # pygame 2 resizes the display surface of a RESIZABLE window itself.
        self.window = pygame.display.get_surface() or self.window
        self.frame_loop.resize(size, size)

    def _present(self) -> None:
        self.window.fill(PAGE_COLOR)
        canvas = self.frame_loop.canvas
        self.window.blit(canvas, canvas.get_rect(center=self.window.get_rect().center))
        pygame.display.flip()
