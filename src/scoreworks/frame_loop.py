"""Per-frame driver: background, score readout, fireworks, and render mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any
import logging
import random
import pygame

from .messages import parse_score_message
from .particles import FireworkField
from .scoreboard import ScoreDisplay, ScoreRenderer, ScoreState, evaluate_state
from .settings import AppSettings, DisplaySettings, SizingMode
from .utils import CANVAS_BG, CELEBRATION_COUNT, LOGGER_NAME, TRAIL_COLOR, Size, clamp

logger = logging.getLogger(LOGGER_NAME)


class RenderMode(Enum):
    """Whether frames are drawn every tick or only on request."""

    IDLE = auto()
    CONTINUOUS = auto()


@dataclass(slots=True)
class AppState:
    """Mutable application state.

    The message handler is the only writer of ``score``; the frame loop reads
    it and owns the firework bookkeeping.
    """

    score: ScoreState = field(default_factory=ScoreState)
    fireworks_active: bool = False
    render_mode: RenderMode = RenderMode.IDLE
    redraw_requested: bool = False


def compute_canvas_size(container: Size | None, window: Size, display: DisplaySettings) -> Size:
    """Size the canvas from its container, or from the window when there is none."""
    low, high = display.canvas_min, display.canvas_max
    if display.sizing == SizingMode.CONTAINER and container is not None:
        width = clamp(container[0], low, high)
        height = clamp(container[1] or width, low, high)
    else:
        width = clamp(min(window[0], high) / 2, low, high)
        height = clamp(min(window[1], high) / 2, low, high)
    return int(width), int(height)


class FrameLoop:
    """Draws frames onto an off-screen canvas and decides when to draw them."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        canvas_size: Size | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        display = self.settings.display
        if canvas_size is None:
            canvas_size = compute_canvas_size(None, (display.window_width, display.window_height), display)

        self.state = AppState()
        self.field = FireworkField(self.settings.fireworks, rng)
        self.renderer = ScoreRenderer()
        self.canvas = pygame.Surface(canvas_size)
        self.trail = pygame.Surface(canvas_size, pygame.SRCALPHA)
        self.canvas.fill(CANVAS_BG)
        self.frames_rendered = 0

    @property
    def canvas_size(self) -> Size:
        return self.canvas.get_size()

    @property
    def display(self) -> ScoreDisplay:
        return evaluate_state(self.state.score)

    def handle_message(self, payload: Any) -> bool:
        """Apply a score message. Returns False when the payload is not recognised."""
        message = parse_score_message(payload)
        if message is None:
            logger.debug("Ignoring message %r", payload)
            return False

        score = self.state.score
        score.record(message.score, message.max_score)
        logger.info("New score received: %s", score.score_text)

        if score.is_perfect:
            self.trigger_fireworks(self.settings.fireworks.celebration_count)
        else:
            self.request_redraw()
        return True

    def trigger_fireworks(self, count: int = CELEBRATION_COUNT) -> int:
        """Launch fireworks and keep drawing until they have all burnt out."""
        spawned = self.field.spawn(count, self.canvas_size)
        if spawned:
            self.state.fireworks_active = True
            self.start_continuous()
        return spawned

    def start_continuous(self) -> None:
        self.state.render_mode = RenderMode.CONTINUOUS

    def stop_continuous(self) -> None:
        self.state.render_mode = RenderMode.IDLE

    def request_redraw(self) -> None:
        """Draw exactly one frame on the next step."""
        self.state.redraw_requested = True

    def resize(self, container: Size | None, window: Size) -> Size:
        """Fit the canvas to a new host size and redraw it."""
        size = compute_canvas_size(container, window, self.settings.display)
        if size != self.canvas_size:
            self.canvas = pygame.Surface(size)
            self.trail = pygame.Surface(size, pygame.SRCALPHA)
            logger.debug("Canvas resized to %dx%d", *size)
        self.request_redraw()
        return size

    def step(self) -> bool:
        """Called once per clock tick. Returns True when a frame was drawn."""
        if self.state.render_mode != RenderMode.CONTINUOUS and not self.state.redraw_requested:
            return False
        self.state.redraw_requested = False
        self.render_frame()
        return True

    def render_frame(self) -> None:
        if self.state.fireworks_active and len(self.field) > 0:
            self.trail.fill((*TRAIL_COLOR, self.settings.display.trail_alpha))
            self.canvas.blit(self.trail, (0, 0))
        else:
            self.canvas.fill(CANVAS_BG)

        self.renderer.render(self.canvas, self.display)
        self.field.tick(self.canvas)
        self.frames_rendered += 1

        if self.state.fireworks_active and len(self.field) == 0:
            self.state.fireworks_active = False
            self.stop_continuous()
            # One more pass so the static readout replaces the last trail frame.
            self.request_redraw()
            logger.info("Fireworks finished")
