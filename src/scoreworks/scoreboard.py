"""Score state, display tiers, and the score readout renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import pygame

from .utils import (
    AMBER,
    AMBER_SHAPE,
    GOLD,
    GOLD_SHAPE,
    GRAY,
    GREEN,
    GREEN_SHAPE,
    RED,
    SCORE_LINE_COLOR,
    format_number,
)

NO_SCORE_MESSAGE = "No score received yet"

MESSAGE_SIZE = 36
SCORE_LINE_SIZE = 24
MESSAGE_OFFSET = -30
SCORE_LINE_OFFSET = 10
SHAPE_OFFSET = 90


class ScoreTier(str, Enum):
    """Display buckets keyed off the score percentage."""

    PERFECT = "perfect"
    EXCELLENT = "excellent"
    GOOD = "good"
    LOW = "low"
    NONE = "none"


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(slots=True)
class ShapeCue:
    """Shape drawn under the score text."""

    kind: ShapeKind
    color: tuple[int, int, int, int]
    max_size: int
    width_ratio: float

    def size_for(self, canvas_width: int) -> float:
        return min(self.max_size, canvas_width * self.width_ratio)


@dataclass(slots=True)
class ScoreState:
    """Latest score received from the content frame."""

    final_score: float = 0.0
    max_score: float = 0.0
    score_text: str = ""

    @property
    def percentage(self) -> float:
        if self.max_score <= 0:
            return 0.0
        return self.final_score / self.max_score * 100

    @property
    def is_perfect(self) -> bool:
        return self.max_score > 0 and self.percentage >= 100

    def record(self, final_score: float, max_score: float) -> None:
        """Store a new score and the text that describes it."""
        self.final_score = final_score
        self.max_score = max_score
        self.score_text = f"Final score: {format_number(final_score)}/{format_number(max_score)}"


@dataclass(slots=True)
class ScoreDisplay:
    """Everything the renderer needs to draw one score readout."""

    percentage: float
    tier: ScoreTier
    message: str
    color: tuple[int, int, int]
    score_line: str
    shape: ShapeCue | None


TIER_MESSAGES = {
    ScoreTier.PERFECT: "Perfect score! Congratulations!",
    ScoreTier.EXCELLENT: "Congratulations! Excellent result!",
    ScoreTier.GOOD: "Good result, keep improving.",
    ScoreTier.LOW: "Needs more effort!",
}

TIER_COLORS = {
    ScoreTier.PERFECT: GOLD,
    ScoreTier.EXCELLENT: GREEN,
    ScoreTier.GOOD: AMBER,
    ScoreTier.LOW: RED,
    ScoreTier.NONE: GRAY,
}

TIER_SHAPES = {
    ScoreTier.PERFECT: ShapeCue(ShapeKind.CIRCLE, GOLD_SHAPE, 140, 0.3),
    ScoreTier.EXCELLENT: ShapeCue(ShapeKind.CIRCLE, GREEN_SHAPE, 120, 0.26),
    ScoreTier.GOOD: ShapeCue(ShapeKind.SQUARE, AMBER_SHAPE, 120, 0.26),
}


def classify(final_score: float, max_score: float) -> tuple[float, ScoreTier]:
    """Return the percentage and its display tier."""
    percentage = final_score / max_score * 100 if max_score > 0 else 0.0
    if max_score > 0 and percentage >= 100:
        return percentage, ScoreTier.PERFECT
    if percentage >= 90:
        return percentage, ScoreTier.EXCELLENT
    if percentage >= 60:
        return percentage, ScoreTier.GOOD
    if percentage > 0:
        return percentage, ScoreTier.LOW
    return percentage, ScoreTier.NONE


def evaluate_score(final_score: float, max_score: float, score_text: str = "") -> ScoreDisplay:
    """Map a score pair to message, colour, and shape."""
    percentage, tier = classify(final_score, max_score)
    message = TIER_MESSAGES.get(tier) or score_text or NO_SCORE_MESSAGE
    return ScoreDisplay(
        percentage=percentage,
        tier=tier,
        message=message,
        color=TIER_COLORS[tier],
        score_line=f"score: {format_number(final_score)}/{format_number(max_score)}",
        shape=TIER_SHAPES.get(tier),
    )


def evaluate_state(state: ScoreState) -> ScoreDisplay:
    return evaluate_score(state.final_score, state.max_score, state.score_text)


class ScoreRenderer:
    """Draws a ScoreDisplay centred on a canvas."""

    def __init__(self) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.message_font = pygame.font.SysFont("arial", MESSAGE_SIZE, bold=True)
        self.score_font = pygame.font.SysFont("arial", SCORE_LINE_SIZE)

    def render(self, surface: pygame.Surface, display: ScoreDisplay) -> None:
        cx = surface.get_width() // 2
        cy = surface.get_height() // 2

        message = self.message_font.render(display.message, True, display.color)
        surface.blit(message, message.get_rect(midbottom=(cx, cy + MESSAGE_OFFSET)))

        score_line = self.score_font.render(display.score_line, True, SCORE_LINE_COLOR)
        surface.blit(score_line, score_line.get_rect(midbottom=(cx, cy + SCORE_LINE_OFFSET)))

        if display.shape is not None:
            self._draw_shape(surface, display.shape, (cx, cy + SHAPE_OFFSET))

    def _draw_shape(self, surface: pygame.Surface, shape: ShapeCue, center: tuple[int, int]) -> None:
        size = max(1, int(shape.size_for(surface.get_width())))
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        if shape.kind == ShapeKind.CIRCLE:
            pygame.draw.circle(layer, shape.color, (size // 2, size // 2), size // 2)
        else:
            layer.fill(shape.color)
        surface.blit(layer, layer.get_rect(center=center))
