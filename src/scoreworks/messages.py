"""Inbound score messages and the event types that carry them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
import pygame

from .utils import CELEBRATION_COUNT, coerce_number

SCORE_RESULT_TYPE = "H5P_SCORE_RESULT"

SCORE_RESULT_EVENT = pygame.event.custom_type()
TRIGGER_FIREWORKS_EVENT = pygame.event.custom_type()


@dataclass(slots=True)
class ScoreMessage:
    """A recognised score result with coerced numeric fields."""

    score: float
    max_score: float


def parse_score_message(payload: Any) -> ScoreMessage | None:
    """Return a ScoreMessage for a recognised payload, otherwise None.

    Invalid or missing numbers become 0 instead of failing.
    """
    if not isinstance(payload, Mapping):
        return None
    if payload.get("type") != SCORE_RESULT_TYPE:
        return None
    return ScoreMessage(
        score=coerce_number(payload.get("score")),
        max_score=coerce_number(payload.get("maxScore")),
    )


def post_score_message(payload: Mapping[str, Any]) -> None:
    """Queue a score payload for the running application."""
    pygame.event.post(pygame.event.Event(SCORE_RESULT_EVENT, payload=dict(payload)))


def trigger_fireworks(count: int = CELEBRATION_COUNT) -> None:
    """Ask the running application to launch ``count`` fireworks."""
    pygame.event.post(pygame.event.Event(TRIGGER_FIREWORKS_EVENT, count=count))
