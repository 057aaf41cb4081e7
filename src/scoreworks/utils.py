"""Shared constants and utility helpers for Scoreworks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple
import json
import math

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 760
FPS = 60
CELEBRATION_COUNT = 6

LOGGER_NAME = "scoreworks"

CANVAS_MIN = 200
CANVAS_MAX = 900

PAGE_COLOR = (236, 239, 244)
CANVAS_BG = (255, 255, 255)
TRAIL_COLOR = (0, 0, 0)
SCORE_LINE_COLOR = (50, 50, 50)

GOLD = (212, 160, 0)
GOLD_SHAPE = (255, 215, 0, 180)
GREEN = (0, 200, 50)
GREEN_SHAPE = (0, 200, 50, 150)
AMBER = (255, 181, 35)
AMBER_SHAPE = (255, 181, 35, 150)
RED = (200, 0, 0)
GRAY = (150, 150, 150)

Size = Tuple[int, int]

DATA_DIR = Path(".scoreworks")
SETTINGS_FILE = DATA_DIR / "settings.json"


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def coerce_number(value: Any) -> float:
    """Convert loosely-typed input to a finite, non-negative number.

    Anything that is not a number (or a numeric string) becomes 0.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def format_number(value: float) -> str:
    """Render a score value without a trailing ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default
