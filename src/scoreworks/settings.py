"""Runtime configuration loaded from an optional JSON file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any
import logging
import math
import os

from .utils import (
    CANVAS_MAX,
    CANVAS_MIN,
    CELEBRATION_COUNT,
    FPS,
    LOGGER_NAME,
    SETTINGS_FILE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    load_json,
)

logger = logging.getLogger(LOGGER_NAME)

SETTINGS_ENV = "SCOREWORKS_SETTINGS"


class SizingMode(str, Enum):
    """How the canvas derives its size from the host window."""

    CONTAINER = "container"
    WINDOW = "window"


@dataclass(slots=True)
class FireworkSettings:
    """Physics constants for launch and debris particles."""

    gravity: float = 0.25
    debris_gravity_scale: float = 0.2
    drag: float = 0.98
    lifespan: int = 255
    decay: int = 4
    explosion_min: int = 60
    explosion_max: int = 120
    debris_speed: tuple[float, float] = (2.0, 8.0)
    launch_vx: tuple[float, float] = (-1.0, 1.0)
    launch_vy: tuple[float, float] = (-12.0, -8.0)
    early_explode_chance: float = 0.01
    celebration_count: int = CELEBRATION_COUNT


@dataclass(slots=True)
class DisplaySettings:
    """Window and canvas options."""

    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    sizing: SizingMode = SizingMode.CONTAINER
    canvas_min: int = CANVAS_MIN
    canvas_max: int = CANVAS_MAX
    fps: int = FPS
    trail_alpha: int = 60
    fullscreen: bool = False
    title: str = "Scoreworks"


@dataclass(slots=True)
class LoggingSettings:
    """Options for the application logger."""

    level: str = "INFO"
    log_file: str | None = None
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True)
class AppSettings:
    """Top-level settings tree."""

    fireworks: FireworkSettings = field(default_factory=FireworkSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


class SettingsManager:
    """Load settings from disk, keeping defaults for anything missing or invalid."""

    def __init__(self, path: Path | None = None) -> None:
        if path is None:
            path = Path(os.environ.get(SETTINGS_ENV, str(SETTINGS_FILE)))
        self.path = path
        self.settings = self.load()

    def load(self) -> AppSettings:
        """Load app settings from disk with safe defaults."""
        raw = load_json(self.path, {})
        settings = AppSettings()
        if not isinstance(raw, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", self.path)
            return settings

        fireworks = self._section(raw, "fireworks")
        fw = settings.fireworks
        fw.gravity = self._number(fireworks, "gravity", fw.gravity, float)
        fw.debris_gravity_scale = self._number(fireworks, "debris_gravity_scale", fw.debris_gravity_scale, float)
        fw.drag = self._number(fireworks, "drag", fw.drag, float)
        fw.lifespan = max(1, self._number(fireworks, "lifespan", fw.lifespan, int))
        fw.decay = max(1, self._number(fireworks, "decay", fw.decay, int))
        fw.explosion_min = max(1, self._number(fireworks, "explosion_min", fw.explosion_min, int))
        fw.explosion_max = max(fw.explosion_min + 1, self._number(fireworks, "explosion_max", fw.explosion_max, int))
        fw.debris_speed = self._range(fireworks, "debris_speed", fw.debris_speed)
        fw.launch_vx = self._range(fireworks, "launch_vx", fw.launch_vx)
        fw.launch_vy = self._range(fireworks, "launch_vy", fw.launch_vy)
        fw.early_explode_chance = self._number(fireworks, "early_explode_chance", fw.early_explode_chance, float)
        fw.celebration_count = max(1, self._number(fireworks, "celebration_count", fw.celebration_count, int))

        display = self._section(raw, "display")
        ds = settings.display
        ds.window_width = max(1, self._number(display, "window_width", ds.window_width, int))
        ds.window_height = max(1, self._number(display, "window_height", ds.window_height, int))
        sizing = display.get("sizing")
        if isinstance(sizing, str) and sizing in {e.value for e in SizingMode}:
            ds.sizing = SizingMode(sizing)
        ds.canvas_min = max(1, self._number(display, "canvas_min", ds.canvas_min, int))
        ds.canvas_max = max(ds.canvas_min, self._number(display, "canvas_max", ds.canvas_max, int))
        ds.fps = max(1, self._number(display, "fps", ds.fps, int))
        ds.trail_alpha = int(min(255, max(0, self._number(display, "trail_alpha", ds.trail_alpha, int))))
        fullscreen = display.get("fullscreen", ds.fullscreen)
        if isinstance(fullscreen, bool):
            ds.fullscreen = fullscreen
        else:
            logger.warning("Invalid value for %r in %s, using %r", "fullscreen", self.path, ds.fullscreen)
        ds.title = str(display.get("title", ds.title))

        log = self._section(raw, "logging")
        ls = settings.logging
        ls.level = str(log.get("level", ls.level)).upper()
        if log.get("log_file"):
            ls.log_file = str(log["log_file"])
        ls.format = str(log.get("format", ls.format))
        return settings

    def _section(self, raw: dict[str, Any], name: str) -> dict[str, Any]:
        section = raw.get(name, {})
        if not isinstance(section, dict):
            logger.warning("Ignoring settings section %r: expected an object", name)
            return {}
        return section

    def _number(self, payload: dict[str, Any], key: str, default: Any, cast: type) -> Any:
        if key not in payload:
            return default
        try:
            value = cast(payload[key])
        except (TypeError, ValueError, OverflowError):
            logger.warning("Invalid value for %r in %s, using %r", key, self.path, default)
            return default
        if isinstance(value, float) and not math.isfinite(value):
            logger.warning("Non-finite value for %r in %s, using %r", key, self.path, default)
            return default
        return value

    def _range(self, payload: dict[str, Any], key: str, default: tuple[float, float]) -> tuple[float, float]:
        value = payload.get(key)
        if value is None:
            return default
        try:
            low, high = (float(v) for v in value)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Invalid range for %r in %s, using %r", key, self.path, default)
            return default
        if not (math.isfinite(low) and math.isfinite(high)):
            logger.warning("Non-finite range for %r in %s, using %r", key, self.path, default)
            return default
        return (min(low, high), max(low, high))
