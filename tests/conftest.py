"""Pytest configuration for headless pygame tests."""

from __future__ import annotations

import os
import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def pygame_headless():
    import pygame

    pygame.init()
    yield pygame
    pygame.quit()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
