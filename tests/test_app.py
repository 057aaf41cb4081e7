from __future__ import annotations

import random

import pygame
import pytest

from scoreworks.app import ScoreApp
from scoreworks.frame_loop import RenderMode
from scoreworks.messages import post_score_message, trigger_fireworks
from scoreworks.settings import AppSettings


@pytest.fixture
def app(pygame_headless) -> ScoreApp:
    settings = AppSettings()
    settings.display.window_width = 800
    settings.display.window_height = 600
    game = ScoreApp(settings, random.Random(7))
    pygame.event.clear()
    return game


def test_canvas_fits_window(app: ScoreApp) -> None:
    assert app.window.get_size() == (800, 600)
    assert app.frame_loop.canvas_size == (800, 600)


def test_score_event_reaches_frame_loop(app: ScoreApp) -> None:
    post_score_message({"type": "H5P_SCORE_RESULT", "score": 10, "maxScore": 10})
    assert app.handle_events()
    assert app.frame_loop.state.score.final_score == 10
    assert len(app.frame_loop.field) == 6
    assert app.frame_loop.state.render_mode == RenderMode.CONTINUOUS


def test_trigger_event_and_key(app: ScoreApp) -> None:
    trigger_fireworks(2)
    assert app.handle_events()
    assert len(app.frame_loop.field) == 2

    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_f, mod=0, unicode="f", scancode=0))
    assert app.handle_events()
    assert len(app.frame_loop.field) == 8


def test_resize_event_resizes_canvas(app: ScoreApp) -> None:
    pygame.event.post(pygame.event.Event(pygame.VIDEORESIZE, size=(1000, 150), w=1000, h=150))
    assert app.handle_events()
    assert app.frame_loop.canvas_size == (900, 200)
    assert app.frame_loop.state.redraw_requested


def test_quit_and_escape_stop_the_loop(app: ScoreApp) -> None:
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert not app.handle_events()

    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0, unicode="", scancode=0))
    assert not app.handle_events()


def test_run_exits_on_quit(app: ScoreApp) -> None:
    post_score_message({"type": "H5P_SCORE_RESULT", "score": 7, "maxScore": 10})
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app.run()
    assert not app.running
