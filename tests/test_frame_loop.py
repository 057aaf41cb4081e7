from __future__ import annotations

import random

import pytest

from scoreworks.frame_loop import FrameLoop, RenderMode, compute_canvas_size
from scoreworks.scoreboard import NO_SCORE_MESSAGE, ScoreTier
from scoreworks.settings import AppSettings, DisplaySettings, SizingMode


def _message(score, max_score) -> dict:
    return {"type": "H5P_SCORE_RESULT", "score": score, "maxScore": max_score}


@pytest.fixture
def loop(pygame_headless, rng: random.Random) -> FrameLoop:
    return FrameLoop(AppSettings(), (400, 400), rng)


def _drain(loop: FrameLoop, limit: int = 2000) -> int:
    frames = 0
    while loop.state.render_mode == RenderMode.CONTINUOUS:
        assert loop.step()
        frames += 1
        assert frames < limit
    return frames


def test_perfect_score_spawns_six_fireworks(loop: FrameLoop) -> None:
    assert loop.handle_message(_message(10, 10))
    assert loop.display.percentage == 100
    assert loop.display.tier == ScoreTier.PERFECT
    assert len(loop.field) == 6
    assert loop.state.fireworks_active
    assert loop.state.render_mode == RenderMode.CONTINUOUS


def test_partial_score_renders_exactly_once(loop: FrameLoop) -> None:
    assert loop.handle_message(_message(7, 10))
    assert loop.display.percentage == 70
    assert loop.display.tier == ScoreTier.GOOD
    assert len(loop.field) == 0
    assert loop.state.render_mode == RenderMode.IDLE

    rendered = [loop.step() for _ in range(5)]
    assert rendered == [True, False, False, False, False]
    assert loop.frames_rendered == 1


def test_zero_max_score_shows_fallback(loop: FrameLoop) -> None:
    assert loop.display.message == NO_SCORE_MESSAGE
    assert loop.handle_message(_message(0, 0))
    assert loop.display.percentage == 0
    assert loop.display.tier == ScoreTier.NONE
    assert loop.display.message == "Final score: 0/0"
    assert len(loop.field) == 0


def test_unrecognised_message_changes_nothing(loop: FrameLoop) -> None:
    assert not loop.handle_message({"type": "SOMETHING_ELSE", "score": 10, "maxScore": 10})
    assert not loop.handle_message("not a dict")
    assert loop.state.score.max_score == 0
    assert not loop.state.redraw_requested
    assert not loop.step()


def test_invalid_fields_default_to_zero(loop: FrameLoop) -> None:
    assert loop.handle_message({"type": "H5P_SCORE_RESULT", "score": "ten", "maxScore": None})
    assert (loop.state.score.final_score, loop.state.score.max_score) == (0, 0)
    assert loop.display.tier == ScoreTier.NONE


def test_celebration_stops_and_leaves_one_final_frame(loop: FrameLoop) -> None:
    loop.handle_message(_message(10, 10))
    frames = _drain(loop)
    assert frames > 0
    assert len(loop.field) == 0
    assert not loop.state.fireworks_active
    assert loop.state.render_mode == RenderMode.IDLE
    assert loop.state.redraw_requested

    before = loop.frames_rendered
    assert loop.step()
    assert not loop.step()
    assert loop.frames_rendered == before + 1
    assert loop.display.tier == ScoreTier.PERFECT
    assert loop.canvas.get_at((0, 0))[:3] == (255, 255, 255)


def test_trigger_fireworks_directly(loop: FrameLoop) -> None:
    assert loop.trigger_fireworks() == 6
    assert loop.trigger_fireworks(2) == 2
    assert len(loop.field) == 8
    assert loop.state.render_mode == RenderMode.CONTINUOUS


def test_trigger_with_no_fireworks_is_noop(loop: FrameLoop) -> None:
    assert loop.trigger_fireworks(0) == 0
    assert not loop.state.fireworks_active
    assert loop.state.render_mode == RenderMode.IDLE


def test_trail_overlay_while_active(loop: FrameLoop) -> None:
    loop.canvas.fill((255, 255, 255))
    loop.trigger_fireworks(1)
    loop.step()
    assert loop.canvas.get_at((0, 0))[:3] != (255, 255, 255)


def test_resize_clamps_and_requests_redraw(loop: FrameLoop) -> None:
    assert loop.resize((1500, 100), (1500, 100)) == (900, 200)
    assert loop.canvas_size == (900, 200)
    assert loop.state.redraw_requested
    assert loop.step()


@pytest.mark.parametrize(
    ("container", "window", "expected"),
    [
        ((500, 400), (1200, 760), (500, 400)),
        ((50, 0), (1200, 760), (200, 200)),
        ((600, 0), (1200, 760), (600, 600)),
        ((2000, 2000), (1200, 760), (900, 900)),
        (None, (1200, 760), (450, 380)),
        (None, (300, 300), (200, 200)),
    ],
)
def test_compute_canvas_size_container_mode(container, window, expected) -> None:
    assert compute_canvas_size(container, window, DisplaySettings()) == expected


def test_compute_canvas_size_window_mode_ignores_container() -> None:
    display = DisplaySettings(sizing=SizingMode.WINDOW)
    assert compute_canvas_size((500, 400), (1200, 760), display) == (450, 380)


def test_first_frame_renders_before_any_message(loop: FrameLoop) -> None:
    loop.request_redraw()
    assert loop.step()
    assert loop.frames_rendered == 1
    assert loop.display.score_line == "score: 0/0"


def test_oversized_score_is_treated_as_zero(loop: FrameLoop) -> None:
    assert loop.handle_message(_message(10**400, 10))
    assert loop.state.score.final_score == 0
    assert len(loop.field) == 0
    assert loop.step()
