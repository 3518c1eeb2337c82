"""Rich frontend tests — clock formatting and Ctrl-C during replay or hint."""

from __future__ import annotations

import pytest

from backend.config import SearchConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import SearchRun
from backend.models.board import Direction
from frontend.cli import app

FEW_PUSHES = [
    "@.....",
    "......",
    "...O..",
    "......",
    "......",
    "OO....",
]


def _interrupt(*_args, **_kwargs):
    raise KeyboardInterrupt


def _search_headless(game: GamePlay) -> SearchRun | None:
    run = game.start_auto_solve()
    if run is not None:
        run.run()
    return run


# -- clock --------------------------------------------------------------------


@pytest.mark.parametrize(
    ("seconds", "text"),
    [(0.0, "00:00"), (59.9, "00:59"), (75.2, "01:15"), (3600.0, "60:00")],
)
def test_format_time(seconds: float, text: str) -> None:
    assert app.format_time(seconds) == text


# -- Ctrl-C -------------------------------------------------------------------


def test_ctrl_c_during_replay_stops_and_unlocks(monkeypatch: pytest.MonkeyPatch) -> None:
    game = GamePlay.from_state(GameGenerator.from_rows(FEW_PUSHES))
    monkeypatch.setattr(app, "_search_live", _search_headless)
    monkeypatch.setattr(app, "_draw_game", _interrupt)

    status, stats = app._auto_solve(game)

    assert "Replay stopped" in status
    assert stats is not None
    assert game.state.moves == 1
    assert not game.is_auto_solving
    assert not game.is_over
    assert any(game.move(direction) for direction in Direction)


def test_ctrl_c_during_hint_leaves_game_untouched(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    game = GamePlay.from_state(GameGenerator.from_rows(FEW_PUSHES))
    before = game.state.puzzle
    monkeypatch.setattr(app.Solver, "hint", staticmethod(_interrupt))

    status = app._apply_hint(game, SearchConfig())

    assert "stopped" in status
    assert game.state.puzzle == before
    assert game.state.moves == 0
