"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.engine.gamerules.rules import Line, evaluate_outcome
from backend.models.board import PuzzleState
from backend.models.results import Outcome


class GameState:
    """Holds the live puzzle, its baseline, move counter, and game clock."""

    def __init__(self, puzzle: PuzzleState, baseline: frozenset[Line]) -> None:
        self.puzzle = puzzle
        self.baseline = baseline
        self.moves: int = 0
        self._started: float = time.monotonic()
        self._stopped: float | None = None

    # -- clock ----------------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        """Seconds since the game started, frozen once the clock is stopped."""
        end = self._stopped if self._stopped is not None else time.monotonic()
        return end - self._started

    def stop_clock(self) -> None:
        if self._stopped is None:
            self._stopped = time.monotonic()

    # -- moves ----------------------------------------------------------------

    def advance(self, puzzle: PuzzleState) -> None:
        self.puzzle = puzzle
        self.moves += 1

    @property
    def outcome(self) -> Outcome:
        return evaluate_outcome(self.puzzle, self.baseline)
