"""Core gameplay logic — processes moves, runs the solver, replays solutions."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from backend.config import SearchConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamerules.rules import Line, apply_move
from backend.engine.gamesolver.search import ProgressCallback, SearchRun, SearchSession
from backend.engine.gamestate import GameState
from backend.models.board import Direction, PuzzleState
from backend.models.results import Blocked, Outcome

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    The live puzzle is shared between the player and the solver's replay,
    but only one of them may change it at a time: player moves are rejected
    while a solve or its replay is in progress.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self.session = SearchSession(config)
        self._solve_run: SearchRun | None = None
        self.state = GameState(*GameGenerator.reset())

    @classmethod
    def from_state(
        cls,
        puzzle: PuzzleState,
        baseline: frozenset[Line] | None = None,
        config: SearchConfig | None = None,
    ) -> GamePlay:
        """Create a game session from an arbitrary puzzle state."""
        obj = cls(config)
        if baseline is None:
            baseline = GameGenerator.baseline(puzzle)
        obj.state = GameState(puzzle, baseline)
        return obj

    def reset(self) -> None:
        self.cancel_auto_solve()
        self.state = GameState(*GameGenerator.reset())

    # -- player moves ---------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """Walk or push in *direction*.

        Returns False, leaving the puzzle unchanged, if the game is over, a
        solve is active, or the move is blocked.
        """
        if self.is_over or self.is_auto_solving:
            return False

        nxt = apply_move(self.state.puzzle, direction)
        if isinstance(nxt, Blocked):
            logger.debug("Move %s blocked: %s", direction.value, nxt.reason.value)
            return False

        self._advance(nxt)
        return True

    # -- solver ---------------------------------------------------------------

    def start_auto_solve(
        self, on_progress: ProgressCallback | None = None
    ) -> SearchRun | None:
        """Begin a search from the live puzzle, or ``None`` if not allowed."""
        if self.is_over or self.is_auto_solving:
            return None
        self._solve_run = self.session.start(
            self.state.puzzle, self.state.baseline, on_progress
        )
        return self._solve_run

    def replay(self, run: SearchRun) -> Iterator[PuzzleState]:
        """Apply the solution of a finished *run* one move at a time.

        Without a solution the solver lock is released right away and the
        iterator is empty. Otherwise the lock is held until the iterator is
        exhausted or closed after its first step; :meth:`cancel_auto_solve`
        and :meth:`reset` release it at any time. The replay stops early if
        the run was superseded, the game ended, or a move no longer applies.
        """
        if run.result is None or not run.result.solved:
            self.finish_auto_solve(run)
            return iter(())
        return self._replay_moves(run, run.result.moves or ())

    def _replay_moves(
        self, run: SearchRun, moves: tuple[Direction, ...]
    ) -> Iterator[PuzzleState]:
        try:
            for direction in moves:
                if not self.session.is_current(run.token) or self.is_over:
                    return
                nxt = apply_move(self.state.puzzle, direction)
                if isinstance(nxt, Blocked):
                    logger.warning(
                        "Replay stopped: move %s blocked (%s)",
                        direction.value,
                        nxt.reason.value,
                    )
                    return
                self._advance(nxt)
                yield nxt
        finally:
            if self._solve_run is run:
                self._solve_run = None

    def finish_auto_solve(self, run: SearchRun) -> None:
        """Release the solver lock without replaying."""
        if self._solve_run is run:
            self._solve_run = None

    def cancel_auto_solve(self) -> None:
        if self._solve_run is not None:
            self.session.cancel(self._solve_run.token)
            self._solve_run = None

    # -- queries --------------------------------------------------------------

    @property
    def outcome(self) -> Outcome:
        return self.state.outcome

    @property
    def is_won(self) -> bool:
        return self.outcome is Outcome.WON

    @property
    def is_lost(self) -> bool:
        return self.outcome is Outcome.LOST

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.ONGOING

    @property
    def is_auto_solving(self) -> bool:
        return self._solve_run is not None

    # -- helpers --------------------------------------------------------------

    def _advance(self, puzzle: PuzzleState) -> None:
        self.state.advance(puzzle)
        if self.is_over:
            self.state.stop_clock()
            logger.info("Game over: %s after %d moves", self.outcome.value, self.state.moves)
