"""Push puzzle solver."""

from __future__ import annotations

from collections.abc import Collection

from backend.config import SearchConfig
from backend.engine.gamerules.rules import Line, has_win, line_keys
from backend.engine.gamesolver.search import SearchSession
from backend.models.board import Cell, Direction, PuzzleState
from backend.models.results import SearchResult


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(
        state: PuzzleState,
        baseline: Collection[Line] | None = None,
        config: SearchConfig | None = None,
    ) -> SearchResult:
        """Search from *state* to completion on a private session.

        Without a *baseline*, the hazard lines already on ``state.grid`` are
        treated as pre-existing.
        """
        if baseline is None:
            baseline = line_keys(state.grid, Cell.HAZARD)
        return SearchSession(config).start(state, baseline).run()

    @staticmethod
    def hint(
        state: PuzzleState,
        baseline: Collection[Line] | None = None,
        config: SearchConfig | None = None,
    ) -> Direction | None:
        """Return the first move of a solution, or ``None`` if won / unsolved."""
        if has_win(state.grid, state.agent):
            return None

        result = Solver.solve(state, baseline, config)
        if not result.solved or not result.moves:
            return None
        return result.moves[0]
