"""Distance-to-goal estimate guiding the best-first search."""

from __future__ import annotations

from backend.engine.gamerules.rules import has_win
from backend.models.board import Cell, PuzzleState


def longest_goal_run(state: PuzzleState) -> int:
    """Longest row or column run of Goal cells, the agent's cell included."""
    goals = set(state.grid.positions_of(Cell.GOAL))
    goals.add(state.agent)

    best = 0
    for r, c in goals:
        # Count only from the first cell of each run.
        if (r, c - 1) not in goals:
            n = 1
            while (r, c + n) in goals:
                n += 1
            best = max(best, n)
        if (r - 1, c) not in goals:
            n = 1
            while (r + n, c) in goals:
                n += 1
            best = max(best, n)
    return best


def estimate(state: PuzzleState, won: bool | None = None) -> int:
    """``3 - longest goal run``, or 0 for a win.

    Pass *won* when the caller has already checked for a win. Piece travel
    distance is ignored, so this is guidance rather than an admissible bound.
    """
    if won is None:
        won = has_win(state.grid, state.agent)
    if won:
        return 0
    return max(0, 3 - longest_goal_run(state))
