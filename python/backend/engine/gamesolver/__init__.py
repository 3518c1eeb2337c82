from backend.engine.gamesolver.canonical import canonical_key
from backend.engine.gamesolver.heuristic import estimate, longest_goal_run
from backend.engine.gamesolver.reconstruct import reconstruct_moves
from backend.engine.gamesolver.search import (
    SearchNode,
    SearchRun,
    SearchSession,
    SearchToken,
)
from backend.engine.gamesolver.solver import Solver

__all__ = [
    "SearchNode",
    "SearchRun",
    "SearchSession",
    "SearchToken",
    "Solver",
    "canonical_key",
    "estimate",
    "longest_goal_run",
    "reconstruct_moves",
]
