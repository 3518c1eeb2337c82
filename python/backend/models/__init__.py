from backend.models.board import Cell, Direction, Grid, Position, PuzzleState
from backend.models.results import (
    Blocked,
    BlockReason,
    Outcome,
    SearchProgress,
    SearchResult,
    SearchStats,
    SearchStatus,
)

__all__ = [
    "Blocked",
    "BlockReason",
    "Cell",
    "Direction",
    "Grid",
    "Outcome",
    "Position",
    "PuzzleState",
    "SearchProgress",
    "SearchResult",
    "SearchStats",
    "SearchStatus",
]
