"""Typed outcomes reported by the rule engine and the solver.

None of these are exceptions: a blocked move, a cancelled search and an
exhausted search are all expected results handed back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import NamedTuple

from backend.models.board import Direction, PuzzleState


class Outcome(StrEnum):
    ONGOING = "ongoing"
    WON = "won"
    LOST = "lost"


class BlockReason(StrEnum):
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"


@dataclass(frozen=True)
class Blocked:
    """A rejected move. The state it was attempted on is unchanged."""

    direction: Direction
    reason: BlockReason

    def __bool__(self) -> bool:
        return False


class SearchStatus(StrEnum):
    SOLVED = "solved"
    UNSOLVED = "unsolved"
    CANCELLED = "cancelled"


class SearchStats(NamedTuple):
    expansions: int
    open_size: int
    visited_size: int


@dataclass(frozen=True)
class SearchProgress:
    """Snapshot emitted at every cooperative yield point."""

    expansions: int
    open_size: int
    visited_size: int
    state: PuzzleState


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    stats: SearchStats
    moves: tuple[Direction, ...] | None = field(default=None)

    @property
    def solved(self) -> bool:
        return self.status is SearchStatus.SOLVED
