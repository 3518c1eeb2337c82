"""Turn a winning node's parent chain into a flat move list."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from backend.models.board import Direction

if TYPE_CHECKING:
    from backend.engine.gamesolver.search import SearchNode


def reconstruct_moves(nodes: Sequence[SearchNode], index: int) -> tuple[Direction, ...]:
    segments: list[tuple[Direction, ...]] = []
    cur: int | None = index
    while cur is not None:
        node = nodes[cur]
        segments.append(node.step_moves)
        cur = node.parent
    segments.reverse()
    return tuple(move for segment in segments for move in segment)
