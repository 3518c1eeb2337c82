"""Flood fill over empty cells, shared by successor generation and keys."""

from __future__ import annotations

from collections import deque

from backend.config import SIZE
from backend.models.board import Cell, Direction, Grid, Position, in_bounds

# In-bounds orthogonal neighbours of every cell, in Direction order.
NEIGHBORS: dict[Position, tuple[Position, ...]] = {
    (r, c): tuple(
        step
        for step in (direction.step((r, c)) for direction in Direction)
        if in_bounds(*step)
    )
    for r in range(SIZE)
    for c in range(SIZE)
}


def reachable_from(grid: Grid, start: Position) -> dict[Position, Position | None]:
    """Breadth-first search from *start* through empty cells only.

    Returns a parent map: every reachable cell maps to the cell it was first
    reached from, and *start* maps to ``None``. Keys are in BFS order.
    """
    cells = grid.cells
    parents: dict[Position, Position | None] = {start: None}
    queue: deque[Position] = deque([start])

    while queue:
        cur = queue.popleft()
        for nxt in NEIGHBORS[cur]:
            if nxt in parents or cells[nxt[0]][nxt[1]] is not Cell.EMPTY:
                continue
            parents[nxt] = cur
            queue.append(nxt)

    return parents


def region_anchor(grid: Grid, start: Position) -> Position:
    """Smallest cell, in row-major order, of the empty region around *start*."""
    cells = grid.cells
    seen = {start}
    stack = [start]
    best = start

    while stack:
        cur = stack.pop()
        if cur < best:
            best = cur
        for nxt in NEIGHBORS[cur]:
            if nxt not in seen and cells[nxt[0]][nxt[1]] is Cell.EMPTY:
                seen.add(nxt)
                stack.append(nxt)

    return best


def walk_path(
    parents: dict[Position, Position | None], end: Position
) -> list[Direction]:
    """Primitive moves leading from the BFS root to *end*."""
    cells = [end]
    prev = parents[end]
    while prev is not None:
        cells.append(prev)
        prev = parents[prev]
    cells.reverse()

    return [
        Direction.from_delta(b[0] - a[0], b[1] - a[1])
        for a, b in zip(cells, cells[1:])
    ]
