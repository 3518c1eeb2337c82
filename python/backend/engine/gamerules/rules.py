"""Win/loss detection and the walk/push transition rules."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import NamedTuple

from backend.config import SIZE
from backend.engine.gamerules.reachability import reachable_from, walk_path
from backend.models.board import Cell, Direction, Grid, Position, PuzzleState, in_bounds
from backend.models.results import Blocked, BlockReason, Outcome


class Axis(StrEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


_AXIS_STEPS: dict[Axis, tuple[int, int]] = {
    Axis.HORIZONTAL: (0, 1),
    Axis.VERTICAL: (1, 0),
}


class Line(NamedTuple):
    """A length-3 window identified by its first (top/left) cell."""

    row: int
    col: int
    axis: Axis

    def cells(self) -> tuple[Position, Position, Position]:
        dr, dc = _AXIS_STEPS[self.axis]
        return (
            (self.row, self.col),
            (self.row + dr, self.col + dc),
            (self.row + 2 * dr, self.col + 2 * dc),
        )


def _windows() -> list[Line]:
    lines: list[Line] = []
    for r in range(SIZE):
        for c in range(SIZE):
            for axis, (dr, dc) in _AXIS_STEPS.items():
                if in_bounds(r + 2 * dr, c + 2 * dc):
                    lines.append(Line(r, c, axis))
    return lines


# Every horizontal and vertical window, row-major then per-axis.
WINDOWS: tuple[Line, ...] = tuple(_windows())

_WINDOW_CELLS: dict[Line, tuple[Position, Position, Position]] = {
    line: line.cells() for line in WINDOWS
}

# Windows covering each cell; at most three per axis.
_WINDOWS_THROUGH: dict[Position, tuple[Line, ...]] = {
    (r, c): tuple(line for line in WINDOWS if (r, c) in _WINDOW_CELLS[line])
    for r in range(SIZE)
    for c in range(SIZE)
}


def _candidates(near: Iterable[Position] | None) -> Iterable[Line]:
    if near is None:
        return WINDOWS
    # Duplicates are harmless to every caller.
    return [line for pos in near for line in _WINDOWS_THROUGH[pos]]


# -- win / loss ----------------------------------------------------------------


def has_win(
    grid: Grid, agent: Position | None, near: Iterable[Position] | None = None
) -> bool:
    """True if three Goal cells line up, counting the agent's cell as a Goal.

    With *near*, only windows through those cells are checked. That is enough
    when they are the only cells changed since a position without a win.
    """
    cells = grid.cells

    def is_goal(pos: Position) -> bool:
        return pos == agent or cells[pos[0]][pos[1]] is Cell.GOAL

    return any(
        all(is_goal(pos) for pos in _WINDOW_CELLS[line]) for line in _candidates(near)
    )


def line_keys(
    grid: Grid, piece: Cell, near: Iterable[Position] | None = None
) -> frozenset[Line]:
    cells = grid.cells
    return frozenset(
        line
        for line in _candidates(near)
        if all(cells[r][c] is piece for r, c in _WINDOW_CELLS[line])
    )


def has_loss(
    grid: Grid, baseline: Collection[Line], near: Iterable[Position] | None = None
) -> bool:
    """True if a Hazard line exists that was not already there at reset.

    *near* narrows the check the same way as for :func:`has_win`.
    """
    return any(line not in baseline for line in line_keys(grid, Cell.HAZARD, near))


def evaluate_outcome(state: PuzzleState, baseline: Collection[Line]) -> Outcome:
    # Win is checked first; a push that completes both lines is a win.
    if has_win(state.grid, state.agent):
        return Outcome.WON
    if has_loss(state.grid, baseline):
        return Outcome.LOST
    return Outcome.ONGOING


# -- transitions ---------------------------------------------------------------


def apply_move(state: PuzzleState, direction: Direction) -> PuzzleState | Blocked:
    """Walk or push one step in *direction*.

    A walk needs an empty target cell. A push moves the single piece in the
    target cell one further step, onto an empty in-bounds cell, and the agent
    follows into the vacated cell.
    """
    nxt = direction.step(state.agent)
    if not in_bounds(*nxt):
        return Blocked(direction, BlockReason.OUT_OF_BOUNDS)

    grid = state.grid
    piece = grid.get(nxt)
    if piece is Cell.EMPTY:
        return state.with_agent(nxt)

    landing = direction.step(nxt)
    if not in_bounds(*landing):
        return Blocked(direction, BlockReason.OUT_OF_BOUNDS)
    if not grid.is_empty(landing):
        return Blocked(direction, BlockReason.OCCUPIED)

    pushed = grid.with_cells({landing: piece, nxt: Cell.EMPTY})
    return PuzzleState(grid=pushed, agent=nxt)


@dataclass(frozen=True)
class Successor:
    """One search edge: walk anywhere reachable, then push once.

    ``landing`` is the cell the pushed piece moved onto.
    """

    state: PuzzleState
    moves: tuple[Direction, ...]
    landing: Position


def generate_successors(state: PuzzleState) -> list[Successor]:
    grid = state.grid
    parents = reachable_from(grid, state.agent)
    successors: list[Successor] = []

    for cell in sorted(parents):
        walk: tuple[Direction, ...] | None = None
        for direction in Direction:
            block = direction.step(cell)
            landing = direction.step(block)
            if not in_bounds(*block) or not in_bounds(*landing):
                continue
            if grid.is_empty(block) or not grid.is_empty(landing):
                continue

            if walk is None:
                walk = tuple(walk_path(parents, cell))
            pushed = grid.with_cells({landing: grid.get(block), block: Cell.EMPTY})
            successors.append(
                Successor(
                    state=PuzzleState(grid=pushed, agent=block),
                    moves=(*walk, direction),
                    landing=landing,
                )
            )

    return successors
