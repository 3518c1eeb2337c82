"""Board model for the push puzzle."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum

from backend.config import SIZE

Position = tuple[int, int]


class Cell(StrEnum):
    EMPTY = "."
    GOAL = "O"
    HAZARD = "X"


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    def step(self, pos: Position) -> Position:
        dr, dc = _DELTAS[self]
        return pos[0] + dr, pos[1] + dc

    @classmethod
    def from_delta(cls, dr: int, dc: int) -> Direction:
        for direction, delta in _DELTAS.items():
            if delta == (dr, dc):
                return direction
        raise ValueError(f"({dr}, {dc}) is not a unit orthogonal step.")


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


@dataclass(frozen=True)
class Grid:
    """Immutable ``SIZE``×``SIZE`` matrix of cells.

    The agent is never stored here; see :class:`PuzzleState`. Every change
    goes through :meth:`with_cells`, which returns a new grid.
    """

    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE or any(len(row) != SIZE for row in self.cells):
            raise ValueError(f"A grid must be exactly {SIZE}×{SIZE}.")

    # -- construction helpers -------------------------------------------------

    @classmethod
    def empty(cls) -> Grid:
        return cls(cells=tuple((Cell.EMPTY,) * SIZE for _ in range(SIZE)))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> Grid:
        """Parse rows of ``.``, ``O`` and ``X`` characters.

        Example::

            Grid.from_rows(["..X...", "......", ...])
        """
        try:
            cells = tuple(tuple(Cell(ch) for ch in row) for row in rows)
        except ValueError as exc:
            raise ValueError(f"Unknown cell character in layout: {exc}") from None
        return cls(cells=cells)

    in_bounds = staticmethod(in_bounds)

    # -- queries --------------------------------------------------------------

    def get(self, pos: Position) -> Cell:
        return self.cells[pos[0]][pos[1]]

    def is_empty(self, pos: Position) -> bool:
        return self.cells[pos[0]][pos[1]] is Cell.EMPTY

    def positions_of(self, cell: Cell) -> list[Position]:
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, value in enumerate(row)
            if value is cell
        ]

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self.cells)

    def serialize(self) -> str:
        """Row-major text encoding, one character per cell, rows split by ``/``."""
        return "/".join("".join(row) for row in self.cells)

    # -- copy-on-write --------------------------------------------------------

    def copy(self) -> Grid:
        return Grid(cells=tuple(tuple(row) for row in self.cells))

    def with_cells(self, changes: Mapping[Position, Cell]) -> Grid:
        # Untouched rows are shared with the original.
        rows = list(self.cells)
        for (r, c), cell in changes.items():
            if not in_bounds(r, c):
                raise ValueError(f"Position {(r, c)} is outside the grid.")
            row = rows[r]
            rows[r] = (*row[:c], cell, *row[c + 1 :])
        return Grid(cells=tuple(rows))


@dataclass(frozen=True)
class PuzzleState:
    """A full snapshot: the grid plus the agent, tracked out-of-band."""

    grid: Grid
    agent: Position

    def __post_init__(self) -> None:
        if not in_bounds(*self.agent):
            raise ValueError(f"Agent position {self.agent} is outside the grid.")
        if not self.grid.is_empty(self.agent):
            raise ValueError(
                f"Agent position {self.agent} is occupied by "
                f"{self.grid.get(self.agent).name}."
            )

    def with_agent(self, pos: Position) -> PuzzleState:
        return PuzzleState(grid=self.grid, agent=pos)
