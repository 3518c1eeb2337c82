"""Board model and layout generator tests."""

from __future__ import annotations

import random

import pytest

from backend.config import SIZE
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamegenerator.generator import (
    INITIAL_AGENT,
    INITIAL_GOALS,
    INITIAL_HAZARDS,
)
from backend.engine.gamerules import line_keys
from backend.models.board import Cell, Direction, Grid, PuzzleState, in_bounds


# -- grid ---------------------------------------------------------------------


def test_empty_grid_is_all_empty() -> None:
    grid = Grid.empty()
    assert len(grid.cells) == SIZE
    assert all(cell is Cell.EMPTY for row in grid for cell in row)
    assert grid.serialize() == "/".join(["......"] * SIZE)


@pytest.mark.parametrize(
    "rows",
    [
        ["......"] * 5,
        ["......"] * 7,
        ["......"] * 5 + ["....."],
    ],
    ids=["too-few-rows", "too-many-rows", "short-row"],
)
def test_grid_rejects_wrong_dimensions(rows: list[str]) -> None:
    with pytest.raises(ValueError):
        Grid.from_rows(rows)


def test_grid_rejects_unknown_cell() -> None:
    with pytest.raises(ValueError):
        Grid.from_rows(["..?..."] + ["......"] * 5)


def test_with_cells_is_copy_on_write() -> None:
    grid = Grid.empty()
    changed = grid.with_cells({(1, 2): Cell.GOAL, (4, 4): Cell.HAZARD})

    assert grid.get((1, 2)) is Cell.EMPTY
    assert changed.get((1, 2)) is Cell.GOAL
    assert changed.get((4, 4)) is Cell.HAZARD
    assert changed != grid


def test_with_cells_rejects_out_of_bounds() -> None:
    with pytest.raises(ValueError):
        Grid.empty().with_cells({(SIZE, 0): Cell.GOAL})


def test_copy_is_equal_but_distinct() -> None:
    grid = Grid.empty().with_cells({(0, 0): Cell.GOAL})
    clone = grid.copy()
    assert clone == grid
    assert clone is not grid
    assert clone.serialize() == grid.serialize()


def test_serialize_distinguishes_cells() -> None:
    goal = Grid.empty().with_cells({(3, 3): Cell.GOAL})
    hazard = Grid.empty().with_cells({(3, 3): Cell.HAZARD})
    shifted = Grid.empty().with_cells({(3, 4): Cell.GOAL})

    keys = {goal.serialize(), hazard.serialize(), shifted.serialize()}
    assert len(keys) == 3
    assert goal.serialize().split("/")[3] == "...O.."


@pytest.mark.parametrize(
    ("row", "col", "expected"),
    [
        (0, 0, True),
        (SIZE - 1, SIZE - 1, True),
        (-1, 0, False),
        (0, -1, False),
        (SIZE, 0, False),
        (0, SIZE, False),
    ],
)
def test_in_bounds(row: int, col: int, expected: bool) -> None:
    assert in_bounds(row, col) is expected
    assert Grid.in_bounds(row, col) is expected


# -- puzzle state -------------------------------------------------------------


def test_agent_must_stand_on_empty_cell() -> None:
    grid = Grid.empty().with_cells({(1, 1): Cell.HAZARD})
    with pytest.raises(ValueError):
        PuzzleState(grid=grid, agent=(1, 1))


def test_agent_must_be_in_bounds() -> None:
    with pytest.raises(ValueError):
        PuzzleState(grid=Grid.empty(), agent=(0, SIZE))


# -- directions ---------------------------------------------------------------


@pytest.mark.parametrize(
    ("direction", "delta"),
    [
        (Direction.UP, (-1, 0)),
        (Direction.DOWN, (1, 0)),
        (Direction.LEFT, (0, -1)),
        (Direction.RIGHT, (0, 1)),
    ],
)
def test_direction_delta(direction: Direction, delta: tuple[int, int]) -> None:
    assert direction.delta == delta
    assert Direction.from_delta(*delta) is direction
    assert direction.step((2, 2)) == (2 + delta[0], 2 + delta[1])


def test_direction_from_diagonal_delta_fails() -> None:
    with pytest.raises(ValueError):
        Direction.from_delta(1, 1)


def test_direction_order_is_fixed() -> None:
    assert list(Direction) == [
        Direction.UP,
        Direction.DOWN,
        Direction.LEFT,
        Direction.RIGHT,
    ]


# -- generator ----------------------------------------------------------------


def test_initial_layout() -> None:
    state = GameGenerator.initial()

    assert sorted(state.grid.positions_of(Cell.HAZARD)) == sorted(INITIAL_HAZARDS)
    assert len(INITIAL_HAZARDS) == 12
    assert state.grid.positions_of(Cell.GOAL) == [(2, 4), (4, 4)]
    assert list(INITIAL_GOALS) == [(2, 4), (4, 4)]
    assert state.agent == INITIAL_AGENT == (2, 0)
    assert GameGenerator.to_rows(state) == [
        "..X...",
        ".X..X.",
        "@.XXO.",
        "X...XX",
        ".X.XOX",
        "X.....",
    ]


def test_reset_returns_baseline() -> None:
    state, baseline = GameGenerator.reset()
    assert state == GameGenerator.initial()
    assert baseline == line_keys(state.grid, Cell.HAZARD)
    assert baseline == frozenset()


def test_from_rows_round_trip() -> None:
    rows = [
        "@.....",
        ".X....",
        "..O...",
        "......",
        "...X..",
        ".....O",
    ]
    state = GameGenerator.from_rows(rows)
    assert state.agent == (0, 0)
    assert state.grid.get((1, 1)) is Cell.HAZARD
    assert state.grid.get((5, 5)) is Cell.GOAL
    assert GameGenerator.to_rows(state) == rows


@pytest.mark.parametrize(
    "rows",
    [
        ["......"] * 6,
        ["@....@"] + ["......"] * 5,
    ],
    ids=["no-agent", "two-agents"],
)
def test_from_rows_requires_one_agent(rows: list[str]) -> None:
    with pytest.raises(ValueError):
        GameGenerator.from_rows(rows)


def test_scramble_is_deterministic_and_legal() -> None:
    start = GameGenerator.initial()
    a = GameGenerator.scramble(start, 50, random.Random(7))
    b = GameGenerator.scramble(start, 50, random.Random(7))

    assert a == b
    # Pushing never creates or destroys pieces.
    assert len(a.grid.positions_of(Cell.HAZARD)) == 12
    assert len(a.grid.positions_of(Cell.GOAL)) == 2
    assert a.grid.is_empty(a.agent)


def test_scramble_boxed_in_agent_stays_put() -> None:
    state = GameGenerator.from_rows(
        [
            "@XX...",
            "X.....",
            "X.....",
            "......",
            "......",
            "......",
        ]
    )
    assert GameGenerator.scramble(state, 10, random.Random(0)) == state
