"""Builds the starting layout and other puzzle states."""

from __future__ import annotations

import random
from collections.abc import Iterable

from backend.engine.gamerules.rules import Line, apply_move, line_keys
from backend.models.board import Cell, Direction, Grid, Position, PuzzleState
from backend.models.results import Blocked

INITIAL_HAZARDS: tuple[Position, ...] = (
    (0, 2),
    (1, 1),
    (1, 4),
    (2, 2),
    (2, 3),
    (3, 0),
    (3, 4),
    (3, 5),
    (4, 1),
    (4, 3),
    (4, 5),
    (5, 0),
)
INITIAL_GOALS: tuple[Position, ...] = ((2, 4), (4, 4))
INITIAL_AGENT: Position = (2, 0)

AGENT_MARK = "@"


class GameGenerator:
    """Creates puzzle states: the fixed opening, parsed layouts, random walks."""

    @staticmethod
    def initial() -> PuzzleState:
        """Return the fixed opening layout: 12 hazards, 2 goals."""
        changes = {pos: Cell.HAZARD for pos in INITIAL_HAZARDS}
        changes.update({pos: Cell.GOAL for pos in INITIAL_GOALS})
        return PuzzleState(grid=Grid.empty().with_cells(changes), agent=INITIAL_AGENT)

    @staticmethod
    def reset() -> tuple[PuzzleState, frozenset[Line]]:
        """Return the opening state together with its baseline hazard lines."""
        state = GameGenerator.initial()
        return state, GameGenerator.baseline(state)

    @staticmethod
    def baseline(state: PuzzleState) -> frozenset[Line]:
        return line_keys(state.grid, Cell.HAZARD)

    @staticmethod
    def from_rows(rows: Iterable[str]) -> PuzzleState:
        """Parse a text layout where ``@`` marks the agent on an empty cell.

        Example::

            GameGenerator.from_rows([
                "@.....",
                ".X....",
                "..O...",
                "......",
                "......",
                "......",
            ])
        """
        rows = list(rows)
        agents = [
            (r, c)
            for r, row in enumerate(rows)
            for c, ch in enumerate(row)
            if ch == AGENT_MARK
        ]
        if len(agents) != 1:
            raise ValueError(
                f"Expected exactly one '{AGENT_MARK}' in the layout, "
                f"got {len(agents)}."
            )
        grid = Grid.from_rows(row.replace(AGENT_MARK, Cell.EMPTY.value) for row in rows)
        return PuzzleState(grid=grid, agent=agents[0])

    @staticmethod
    def to_rows(state: PuzzleState) -> list[str]:
        """Inverse of :meth:`from_rows`."""
        rows = [[cell.value for cell in row] for row in state.grid]
        r, c = state.agent
        rows[r][c] = AGENT_MARK
        return ["".join(row) for row in rows]

    @staticmethod
    def scramble(
        state: PuzzleState, steps: int, rng: random.Random | None = None
    ) -> PuzzleState:
        """Apply *steps* random legal moves to *state*.

        Blocked directions are skipped; the agent always has at least one
        legal move unless it is boxed in, in which case *state* is returned.
        """
        rng = rng or random.Random()
        for _ in range(steps):
            options = [
                nxt
                for nxt in (apply_move(state, d) for d in Direction)
                if not isinstance(nxt, Blocked)
            ]
            if not options:
                break
            state = rng.choice(options)
        return state
