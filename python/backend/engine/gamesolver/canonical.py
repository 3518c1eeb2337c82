"""Collapse states whose agents share a connected empty region."""

from __future__ import annotations

from backend.config import SIZE
from backend.engine.gamerules.reachability import region_anchor
from backend.models.board import PuzzleState


def canonical_key(state: PuzzleState) -> str:
    """Grid encoding plus the smallest row-major index the agent can walk to.

    Every push action depends only on the grid and the agent's reachable
    region, so any two agent cells in the same region share one key.
    """
    r, c = region_anchor(state.grid, state.agent)
    return f"{state.grid.serialize()}@{r * SIZE + c}"
