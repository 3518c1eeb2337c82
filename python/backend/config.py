"""Engine-wide constants and search tuning."""

from __future__ import annotations

from dataclasses import dataclass

SIZE = 6

# Hard cap on node expansions per search run; exceeding it reports UNSOLVED.
MAX_EXPANSIONS = 200_000

# Expansions between cooperative yield points.
PROGRESS_EVERY = 2

# Frontend pacing, in seconds: the live search view redraws at most once per
# frame interval, and solution replay waits between moves.
SEARCH_FRAME_INTERVAL = 0.05
PLAYBACK_STEP_DELAY = 0.13


@dataclass(frozen=True)
class SearchConfig:
    """Limits for a single best-first search run."""

    max_expansions: int = MAX_EXPANSIONS
    progress_every: int = PROGRESS_EVERY

    def __post_init__(self) -> None:
        if self.max_expansions < 1:
            raise ValueError(
                f"max_expansions must be positive, got {self.max_expansions}."
            )
        if self.progress_every < 1:
            raise ValueError(
                f"progress_every must be positive, got {self.progress_every}."
            )
