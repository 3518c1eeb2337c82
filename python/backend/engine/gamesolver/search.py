"""Cooperative best-first search over push actions.

A :class:`SearchSession` hands out runs. Each run carries a token, and
starting a new run or cancelling invalidates the tokens issued before it.
A :class:`SearchRun` is a generator: iterating it advances the search and
yields a :class:`SearchProgress` every ``progress_every`` expansions, which
is also the point where a cancelled run stops.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Callable, Collection, Generator, Iterator
from dataclasses import dataclass

from backend.config import SearchConfig
from backend.engine.gamerules.rules import Line, generate_successors, has_loss, has_win
from backend.engine.gamesolver.canonical import canonical_key
from backend.engine.gamesolver.heuristic import estimate
from backend.engine.gamesolver.reconstruct import reconstruct_moves
from backend.models.board import Direction, PuzzleState
from backend.models.results import (
    SearchProgress,
    SearchResult,
    SearchStats,
    SearchStatus,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[SearchProgress], None]


@dataclass(slots=True)
class SearchNode:
    state: PuzzleState
    g: int
    f: int
    parent: int | None
    step_moves: tuple[Direction, ...]
    key: str


@dataclass(frozen=True)
class SearchToken:
    run_id: int


class SearchSession:
    """Issues search runs and tracks which one is current."""

    def __init__(self, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig()
        self._run_id = 0

    def start(
        self,
        state: PuzzleState,
        baseline: Collection[Line],
        on_progress: ProgressCallback | None = None,
    ) -> SearchRun:
        """Begin a new run, superseding any run still in flight."""
        self._run_id += 1
        token = SearchToken(self._run_id)
        logger.debug("Search run %d created", token.run_id)
        return SearchRun(self, token, state, frozenset(baseline), on_progress)

    def cancel(self, token: SearchToken | None = None) -> None:
        """Invalidate *token*, or whichever run is current if omitted.

        Stale tokens are ignored. Cancelling a finished run leaves its result
        untouched.
        """
        if token is not None and not self.is_current(token):
            return
        logger.debug("Search run %d cancelled", self._run_id)
        self._run_id += 1

    def is_current(self, token: SearchToken) -> bool:
        return token.run_id == self._run_id


class SearchRun:
    """One search from a fixed start state.

    Iterate it to drive the search step by step, or call :meth:`run` to
    drain it. The outcome is available as :attr:`result` afterwards.
    """

    def __init__(
        self,
        session: SearchSession,
        token: SearchToken,
        start: PuzzleState,
        baseline: frozenset[Line],
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.session = session
        self.token = token
        self.start = start
        self.baseline = baseline
        self.on_progress = on_progress
        self.result: SearchResult | None = None
        self._nodes: list[SearchNode] = []
        self._started = False

    @property
    def nodes(self) -> tuple[SearchNode, ...]:
        """Every node created so far, in creation order."""
        return tuple(self._nodes)

    def __iter__(self) -> Iterator[SearchProgress]:
        if self._started:
            raise RuntimeError(f"Search run {self.token.run_id} was already started.")
        self._started = True
        self.result = yield from self._search()
        logger.info(
            "Search run %d finished: %s after %d expansions (visited %d)",
            self.token.run_id,
            self.result.status.value,
            self.result.stats.expansions,
            self.result.stats.visited_size,
        )

    def run(self) -> SearchResult:
        for _ in self:
            pass
        if self.result is None:
            raise RuntimeError(f"Search run {self.token.run_id} produced no result.")
        return self.result

    # -- search loop ----------------------------------------------------------

    def _push(self, node: SearchNode, heap: list[tuple[int, int, int]]) -> None:
        # Equal f: lower estimate first, then creation order.
        index = len(self._nodes)
        self._nodes.append(node)
        heapq.heappush(heap, (node.f, node.f - node.g, index))

    def _search(self) -> Generator[SearchProgress, None, SearchResult]:
        config = self.session.config
        heap: list[tuple[int, int, int]] = []
        visited: dict[str, int] = {}
        expansions = 0

        def stats() -> SearchStats:
            return SearchStats(expansions, len(heap), len(visited))

        start_key = canonical_key(self.start)
        self._push(
            SearchNode(
                state=self.start,
                g=0,
                f=estimate(self.start),
                parent=None,
                step_moves=(),
                key=start_key,
            ),
            heap,
        )
        visited[start_key] = 0
        logger.info(
            "Search run %d started (budget %d expansions)",
            self.token.run_id,
            config.max_expansions,
        )

        while heap and expansions < config.max_expansions:
            if not self.session.is_current(self.token):
                return SearchResult(SearchStatus.CANCELLED, stats())

            _, _, index = heapq.heappop(heap)
            current = self._nodes[index]
            expansions += 1

            if expansions % config.progress_every == 0:
                progress = SearchProgress(
                    expansions=expansions,
                    open_size=len(heap),
                    visited_size=len(visited),
                    state=current.state,
                )
                logger.debug(
                    "Expanded: %d | Open: %d | Visited: %d",
                    expansions,
                    len(heap),
                    len(visited),
                )
                if self.on_progress is not None:
                    self.on_progress(progress)
                yield progress
                if not self.session.is_current(self.token):
                    return SearchResult(SearchStatus.CANCELLED, stats())

            if has_win(current.state.grid, current.state.agent):
                moves = reconstruct_moves(self._nodes, index)
                return SearchResult(SearchStatus.SOLVED, stats(), moves)
            if has_loss(current.state.grid, self.baseline):
                continue

            # The current node is neither won nor lost, so a successor can only
            # gain a line through the landing cell or the agent's new cell.
            g = current.g + 1
            for successor in generate_successors(current.state):
                nxt = successor.state
                if has_loss(nxt.grid, self.baseline, near=(successor.landing,)):
                    continue
                key = canonical_key(nxt)
                best = visited.get(key)
                if best is not None and best <= g:
                    continue
                visited[key] = g
                won = has_win(nxt.grid, nxt.agent, near=(successor.landing, nxt.agent))
                self._push(
                    SearchNode(
                        state=nxt,
                        g=g,
                        f=g + estimate(nxt, won),
                        parent=index,
                        step_moves=successor.moves,
                        key=key,
                    ),
                    heap,
                )

        return SearchResult(SearchStatus.UNSOLVED, stats())
