#!/usr/bin/env python3
"""Push Puzzle.

Usage::

    python main.py                      # interactive Rich terminal game
    python main.py --solve              # solve the opening layout headlessly
    python main.py --solve --log-level debug --max-expansions 50000
"""

import logging
import sys
from enum import StrEnum
from pathlib import Path

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import MAX_EXPANSIONS, PROGRESS_EVERY, SearchConfig  # noqa: E402


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level.value.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _solve_headless(config: SearchConfig) -> int:
    import rich.box
    from rich.console import Console
    from rich.table import Table

    from backend.engine.gamegenerator import GameGenerator
    from backend.engine.gamesolver import Solver
    from frontend.cli.app import render_board, stats_text

    console = Console()
    state, baseline = GameGenerator.reset()
    console.print(render_board(state))

    result = Solver.solve(state, baseline, config)
    stats = result.stats
    console.print(stats_text(stats.expansions, stats.open_size, stats.visited_size))

    if not result.solved:
        console.print(f"[red]No solution found ({result.status.value}).[/red]")
        return 1

    moves = result.moves or ()
    table = Table(title=f"Solution ({len(moves)} moves)", box=rich.box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Move", style="bold cyan")
    for i, move in enumerate(moves, 1):
        table.add_row(str(i), move.value)
    console.print(table)
    return 0


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    solve: bool = typer.Option(
        False, "--solve",
        help="Solve the opening layout and print the moves instead of playing.",
    ),
    max_expansions: int = typer.Option(
        MAX_EXPANSIONS, "--max-expansions",
        min=1,
        help="Search budget; the solver reports no solution once it is spent.",
    ),
    progress_every: int = typer.Option(
        PROGRESS_EVERY, "--progress-every",
        min=1,
        help="Expansions between solver progress updates.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
) -> None:
    """Push Puzzle: line up three O's before three X's."""
    _configure_logging(log_level)
    config = SearchConfig(max_expansions=max_expansions, progress_every=progress_every)

    if solve:
        raise typer.Exit(code=_solve_headless(config))

    from frontend.cli.app import run

    run(config)


if __name__ == "__main__":
    app()
