"""Rich terminal frontend — board panel, live solver stats, solution replay.

Commands are read one line at a time with ``rich.prompt.Prompt`` so the
frontend works in any terminal without raw-mode key handling.
"""

from __future__ import annotations

import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from backend.config import PLAYBACK_STEP_DELAY, SEARCH_FRAME_INTERVAL, SearchConfig
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import SearchRun, Solver
from backend.models.board import Cell, Direction, PuzzleState
from backend.models.results import Outcome, SearchProgress, SearchStatus

console = Console()

_COMMANDS: dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


# -- board rendering ----------------------------------------------------------


def render_board(puzzle: PuzzleState) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in puzzle.grid.cells:
        table.add_column(width=1, justify="center")

    for r, row in enumerate(puzzle.grid):
        cells: list[str] = []
        for c, cell in enumerate(row):
            if (r, c) == puzzle.agent:
                cells.append("[bold cyan]@[/bold cyan]")
            elif cell is Cell.GOAL:
                cells.append("[bold green]O[/bold green]")
            elif cell is Cell.HAZARD:
                cells.append("[bold red]X[/bold red]")
            else:
                cells.append("[dim]·[/dim]")
        table.add_row(*cells)

    return table


def stats_text(expansions: int, open_size: int, visited_size: int) -> Text:
    text = Text()
    text.append("  Expanded: ", style="dim")
    text.append(str(expansions), style="bold yellow")
    text.append("  Open: ", style="dim")
    text.append(str(open_size), style="bold yellow")
    text.append("  Visited: ", style="dim")
    text.append(str(visited_size), style="bold yellow")
    return text


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _panel(puzzle: PuzzleState, title: str, style: str, *extra: Text) -> Panel:
    return Panel(
        Group(Align.center(render_board(puzzle)), *(Align.center(t) for t in extra)),
        title=f"[bold {style}]{title}[/bold {style}]",
        border_style=style,
        padding=(1, 2),
    )


# -- game screen --------------------------------------------------------------


def _draw_game(game: GamePlay, status: str = "", solver_stats: Text | None = None) -> None:
    console.clear()

    outcome = game.outcome
    if outcome is Outcome.WON:
        title, style = "You win: 3 O's in a row", "green"
    elif outcome is Outcome.LOST:
        title, style = "You lose: 3 X's in a row", "red"
    else:
        title, style = "Push Puzzle", "bright_blue"

    moves = Text()
    moves.append("  Moves: ", style="dim")
    moves.append(str(game.state.moves), style="bold yellow")
    moves.append("    Time: ", style="dim")
    moves.append(format_time(game.state.elapsed_time), style="bold yellow")

    controls = Text()
    controls.append("  WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    console.print()
    console.print(Align.center(_panel(game.state.puzzle, title, style, moves)))
    if solver_stats is not None:
        console.print(Align.center(solver_stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay, config: SearchConfig) -> str:
    if game.is_over:
        return "[yellow]The game is over. Press R to reset.[/yellow]"
    try:
        with console.status("[cyan]Searching for a hint… (Ctrl-C to stop)[/cyan]"):
            hint = Solver.hint(game.state.puzzle, game.state.baseline, config)
    except KeyboardInterrupt:
        return "[yellow]Hint search stopped.[/yellow]"
    if hint is None:
        return "[yellow]No hint available from this position.[/yellow]"
    game.move(hint)
    return f"[cyan]Hint:[/cyan] moved [bold]{hint.value}[/bold]"


def _search_live(game: GamePlay) -> SearchRun | None:
    """Run a search while showing the explored states; Ctrl-C cancels."""
    run = game.start_auto_solve()
    if run is None:
        return None

    def frame(progress: SearchProgress) -> Panel:
        return _panel(
            progress.state,
            "Solver exploring combinations in real time…",
            "yellow",
            stats_text(progress.expansions, progress.open_size, progress.visited_size),
        )

    start = game.state.puzzle
    with Live(Align.center(_panel(start, "Solving…", "yellow")), console=console) as live:
        last_frame = 0.0
        try:
            for progress in run:
                now = time.monotonic()
                if now - last_frame >= SEARCH_FRAME_INTERVAL:
                    live.update(Align.center(frame(progress)))
                    last_frame = now
        except KeyboardInterrupt:
            game.cancel_auto_solve()
            return None

    return run


def _auto_solve(game: GamePlay) -> tuple[str, Text | None]:
    run = _search_live(game)
    if run is None or run.result is None:
        if game.is_over:
            return "[yellow]The game is over. Press R to reset.[/yellow]", None
        return "[yellow]Search cancelled.[/yellow]", None

    result = run.result
    final = stats_text(result.stats.expansions, 0, result.stats.visited_size)
    if result.status is not SearchStatus.SOLVED:
        game.finish_auto_solve(run)
        return "[red]No solution found from this position.[/red]", final

    total = len(result.moves or ())
    steps = game.replay(run)
    try:
        for i, _ in enumerate(steps, 1):
            _draw_game(game, f"[cyan]Replaying solution… move {i}/{total}[/cyan]", final)
            time.sleep(PLAYBACK_STEP_DELAY)
    except KeyboardInterrupt:
        game.cancel_auto_solve()
        return "[yellow]Replay stopped.[/yellow]", final

    if game.is_won:
        return f"[bold green]Solved in {total} moves![/bold green]", final
    return "[yellow]Solver replay finished.[/yellow]", final


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay, config: SearchConfig) -> None:
    status = "Line up 3 O's to win."
    solver_stats: Text | None = None

    while True:
        _draw_game(game, status, solver_stats)
        status = ""
        key = Prompt.ask("  >", default="", show_default=False).strip().lower()

        if key in _COMMANDS:
            if game.is_over:
                status = "[yellow]The game is over. Press R to reset.[/yellow]"
            elif not game.move(_COMMANDS[key]):
                status = "That block is blocked and cannot be pushed."
            solver_stats = None
        elif key == "v":
            status, solver_stats = _auto_solve(game)
        elif key == "n":
            status = _apply_hint(game, config)
        elif key == "r":
            game.reset()
            status = "Line up 3 O's to win."
            solver_stats = None
        elif key == "q":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key:
            status = f"[dim]Unknown command {key!r}.[/dim]"


# -- public entry point -------------------------------------------------------


def run(config: SearchConfig | None = None) -> None:
    """Launch the Rich CLI game."""
    config = config or SearchConfig()
    _play(GamePlay(config), config)
