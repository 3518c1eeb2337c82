from backend.engine.gamerules.reachability import reachable_from, walk_path
from backend.engine.gamerules.rules import (
    WINDOWS,
    Axis,
    Line,
    Successor,
    apply_move,
    evaluate_outcome,
    generate_successors,
    has_loss,
    has_win,
    line_keys,
)

__all__ = [
    "WINDOWS",
    "Axis",
    "Line",
    "Successor",
    "apply_move",
    "evaluate_outcome",
    "generate_successors",
    "has_loss",
    "has_win",
    "line_keys",
    "reachable_from",
    "walk_path",
]
