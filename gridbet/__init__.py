# gridbet/__init__.py
"""
Top-level package for the grid-bet backtester (gridbet).
Keeping these imports here makes `gridbet.grid`, `gridbet.evaluate`, etc.
available after a plain `import gridbet`.
"""

try:
    from importlib.metadata import version as _v, PackageNotFoundError
    __version__ = _v("gridbet")
except PackageNotFoundError:  # local/dev runs
    __version__ = "0+local"

from . import (  # noqa: F401
    bets, config, errors, evaluate, grid, log, outcomes, rng, rounds,
    strategies, summary, team_history,
)
from .evaluate import calculate_accuracy, evaluate_bet  # noqa: F401
from .grid import generate_lines, select_best_matches  # noqa: F401
from .summary import summarize  # noqa: F401

__all__ = [
    "bets", "config", "errors", "evaluate", "grid", "log", "outcomes", "rng",
    "rounds", "strategies", "summary", "team_history",
    "calculate_accuracy", "evaluate_bet", "generate_lines", "select_best_matches",
    "summarize", "__version__",
]
