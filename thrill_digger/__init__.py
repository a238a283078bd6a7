"""
Thrill Digger Probability Calculator

An exact constraint-satisfaction solver for Thrill Digger boards:
- Constraint building: each revealed rupee bounds its hidden neighbors
- Component enumeration: exhaustive pruned search per connected group
- Global combination: polynomial convolution over the remaining bad count
"""

from .board import (
    COLS,
    ROWS,
    TOTAL_BAD,
    TOTAL_CELLS,
    Board,
    CellContent,
    clue_range,
)
from .engine import ThrillDigger, clue_for_count, play_cli
from .solver import SolveResult, SolveStatus, ThrillDiggerSolver
from .analysis import (
    calibration_bins,
    format_probabilities,
    plot_calibration,
    run_solver_many_tests,
    run_solver_single_test,
)

__version__ = "1.0.0"

__all__ = [
    # Board model
    "CellContent",
    "Board",
    "clue_range",
    "ROWS",
    "COLS",
    "TOTAL_CELLS",
    "TOTAL_BAD",
    # Core classes
    "ThrillDiggerSolver",
    "SolveResult",
    "SolveStatus",
    "ThrillDigger",
    "clue_for_count",
    # CLI
    "play_cli",
    # Analysis functions
    "format_probabilities",
    "run_solver_single_test",
    "run_solver_many_tests",
    "calibration_bins",
    "plot_calibration",
]
