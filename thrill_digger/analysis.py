"""Analysis and benchmarking tools for the Thrill Digger solver."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .board import COLS, CONTENT_SYMBOLS, ROWS, CellContent
from .engine import BOMBS, RUPOORS, ThrillDigger
from .enumeration import DEFAULT_MAX_COMPONENT_SIZE
from .solver import SolveStatus, ThrillDiggerSolver


def format_probabilities(
    solver: ThrillDiggerSolver, *, show_coords: bool = True
) -> str:
    """
    Format the solver's board and current probabilities as a text grid.

    Args:
        solver: Solver whose board and probability vector will be displayed.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where hidden cells show their bad probability as a
        percentage and revealed cells show a one-letter content symbol.
    """
    probs = solver.probabilities

    def cell_str(r: int, c: int) -> str:
        content = solver.content(r, c)
        if content == CellContent.HIDDEN:
            return f"{round(probs[r, c] * 100):3d}%"
        return f"{CONTENT_SYMBOLS[content]:>4}"

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{c:4d}" for c in range(solver.cols))
        lines.append("   " + header)
        lines.append("   " + "-" * (5 * solver.cols - 1))

    for r in range(solver.rows):
        row = " ".join(cell_str(r, c) for c in range(solver.cols))
        lines.append(f"{r:2d} |" + row if show_coords else row)

    return "\n".join(lines)


def run_solver_single_test(
    seed: Optional[int] = None,
    *,
    rows: int = ROWS,
    cols: int = COLS,
    bombs: int = BOMBS,
    rupoors: int = RUPOORS,
    show_boards: bool = False,
    max_component_size: int = DEFAULT_MAX_COMPONENT_SIZE,
) -> Dict[str, Any]:
    """
    Play one game by always digging the hidden cell least likely to be bad.

    Args:
        seed: Seed for the game's bad-item placement.
        rows: Board rows.
        cols: Board columns.
        bombs: Bombs on the board.
        rupoors: Rupoors on the board.
        show_boards: If True, print the true board and the final probabilities.
        max_component_size: Enumeration bound passed to the solver.

    Returns:
        Payload with "status" (-1 loss, 1 win), "digs", "rupoors_hit",
        "approximate_solves", "max_frontier" and "predictions", a list of
        (probability, was_bad) pairs for every dug cell.

    Raises:
        RuntimeError: If the solver reports a contradiction on a real board.
    """
    game = ThrillDigger(rows, cols, bombs, rupoors, seed=seed)
    solver = ThrillDiggerSolver(
        rows, cols, game.total_bad, max_component_size=max_component_size
    )

    digs = 0
    rupoors_hit = 0
    approximate_solves = 0
    max_frontier = 0
    predictions: List[Tuple[float, bool]] = []

    status = 0
    while status == 0:
        result = solver.solve()
        if result.status is SolveStatus.CONTRADICTION:
            raise RuntimeError("Solver found a contradiction on a consistent board.")
        if result.status is SolveStatus.APPROXIMATE:
            approximate_solves += 1
        max_frontier = max(max_frontier, result.num_frontier)

        hidden = [
            (result.probabilities[r, c], r, c)
            for r in range(rows)
            for c in range(cols)
            if solver.content(r, c) == CellContent.HIDDEN
        ]
        p, r, c = min(hidden)

        status, content = game.dig(r, c)
        solver.set_cell(r, c, content)
        digs += 1
        predictions.append((float(p), content.is_bad))
        if content == CellContent.RUPOOR:
            rupoors_hit += 1

    if show_boards:
        print("Underlying board:")
        print(game.format_board(reveal_all=True))
        print()
        print("Solver view (hidden cells show bad probability):")
        solver.solve()
        print(format_probabilities(solver, show_coords=True))
        print()
        print(f"Finished with status {status}.")

    return {
        "status": status,
        "digs": digs,
        "rupoors_hit": rupoors_hit,
        "approximate_solves": approximate_solves,
        "max_frontier": max_frontier,
        "predictions": predictions,
    }


def calibration_bins(
    predictions: Sequence[Tuple[float, bool]], bins: int = 10
) -> Dict[str, np.ndarray]:
    """
    Bucket (predicted probability, outcome) pairs into equal-width bins.

    Returns:
        Dict of arrays, one entry per bin:
        - edges: bins + 1 bin edges over [0, 1]
        - counts: number of predictions in the bin
        - predicted: mean predicted probability (NaN for empty bins)
        - observed: fraction that were actually bad (NaN for empty bins)
    """
    if bins <= 0:
        raise ValueError("bins must be positive.")

    edges = np.linspace(0.0, 1.0, bins + 1)
    if not predictions:
        empty = np.full(bins, np.nan)
        return {
            "edges": edges,
            "counts": np.zeros(bins, dtype=int),
            "predicted": empty,
            "observed": empty.copy(),
        }

    data = np.asarray(predictions, dtype=float)
    p, outcome = data[:, 0], data[:, 1]
    idx = np.clip(np.digitize(p, edges[1:-1]), 0, bins - 1)

    counts = np.bincount(idx, minlength=bins)
    p_sum = np.bincount(idx, weights=p, minlength=bins)
    bad_sum = np.bincount(idx, weights=outcome, minlength=bins)
    with np.errstate(invalid="ignore", divide="ignore"):
        predicted = np.where(counts > 0, p_sum / counts, np.nan)
        observed = np.where(counts > 0, bad_sum / counts, np.nan)

    return {
        "edges": edges,
        "counts": counts,
        "predicted": predicted,
        "observed": observed,
    }


def run_solver_many_tests(
    runs: int,
    seed: Optional[int] = None,
    *,
    rows: int = ROWS,
    cols: int = COLS,
    bombs: int = BOMBS,
    rupoors: int = RUPOORS,
    max_component_size: int = DEFAULT_MAX_COMPONENT_SIZE,
) -> Dict[str, Any]:
    """
    Run many independent games and return averaged metrics plus calibration.

    Args:
        runs: Number of games to play.
        seed: Base seed; game i uses seed + i. None for unseeded games.
        rows: Board rows.
        cols: Board columns.
        bombs: Bombs per board.
        rupoors: Rupoors per board.
        max_component_size: Enumeration bound passed to the solver.

    Returns:
        Dict with "win_rate", "avg_digs", "avg_rupoors_hit",
        "avg_max_frontier", "approximate_solves" and "calibration"
        (see calibration_bins()).

    Raises:
        ValueError: If runs is not positive.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    wins = 0
    digs = 0
    rupoors_hit = 0
    max_frontier = 0
    approximate = 0
    predictions: List[Tuple[float, bool]] = []

    for i in range(runs):
        payload = run_solver_single_test(
            None if seed is None else seed + i,
            rows=rows,
            cols=cols,
            bombs=bombs,
            rupoors=rupoors,
            max_component_size=max_component_size,
        )
        if payload["status"] == 1:
            wins += 1
        elif payload["status"] != -1:
            raise RuntimeError(f"Unexpected game status: {payload['status']}")

        digs += payload["digs"]
        rupoors_hit += payload["rupoors_hit"]
        max_frontier += payload["max_frontier"]
        approximate += payload["approximate_solves"]
        predictions.extend(payload["predictions"])

    return {
        "win_rate": wins / runs,
        "avg_digs": digs / runs,
        "avg_rupoors_hit": rupoors_hit / runs,
        "avg_max_frontier": max_frontier / runs,
        "approximate_solves": approximate,
        "calibration": calibration_bins(predictions),
    }


def plot_calibration(results: Dict[str, Any]) -> None:
    """
    Plot predicted bad probability against observed bad frequency.

    Args:
        results: Output of run_solver_many_tests().
    """
    cal = results["calibration"]
    edges = cal["edges"]
    centers = (edges[:-1] + edges[1:]) / 2
    mask = cal["counts"] > 0

    plt.figure()  # type: ignore[misc]
    plt.plot([0.0, 1.0], [0.0, 1.0], linestyle="--", color="gray", label="ideal")  # type: ignore[misc]
    plt.plot(cal["predicted"][mask], cal["observed"][mask], marker="o", label="solver")  # type: ignore[misc]
    plt.xlabel("Predicted bad probability")  # type: ignore[misc]
    plt.ylabel("Observed bad frequency")  # type: ignore[misc]
    plt.title(f"Calibration over {int(cal['counts'].sum())} digs")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    plt.figure()  # type: ignore[misc]
    plt.bar(centers, cal["counts"], width=edges[1] - edges[0])  # type: ignore[misc]
    plt.xlabel("Predicted bad probability")  # type: ignore[misc]
    plt.ylabel("Digs")  # type: ignore[misc]
    plt.title("Digs by predicted probability")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]
