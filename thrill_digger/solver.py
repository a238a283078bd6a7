"""Thrill Digger probability solver: exact per-cell bad-item probabilities."""

import logging
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

import numpy as np

from .board import COLS, ROWS, TOTAL_BAD, Board, CellContent
from .combiner import combine_components
from .constraints import build_constraints, split_frontier
from .enumeration import (
    DEFAULT_MAX_COMPONENT_SIZE,
    ComponentResult,
    enumerate_component,
    find_components,
)

logger = logging.getLogger(__name__)


class SolveStatus(Enum):
    """How trustworthy the probabilities of a solve are."""

    EXACT = "exact"
    # At least one component was too large to enumerate; its cells got the
    # uniform estimate remaining_bad / hidden_cells.
    APPROXIMATE = "approximate"
    # No assignment satisfies every clue and the global bad count; every
    # hidden cell got the uniform estimate.
    CONTRADICTION = "contradiction"


class SolveResult(NamedTuple):
    status: SolveStatus
    probabilities: np.ndarray
    remaining_bad: int
    total_ways: int
    num_components: int
    num_frontier: int
    num_interior: int
    overflow_cells: Tuple[int, ...]

    @property
    def is_exact(self) -> bool:
        return self.status is SolveStatus.EXACT


class ThrillDiggerSolver:
    """
    Owns a board and its probability vector.

    The caller mutates the board with ``set_cell`` / ``reset`` and calls
    ``solve`` to recompute every probability from scratch.
    """

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        total_bad: int = TOTAL_BAD,
        max_component_size: int = DEFAULT_MAX_COMPONENT_SIZE,
    ) -> None:
        """
        Args:
            rows: Board rows.
            cols: Board columns.
            total_bad: Bad items (bombs + rupoors) on the true board.
            max_component_size: Largest connected group of constrained cells
                enumerated exactly; larger groups get a uniform estimate.

        Raises:
            ValueError: If any argument is out of range.
        """
        if max_component_size < 1:
            raise ValueError("max_component_size must be at least 1.")

        self.board = Board(rows, cols, total_bad)
        self.max_component_size: int = max_component_size
        self.last_result: Optional[SolveResult] = None
        self._probabilities: np.ndarray = self._prior()

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def total_bad(self) -> int:
        return self.board.total_bad

    def _prior(self) -> np.ndarray:
        return np.full(self.board.size, self.board.total_bad / self.board.size)

    # -------------------------------------------------------------------------
    # Caller interface
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Hide every cell and restore the prior total_bad / total_cells."""
        self.board.reset()
        self._probabilities = self._prior()
        self.last_result = None

    def set_cell(self, row: int, col: int, content: Union[CellContent, int]) -> None:
        """
        Overwrite one cell's content.

        Raises:
            ValueError: If coordinates are outside the board or the content
                value is not a ``CellContent``.
        """
        self.board.set(row, col, content)

    def content(self, row: int, col: int) -> CellContent:
        return self.board.get(row, col)

    def probability(self, row: int, col: int) -> float:
        return float(self._probabilities[self.board.index(row, col)])

    @property
    def probabilities(self) -> np.ndarray:
        """Copy of the probability vector shaped (rows, cols)."""
        return self._probabilities.reshape(self.rows, self.cols).copy()

    def known_bad_count(self) -> int:
        return self.board.known_bad_count()

    def revealed_count(self) -> int:
        return self.board.revealed_count()

    # -------------------------------------------------------------------------
    # Main solving routine
    # -------------------------------------------------------------------------

    def solve(self) -> SolveResult:
        """
        Recompute every cell's probability of being bad from the current board.

        Revealed bad cells get 1.0, revealed clue cells 0.0. Contradictory
        boards and oversized components are reported through the result
        status, never raised. The stored vector is replaced only once the
        whole computation has finished.
        """
        cells = self.board.snapshot()
        probs = np.zeros(len(cells))

        hidden: List[int] = []
        known_bad = 0
        for idx, content in enumerate(cells):
            if content.is_bad:
                probs[idx] = 1.0
                known_bad += 1
            elif content == CellContent.HIDDEN:
                hidden.append(idx)

        remaining_bad = self.total_bad - known_bad
        status = SolveStatus.EXACT
        total_ways = 0
        num_components = 0
        frontier: List[int] = []
        interior: List[int] = []
        overflow: List[int] = []

        if remaining_bad < 0:
            logger.warning(
                "%d bad cells marked but only %d exist", known_bad, self.total_bad
            )
            status = SolveStatus.CONTRADICTION
        else:
            constraints = build_constraints(cells, self.rows, self.cols)
            frontier, interior = split_frontier(cells, constraints)
            uniform = remaining_bad / len(hidden) if hidden else 0.0

            results: List[ComponentResult] = []
            components = find_components(frontier, constraints)
            num_components = len(components)
            for comp_cells, comp_constraints in components:
                result = enumerate_component(
                    comp_cells, comp_constraints, remaining_bad, self.max_component_size
                )
                if result is None:
                    logger.warning(
                        "component of %d cells exceeds enumeration bound %d; "
                        "using uniform estimate",
                        len(comp_cells),
                        self.max_component_size,
                    )
                    overflow.extend(comp_cells)
                    probs[list(comp_cells)] = uniform
                else:
                    results.append(result)

            combined = combine_components(results, len(interior), remaining_bad)
            total_ways = combined.total_ways
            if total_ways == 0:
                logger.warning("board is contradictory; using uniform estimate")
                status = SolveStatus.CONTRADICTION
                probs[hidden] = uniform
                overflow = []
            else:
                if overflow:
                    status = SolveStatus.APPROXIMATE
                for idx, p in combined.cell_probabilities.items():
                    probs[idx] = p
                if combined.interior_probability is not None:
                    probs[interior] = combined.interior_probability

        np.clip(probs, 0.0, 1.0, out=probs)
        self._probabilities = probs
        self.last_result = SolveResult(
            status=status,
            probabilities=probs.reshape(self.rows, self.cols).copy(),
            remaining_bad=remaining_bad,
            total_ways=total_ways,
            num_components=num_components,
            num_frontier=len(frontier),
            num_interior=len(interior),
            overflow_cells=tuple(overflow),
        )
        return self.last_result
