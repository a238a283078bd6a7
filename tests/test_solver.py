"""Unit tests for the solve orchestrator."""

import itertools
import unittest
from typing import Dict, Tuple

import numpy as np

from thrill_digger.board import CellContent, clue_range
from thrill_digger.solver import SolveStatus, ThrillDiggerSolver
from thrill_digger.utils import get_neighborhoods


def _brute_force(solver: ThrillDiggerSolver) -> Tuple[int, Dict[int, float]]:
    """Enumerate every placement of the remaining bad items directly.

    Returns:
        Tuple of (consistent placements, board index -> bad probability)
        for hidden cells.
    """
    cells = solver.board.snapshot()
    nbhd = get_neighborhoods(solver.rows, solver.cols)
    hidden = [i for i, c in enumerate(cells) if c == CellContent.HIDDEN]
    known = {i for i, c in enumerate(cells) if c.is_bad}
    clues = [(i, clue_range(c)) for i, c in enumerate(cells) if c.is_clue]
    remaining = solver.total_bad - len(known)

    total = 0
    bad_tally = dict.fromkeys(hidden, 0)
    for chosen in itertools.combinations(hidden, remaining):
        bad = known | set(chosen)
        if all(lo <= sum(1 for n in nbhd[i] if n in bad) <= hi for i, (lo, hi) in clues):
            total += 1
            for cell in chosen:
                bad_tally[cell] += 1
    return total, {cell: n / total for cell, n in bad_tally.items()}


def _hidden_probs(solver: ThrillDiggerSolver) -> Dict[int, float]:
    probs = solver.probabilities.ravel()
    return {
        i: float(probs[i])
        for i, c in enumerate(solver.board.cells)
        if c == CellContent.HIDDEN
    }


class TestResetAndPrior(unittest.TestCase):
    """Tests for reset() and the uniform prior."""

    def test_prior_before_first_solve(self) -> None:
        solver = ThrillDiggerSolver()
        np.testing.assert_allclose(solver.probabilities, np.full((5, 8), 0.4))
        self.assertIsNone(solver.last_result)

    def test_no_clues_gives_exact_uniform(self) -> None:
        solver = ThrillDiggerSolver()
        result = solver.solve()
        self.assertIs(result.status, SolveStatus.EXACT)
        for p in solver.probabilities.ravel():
            self.assertAlmostEqual(p, 16 / 40, places=12)

    def test_no_clues_with_known_bad(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(0, 0, CellContent.BOMB)
        solver.set_cell(4, 7, CellContent.RUPOOR)
        solver.solve()
        self.assertEqual(solver.probability(0, 0), 1.0)
        self.assertEqual(solver.probability(4, 7), 1.0)
        for idx, p in _hidden_probs(solver).items():
            self.assertAlmostEqual(p, 14 / 38, places=12)

    def test_reset_restores_prior(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(2, 3, CellContent.GREEN)
        solver.set_cell(0, 0, CellContent.BOMB)
        solver.solve()
        solver.reset()
        self.assertEqual(solver.revealed_count(), 0)
        np.testing.assert_allclose(solver.probabilities, np.full((5, 8), 0.4))
        solver.solve()
        np.testing.assert_allclose(solver.probabilities, np.full((5, 8), 0.4))


class TestSetCell(unittest.TestCase):
    """Tests for set_cell() and the read-only accessors."""

    def test_out_of_range_coordinates(self) -> None:
        solver = ThrillDiggerSolver()
        for row, col in ((5, 0), (-1, 0), (0, 8), (0, -1)):
            with self.assertRaises(ValueError):
                solver.set_cell(row, col, CellContent.GREEN)

    def test_invalid_content(self) -> None:
        solver = ThrillDiggerSolver()
        with self.assertRaises(ValueError):
            solver.set_cell(0, 0, 99)

    def test_accessors(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(1, 2, CellContent.SILVER)
        solver.set_cell(3, 3, CellContent.BOMB)
        self.assertEqual(solver.content(1, 2), CellContent.SILVER)
        self.assertEqual(solver.known_bad_count(), 1)
        self.assertEqual(solver.revealed_count(), 2)

    def test_probabilities_is_a_copy(self) -> None:
        solver = ThrillDiggerSolver()
        probs = solver.probabilities
        probs[0, 0] = 0.9
        self.assertAlmostEqual(solver.probability(0, 0), 0.4)

    def test_set_cell_does_not_resolve(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(2, 3, CellContent.GREEN)
        self.assertAlmostEqual(solver.probability(2, 4), 0.4)


class TestSolveProperties(unittest.TestCase):
    """Tests for the exact solve path."""

    def test_green_clue_clears_neighbors(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(2, 3, CellContent.GREEN)
        result = solver.solve()

        self.assertIs(result.status, SolveStatus.EXACT)
        self.assertEqual(result.num_frontier, 8)
        self.assertEqual(result.num_interior, 31)
        self.assertEqual(solver.probability(2, 3), 0.0)
        neighbors = {(1, 2), (1, 3), (1, 4), (2, 2), (2, 4), (3, 2), (3, 3), (3, 4)}
        for row in range(5):
            for col in range(8):
                if (row, col) == (2, 3):
                    continue
                p = solver.probability(row, col)
                if (row, col) in neighbors:
                    self.assertEqual(p, 0.0)
                else:
                    # All 16 bad items sit among the 31 cells away from the clue.
                    self.assertAlmostEqual(p, 16 / 31, places=12)
                    self.assertGreater(p, 0.4)

    def test_all_bad_found(self) -> None:
        solver = ThrillDiggerSolver()
        for idx in range(16):
            solver.set_cell(idx // 8, idx % 8, CellContent.BOMB if idx % 2 else CellContent.RUPOOR)
        solver.set_cell(4, 0, CellContent.GREEN)
        result = solver.solve()
        self.assertEqual(result.remaining_bad, 0)
        self.assertEqual(result.total_ways, 1)
        for p in _hidden_probs(solver).values():
            self.assertEqual(p, 0.0)

    def test_symmetric_cells_match(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(0, 0, CellContent.BLUE)
        solver.solve()
        self.assertEqual(solver.probability(0, 1), solver.probability(1, 0))
        self.assertEqual(solver.probability(0, 1), solver.probability(1, 1))

    def test_probabilities_sum_to_remaining_bad(self) -> None:
        boards = [
            [(0, 0, CellContent.BLUE)],
            [(2, 3, CellContent.RED), (2, 4, CellContent.BLUE), (1, 3, CellContent.BOMB)],
            [(0, 0, CellContent.GREEN), (4, 7, CellContent.SILVER), (0, 7, CellContent.BLUE),
             (3, 6, CellContent.RUPOOR)],
        ]
        for cells in boards:
            solver = ThrillDiggerSolver()
            for row, col, content in cells:
                solver.set_cell(row, col, content)
            result = solver.solve()
            self.assertIs(result.status, SolveStatus.EXACT)
            total = sum(_hidden_probs(solver).values())
            self.assertAlmostEqual(total, result.remaining_bad, places=9)
            probs = solver.probabilities
            self.assertTrue(np.all(probs >= 0.0) and np.all(probs <= 1.0))

    def test_overlapping_clues_form_one_component(self) -> None:
        solver = ThrillDiggerSolver()
        solver.set_cell(0, 0, CellContent.BLUE)
        solver.set_cell(0, 2, CellContent.BLUE)
        solver.set_cell(4, 7, CellContent.GREEN)
        result = solver.solve()
        self.assertEqual(result.num_components, 2)
        self.assertEqual(result.num_frontier, 6 + 3)


class TestBruteForceAgreement(unittest.TestCase):
    """Cross-check exact marginals against direct enumeration on small grids."""

    def _check(self, rows: int, cols: int, total_bad: int, cells) -> None:
        solver = ThrillDiggerSolver(rows, cols, total_bad)
        for row, col, content in cells:
            solver.set_cell(row, col, content)
        result = solver.solve()
        total, expected = _brute_force(solver)

        self.assertIs(result.status, SolveStatus.EXACT)
        self.assertEqual(result.total_ways, total)
        actual = _hidden_probs(solver)
        for cell, p in expected.items():
            self.assertAlmostEqual(actual[cell], p, places=12, msg=f"cell {cell}")

    def test_overlapping_range_clues(self) -> None:
        self._check(3, 4, 4, [
            (0, 0, CellContent.BLUE),
            (1, 2, CellContent.RED),
            (2, 0, CellContent.BOMB),
        ])

    def test_clues_with_known_bad_neighbor(self) -> None:
        self._check(4, 4, 5, [
            (1, 1, CellContent.BLUE),
            (2, 2, CellContent.RED),
            (3, 3, CellContent.RUPOOR),
        ])

    def test_independent_components_and_interior(self) -> None:
        self._check(3, 5, 4, [
            (0, 0, CellContent.BLUE),
            (2, 4, CellContent.GREEN),
        ])


class TestDegradedPaths(unittest.TestCase):
    """Tests for contradiction and enumeration-overflow reporting."""

    def test_contradictory_clues(self) -> None:
        solver = ThrillDiggerSolver()
        # Green at (0,0) clears (0,1) and (1,1); silver at (0,2) needs all five
        # of its hidden neighbors, including those two, to be bad.
        solver.set_cell(0, 0, CellContent.GREEN)
        solver.set_cell(0, 2, CellContent.SILVER)
        result = solver.solve()

        self.assertIs(result.status, SolveStatus.CONTRADICTION)
        self.assertFalse(result.is_exact)
        self.assertEqual(result.total_ways, 0)
        for p in _hidden_probs(solver).values():
            self.assertAlmostEqual(p, 16 / 38)

    def test_more_bad_than_remaining_hidden(self) -> None:
        solver = ThrillDiggerSolver(2, 2, 3)
        solver.set_cell(0, 0, CellContent.GREEN)
        solver.set_cell(0, 1, CellContent.GREEN)
        result = solver.solve()
        self.assertIs(result.status, SolveStatus.CONTRADICTION)
        for p in _hidden_probs(solver).values():
            self.assertEqual(p, 1.0)

    def test_over_marked_board(self) -> None:
        solver = ThrillDiggerSolver()
        for idx in range(17):
            solver.set_cell(idx // 8, idx % 8, CellContent.BOMB)
        result = solver.solve()
        self.assertIs(result.status, SolveStatus.CONTRADICTION)
        self.assertEqual(result.remaining_bad, -1)
        for p in _hidden_probs(solver).values():
            self.assertEqual(p, 0.0)

    def test_oversized_component_is_flagged(self) -> None:
        solver = ThrillDiggerSolver(max_component_size=3)
        solver.set_cell(0, 0, CellContent.BLUE)
        solver.set_cell(0, 2, CellContent.BLUE)
        solver.set_cell(4, 7, CellContent.GREEN)
        result = solver.solve()

        self.assertIs(result.status, SolveStatus.APPROXIMATE)
        self.assertEqual(result.overflow_cells, (1, 3, 8, 9, 10, 11))
        for row, col in ((0, 1), (1, 0), (1, 1)):
            self.assertAlmostEqual(solver.probability(row, col), 16 / 37)
        # The green corner still resolves exactly.
        self.assertEqual(solver.probability(3, 7), 0.0)

    def test_invalid_component_bound(self) -> None:
        with self.assertRaises(ValueError):
            ThrillDiggerSolver(max_component_size=0)

    def test_last_result_tracks_solve(self) -> None:
        solver = ThrillDiggerSolver()
        result = solver.solve()
        self.assertIs(solver.last_result, result)
        result.probabilities[0, 0] = 0.9
        self.assertAlmostEqual(solver.probability(0, 0), 0.4)


if __name__ == "__main__":
    unittest.main()
