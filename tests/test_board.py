"""Unit tests for the board model and grid helpers."""

import unittest

from thrill_digger.board import Board, CellContent, clue_range
from thrill_digger.utils import UnionFind, get_neighborhoods, neighbors


class TestCellContent(unittest.TestCase):
    """Tests for CellContent predicates and clue_range."""

    def test_predicates(self) -> None:
        self.assertFalse(CellContent.HIDDEN.is_revealed)
        self.assertFalse(CellContent.HIDDEN.is_clue)
        self.assertFalse(CellContent.HIDDEN.is_bad)
        for c in (CellContent.GREEN, CellContent.BLUE, CellContent.RED,
                  CellContent.SILVER, CellContent.GOLD):
            self.assertTrue(c.is_clue)
            self.assertTrue(c.is_revealed)
            self.assertFalse(c.is_bad)
        for c in (CellContent.RUPOOR, CellContent.BOMB):
            self.assertTrue(c.is_bad)
            self.assertTrue(c.is_revealed)
            self.assertFalse(c.is_clue)

    def test_clue_ranges(self) -> None:
        self.assertEqual(clue_range(CellContent.GREEN), (0, 0))
        self.assertEqual(clue_range(CellContent.BLUE), (1, 2))
        self.assertEqual(clue_range(CellContent.RED), (3, 4))
        self.assertEqual(clue_range(CellContent.SILVER), (5, 6))
        self.assertEqual(clue_range(CellContent.GOLD), (7, 8))

    def test_clue_range_rejects_non_clues(self) -> None:
        for c in (CellContent.HIDDEN, CellContent.RUPOOR, CellContent.BOMB):
            with self.assertRaises(ValueError):
                clue_range(c)


class TestBoard(unittest.TestCase):
    """Tests for Board."""

    def test_defaults_to_expert(self) -> None:
        board = Board()
        self.assertEqual((board.rows, board.cols, board.total_bad), (5, 8, 16))
        self.assertEqual(board.size, 40)
        self.assertTrue(all(c == CellContent.HIDDEN for c in board.cells))

    def test_invalid_configuration(self) -> None:
        with self.assertRaises(ValueError):
            Board(0, 8)
        with self.assertRaises(ValueError):
            Board(5, 8, total_bad=41)
        with self.assertRaises(ValueError):
            Board(5, 8, total_bad=-1)

    def test_set_and_get_row_major(self) -> None:
        board = Board()
        board.set(2, 3, CellContent.RED)
        self.assertEqual(board.get(2, 3), CellContent.RED)
        self.assertEqual(board.cells[2 * 8 + 3], CellContent.RED)

    def test_set_accepts_raw_values(self) -> None:
        board = Board()
        board.set(0, 0, 7)
        self.assertIs(board.get(0, 0), CellContent.BOMB)

    def test_set_rejects_bad_coordinates(self) -> None:
        board = Board()
        for row, col in ((-1, 0), (5, 0), (0, -1), (0, 8)):
            with self.assertRaises(ValueError):
                board.set(row, col, CellContent.GREEN)

    def test_set_rejects_bad_content(self) -> None:
        board = Board()
        with self.assertRaises(ValueError):
            board.set(0, 0, 8)
        with self.assertRaises(ValueError):
            board.set(0, 0, "bomb")

    def test_counts(self) -> None:
        board = Board()
        board.set(0, 0, CellContent.BOMB)
        board.set(0, 1, CellContent.RUPOOR)
        board.set(0, 2, CellContent.GREEN)
        self.assertEqual(board.known_bad_count(), 2)
        self.assertEqual(board.revealed_count(), 3)
        self.assertEqual(board.hidden_count(), 37)
        self.assertEqual(board.remaining_bad(), 14)

    def test_snapshot_is_immutable_copy(self) -> None:
        board = Board()
        snap = board.snapshot()
        board.set(0, 0, CellContent.BOMB)
        self.assertEqual(snap[0], CellContent.HIDDEN)
        self.assertIsInstance(snap, tuple)

    def test_reset(self) -> None:
        board = Board()
        board.set(1, 1, CellContent.GOLD)
        board.reset()
        self.assertEqual(board.revealed_count(), 0)


class TestNeighborhoods(unittest.TestCase):
    """Tests for get_neighborhoods / neighbors."""

    def test_corner(self) -> None:
        self.assertEqual(neighbors(0, 5, 8), (1, 8, 9))
        self.assertEqual(neighbors(39, 5, 8), (30, 31, 38))

    def test_edge(self) -> None:
        self.assertEqual(neighbors(3, 5, 8), (2, 4, 10, 11, 12))

    def test_interior(self) -> None:
        self.assertEqual(neighbors(19, 5, 8), (10, 11, 12, 18, 20, 26, 27, 28))

    def test_symmetric_and_cached(self) -> None:
        nbhd = get_neighborhoods(5, 8)
        self.assertIs(nbhd, get_neighborhoods(5, 8))
        for idx, nbrs in enumerate(nbhd):
            self.assertNotIn(idx, nbrs)
            for n in nbrs:
                self.assertIn(idx, nbhd[n])

    def test_invalid_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            get_neighborhoods(0, 3)


class TestUnionFind(unittest.TestCase):
    """Tests for UnionFind."""

    def test_singletons(self) -> None:
        uf = UnionFind(4)
        self.assertEqual([uf.find(i) for i in range(4)], [0, 1, 2, 3])

    def test_union_is_transitive(self) -> None:
        uf = UnionFind(6)
        uf.union(0, 1)
        uf.union(2, 3)
        uf.union(1, 3)
        self.assertEqual(uf.find(0), uf.find(2))
        self.assertNotEqual(uf.find(0), uf.find(4))
        self.assertNotEqual(uf.find(4), uf.find(5))

    def test_path_compression(self) -> None:
        uf = UnionFind(5)
        for i in range(4):
            uf.union(i, i + 1)
        root = uf.find(0)
        self.assertEqual(uf.parent[0], root)
        self.assertEqual(uf.parent[1], root)


if __name__ == "__main__":
    unittest.main()
