"""Translate revealed clue cells into range constraints over hidden cells."""

from typing import List, NamedTuple, Sequence, Tuple

from .board import CellContent, clue_range
from .utils import get_neighborhoods


class Constraint(NamedTuple):
    """Between ``min_bad`` and ``max_bad`` (inclusive) of ``cells`` are bad."""

    cells: Tuple[int, ...]
    min_bad: int
    max_bad: int
    source: int  # board index of the clue cell


def build_constraints(
    cells: Sequence[CellContent], rows: int, cols: int
) -> List[Constraint]:
    """
    Build one constraint per revealed clue cell that still has hidden neighbors.

    Revealed-bad neighbors are subtracted from the clue's range; revealed-safe
    neighbors contribute nothing. Both bounds are then clamped to
    [0, number of hidden neighbors].

    Args:
        cells: Row-major board contents.
        rows: Board rows.
        cols: Board columns.

    Returns:
        Constraints in board order of their clue cells. Every member index
        refers to a currently hidden cell.
    """
    neighborhoods = get_neighborhoods(rows, cols)
    constraints: List[Constraint] = []

    for idx, content in enumerate(cells):
        if not content.is_clue:
            continue

        min_bad, max_bad = clue_range(content)
        known_bad = 0
        members: List[int] = []
        for n in neighborhoods[idx]:
            if cells[n].is_bad:
                known_bad += 1
            elif cells[n] == CellContent.HIDDEN:
                members.append(n)

        if not members:
            continue

        adj_min = min(max(0, min_bad - known_bad), len(members))
        adj_max = min(max(0, max_bad - known_bad), len(members))
        constraints.append(Constraint(tuple(members), adj_min, adj_max, idx))

    return constraints


def split_frontier(
    cells: Sequence[CellContent], constraints: Sequence[Constraint]
) -> Tuple[List[int], List[int]]:
    """
    Partition hidden cells into frontier (constrained) and interior cells.

    Returns:
        Tuple of (frontier, interior), both sorted by board index.
    """
    constrained = {n for con in constraints for n in con.cells}
    frontier: List[int] = []
    interior: List[int] = []
    for idx, content in enumerate(cells):
        if content != CellContent.HIDDEN:
            continue
        if idx in constrained:
            frontier.append(idx)
        else:
            interior.append(idx)
    return frontier, interior
