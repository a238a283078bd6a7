"""Connected-component partitioning and exact per-component enumeration."""

import logging
from collections import defaultdict
from typing import DefaultDict, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .constraints import Constraint
from .utils import UnionFind

logger = logging.getLogger(__name__)

# The whole Expert board has 40 cells, so this bound is never hit there.
DEFAULT_MAX_COMPONENT_SIZE = 40


class ComponentResult(NamedTuple):
    """
    Exact configuration counts for one component.

    Attributes:
        cells: Board indices of the component, in local index order.
        counts: counts[k] = number of valid assignments with exactly k bad cells.
        bad_counts: bad_counts[i][k] = number of those assignments in which
            cells[i] is bad.
    """

    cells: Tuple[int, ...]
    counts: List[int]
    bad_counts: List[List[int]]

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def total(self) -> int:
        return sum(self.counts)


def find_components(
    frontier: Sequence[int], constraints: Sequence[Constraint]
) -> List[Tuple[Tuple[int, ...], List[Constraint]]]:
    """
    Group frontier cells that are transitively linked by shared constraints.

    Args:
        frontier: Hidden cells referenced by at least one constraint.
        constraints: Constraints whose members all lie in ``frontier``.

    Returns:
        List of (cells, constraints) pairs, one per component, ordered by the
        smallest board index in each component. Cells are sorted by board
        index; every constraint appears in exactly one component.
    """
    local: Dict[int, int] = {cell: i for i, cell in enumerate(frontier)}
    uf = UnionFind(len(frontier))
    for con in constraints:
        first = local[con.cells[0]]
        for cell in con.cells[1:]:
            uf.union(first, local[cell])

    members: DefaultDict[int, List[int]] = defaultdict(list)
    for i, cell in enumerate(frontier):
        members[uf.find(i)].append(cell)

    grouped: DefaultDict[int, List[Constraint]] = defaultdict(list)
    for con in constraints:
        grouped[uf.find(local[con.cells[0]])].append(con)

    components = [
        (tuple(sorted(cells)), grouped[root]) for root, cells in members.items()
    ]
    components.sort(key=lambda comp: comp[0][0])
    return components


def enumerate_component(
    cells: Sequence[int],
    constraints: Sequence[Constraint],
    remaining_bad: int,
    max_size: int = DEFAULT_MAX_COMPONENT_SIZE,
) -> Optional[ComponentResult]:
    """
    Count every bad/safe assignment of a component that satisfies its constraints.

    Cells are assigned in a fixed order, most-constrained first (ties keep
    board order). After each assignment, every constraint touching the cell
    is checked against its partially assigned members and the branch is cut
    as soon as the maximum is exceeded or the minimum becomes unreachable.
    Branches using more than ``remaining_bad`` bad cells are cut too.

    Args:
        cells: Board indices of the component.
        constraints: Constraints whose members all lie in ``cells``.
        remaining_bad: Bad items not yet found on the board.
        max_size: Largest component enumerated exactly.

    Returns:
        The exact counts, or None if the component is larger than ``max_size``.
    """
    size = len(cells)
    if size > max_size:
        return None

    local: Dict[int, int] = {cell: i for i, cell in enumerate(cells)}
    local_constraints: List[Tuple[Tuple[int, ...], int, int]] = [
        (tuple(local[c] for c in con.cells), con.min_bad, con.max_bad)
        for con in constraints
    ]

    cell_constraints: List[List[int]] = [[] for _ in range(size)]
    for ci, (members, _, _) in enumerate(local_constraints):
        for li in members:
            cell_constraints[li].append(ci)

    order = sorted(range(size), key=lambda li: -len(cell_constraints[li]))
    order_pos = [0] * size
    for pos, li in enumerate(order):
        order_pos[li] = pos

    assignment = [0] * size
    counts = [0] * (size + 1)
    bad_counts = [[0] * (size + 1) for _ in range(size)]

    def consistent(cell: int, pos: int) -> bool:
        for ci in cell_constraints[cell]:
            members, min_bad, max_bad = local_constraints[ci]
            bad = 0
            unassigned = 0
            for li in members:
                if order_pos[li] <= pos:
                    bad += assignment[li]
                else:
                    unassigned += 1
            if bad > max_bad or bad + unassigned < min_bad:
                return False
        return True

    def dfs(pos: int, num_bad: int) -> None:
        if num_bad > remaining_bad:
            return

        if pos == size:
            counts[num_bad] += 1
            for li in range(size):
                if assignment[li]:
                    bad_counts[li][num_bad] += 1
            return

        cell = order[pos]
        for val in (0, 1):
            assignment[cell] = val
            if consistent(cell, pos):
                dfs(pos + 1, num_bad + val)
        assignment[cell] = 0

    dfs(0, 0)

    result = ComponentResult(tuple(cells), counts, bad_counts)
    logger.debug(
        "component of %d cells, %d constraints: %d configurations",
        size,
        len(local_constraints),
        result.total,
    )
    return result
