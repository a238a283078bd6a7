"""Grid adjacency and disjoint-set helpers for the Thrill Digger solver."""

from typing import Dict, List, Tuple

# Module-level cache: (rows, cols) -> ((neighbor_idx, ...) per cell index)
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Tuple[Tuple[int, ...], ...]] = {}


def get_neighborhoods(rows: int, cols: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Precompute and cache 8-connected neighbor indices for every cell in a grid.

    Args:
        rows: Number of grid rows. Must be positive.
        cols: Number of grid columns. Must be positive.

    Returns:
        A tuple indexed by row-major cell index; entry ``i`` holds the valid
        neighbor indices of cell ``i`` in (dr, dc) scan order, clipped at
        edges and corners.

    Raises:
        ValueError: If rows or cols is non-positive.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: List[Tuple[int, ...]] = []
    for r in range(rows):
        for c in range(cols):
            nbrs: List[int] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < rows and 0 <= nc < cols:
                        nbrs.append(nr * cols + nc)
            neighborhoods.append(tuple(nbrs))

    result = tuple(neighborhoods)
    _NEIGHBORHOODS_CACHE[key] = result
    return result


def neighbors(idx: int, rows: int, cols: int) -> Tuple[int, ...]:
    """Return the neighbor indices of cell ``idx`` on a rows x cols grid."""
    return get_neighborhoods(rows, cols)[idx]


class UnionFind:
    """Disjoint sets over the integers 0..n-1 with path compression."""

    def __init__(self, n: int) -> None:
        self.parent: List[int] = list(range(n))

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self.parent[ra] = rb
