"""Combine per-component counts into exact per-cell bad probabilities."""

import logging
from math import comb
from typing import Dict, List, NamedTuple, Optional, Sequence

from .enumeration import ComponentResult

logger = logging.getLogger(__name__)


class CombinedResult(NamedTuple):
    """
    Global combination of all components with the interior cells.

    Attributes:
        total_ways: Number of hidden-cell assignments consistent with every
            clue and with exactly ``remaining_bad`` bad cells. Zero means the
            board is contradictory and no probabilities were produced.
        cell_probabilities: Board index -> probability for frontier cells.
        interior_probability: Shared probability of every interior cell, or
            None when there are no interior cells.
    """

    total_ways: int
    cell_probabilities: Dict[int, float]
    interior_probability: Optional[float]


def convolve(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """
    Multiply two "ways to have exactly k bad cells" polynomials.

    For example, ways [1, 2] convolved with [3, 1] gives [3, 7, 2].
    """
    if not a or not b:
        return []
    result = [0] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        if not x:
            continue
        for j, y in enumerate(b):
            result[i + j] += x * y
    return result


def interior_polynomial(num_interior: int) -> List[int]:
    """Ways to place m bad items among mutually unconstrained cells: C(n, m)."""
    return [comb(num_interior, m) for m in range(num_interior + 1)]


def _coefficient(poly: Sequence[int], k: int) -> int:
    return poly[k] if 0 <= k < len(poly) else 0


def combine_components(
    components: Sequence[ComponentResult], num_interior: int, remaining_bad: int
) -> CombinedResult:
    """
    Derive each hidden cell's marginal probability of being bad.

    The product of all component polynomials and the interior binomial
    polynomial gives, at index ``remaining_bad``, the number of globally
    consistent boards. A frontier cell's numerator pairs its own component's
    per-k bad counts with the product of every other polynomial at
    ``remaining_bad - k``.

    Args:
        components: Exact results for every enumerated component.
        num_interior: Number of unconstrained hidden cells.
        remaining_bad: Bad items still hidden on the board.

    Returns:
        The combined result; when ``total_ways`` is 0 the probability fields
        are empty and the caller must fall back.
    """
    interior_poly = interior_polynomial(num_interior)

    # prefix[i] = product of components[:i], suffix[i] = product of components[i:]
    prefix: List[List[int]] = [[1]]
    for comp in components:
        prefix.append(convolve(prefix[-1], comp.counts))
    suffix: List[List[int]] = [[1]]
    for comp in reversed(components):
        suffix.append(convolve(comp.counts, suffix[-1]))
    suffix.reverse()

    comp_prod = prefix[-1]
    total_poly = convolve(interior_poly, comp_prod)
    total_ways = _coefficient(total_poly, remaining_bad)
    logger.debug(
        "%d components, %d interior cells, %d remaining bad: %d total ways",
        len(components),
        num_interior,
        remaining_bad,
        total_ways,
    )

    if total_ways == 0:
        return CombinedResult(0, {}, None)

    cell_probabilities: Dict[int, float] = {}
    for i, comp in enumerate(components):
        without = convolve(convolve(prefix[i], suffix[i + 1]), interior_poly)
        for li, cell in enumerate(comp.cells):
            per_k = comp.bad_counts[li]
            numerator = 0
            for k in range(min(comp.size, remaining_bad) + 1):
                if per_k[k]:
                    numerator += per_k[k] * _coefficient(without, remaining_bad - k)
            cell_probabilities[cell] = numerator / total_ways

    interior_probability: Optional[float] = None
    if num_interior > 0:
        numerator = 0
        for m in range(1, min(num_interior, remaining_bad) + 1):
            numerator += comb(num_interior - 1, m - 1) * _coefficient(
                comp_prod, remaining_bad - m
            )
        interior_probability = numerator / total_ways

    return CombinedResult(total_ways, cell_probabilities, interior_probability)
