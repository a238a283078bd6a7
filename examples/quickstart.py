"""
Quickstart example for the Thrill Digger probability calculator.

This script demonstrates basic usage of the solver.
"""

import logging

from thrill_digger import (
    CellContent,
    ThrillDiggerSolver,
    format_probabilities,
    run_solver_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("Thrill Digger Calculator - Quickstart Example")
    print("=" * 60)

    # Example 1: Fresh Expert board
    print("\n1. Fresh Expert board (5x8, 16 bad items)...")
    print("-" * 60)

    solver = ThrillDiggerSolver()
    solver.solve()
    print(format_probabilities(solver))

    # Example 2: Enter a few dug spots
    print("\n2. After digging a green rupee and a blue rupee...")
    print("-" * 60)

    solver.set_cell(2, 3, CellContent.GREEN)
    solver.set_cell(0, 0, CellContent.BLUE)
    result = solver.solve()
    print(format_probabilities(solver))
    print(f"Status: {result.status.value}")
    print(f"Consistent layouts: {result.total_ways}")
    print(f"Components: {result.num_components}, frontier: {result.num_frontier}, "
          f"interior: {result.num_interior}")

    # Example 3: Mark a bomb next to the blue rupee
    print("\n3. After finding a bomb next to the blue rupee...")
    print("-" * 60)

    solver.set_cell(1, 0, CellContent.BOMB)
    result = solver.solve()
    print(format_probabilities(solver))
    print(f"Remaining bad: {result.remaining_bad}")

    # Example 4: Play games with the safest-dig strategy
    print("\n4. Playing 10 games digging the safest spot each turn...")
    print("-" * 60)

    results = run_solver_many_tests(runs=10, seed=0)
    print(f"Win rate: {results['win_rate']*100:.1f}%")
    print(f"Average digs per game: {results['avg_digs']:.1f}")
    print(f"Average rupoors hit: {results['avg_rupoors_hit']:.1f}")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
