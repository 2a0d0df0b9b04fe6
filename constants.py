"""
Central defaults for the permutation N-Queens GA.

This module provides:
 - BOARD_SIZE: default board size
 - default GA parameters (population, generation cap, elite threshold,
   tournament size, adaptive mutation rate, worker count)
 - recommend_params(n): good starting values for any n
"""

from __future__ import annotations

# Problem constant: default board size
BOARD_SIZE = 8  # Try 4, 8, 16, 32, 100, ...

# Evolutionary constants
POPULATION_SIZE = 100
GENERATIONS = 50000
ELITE_THRESHOLD = 3     # below this many conflicts, replacement skips the coin flip
TOURNAMENT_K = 2
MUTATION_RATE = 10      # percent, per gene, adaptive mutation only
WORKERS = 1             # offspring-generation workers per generation

# Progress line cadence for verbose runs
REPORT_EVERY = 100

# Defaults for repeated solving (benchmark mode)
SOLVE_REPEATS = 20


def recommend_params(n: int) -> dict:
    """Return recommended starting GA parameters for a given board size n.

    Heuristics:
      - population_size ~ 25*n, clamped to [50, 200]
      - generations ~ 6250*n (min 1000), so n=8 gets 50000
      - elite threshold and tournament size keep their baseline values
    """
    n = max(1, int(n))
    return {
        "population_size": max(50, min(200, 25 * n)),
        "generations": max(1000, 6250 * n),
        "elite_threshold": ELITE_THRESHOLD,
        "tournament_k": TOURNAMENT_K,
        "mutation_rate": MUTATION_RATE,
    }
