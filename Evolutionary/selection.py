from typing import Sequence

import numpy as np


def tournament_selection(fitnesses: Sequence[int], rng: np.random.Generator, k: int = 2) -> int:
    """Pick the index of the fittest of ``k`` uniformly drawn individuals.

    Args:
        fitnesses: Cached conflict counts, one per population slot.
        rng: Random number generator.
        k: Tournament size (>= 2). Draws are with replacement.

    Returns:
        Index of the winner. An earlier draw only keeps its place when it
        is strictly fitter, so ties go to the later draw.
    """
    if k < 2:
        raise ValueError(f"tournament size must be at least 2, got {k}")
    count = len(fitnesses)
    if count == 0:
        raise ValueError("cannot select from an empty population")

    winner = int(rng.integers(count))
    for _ in range(k - 1):
        challenger = int(rng.integers(count))
        if not fitnesses[winner] < fitnesses[challenger]:
            winner = challenger
    return winner
