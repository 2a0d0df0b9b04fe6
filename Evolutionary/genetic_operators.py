from typing import List, Sequence

import numpy as np


def swap_mutation(genes: List[int], rng: np.random.Generator) -> List[int]:
    """Mutate genes by swapping two random positions.

    Args:
        genes: The gene list to be mutated in place.
        rng: Random number generator.

    Returns:
        The mutated gene list. Both positions may coincide, which leaves
        it unchanged.
    """

    n = len(genes)
    i = int(rng.integers(n))
    j = int(rng.integers(n))
    genes[i], genes[j] = genes[j], genes[i]

    return genes


def adaptive_mutation(genes: List[int], rate: int, rng: np.random.Generator) -> List[int]:
    """Give every gene a ``rate`` percent chance to swap with a random position.

    Args:
        genes: The gene list to be mutated in place.
        rate: Mutation rate in percent, 0..100.
        rng: Random number generator.

    Returns:
        The mutated gene list.
    """

    if not 0 <= rate <= 100:
        raise ValueError(f"mutation rate must be within [0, 100], got {rate}")

    n = len(genes)
    for i in range(n):
        if rng.integers(100) < rate:
            j = int(rng.integers(n))
            genes[i], genes[j] = genes[j], genes[i]

    return genes


def multi_point_crossover(parent_1: Sequence[int], parent_2: Sequence[int],
                          rng: np.random.Generator, strict: bool = False) -> List[int]:
    """Combine two parents around a random window [start, end].

    Args:
        parent_1: Donates the genes inside the window.
        parent_2: Donates the genes outside the window, at the same positions.
        rng: Random number generator.
        strict: Repair the child into a permutation.

    Returns:
        A new gene list. Without ``strict`` the child can repeat columns.
    """

    n = len(parent_1)
    if len(parent_2) != n:
        raise ValueError(f"parents differ in length: {n} != {len(parent_2)}")

    a = int(rng.integers(n))
    b = int(rng.integers(n))
    start, end = min(a, b), max(a, b)

    child = [parent_1[k] if start <= k <= end else parent_2[k] for k in range(n)]

    if strict:
        repair_permutation(child, parent_2, start, end)

    return child


def repair_permutation(child: List[int], donor: Sequence[int], start: int, end: int) -> List[int]:
    """Turn a crossover child back into a permutation, in place.

    Genes inside [start, end] are kept first, then genes outside the
    window in position order; any value already placed leaves a hole.
    Holes are filled with the missing columns in the order they appear
    in ``donor``.

    Args:
        child: Gene list to legalize.
        donor: Parent whose ordering fills the holes.
        start: First position of the protected window.
        end: Last position of the protected window.

    Returns:
        The repaired gene list.
    """

    n = len(child)
    order = list(range(start, end + 1)) + [k for k in range(n) if k < start or k > end]

    placed = set()
    holes = []
    for k in order:
        if child[k] in placed:
            holes.append(k)
        else:
            placed.add(child[k])

    if not holes:
        return child

    missing = []
    for value in list(donor) + list(range(n)):
        if value not in placed:
            placed.add(value)
            missing.append(value)

    for k, value in zip(sorted(holes), missing):
        child[k] = value

    return child
