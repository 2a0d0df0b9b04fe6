from typing import List, Optional, Sequence

import numpy as np


def count_conflicts(genes: Sequence[int]) -> int:
    """Number of attacking queen pairs for ``genes[row] = column``.

    Permutations can only collide on diagonals; the column check only
    fires for crossover children that are not permutations.
    """
    n = len(genes)
    conflicts = 0
    for i in range(n):
        gi = genes[i]
        for j in range(i + 1, n):
            d = gi - genes[j]
            if d == 0 or d == j - i or d == i - j:
                conflicts += 1
    return conflicts


def random_permutation(size: int, rng: np.random.Generator) -> List[int]:
    """Shuffle a fresh identity permutation: position i swaps with a random j."""
    genes = list(range(size))
    for i in range(size):
        j = int(rng.integers(size))
        genes[i], genes[j] = genes[j], genes[i]
    return genes


class Chromosome:
    def __init__(self, size: int, genes: Optional[Sequence[int]] = None,
                 rng: Optional[np.random.Generator] = None):
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        self.size = size
        if genes is None:
            self.genes = random_permutation(size, rng if rng is not None else np.random.default_rng())
        else:
            if len(genes) != size:
                raise ValueError(f"expected {size} genes, got {len(genes)}")
            self.genes = [int(g) for g in genes]
            for g in self.genes:
                if not 0 <= g < size:
                    raise ValueError(f"gene {g} outside [0, {size})")
        self.evaluate()

    def evaluate(self) -> int:
        """Recompute and cache the conflict count after the genes changed."""
        self.fitness = count_conflicts(self.genes)
        return self.fitness

    def max_conflicts(self) -> int:
        n = self.size
        return n * (n - 1) // 2

    def is_permutation(self) -> bool:
        return sorted(self.genes) == list(range(self.size))

    def is_solution(self) -> bool:
        return self.fitness == 0

    def clone(self) -> "Chromosome":
        twin = Chromosome.__new__(Chromosome)
        twin.size = self.size
        twin.genes = self.genes[:]
        twin.fitness = self.fitness
        return twin

    def __repr__(self) -> str:
        return f"Chromosome(genes={self.genes}, fitness={self.fitness})"
