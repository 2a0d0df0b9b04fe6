from typing import Iterator, List

import numpy as np

from chromosome import Chromosome
from constants import ELITE_THRESHOLD, TOURNAMENT_K
from Evolutionary.selection import tournament_selection


class Population:
    """Fixed-size collection of chromosomes, each carrying its cached fitness.

    The size never changes after creation; a generation only swaps
    individual slots through ``replace``.
    """

    def __init__(self, members: List[Chromosome]):
        if not members:
            raise ValueError("population must contain at least one chromosome")
        size = members[0].size
        for m in members:
            if m.size != size:
                raise ValueError(f"mixed board sizes in population: {m.size} != {size}")
        self.board_size = size
        self.members = members

    @classmethod
    def random(cls, board_size: int, count: int, rng: np.random.Generator) -> "Population":
        if count <= 0:
            raise ValueError(f"population size must be positive, got {count}")
        # every individual gets its own gene list, nothing is shared
        return cls([Chromosome(board_size, rng=rng) for _ in range(count)])

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, index: int) -> Chromosome:
        return self.members[index]

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self.members)

    def fitnesses(self) -> List[int]:
        return [m.fitness for m in self.members]

    def select_parent(self, rng: np.random.Generator, k: int = TOURNAMENT_K) -> int:
        return tournament_selection(self.fitnesses(), rng, k)

    def replace(self, slot: int, child: Chromosome, rng: np.random.Generator,
                elite_threshold: int = ELITE_THRESHOLD) -> bool:
        """Elitist-with-drift replacement of ``slot`` by ``child``.

        Near the solution (parent or child below ``elite_threshold``) a
        strictly better child always wins. Otherwise a fair coin is
        flipped first and the child may only win on heads.
        Returns True when the slot was replaced.
        """
        parent = self.members[slot]
        if parent.fitness < elite_threshold or child.fitness < elite_threshold:
            accept = child.fitness < parent.fitness
        else:
            coin = int(rng.integers(2))
            accept = coin == 1 and child.fitness < parent.fitness
        if accept:
            self.members[slot] = child
        return accept

    def has_solution(self) -> bool:
        return any(m.fitness == 0 for m in self.members)

    def best_index(self) -> int:
        """Index of the first individual with the lowest conflict count."""
        best = 0
        for i in range(1, len(self.members)):
            if self.members[i].fitness < self.members[best].fitness:
                best = i
        return best

    def best(self) -> Chromosome:
        return self.members[self.best_index()]

    def snapshot(self) -> "Population":
        return Population([m.clone() for m in self.members])
