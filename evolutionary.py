import concurrent.futures as cf
import time
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from chromosome import Chromosome
from constants import (
    POPULATION_SIZE,
    GENERATIONS,
    ELITE_THRESHOLD,
    TOURNAMENT_K,
    MUTATION_RATE,
    WORKERS,
    REPORT_EVERY,
)
from population import Population
from Evolutionary.selection import tournament_selection
from Evolutionary.genetic_operators import (
    swap_mutation,
    adaptive_mutation,
    multi_point_crossover,
)


# ---------------------------
# GA configuration structures
# ---------------------------

class GASettings:
    def __init__(
        self,
        population_size: int = POPULATION_SIZE,
        generations: int = GENERATIONS,
        elite_threshold: int = ELITE_THRESHOLD,
        tournament_k: int = TOURNAMENT_K,
        mutation_rate: int = MUTATION_RATE,
        crossover: bool = False,
        strict_permutation: bool = False,
        workers: int = WORKERS,
    ) -> None:
        self.population_size = int(population_size)
        self.generations = int(generations)
        self.elite_threshold = int(elite_threshold)
        self.tournament_k = int(tournament_k)
        self.mutation_rate = int(mutation_rate)
        self.crossover = bool(crossover)
        self.strict_permutation = bool(strict_permutation)
        self.workers = int(workers)

    def validate(self) -> "GASettings":
        if self.population_size <= 0:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be >= 0, got {self.generations}")
        if self.elite_threshold < 0:
            raise ValueError(f"elite_threshold must be >= 0, got {self.elite_threshold}")
        if self.tournament_k < 2:
            raise ValueError(f"tournament_k must be >= 2, got {self.tournament_k}")
        if not 0 <= self.mutation_rate <= 100:
            raise ValueError(f"mutation_rate must be within [0, 100], got {self.mutation_rate}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        return self

    def to_dict(self) -> dict:
        return {
            "population_size": self.population_size,
            "generations": self.generations,
            "elite_threshold": self.elite_threshold,
            "tournament_k": self.tournament_k,
            "mutation_rate": self.mutation_rate,
            "crossover": self.crossover,
            "strict_permutation": self.strict_permutation,
            "workers": self.workers,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GASettings":
        return cls(
            population_size=d.get("population_size", POPULATION_SIZE),
            generations=d.get("generations", GENERATIONS),
            elite_threshold=d.get("elite_threshold", ELITE_THRESHOLD),
            tournament_k=d.get("tournament_k", TOURNAMENT_K),
            mutation_rate=d.get("mutation_rate", MUTATION_RATE),
            crossover=d.get("crossover", False),
            strict_permutation=d.get("strict_permutation", False),
            workers=d.get("workers", WORKERS),
        )


class RunState(Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


class GAResult:
    def __init__(self, population: Population, state: RunState, generations: int,
                 duration: float, history: List[int]) -> None:
        self.population = population
        self.best = population.best().clone()
        self.state = state
        self.generations = generations
        self.duration = duration
        self.history = history

    @property
    def solved(self) -> bool:
        return self.state is RunState.CONVERGED


# ---------------------------
# Offspring generation
# ---------------------------

def make_child(parents: Sequence[Sequence[int]], fitnesses: Sequence[int],
               settings: GASettings, rng: np.random.Generator) -> Chromosome:
    """Select two parents and vary them into one new chromosome.

    Baseline: clone the first parent and swap two genes.
    Crossover variant: cross both parents, then mutate adaptively.
    """
    first = tournament_selection(fitnesses, rng, settings.tournament_k)
    second = tournament_selection(fitnesses, rng, settings.tournament_k)

    if settings.crossover:
        genes = multi_point_crossover(parents[first], parents[second], rng,
                                      strict=settings.strict_permutation)
        adaptive_mutation(genes, settings.mutation_rate, rng)
    else:
        genes = list(parents[first])
        swap_mutation(genes, rng)

    return Chromosome(len(genes), genes)


def partition_slots(count: int, workers: int) -> List[range]:
    """Split [0, count) into ``workers`` contiguous, disjoint ranges."""
    base = count // workers
    extra = count % workers
    chunks = []
    lo = 0
    for i in range(workers):
        hi = lo + base + (1 if i < extra else 0)
        chunks.append(range(lo, hi))
        lo = hi
    return chunks


def _fill_slots(children: List[Optional[Chromosome]], slots: range,
                parents: Sequence[Sequence[int]], fitnesses: Sequence[int],
                settings: GASettings, rng: np.random.Generator) -> None:
    for i in slots:
        children[i] = make_child(parents, fitnesses, settings, rng)


def generate_offspring(
    population: Population,
    settings: GASettings,
    rngs: Sequence[np.random.Generator],
    executor: Optional[cf.Executor] = None,
) -> List[Chromosome]:
    """Produce one child per population slot from a frozen parent snapshot.

    With an executor and several generators, every generator owns one
    slot range and runs as its own task; the call returns only after
    all tasks are done.
    """
    parents = [tuple(m.genes) for m in population]
    fitnesses = tuple(population.fitnesses())
    children: List[Optional[Chromosome]] = [None] * len(population)

    if executor is None or len(rngs) == 1:
        _fill_slots(children, range(len(children)), parents, fitnesses, settings, rngs[0])
    else:
        chunks = partition_slots(len(children), len(rngs))
        futures = [
            executor.submit(_fill_slots, children, chunk, parents, fitnesses, settings, rng)
            for chunk, rng in zip(chunks, rngs)
            if len(chunk)
        ]
        for fut in futures:
            fut.result()

    return children


def next_generation(
    population: Population,
    settings: GASettings,
    rng: np.random.Generator,
    worker_rngs: Optional[Sequence[np.random.Generator]] = None,
    executor: Optional[cf.Executor] = None,
) -> int:
    """Advance the population by one steady-state generation.

    Returns the number of slots whose parent was replaced.
    """
    children = generate_offspring(population, settings, worker_rngs or [rng], executor)
    replaced = 0
    for slot, child in enumerate(children):
        if population.replace(slot, child, rng, settings.elite_threshold):
            replaced += 1
    return replaced


# ---------------------------
# GA main loop
# ---------------------------

def run_ga(
    settings: GASettings,
    board_size: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False,
    report_every: int = REPORT_EVERY,
) -> GAResult:
    settings.validate()
    if board_size <= 0:
        raise ValueError(f"board size must be positive, got {board_size}")
    if rng is None:
        rng = np.random.default_rng(seed)

    start = time.perf_counter()
    population = Population.random(board_size, settings.population_size, rng)
    history = [population.best().fitness]
    max_conflicts = board_size * (board_size - 1) // 2

    if verbose:
        print(f"Initial best fitness: {history[0]} / {max_conflicts} conflicts")

    executor = None
    if settings.workers > 1:
        worker_rngs = rng.spawn(settings.workers)
        executor = cf.ThreadPoolExecutor(max_workers=settings.workers)
    else:
        worker_rngs = [rng]

    generation = 0
    try:
        while True:
            if history[-1] == 0:
                state = RunState.CONVERGED
                break
            if generation >= settings.generations:
                state = RunState.EXHAUSTED
                break

            next_generation(population, settings, rng, worker_rngs, executor)
            generation += 1
            history.append(min(population.fitnesses()))

            if verbose and (generation == 1 or generation % report_every == 0):
                print(f"Gen {generation:6d} | best conflicts = {history[-1]}")
    finally:
        if executor is not None:
            executor.shutdown()

    duration = time.perf_counter() - start
    if verbose:
        if state is RunState.CONVERGED:
            print(f"\nSolved at generation {generation} in {duration:.3f}s.")
        else:
            print(f"\nGeneration cap reached at generation {generation}.")
        print(f"Finished in {duration:.3f}s | Best conflicts: {history[-1]}")

    return GAResult(population, state, generation, duration, history)
