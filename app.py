import argparse
import concurrent.futures as cf
import os
import sys
from concurrent.futures.process import BrokenProcessPool
from statistics import median
from typing import List, Optional

import numpy as np

from constants import BOARD_SIZE, SOLVE_REPEATS, recommend_params
from evolutionary import GASettings, partition_slots, run_ga
import view


# ---------------------------
# Repeated solving
# ---------------------------

def _worker_run_many(payload: dict) -> dict:
    """Run the GA once per seed in one worker to reduce process startup overhead."""
    s = GASettings.from_dict(payload["settings"])  # reconstruct settings in worker
    board_size = payload["board_size"]
    out = {"durations": [], "generations": [], "best_fitness": [], "successes": 0}
    for seed in payload["seeds"]:
        res = run_ga(s, board_size, seed=seed)
        out["durations"].append(res.duration)
        out["generations"].append(res.generations)
        out["best_fitness"].append(res.best.fitness)
        if res.solved:
            out["successes"] += 1
    return out


_POOL_FALLBACK_WARNED = False


def evaluate_settings_over_runs(
    settings: GASettings,
    board_size: int,
    runs: int,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
) -> dict:
    """Solve ``runs`` times and summarize iterations, time and success."""
    global _POOL_FALLBACK_WARNED
    settings.validate()
    runs = int(runs)
    if runs <= 0:
        raise ValueError(f"runs must be positive, got {runs}")
    if workers is None:
        workers = os.cpu_count() or 1
    workers = max(1, min(int(workers), runs))

    seeds = [int(s.generate_state(1)[0]) for s in np.random.SeedSequence(seed).spawn(runs)]
    payload = {"settings": settings.to_dict(), "board_size": board_size}

    results: List[dict] = []
    if workers == 1:
        results.append(_worker_run_many(dict(payload, seeds=seeds)))
    else:
        try:
            with cf.ProcessPoolExecutor(max_workers=workers) as ex:
                futures = [
                    ex.submit(_worker_run_many, dict(payload, seeds=[seeds[i] for i in chunk]))
                    for chunk in partition_slots(runs, workers)
                    if len(chunk)
                ]
                for fut in cf.as_completed(futures):
                    results.append(fut.result())
        except (OSError, NotImplementedError, BrokenProcessPool):
            if not _POOL_FALLBACK_WARNED:
                print("[warn] Multiprocessing unavailable; falling back to sequential evaluation.")
                _POOL_FALLBACK_WARNED = True
            results = [_worker_run_many(dict(payload, seeds=seeds))]

    durations = [d for r in results for d in r["durations"]]
    generations = [g for r in results for g in r["generations"]]
    best_fitness = [f for r in results for f in r["best_fitness"]]
    successes = sum(r["successes"] for r in results)
    return {
        "runs": runs,
        "success_rate": successes / runs,
        "median_generations": float(median(generations)),
        "avg_generations": sum(generations) / runs,
        "median_duration": float(median(durations)),
        "avg_best_fitness": sum(best_fitness) / runs,
        "generations": sorted(generations),
    }


# ---------------------------
# Command line
# ---------------------------

def build_settings(args: argparse.Namespace) -> GASettings:
    rec = recommend_params(args.board_size)
    return GASettings(
        population_size=args.population if args.population is not None else rec["population_size"],
        generations=args.generations if args.generations is not None else rec["generations"],
        elite_threshold=args.elite_threshold if args.elite_threshold is not None else rec["elite_threshold"],
        tournament_k=args.tournament_k if args.tournament_k is not None else rec["tournament_k"],
        mutation_rate=args.mutation_rate if args.mutation_rate is not None else rec["mutation_rate"],
        crossover=args.crossover,
        strict_permutation=args.strict,
        workers=args.workers,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="N-Queens steady-state GA on permutation chromosomes")
    parser.add_argument("--board-size", type=int, default=BOARD_SIZE)
    parser.add_argument("--population", type=int)
    parser.add_argument("--generations", type=int, help="Generation cap")
    parser.add_argument("--elite-threshold", type=int)
    parser.add_argument("--tournament-k", type=int)
    parser.add_argument("--mutation-rate", type=int, help="Adaptive mutation rate in percent (crossover mode)")
    parser.add_argument("--crossover", action="store_true", help="Multi-point crossover with adaptive mutation")
    parser.add_argument("--strict", action="store_true", help="Repair crossover children into permutations")
    parser.add_argument("--workers", type=int, default=1, help="Offspring-generation workers per generation")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--repeats", type=int, default=None,
                        help=f"Solve N times and summarize (e.g. {SOLVE_REPEATS})")
    parser.add_argument("--pool", type=int, default=os.cpu_count() or 1,
                        help="Worker processes for --repeats")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--plot", metavar="PATH", help="Save the best board as an image")
    parser.add_argument("--plot-history", metavar="PATH", help="Save the best-fitness curve as an image")
    args = parser.parse_args(argv)

    if args.board_size <= 0:
        parser.error("--board-size must be positive")
    try:
        settings = build_settings(args).validate()
    except ValueError as e:
        parser.error(str(e))

    if args.repeats:
        summary = evaluate_settings_over_runs(settings, args.board_size, args.repeats,
                                              workers=args.pool, seed=args.seed)
        print(
            f"n={args.board_size} | runs={summary['runs']} | success={summary['success_rate']:.2%} | "
            f"median gens={summary['median_generations']:.1f} | avg gens={summary['avg_generations']:.1f} | "
            f"median time={summary['median_duration']:.3f}s"
        )
        return 0

    result = run_ga(settings, args.board_size, seed=args.seed, verbose=args.verbose)
    print(f"Time taken: {result.duration:f} seconds.")
    print(f"Number of Iterations: {result.generations}")
    print(f"Result: {result.state.value} (conflicts={result.best.fitness})")
    view.print_board(result.best)

    if args.plot:
        view.plot_board(result.best, args.plot)
    if args.plot_history:
        view.plot_history(result.history, args.plot_history)

    return 0 if result.solved else 1


if __name__ == "__main__":
    sys.exit(main())
