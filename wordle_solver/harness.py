"""
Evaluation Harness
==================

Plays the solver against known targets and measures the average number of
guesses, the solver's main quality metric. Each target gets its own clone of
a prototype solver, so targets can be spread over worker processes.
"""

import logging
import multiprocessing
import time
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from .feedback import evaluate
from .solver import CandidateSolver, ExhaustedCandidatesError

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

MAX_GUESSES = 100
CHUNKS_PER_WORKER = 5


# ============================================================================
# SINGLE GAME
# ============================================================================

def solve(solver: CandidateSolver, target: str, max_guesses: int = MAX_GUESSES,
          verbose: bool = False) -> Tuple[int, List[str]]:
    """
    Play one game against `target`, narrowing `solver` in place.

    Args:
        solver: solver to drive; its candidate set is consumed
        target: the hidden word
        max_guesses: ceiling on the number of guesses
        verbose: print each turn

    Returns:
        (num_guesses, list_of_guesses). num_guesses is max_guesses when the
        target was not found.
    """
    guesses: List[str] = []

    for turn in range(max_guesses):
        try:
            guess = solver.suggest()
        except ExhaustedCandidatesError:
            log.warning("Ran out of candidates for '%s' after %s", target, guesses)
            return max_guesses, guesses

        guesses.append(guess)
        if verbose:
            print(f"Turn {turn + 1}: {guess} ({len(solver)} candidates)")
        if guess == target:
            return len(guesses), guesses

        feedback = evaluate(target, guess, solver.strict, solver.word_length)
        solver.apply_feedback(guess, feedback)

    return max_guesses, guesses


def guess_count(solver: CandidateSolver, target: str, max_guesses: int = MAX_GUESSES) -> int:
    """Number of guesses the solver needs to find `target`, capped at max_guesses."""
    n, _ = solve(solver, target, max_guesses)
    return n


# ============================================================================
# BATCH EVALUATION
# ============================================================================

_worker_solver: Optional[CandidateSolver] = None


def _init_worker(solver: CandidateSolver) -> None:
    """Pool initializer: receive the prototype solver once per process."""
    global _worker_solver
    _worker_solver = solver


def _solve_in_worker(args: Tuple[str, int]) -> Tuple[int, bool]:
    target, max_guesses = args
    n, guesses = solve(_worker_solver.clone(), target, max_guesses)
    return n, bool(guesses) and guesses[-1] == target


def benchmark(solver: CandidateSolver, targets: Optional[Sequence[str]] = None,
              max_guesses: int = MAX_GUESSES, nproc: int = 1,
              verbose: bool = True) -> Dict:
    """
    Benchmark solver on a list of targets.

    Args:
        solver: prototype solver; it is cloned per target and never mutated
        targets: words to test (default: every distinct dictionary word)
        max_guesses: per-game ceiling; failed games count as this many guesses
        nproc: number of worker processes (1 runs in this process)
        verbose: print progress

    Returns:
        Dict with results
    """
    if targets is None:
        targets = list(dict.fromkeys(solver.words))
    if not targets:
        raise ValueError("No targets to benchmark")

    results: List[int] = []
    dist: Counter = Counter()
    failures: List[str] = []

    def record(word: str, n: int, solved: bool) -> None:
        results.append(n)
        dist[n] += 1
        if not solved:
            failures.append(word)

    start = time.time()
    if nproc > 1:
        chunksize = max(1, len(targets) // (nproc * CHUNKS_PER_WORKER))
        log.debug("Benchmarking %d targets on %d processes, chunksize %d",
                  len(targets), nproc, chunksize)
        jobs = ((word, max_guesses) for word in targets)
        # Fresh interpreters: numba thread pools do not survive a fork
        context = multiprocessing.get_context("spawn")
        with ProcessPoolExecutor(nproc, mp_context=context, initializer=_init_worker,
                                 initargs=(solver,)) as executor:
            for word, (n, solved) in zip(
                    targets, executor.map(_solve_in_worker, jobs, chunksize=chunksize)):
                record(word, n, solved)
    else:
        for i, word in enumerate(targets):
            if verbose and i % 500 == 0:
                elapsed = time.time() - start
                rate = (i + 1) / elapsed if elapsed > 0 else 0
                avg = sum(results) / len(results) if results else 0
                print(f"[{i}/{len(targets)}] {rate:.1f} w/s, avg={avg:.4f}")

            n, guesses = solve(solver.clone(), word, max_guesses)
            record(word, n, bool(guesses) and guesses[-1] == word)

    elapsed = time.time() - start

    return {
        'total': len(targets),
        'average': sum(results) / len(results),
        'total_guesses': sum(results),
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures,
        'time': elapsed,
        'rate': len(targets) / elapsed if elapsed > 0 else 0.0,
    }


def print_results(results: Dict):
    """Print benchmark results."""
    print("\n" + "=" * 60)
    print("BENCHMARK RESULTS")
    print("=" * 60)
    print(f"Words tested: {results['total']}")
    print(f"Total guesses: {results['total_guesses']}")
    print(f"Average: {results['average']:.4f}")
    print(f"Failures: {results['failures']}")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} words/sec)")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / results['total']
        bar = "█" * int(pct / 2)
        print(f"  {n:3d}: {count:5d} ({pct:5.2f}%) {bar}")
    if results['failed_words']:
        print(f"\nFailed: {results['failed_words'][:10]}")
    print("=" * 60)
