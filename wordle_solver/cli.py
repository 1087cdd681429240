"""
Command-line entry point.

    wordle-solver play                 # guess a random word yourself
    wordle-solver assist               # get suggestions for a game elsewhere
    wordle-solver benchmark --nproc 4  # average guesses over the dictionary
"""

import argparse
import logging
import os
import random
import sys
from typing import Dict, List, Optional

from .codes import format_feedback, parse_feedback, render
from .feedback import WORD_LENGTH, evaluate, is_solved
from .harness import MAX_GUESSES, benchmark, print_results
from .solver import DEFAULT_MAX_RANK_SIZE, RANKINGS, CandidateSolver, ExhaustedCandidatesError
from .words import choose_target, load_frequencies, load_words

log = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
DEFAULT_WORDS = os.path.join(DATA_DIR, "words.txt")
DEFAULT_FREQUENCIES = os.path.join(DATA_DIR, "frequencies.csv")
DEFAULT_MAX_TURNS = 6


def build_solver(args: argparse.Namespace) -> CandidateSolver:
    words = load_words(args.words)
    frequencies: Dict[str, int] = {}
    if args.frequencies:
        frequencies = load_frequencies(args.frequencies)
    log.info("Loaded %d words, %d frequencies", len(words), len(frequencies))
    return CandidateSolver(
        words, frequencies,
        word_length=args.word_length,
        strict=not args.naive,
        ranking=args.ranking,
        max_rank_size=args.max_rank_size or None,
    )


# ============================================================================
# MODES
# ============================================================================

def play(solver: CandidateSolver, max_turns: int, seed: Optional[int] = None,
         emoji: bool = False) -> int:
    """Interactive game against a random target."""
    target = choose_target(solver.words, random.Random(seed))
    dictionary = set(solver.words)
    history: List[str] = []

    print(f"Guess the {solver.word_length}-letter word in {max_turns} tries.")
    while len(history) < max_turns:
        guess = input(f"[{len(history) + 1}/{max_turns}] > ").strip().lower()
        if len(guess) != solver.word_length:
            print(f"  need exactly {solver.word_length} letters")
            continue
        if guess not in dictionary:
            print("  not in word list")
            continue

        feedback = evaluate(target, guess, solver.strict, solver.word_length)
        history.append(render(guess, feedback, emoji))
        print("\n".join(history))
        if is_solved(feedback):
            print(f"Solved in {len(history)}!")
            return 0

    print(f"Out of tries. The word was {target.upper()}.")
    return 1


def assist(solver: CandidateSolver, emoji: bool = False) -> int:
    """Suggest guesses and read back the feedback the puzzle gave."""
    print("Enter the feedback for each guess: G = correct, Y = misplaced, B = absent.")
    print("Prefix it with the word you played if you did not use the suggestion.")
    while True:
        try:
            suggestion = solver.suggest()
        except ExhaustedCandidatesError:
            print("No words fit that feedback. Check the codes you entered.")
            return 1

        print(f"Try: {suggestion.upper()} ({len(solver)} candidates)")
        while True:
            parts = input("feedback> ").split()
            guess, code = suggestion, "".join(parts)
            if len(parts) == 2:
                guess, code = parts[0].lower(), parts[1]
            try:
                feedback = parse_feedback(code, solver.word_length)
                if is_solved(feedback):
                    print("Solved!")
                    return 0
                solver.apply_feedback(guess, feedback)
            except ValueError as e:
                print(f"  {e}")
                continue
            break
        print(f"  {render(guess, feedback, emoji)}  {format_feedback(feedback)}")


def run_benchmark(solver: CandidateSolver, nwords: Optional[int], nproc: int,
                  max_guesses: int) -> int:
    targets = list(dict.fromkeys(solver.words))
    if nwords is not None:
        targets = targets[:nwords]
    results = benchmark(solver, targets, max_guesses=max_guesses, nproc=nproc)
    print_results(results)
    return 0


# ============================================================================
# MAIN
# ============================================================================

def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordle-solver",
        description="Word-guessing puzzle solver.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--words", default=DEFAULT_WORDS,
                        help="Word list, one word per line")
    parser.add_argument("--frequencies", default=DEFAULT_FREQUENCIES,
                        help="word,count frequency table (empty string: none)")
    parser.add_argument("--word-length", type=int, default=WORD_LENGTH,
                        help="Letters per word")
    parser.add_argument("--naive", action="store_true",
                        help="Use simplified repeated-letter rules")
    parser.add_argument("--ranking", choices=RANKINGS, default=None,
                        help="Rank candidates instead of using frequency order")
    parser.add_argument("--max-rank-size", type=int, default=DEFAULT_MAX_RANK_SIZE,
                        help="Skip ranking above this many candidates (0: no cap)")
    parser.add_argument("--emoji", action="store_true",
                        help="Emoji tiles instead of ANSI colors")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Be verbose")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_play = subparsers.add_parser(
        "play", help="Play against a random word",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser_play.add_argument("--seed", type=int, default=None,
                             help="Random seed for the target")
    parser_play.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS,
                             help="Number of guesses allowed")

    subparsers.add_parser(
        "assist", help="Suggest guesses for a game played elsewhere",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    parser_bench = subparsers.add_parser(
        "benchmark", help="Average guesses over the dictionary",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser_bench.add_argument("--nwords", type=int, default=None,
                              help="Only test the first N words")
    parser_bench.add_argument("--nproc", type=int, default=1,
                              help="Number of worker processes")
    parser_bench.add_argument("--max-guesses", type=int, default=MAX_GUESSES,
                              help="Per-game guess ceiling")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = make_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    solver = build_solver(args)
    try:
        if args.command == "play":
            return play(solver, args.max_turns, args.seed, args.emoji)
        if args.command == "assist":
            return assist(solver, args.emoji)
        return run_benchmark(solver, args.nwords, args.nproc, args.max_guesses)
    except (EOFError, KeyboardInterrupt):
        print()
        return 1


if __name__ == "__main__":
    sys.exit(main())
