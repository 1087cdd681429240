import pytest

from wordle_solver.harness import benchmark, guess_count, print_results, solve
from wordle_solver.solver import CandidateSolver

FRUIT = ["apple", "grape", "mango"]
FRUIT_FREQ = {"apple": 10, "grape": 5, "mango": 1}


@pytest.fixture
def solver():
    return CandidateSolver(FRUIT, FRUIT_FREQ)


def test_first_guess_takes_one(solver):
    assert guess_count(solver.clone(), solver.next_guess()) == 1


def test_solve_records_guesses(solver):
    assert solve(solver, "mango") == (2, ["apple", "mango"])
    assert solver.candidates == ["mango"]


def test_unknown_target_counts_as_ceiling(solver):
    assert guess_count(solver, "lemon", max_guesses=10) == 10


def test_ceiling_bounds_the_game(solver):
    n, guesses = solve(solver, "mango", max_guesses=1)
    assert n == 1
    assert guesses == ["apple"]


@pytest.mark.parametrize("ranking", [None, "consistency", "entropy"])
def test_every_dictionary_word_is_found(ranking):
    words = ["total", "stoal", "allot", "tally", "alloy", "atoll",
             "glass", "sassy", "brass", "class", "grass", "crane"]
    proto = CandidateSolver(words, ranking=ranking)
    for target in words:
        n, guesses = solve(proto.clone(), target)
        assert guesses[-1] == target
        assert n == len(guesses) <= len(words)


def test_benchmark(solver):
    results = benchmark(solver, verbose=False)
    assert results['total'] == 3
    assert results['total_guesses'] == 5
    assert results['average'] == pytest.approx(5 / 3)
    assert results['distribution'] == {1: 1, 2: 2}
    assert results['failures'] == 0
    # The prototype is never consumed
    assert solver.candidates == FRUIT


def test_benchmark_counts_failures_at_ceiling(solver):
    results = benchmark(solver, ["apple", "lemon"], max_guesses=10, verbose=False)
    assert results['total_guesses'] == 11
    assert results['failures'] == 1
    assert results['failed_words'] == ["lemon"]


def test_benchmark_in_parallel(solver):
    sequential = benchmark(solver, verbose=False)
    parallel = benchmark(solver, nproc=2, verbose=False)
    for key in ('total', 'total_guesses', 'distribution', 'failures'):
        assert parallel[key] == sequential[key]


def test_benchmark_needs_targets(solver):
    with pytest.raises(ValueError):
        benchmark(solver, [], verbose=False)


def test_print_results(solver, capsys):
    print_results(benchmark(solver, verbose=False))
    out = capsys.readouterr().out
    assert "Words tested: 3" in out
    assert "Average: 1.6667" in out
