import pytest

from wordle_solver.feedback import (
    InvalidWordError,
    Placement,
    WordLengthError,
    all_correct_pattern,
    consistent,
    evaluate,
    feedback_to_pattern,
    is_solved,
    pattern_to_feedback,
)

C, M, A = Placement.CORRECT, Placement.MISPLACED, Placement.ABSENT


@pytest.mark.parametrize("strict", [True, False])
@pytest.mark.parametrize("word", ["crane", "sassy", "mamma", "eerie"])
def test_self_evaluation_is_all_correct(word, strict):
    feedback = evaluate(word, word, strict)
    assert feedback == (C,) * 5
    assert is_solved(feedback)


def test_single_misplaced_letter():
    assert evaluate("mango", "apple") == (M, A, A, A, A)


@pytest.mark.parametrize("strict", [True, False])
def test_repeated_guess_letters_against_sassy(strict):
    # Both rule sets agree here: the target has enough s's for every guess s
    assert evaluate("sassy", "glass", strict) == (A, A, M, C, M)
    assert consistent("sassy", "glass", evaluate("sassy", "glass", strict), strict)


def test_repeated_target_letters_strict():
    # glass has two s's; one is matched exactly, so only one more can be yellow
    assert evaluate("glass", "sassy") == (M, M, A, C, A)


def test_repeated_target_letters_simplified():
    assert evaluate("glass", "sassy", strict=False) == (M, M, M, C, A)


def test_repeated_guess_letter_single_in_target():
    assert evaluate("crane", "eerie") == (A, A, M, A, C)
    assert evaluate("crane", "eerie", strict=False) == (M, M, M, A, C)


def test_repeated_letters_in_both():
    assert evaluate("geese", "eerie") == (M, C, A, A, C)


@pytest.mark.parametrize("strict", [True, False])
@pytest.mark.parametrize("target,guess", [
    ("glass", "sassy"),
    ("sassy", "glass"),
    ("crane", "eerie"),
    ("geese", "eerie"),
    ("mamma", "llama"),
])
def test_true_target_is_consistent_with_its_own_feedback(target, guess, strict):
    assert consistent(target, guess, evaluate(target, guess, strict), strict)


def test_simplified_rules_reject_target_under_strict_feedback():
    strict_feedback = evaluate("glass", "sassy", strict=True)
    assert consistent("glass", "sassy", strict_feedback, strict=True)
    assert not consistent("glass", "sassy", strict_feedback, strict=False)


def test_simplified_misplaced_only_needs_position_mismatch():
    # "y" at position 0 is not in "crane", yet the simplified rules accept it
    assert consistent("crane", "yyyyy", (M, M, M, M, M), strict=False)
    assert not consistent("crane", "yyyyy", (M, M, M, M, M), strict=True)


def test_consistency_rules():
    assert consistent("grape", "apple", (M, M, A, A, C))
    assert not consistent("grape", "apple", (A, A, A, A, A))
    assert not consistent("apple", "apple", (M, A, A, A, A))


def test_length_mismatch_is_rejected():
    with pytest.raises(WordLengthError):
        evaluate("crane", "cran")
    with pytest.raises(WordLengthError):
        evaluate("cranes", "crane")
    with pytest.raises(WordLengthError):
        consistent("crane", "slate", (A, A, A, A))


def test_invalid_letters_are_rejected():
    with pytest.raises(InvalidWordError):
        evaluate("crane", "cr4ne")
    with pytest.raises(InvalidWordError):
        evaluate("CRANE", "crane")


def test_invalid_placement_value():
    with pytest.raises(ValueError):
        feedback_to_pattern((0, 1, 2, 3, 0))


def test_patterns():
    assert feedback_to_pattern((C,) * 5) == all_correct_pattern() == 242
    assert feedback_to_pattern((M, A, A, A, A)) == 1
    assert pattern_to_feedback(144) == (A, A, M, C, M)


def test_other_word_lengths():
    assert evaluate("cat", "act", word_length=3) == (M, M, C)
    assert consistent("tact", "cart", (M, C, A, C), word_length=4)
