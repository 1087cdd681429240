"""
Feedback Oracle
===============

Computes per-letter placement feedback for a guess against a hidden target,
and decides whether a word is consistent with feedback already observed.

Two rule sets are supported:
- strict (default): the real puzzle rules. Exact matches are marked first,
  then letters are marked misplaced only while unmatched copies remain in the
  target.
- simplified: a single containment pass. A letter is misplaced whenever it
  occurs anywhere in the target, so repeated letters can be over-reported.

Feedback is packed into a base-3 integer (position i contributes
placement * 3**i) so the solver can work on plain integer arrays.
"""

import enum
from typing import List, Sequence, Tuple

import numpy as np
from numba import jit


# ============================================================================
# CONSTANTS
# ============================================================================

WORD_LENGTH = 5
ALPHABET = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_SIZE = len(ALPHABET)

ABSENT = 0
MISPLACED = 1
CORRECT = 2


class Placement(enum.IntEnum):
    """Outcome for one letter of a guess."""

    ABSENT = ABSENT
    MISPLACED = MISPLACED
    CORRECT = CORRECT


Feedback = Tuple[Placement, ...]


class InvalidWordError(ValueError):
    """A word contains letters outside the puzzle alphabet."""


class WordLengthError(InvalidWordError):
    """A word or feedback does not have the configured length."""


# ============================================================================
# ENCODING
# ============================================================================

def encode_word(word: str, word_length: int = WORD_LENGTH) -> np.ndarray:
    """Convert a word to an array of letter codes (0-25)."""
    if len(word) != word_length:
        raise WordLengthError(
            f"'{word}' has {len(word)} letters, expected {word_length}")
    arr = np.zeros(word_length, dtype=np.int32)
    for j, c in enumerate(word):
        code = ord(c) - ord('a')
        if not 0 <= code < ALPHABET_SIZE:
            raise InvalidWordError(f"'{word}' contains invalid letter '{c}'")
        arr[j] = code
    return arr


def encode_words(words: Sequence[str], word_length: int = WORD_LENGTH) -> np.ndarray:
    """Convert words to a (len(words), word_length) array of letter codes."""
    arr = np.zeros((len(words), word_length), dtype=np.int32)
    for i, w in enumerate(words):
        arr[i] = encode_word(w, word_length)
    return arr


def all_correct_pattern(word_length: int = WORD_LENGTH) -> int:
    return 3 ** word_length - 1


def feedback_to_pattern(feedback: Sequence[int], word_length: int = WORD_LENGTH) -> int:
    """
    Pack feedback into its base-3 pattern.

    Raises:
        WordLengthError: feedback has the wrong number of placements
        ValueError: an element is not a valid placement
    """
    if len(feedback) != word_length:
        raise WordLengthError(
            f"feedback has {len(feedback)} placements, expected {word_length}")
    pattern = 0
    base = 1
    for p in feedback:
        pattern += int(Placement(p)) * base
        base *= 3
    return pattern


def pattern_to_feedback(pattern: int, word_length: int = WORD_LENGTH) -> Feedback:
    """Unpack a base-3 pattern into a tuple of placements."""
    placements: List[Placement] = []
    for _ in range(word_length):
        placements.append(Placement(pattern % 3))
        pattern //= 3
    return tuple(placements)


# ============================================================================
# NUMBA KERNELS
# ============================================================================

@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray, strict: bool) -> int:
    """
    Compute the feedback pattern for a guess against an answer.

    Args:
        guess: letter codes of the guess
        answer: letter codes of the answer, same length
        strict: use multiset-aware puzzle rules

    Returns:
        Base-3 feedback pattern
    """
    n = guess.shape[0]
    feedback = np.zeros(n, dtype=np.int64)

    if strict:
        answer_counts = np.zeros(ALPHABET_SIZE, dtype=np.int32)
        for i in range(n):
            answer_counts[answer[i]] += 1

        # First pass: exact matches
        for i in range(n):
            if guess[i] == answer[i]:
                feedback[i] = CORRECT
                answer_counts[guess[i]] -= 1

        # Second pass: misplaced, limited by unmatched copies
        for i in range(n):
            if feedback[i] == ABSENT:
                c = guess[i]
                if answer_counts[c] > 0:
                    feedback[i] = MISPLACED
                    answer_counts[c] -= 1
    else:
        for i in range(n):
            if guess[i] == answer[i]:
                feedback[i] = CORRECT
            else:
                for j in range(n):
                    if answer[j] == guess[i]:
                        feedback[i] = MISPLACED
                        break

    pattern = 0
    base = 1
    for i in range(n):
        pattern += feedback[i] * base
        base *= 3
    return pattern


@jit(nopython=True, cache=True)
def is_consistent(word: np.ndarray, guess: np.ndarray, pattern: int, strict: bool) -> bool:
    """Could `word` be the target, given that `guess` produced `pattern`?"""
    if strict:
        return compute_feedback(guess, word, True) == pattern

    n = guess.shape[0]
    rest = pattern
    for i in range(n):
        p = rest % 3
        rest //= 3
        g = guess[i]
        if p == CORRECT:
            if word[i] != g:
                return False
        elif p == MISPLACED:
            if word[i] == g:
                return False
        else:
            for j in range(n):
                if word[j] == g:
                    return False
    return True


@jit(nopython=True, cache=True)
def consistent_mask(words: np.ndarray, guess: np.ndarray, pattern: int,
                    strict: bool) -> np.ndarray:
    """Boolean mask over the rows of `words` that are consistent with the feedback."""
    n = words.shape[0]
    mask = np.zeros(n, dtype=np.bool_)
    for i in range(n):
        mask[i] = is_consistent(words[i], guess, pattern, strict)
    return mask


# ============================================================================
# PUBLIC API
# ============================================================================

def evaluate(target: str, guess: str, strict: bool = True,
             word_length: int = WORD_LENGTH) -> Feedback:
    """
    Feedback for `guess` when the hidden word is `target`.

    Raises:
        WordLengthError: either word has the wrong length
        InvalidWordError: either word has letters outside a-z
    """
    pattern = compute_feedback(encode_word(guess, word_length),
                               encode_word(target, word_length), strict)
    return pattern_to_feedback(pattern, word_length)


def consistent(word: str, guess: str, feedback: Sequence[int], strict: bool = True,
               word_length: int = WORD_LENGTH) -> bool:
    """True if `word` could be the target given `feedback` for `guess`."""
    pattern = feedback_to_pattern(feedback, word_length)
    return bool(is_consistent(encode_word(word, word_length),
                              encode_word(guess, word_length), pattern, strict))


def is_solved(feedback: Sequence[int]) -> bool:
    return len(feedback) > 0 and all(p == Placement.CORRECT for p in feedback)
