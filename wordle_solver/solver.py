"""
Candidate Solver
================

Keeps the dictionary words still consistent with every piece of feedback seen
so far, ordered by usage frequency, and picks the next guess.

Ranking modes:
- None: guess the most frequent remaining word
- "consistency": maximise the frequency-weighted number of candidates the
  guess would eliminate, summed over every possible target
- "entropy": maximise the frequency-weighted Shannon entropy of the feedback
  patterns the guess would produce

Both ranking modes are O(n^2) in the number of candidates, so they are skipped
once the candidate set grows beyond `max_rank_size`.
"""

import copy
import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
from numba import jit, prange

from .feedback import (
    WORD_LENGTH,
    WordLengthError,
    compute_feedback,
    consistent_mask,
    encode_word,
    encode_words,
    feedback_to_pattern,
    is_consistent,
)

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_MAX_RANK_SIZE = 2000
RANKINGS = ("consistency", "entropy")


class ExhaustedCandidatesError(RuntimeError):
    """No dictionary word is consistent with the feedback applied so far."""


# ============================================================================
# NUMBA SCORING KERNELS
# ============================================================================

@jit(nopython=True, parallel=True, cache=True)
def consistency_scores(chars: np.ndarray, weights: np.ndarray, strict: bool) -> np.ndarray:
    """
    Score every candidate as a guess against every candidate as a target.

    score[g] = sum over t of weights[t] * (n - remaining(g, t)), where
    remaining(g, t) is the number of candidates consistent with the feedback
    g would receive if t were the answer.

    Args:
        chars: shape (n, word_length) letter codes of the candidates
        weights: shape (n,) frequency weight of each candidate
        strict: puzzle rules to use

    Returns:
        shape (n,) scores, higher is better
    """
    n = chars.shape[0]
    n_patterns = 3 ** chars.shape[1]
    scores = np.zeros(n, dtype=np.float64)

    for g in prange(n):
        row = np.empty(n, dtype=np.int64)
        for t in range(n):
            row[t] = compute_feedback(chars[g], chars[t], strict)

        if strict:
            # Consistent words are exactly those sharing the pattern
            counts = np.zeros(n_patterns, dtype=np.int64)
            for t in range(n):
                counts[row[t]] += 1
        else:
            counts = np.full(n_patterns, -1, dtype=np.int64)
            for t in range(n):
                p = row[t]
                if counts[p] < 0:
                    c = 0
                    for w in range(n):
                        if is_consistent(chars[w], chars[g], p, False):
                            c += 1
                    counts[p] = c

        total = 0.0
        for t in range(n):
            total += weights[t] * (n - counts[row[t]])
        scores[g] = total

    return scores


@jit(nopython=True, parallel=True, cache=True)
def entropy_scores(chars: np.ndarray, probs: np.ndarray, strict: bool) -> np.ndarray:
    """Shannon entropy (bits) of the feedback distribution of each candidate guess."""
    n = chars.shape[0]
    n_patterns = 3 ** chars.shape[1]
    scores = np.zeros(n, dtype=np.float64)

    for g in prange(n):
        mass = np.zeros(n_patterns, dtype=np.float64)
        for t in range(n):
            mass[compute_feedback(chars[g], chars[t], strict)] += probs[t]

        entropy = 0.0
        for p in range(n_patterns):
            m = mass[p]
            if m > 0:
                entropy -= m * np.log2(m)
        scores[g] = entropy

    return scores


# ============================================================================
# SOLVER CLASS
# ============================================================================

class CandidateSolver:
    """
    Word-guessing solver over a fixed dictionary.

    The dictionary, its encoded letters and the frequency weights are
    read-only and shared between clones; each solver owns its own candidate
    list.
    """

    def __init__(self, dictionary: Sequence[str],
                 frequencies: Optional[Dict[str, float]] = None,
                 *,
                 word_length: int = WORD_LENGTH,
                 strict: bool = True,
                 ranking: Optional[str] = None,
                 max_rank_size: Optional[int] = DEFAULT_MAX_RANK_SIZE):
        """
        Initialize solver with a dictionary and frequency table.

        Args:
            dictionary: candidate words, all of length word_length
            frequencies: word -> non-negative weight (missing words weigh 0)
            word_length: number of letters per word
            strict: multiset-aware puzzle rules, or the simplified rules
            ranking: None, "consistency" or "entropy"
            max_rank_size: skip ranking above this many candidates (None: never)
        """
        if ranking is not None and ranking not in RANKINGS:
            raise ValueError(f"Unknown ranking '{ranking}', expected one of {RANKINGS}")
        frequencies = frequencies or {}

        self.words = tuple(dictionary)
        self.word_length = word_length
        self.strict = strict
        self.ranking = ranking
        self.max_rank_size = max_rank_size

        self.word_chars = encode_words(self.words, word_length)
        self.weights = np.array([frequencies.get(w, 0) for w in self.words], dtype=np.float64)
        if np.any(self.weights < 0):
            raise ValueError("Frequency weights must be non-negative")
        self.word_chars.flags.writeable = False
        self.weights.flags.writeable = False

        # Stable sort keeps dictionary order among equal weights
        self._candidates = np.argsort(-self.weights, kind="stable").astype(np.int32)
        log.debug("Solver initialized with %d words", len(self._candidates))

    def clone(self) -> "CandidateSolver":
        """Independent solver sharing this one's read-only data."""
        other = copy.copy(self)
        other._candidates = self._candidates.copy()
        return other

    @property
    def candidates(self) -> List[str]:
        return [self.words[i] for i in self._candidates]

    def __len__(self) -> int:
        return len(self._candidates)

    def __contains__(self, word: str) -> bool:
        return any(self.words[i] == word for i in self._candidates)

    def next_guess(self) -> str:
        """Current head of the candidate list."""
        if len(self._candidates) == 0:
            raise ExhaustedCandidatesError("No candidates remaining")
        return self.words[self._candidates[0]]

    def apply_feedback(self, guess: str, feedback: Sequence[int]) -> int:
        """
        Drop every candidate that is inconsistent with `feedback` for `guess`.

        The guess and feedback are validated before anything changes.

        Returns:
            Number of candidates remaining
        """
        if len(feedback) != self.word_length:
            raise WordLengthError(
                f"feedback has {len(feedback)} placements, expected {self.word_length}")
        guess_chars = encode_word(guess, self.word_length)
        pattern = feedback_to_pattern(feedback, self.word_length)

        before = len(self._candidates)
        mask = consistent_mask(self.word_chars[self._candidates], guess_chars,
                               pattern, self.strict)
        self._candidates = self._candidates[mask]

        log.debug("%s: %d -> %d candidates", guess, before, len(self._candidates))
        if len(self._candidates) == 0:
            log.warning("Feedback for '%s' is inconsistent with every candidate", guess)
        return len(self._candidates)

    def choose_best_guess(self, method: Optional[str] = None) -> str:
        """
        Move the highest-scoring candidate to the front and return it.

        Ties go to the earliest candidate. Above `max_rank_size` candidates
        the order is left alone.
        """
        method = method or self.ranking or "consistency"
        if method not in RANKINGS:
            raise ValueError(f"Unknown ranking '{method}', expected one of {RANKINGS}")

        n = len(self._candidates)
        if n == 0:
            raise ExhaustedCandidatesError("No candidates remaining")
        if n <= 2:
            return self.next_guess()
        if self.max_rank_size is not None and n > self.max_rank_size:
            log.debug("Skipping %s ranking for %d candidates (cap %d)",
                      method, n, self.max_rank_size)
            return self.next_guess()

        chars = self.word_chars[self._candidates]
        weights = self.weights[self._candidates]
        if method == "consistency":
            scores = consistency_scores(chars, weights, self.strict)
        else:
            total = weights.sum()
            probs = weights / total if total > 0 else np.full(n, 1.0 / n)
            scores = entropy_scores(chars, probs, self.strict)

        best = int(np.argmax(scores))
        if best != 0:
            self._candidates[[0, best]] = self._candidates[[best, 0]]
        log.debug("Best %s guess among %d: %s (score %.4f)",
                  method, n, self.words[self._candidates[0]], scores[best])
        return self.next_guess()

    def suggest(self) -> str:
        """Next guess under the configured ranking."""
        if self.ranking is None:
            return self.next_guess()
        return self.choose_best_guess()
