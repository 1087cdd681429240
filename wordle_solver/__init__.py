"""
Wordle Solver - Frequency-Ranked Candidate Elimination
======================================================

Narrows a dictionary to the words consistent with the feedback seen so far
and suggests the next guess, optionally ranked by expected information.
"""

__version__ = "1.0.0"

from .feedback import (
    WORD_LENGTH,
    Feedback,
    InvalidWordError,
    Placement,
    WordLengthError,
    consistent,
    evaluate,
    is_solved,
)
from .solver import CandidateSolver, ExhaustedCandidatesError
from .harness import benchmark, guess_count, print_results, solve
from .codes import FeedbackParseError, format_feedback, parse_feedback, render
from .words import choose_target, load_frequencies, load_words
