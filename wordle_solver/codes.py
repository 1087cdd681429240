"""Text codes and terminal rendering for feedback."""

from typing import Sequence

from .feedback import WORD_LENGTH, Feedback, Placement


# G = green (correct), Y = yellow (misplaced), B = black (absent)
CODES = {
    "g": Placement.CORRECT,
    "y": Placement.MISPLACED,
    "b": Placement.ABSENT,
}
LETTERS = {placement: code.upper() for code, placement in CODES.items()}

EMOJI = {
    Placement.CORRECT: "🟩",
    Placement.MISPLACED: "🟨",
    Placement.ABSENT: "⬛",
}


class Ansi:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    BLACK = "\033[30m"
    WHITE = "\033[37m"
    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_GREY = "\033[100m"


TILE_STYLES = {
    Placement.CORRECT: Ansi.BOLD + Ansi.BLACK + Ansi.BG_GREEN,
    Placement.MISPLACED: Ansi.BOLD + Ansi.BLACK + Ansi.BG_YELLOW,
    Placement.ABSENT: Ansi.BOLD + Ansi.WHITE + Ansi.BG_GREY,
}


class FeedbackParseError(ValueError):
    """A feedback code could not be read."""


def parse_feedback(code: str, word_length: int = WORD_LENGTH) -> Feedback:
    """
    Read a feedback code such as "bygbb" (case-insensitive).

    Raises:
        FeedbackParseError: wrong length or unknown character
    """
    code = code.strip().lower()
    if len(code) != word_length:
        raise FeedbackParseError(
            f"expected {word_length} characters, got {len(code)}")
    try:
        return tuple(CODES[c] for c in code)
    except KeyError as e:
        raise FeedbackParseError(
            f"unknown character {e.args[0]!r}, use G, Y or B") from None


def format_feedback(feedback: Sequence[int]) -> str:
    return "".join(LETTERS[Placement(p)] for p in feedback)


def render(guess: str, feedback: Sequence[int], emoji: bool = False) -> str:
    """Colored tiles for a guess (or emoji squares)."""
    if emoji:
        return "".join(EMOJI[Placement(p)] for p in feedback)
    return "".join(
        f"{TILE_STYLES[Placement(p)]} {c.upper()} {Ansi.RESET}"
        for c, p in zip(guess, feedback)
    )
