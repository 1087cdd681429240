"""Word list and frequency table loading."""

import random
from typing import Dict, List, Optional, Sequence


def load_words(filepath: str) -> List[str]:
    """Load words from file, one per line. Order and duplicates are kept."""
    with open(filepath, 'r', encoding="utf-8") as f:
        return [line.strip().lower() for line in f if line.strip()]


def load_frequencies(filepath: str) -> Dict[str, int]:
    """
    Load a word,count table.

    A first line whose count is not an integer is taken as a header. Later
    words override earlier ones.

    Raises:
        ValueError: malformed line or negative count
    """
    frequencies: Dict[str, int] = {}
    with open(filepath, 'r', encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            parts = line.split(',')
            if len(parts) < 2:
                raise ValueError(f"{filepath}:{lineno}: expected 'word,count'")
            word, count = parts[0].strip().lower(), parts[1].strip()
            try:
                weight = int(count)
            except ValueError:
                if lineno == 1:
                    continue
                raise ValueError(f"{filepath}:{lineno}: bad count {count!r}") from None
            if weight < 0:
                raise ValueError(f"{filepath}:{lineno}: negative count {weight}")
            frequencies[word] = weight
    return frequencies


def choose_target(words: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Pick a random target word."""
    if not words:
        raise ValueError("Cannot choose a target from an empty word list")
    return (rng or random).choice(list(words))
