"""Letter distribution and rare-letter bookkeeping."""

from typing import Dict, FrozenSet, List, Set, Tuple
from pydantic import BaseModel, Field


# English letter frequencies in percent (sums to 100)
LETTER_FREQUENCIES: Dict[str, float] = {
    "E": 12.13, "T": 9.00, "A": 8.12, "O": 7.68, "I": 7.31, "N": 6.95,
    "S": 6.28, "R": 6.02, "H": 5.92, "D": 4.32, "L": 3.98, "U": 2.88,
    "C": 2.71, "M": 2.61, "F": 2.30, "Y": 2.11, "W": 2.09, "G": 2.03,
    "P": 1.82, "B": 1.49, "V": 1.11, "K": 0.69, "X": 0.17, "Q": 0.11,
    "J": 0.10, "Z": 0.07,
}

# Letters whose on-board density is capped
RARE_LETTERS: FrozenSet[str] = frozenset({"Z", "Q", "X", "J", "K", "V"})

# Max distinct rare letters on the board at once
RARE_LETTER_CAP = 2

# Drawn uniformly once the rare cap is reached
COMMON_LETTERS: List[str] = sorted(set(LETTER_FREQUENCIES) - RARE_LETTERS)

# Last resort when the anti-clustering retries run out
FALLBACK_LETTERS: List[str] = ["E", "T", "A", "O", "I", "N", "S", "R", "H", "L"]


def _cumulative_buckets(frequencies: Dict[str, float]) -> List[Tuple[float, str]]:
    """Turn percent weights into (upper bound in [0, 1], letter) buckets."""
    buckets: List[Tuple[float, str]] = []
    running = 0.0
    for letter, weight in frequencies.items():
        running += weight
        buckets.append((running / 100.0, letter))
    return buckets


_CUMULATIVE = _cumulative_buckets(LETTER_FREQUENCIES)


def letter_for_draw(draw: float) -> str:
    """
    Map a uniform draw in [0, 1) onto the weighted letter distribution.

    Args:
        draw: A number in [0, 1), typically ``rng.random()``

    Returns:
        The letter whose cumulative bucket contains ``draw``. If rounding
        leaves the draw past the last bucket, returns 'E'.
    """
    for upper, letter in _CUMULATIVE:
        if draw < upper:
            return letter
    return "E"


def is_rare(letter: str) -> bool:
    """Check whether a letter belongs to the capped rare subset."""
    return letter.upper() in RARE_LETTERS


class RareLetterTracker(BaseModel):
    """
    Records which rare letters currently occupy the board.

    One tracker belongs to one match; generation consults it to stop
    more than ``RARE_LETTER_CAP`` distinct rare letters appearing.
    """

    letters: Set[str] = Field(default_factory=set)

    def contains_at_cap(self) -> bool:
        """True once the tracked set holds the maximum number of rare letters."""
        return len(self.letters) >= RARE_LETTER_CAP

    def record(self, letter: str) -> None:
        """Track a rare letter that was placed. Non-rare letters are ignored."""
        letter = letter.upper()
        if letter in RARE_LETTERS:
            self.letters.add(letter)

    def release(self, letter: str) -> None:
        """Stop tracking a rare letter that left the board."""
        self.letters.discard(letter.upper())

    def reset(self) -> None:
        self.letters.clear()

    def size(self) -> int:
        return len(self.letters)
