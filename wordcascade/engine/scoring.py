"""
Word scoring, timer bonuses and level progression.

Scoring:
  - letter_score: sum of Scrabble-style letter points
  - score:        letter_score plus 10% per level above 1 (floored)
  - time_bonus:   seconds by word length, reduced in steps as the level rises

Levels:
  - points_for_level(n) is the cost of going from level n to n+1, growing
    geometrically by 15% per level from a base of 25 points.
  - A level advances by at most one step per evaluation, even when a single
    word crosses two thresholds; the next evaluation picks up the rest.
"""

import logging
import math
from typing import Dict, Optional

from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)

LETTER_POINTS: Dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2,
    "H": 4, "I": 1, "J": 8, "K": 5, "L": 1, "M": 3, "N": 1,
    "O": 1, "P": 3, "Q": 10, "R": 1, "S": 1, "T": 1, "U": 1,
    "V": 4, "W": 4, "X": 8, "Y": 4, "Z": 10,
}

# Base seconds awarded by word length; other lengths earn nothing
BASE_TIME_BONUS: Dict[int, int] = {3: 1, 4: 2, 5: 3, 6: 4, 7: 5, 8: 6}

LEVEL_BASE_POINTS = 25
LEVEL_GROWTH = 1.15

# From this level on, words need four letters
LONG_WORD_LEVEL = 40


def letter_score(word: str) -> int:
    """Sum the point value of each letter; unknown characters score nothing."""
    return sum(LETTER_POINTS.get(ch, 0) for ch in word.upper())


def score(word: str, level: int) -> int:
    """
    Points for an accepted word at a given level.

    Examples:
        score("CAT", 1) -> 5
        score("CAT", 3) -> 6   # 5 + floor(5 * 2 * 0.1)
    """
    base = letter_score(word)
    return base + math.floor(base * (level - 1) * 0.1)


def time_penalty(level: int) -> int:
    """Seconds shaved off every time bonus: one more step every five levels from 5, capped at 4."""
    if level < 5:
        return 0
    return min(4, level // 5)


def time_bonus(length: int, level: int) -> int:
    return max(0, BASE_TIME_BONUS.get(length, 0) - time_penalty(level))


def minimum_word_length(level: int) -> int:
    return 4 if level >= LONG_WORD_LEVEL else 3


def points_for_level(n: int) -> int:
    """Points needed to advance from level n to n + 1."""
    return math.floor(LEVEL_BASE_POINTS * LEVEL_GROWTH ** (n - 1))


def cumulative_points(level: int) -> int:
    """Total score needed to reach ``level`` from level 1."""
    return sum(points_for_level(n) for n in range(1, level))


class LevelProgression(BaseModel):
    """Tracks the current level against the cumulative score curve."""

    level: int = Field(default=1, ge=1)
    highest_level: int = Field(default=1, ge=1)

    def next_threshold(self) -> int:
        """Score at which the next level-up fires."""
        return cumulative_points(self.level + 1)

    def evaluate(self, current_score: int) -> Optional[int]:
        """
        Advance one level if the score has reached the next threshold.

        Returns:
            The new level if a level-up happened, otherwise None
        """
        if current_score < self.next_threshold():
            return None
        self.level += 1
        self.highest_level = max(self.highest_level, self.level)
        logger.info("Level up to %d at score %d", self.level, current_score)
        return self.level
