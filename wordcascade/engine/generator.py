"""Board generation with a rare-letter cap and adjacent-duplicate avoidance."""

import logging
import random
from typing import Callable, Optional, Set

from .board import BOARD_SIZE, EMPTY, Board, empty_board, neighbors
from .letters import (
    COMMON_LETTERS,
    FALLBACK_LETTERS,
    RareLetterTracker,
    is_rare,
    letter_for_draw,
)


logger = logging.getLogger(__name__)

# Redraws allowed before falling back to a very common letter
MAX_ATTEMPTS = 10


class BoardGenerator:
    """
    Fills an 8x8 board one cell at a time in row-major order.

    Each cell avoids the letters already placed in its neighbourhood. Only
    cells visited earlier in the scan hold letters at that point, so a cell
    is compared against its upper and left neighbours only.

    Args:
        tracker: The match's RareLetterTracker, updated as rare letters are placed
        rng: Random source; pass a seeded ``random.Random`` for reproducible boards
        letter_model: Maps a uniform draw to a letter (defaults to the frequency table)
    """

    def __init__(
        self,
        tracker: RareLetterTracker,
        rng: Optional[random.Random] = None,
        letter_model: Callable[[float], str] = letter_for_draw,
    ):
        self.tracker = tracker
        self.rng = rng or random.Random()
        self.letter_model = letter_model

    def generate(self) -> Board:
        """Produce a fully populated board."""
        board = empty_board()
        fallbacks = 0
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                letter, exhausted = self._pick_letter(self._neighbor_letters(board, row, col))
                if exhausted:
                    fallbacks += 1
                board[row][col] = letter
                if is_rare(letter):
                    self.tracker.record(letter)
        if fallbacks:
            logger.debug("Board generated with %d fallback cells", fallbacks)
        return board

    @staticmethod
    def _neighbor_letters(board: Board, row: int, col: int) -> Set[str]:
        return {
            board[r][c] for r, c in neighbors(row, col)
            if board[r][c] != EMPTY
        }

    def _draw(self) -> str:
        if self.tracker.contains_at_cap():
            return self.rng.choice(COMMON_LETTERS)
        return self.letter_model(self.rng.random())

    def _pick_letter(self, taken: Set[str]):
        """
        Draw until a letter differs from every neighbour.

        Returns:
            Tuple of (letter, whether the retry budget ran out)
        """
        for _ in range(MAX_ATTEMPTS):
            letter = self._draw()
            if letter not in taken:
                return letter, False
        # Clustering constraint is dropped here so generation always finishes
        return self.rng.choice(FALLBACK_LETTERS), True
