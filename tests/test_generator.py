"""Test board generation."""

import random

from wordcascade.engine.board import BOARD_SIZE, EMPTY, has_valid_shape, neighbors
from wordcascade.engine.generator import BoardGenerator
from wordcascade.engine.letters import (
    COMMON_LETTERS,
    FALLBACK_LETTERS,
    RARE_LETTERS,
    RareLetterTracker,
)


def earlier_neighbors(row, col):
    """Neighbours filled before (row, col) in a row-major scan."""
    return [(r, c) for r, c in neighbors(row, col) if (r, c) < (row, col)]


class TestBoardGenerator:
    """Test the row-major generator."""

    def test_board_is_full_8x8(self):
        """Every cell of an 8x8 board holds one uppercase letter."""
        board = BoardGenerator(RareLetterTracker(), random.Random(1)).generate()
        assert has_valid_shape(board)
        for row in board:
            for cell in row:
                assert cell != EMPTY
                assert len(cell) == 1 and cell.isupper()

    def test_seeded_generation_is_reproducible(self):
        """The same seed gives the same board."""
        first = BoardGenerator(RareLetterTracker(), random.Random(42)).generate()
        second = BoardGenerator(RareLetterTracker(), random.Random(42)).generate()
        assert first == second

    def test_no_clusters_except_fallback(self):
        """A letter only repeats an earlier neighbour when it came from the fallback pool."""
        for seed in range(20):
            board = BoardGenerator(RareLetterTracker(), random.Random(seed)).generate()
            for row in range(BOARD_SIZE):
                for col in range(BOARD_SIZE):
                    letter = board[row][col]
                    taken = {board[r][c] for r, c in earlier_neighbors(row, col)}
                    assert letter not in taken or letter in FALLBACK_LETTERS

    def test_rare_letter_cap(self):
        """At most two distinct rare letters ever appear on a generated board."""
        for seed in range(50):
            tracker = RareLetterTracker()
            board = BoardGenerator(tracker, random.Random(seed)).generate()
            on_board = {cell for row in board for cell in row} & RARE_LETTERS
            assert len(on_board) <= 2
            assert tracker.size() <= 2
            assert tracker.letters == on_board

    def test_rare_only_model_is_capped(self):
        """Even a model that only emits rare letters is held to the cap."""
        rare = sorted(RARE_LETTERS)
        tracker = RareLetterTracker()
        generator = BoardGenerator(
            tracker,
            random.Random(5),
            letter_model=lambda draw: rare[int(draw * len(rare))],
        )
        board = generator.generate()
        on_board = {cell for row in board for cell in row} & RARE_LETTERS
        assert len(on_board) <= 2
        assert tracker.contains_at_cap() is True
        allowed = set(COMMON_LETTERS) | set(FALLBACK_LETTERS) | on_board
        assert {cell for row in board for cell in row} <= allowed

    def test_single_letter_model_terminates(self):
        """A model that only ever draws 'A' still yields a valid board through the fallback."""
        board = BoardGenerator(
            RareLetterTracker(),
            random.Random(9),
            letter_model=lambda draw: "A",
        ).generate()
        assert has_valid_shape(board)
        assert board[0][0] == "A"
        # (0, 1) sees the 'A' to its left, so every redraw fails
        assert board[0][1] in FALLBACK_LETTERS
        for row in board:
            assert all(cell != EMPTY for cell in row)

    def test_tracker_is_updated_in_place(self):
        """The generator records rare letters on the tracker it was given."""
        tracker = RareLetterTracker()
        generator = BoardGenerator(tracker, random.Random(0), letter_model=lambda draw: "Q")
        generator.generate()
        assert "Q" in tracker.letters
