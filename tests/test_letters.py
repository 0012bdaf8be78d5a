"""Test the letter distribution and rare-letter tracker."""

import random

import pytest

from wordcascade.engine.letters import (
    COMMON_LETTERS,
    FALLBACK_LETTERS,
    LETTER_FREQUENCIES,
    RARE_LETTERS,
    RareLetterTracker,
    is_rare,
    letter_for_draw,
)


class TestLetterFrequencyModel:
    """Test mapping uniform draws onto letters."""

    def test_weights_sum_to_hundred(self):
        """The frequency table should cover the whole distribution."""
        assert sum(LETTER_FREQUENCIES.values()) == pytest.approx(100.0)
        assert len(LETTER_FREQUENCIES) == 26

    def test_lowest_draw_is_e(self):
        """E owns the first bucket."""
        assert letter_for_draw(0.0) == "E"
        assert letter_for_draw(0.1) == "E"

    def test_second_bucket_is_t(self):
        """A draw just past E's share lands on T."""
        assert letter_for_draw(0.15) == "T"

    def test_out_of_range_draw_falls_back_to_e(self):
        """A draw past every bucket returns the most frequent letter."""
        assert letter_for_draw(1.5) == "E"

    def test_deterministic(self):
        """The same draw always gives the same letter."""
        assert letter_for_draw(0.42) == letter_for_draw(0.42)

    def test_every_draw_is_uppercase_letter(self):
        """Draws across [0, 1) always produce A-Z."""
        rng = random.Random(7)
        for _ in range(2000):
            letter = letter_for_draw(rng.random())
            assert len(letter) == 1 and "A" <= letter <= "Z"

    def test_frequent_letters_dominate(self):
        """E should be drawn far more often than Z."""
        rng = random.Random(3)
        draws = [letter_for_draw(rng.random()) for _ in range(5000)]
        assert draws.count("E") > 20 * max(1, draws.count("Z"))


class TestLetterSubsets:
    """Test the fixed letter subsets."""

    def test_rare_letters(self):
        assert RARE_LETTERS == {"Z", "Q", "X", "J", "K", "V"}

    def test_common_letters_exclude_rare(self):
        """The common pool holds the 20 non-rare letters."""
        assert len(COMMON_LETTERS) == 20
        assert not set(COMMON_LETTERS) & RARE_LETTERS

    def test_fallback_letters(self):
        """The fallback pool holds 10 very common, non-rare letters."""
        assert len(FALLBACK_LETTERS) == 10
        assert not set(FALLBACK_LETTERS) & RARE_LETTERS

    def test_is_rare_case_insensitive(self):
        assert is_rare("q") is True
        assert is_rare("E") is False


class TestRareLetterTracker:
    """Test rare-letter bookkeeping."""

    def test_starts_empty(self):
        tracker = RareLetterTracker()
        assert tracker.size() == 0
        assert tracker.contains_at_cap() is False

    def test_record_ignores_common_letters(self):
        """Recording a non-rare letter is a no-op."""
        tracker = RareLetterTracker()
        tracker.record("E")
        assert tracker.size() == 0

    def test_cap_reached_at_two(self):
        """Two distinct rare letters put the tracker at cap."""
        tracker = RareLetterTracker()
        tracker.record("Z")
        assert tracker.contains_at_cap() is False
        tracker.record("Q")
        assert tracker.contains_at_cap() is True

    def test_duplicate_record_counts_once(self):
        tracker = RareLetterTracker()
        tracker.record("Z")
        tracker.record("z")
        assert tracker.size() == 1

    def test_release(self):
        """Releasing drops a tracked letter; untracked releases are no-ops."""
        tracker = RareLetterTracker()
        tracker.record("X")
        tracker.release("J")
        tracker.release("E")
        assert tracker.letters == {"X"}
        tracker.release("X")
        assert tracker.size() == 0

    def test_reset(self):
        tracker = RareLetterTracker()
        tracker.record("K")
        tracker.record("V")
        tracker.reset()
        assert tracker.size() == 0
        assert tracker.contains_at_cap() is False

    def test_trackers_are_independent(self):
        """Two trackers never share state."""
        first = RareLetterTracker()
        second = RareLetterTracker()
        first.record("Z")
        assert second.size() == 0
