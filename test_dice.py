"""
Dice Test Suite

Sections:
    1. Die — rolling, range
    2. Hand — construction, throw limit, re-rolling subsets
"""
import logging
import random

import pytest

from dice import FACE_NAMES, MAX_THROWS, NUM_DICE, Die, Hand


# ── 1. Die ───────────────────────────────────────────────────────────────────

class TestDie:

    def test_new_die_has_no_value(self):
        assert Die().value is None

    def test_roll_stays_in_range(self):
        random.seed(3)
        die = Die()
        for _ in range(200):
            assert 1 <= die.roll() <= 6
            assert die.value in range(1, 7)

    def test_roll_is_reproducible_with_seed(self):
        random.seed(42)
        first = [Die().roll() for _ in range(10)]
        random.seed(42)
        second = [Die().roll() for _ in range(10)]
        assert first == second


# ── 2. Hand ──────────────────────────────────────────────────────────────────

class TestHand:

    def test_new_hand_is_unrolled(self):
        hand = Hand()
        assert len(hand) == NUM_DICE
        assert hand.rolls == 0
        assert not hand.is_rolled
        assert hand.can_roll
        assert hand.values == (None,) * NUM_DICE

    def test_from_values(self):
        hand = Hand.from_values(6, 5, 4, 3, 2)
        assert hand.values == (6, 5, 4, 3, 2)
        assert hand.rolls == 1
        assert hand.face_names == ("six", "five", "four", "three", "two")

    def test_from_values_needs_five_dice(self):
        with pytest.raises(ValueError):
            Hand.from_values(1, 2, 3)

    def test_face_names_cover_every_value(self):
        assert len(FACE_NAMES) == 6
        assert Hand().face_names == (None,) * NUM_DICE

    def test_roll_all_dice(self):
        random.seed(1)
        hand = Hand()
        assert hand.roll()
        assert hand.rolls == 1
        assert all(1 <= v <= 6 for v in hand.values)

    def test_roll_subset_keeps_other_dice(self):
        random.seed(7)
        hand = Hand.from_values(1, 2, 3, 4, 5)
        hand.roll([0, 4])
        assert hand.values[1:4] == (2, 3, 4)
        assert hand.rolls == 2

    def test_roll_nothing_still_counts_as_throw(self):
        hand = Hand.from_values(1, 2, 3, 4, 5)
        assert hand.roll([])
        assert hand.values == (1, 2, 3, 4, 5)
        assert hand.rolls == 2

    def test_throw_limit(self, caplog):
        random.seed(5)
        hand = Hand()
        for _ in range(MAX_THROWS):
            assert hand.roll()
        before = hand.values
        with caplog.at_level(logging.WARNING, logger="dice"):
            assert not hand.roll()
        assert hand.rolls == MAX_THROWS
        assert hand.values == before
        assert "Rolled more than 3 times" in caplog.text

    def test_custom_throw_limit(self):
        hand = Hand(max_throws=1)
        assert hand.roll()
        assert not hand.can_roll
        assert not hand.roll()

    def test_bad_index_raises_without_counting(self):
        hand = Hand.from_values(1, 2, 3, 4, 5)
        with pytest.raises(IndexError):
            hand.roll([0, 5])
        assert hand.rolls == 1
        assert hand.values == (1, 2, 3, 4, 5)

    def test_indexing_and_iteration(self):
        hand = Hand.from_values(3, 3, 2, 2, 1)
        assert hand[2].value == 2
        assert [d.value for d in hand] == [3, 3, 2, 2, 1]
