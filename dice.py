"""
Dice for Yahtzee — a single Die and the five-dice Hand a player works with.

Pure Python, no GUI dependency. A Hand is created fresh every round and
counts how many times it has been thrown.
"""
from __future__ import annotations

import logging
import random

logger = logging.getLogger(__name__)

NUM_DICE = 5
MAX_THROWS = 3

FACE_NAMES = ("one", "two", "three", "four", "five", "six")


class Die:
    """A six-sided die holding its last-rolled face value (None until rolled)."""

    def __init__(self, value: int | None = None) -> None:
        self.value = value

    def roll(self) -> int:
        """Roll the die and return the new value (1-6)."""
        self.value = random.randint(1, 6)
        return self.value

    def __repr__(self) -> str:
        return f"Die({self.value})"


class Hand:
    """Five dice plus the number of throws taken this round."""

    def __init__(self, max_throws: int = MAX_THROWS) -> None:
        self.dice = [Die() for _ in range(NUM_DICE)]
        self.rolls = 0
        self.max_throws = max_throws

    @classmethod
    def from_values(cls, *values: int, rolls: int = 1, max_throws: int = MAX_THROWS) -> Hand:
        """Build a hand with explicit face values (for replays and tests)."""
        if len(values) != NUM_DICE:
            raise ValueError(f"A hand needs {NUM_DICE} dice, got {len(values)}")
        hand = cls(max_throws=max_throws)
        for die, value in zip(hand.dice, values):
            die.value = value
        hand.rolls = rolls
        return hand

    def __len__(self) -> int:
        return len(self.dice)

    def __getitem__(self, index: int) -> Die:
        return self.dice[index]

    def __iter__(self):
        return iter(self.dice)

    @property
    def can_roll(self) -> bool:
        return self.rolls < self.max_throws

    @property
    def is_rolled(self) -> bool:
        return self.rolls > 0

    def roll(self, indices=range(NUM_DICE)) -> bool:
        """Re-roll the dice at the given indices.

        Returns False and leaves the dice untouched when the throw limit has
        already been reached.
        """
        if not self.can_roll:
            logger.warning("Rolled more than %d times, ignoring", self.max_throws)
            return False
        indices = list(indices)
        for index in indices:
            if not 0 <= index < NUM_DICE:
                raise IndexError(f"Die index {index} out of range 0-{NUM_DICE - 1}")
        self.rolls += 1
        for index in indices:
            self.dice[index].roll()
        return True

    @property
    def values(self) -> tuple[int | None, ...]:
        """Face values of the five dice, in slot order."""
        return tuple(die.value for die in self.dice)

    @property
    def face_names(self) -> tuple[str | None, ...]:
        """Symbolic names ("one".."six") of the face values."""
        return tuple(FACE_NAMES[v - 1] if v is not None else None for v in self.values)

    def __repr__(self) -> str:
        return f"Hand({list(self.values)}, rolls={self.rolls})"
