"""
Yahtzee Game Engine - Category rules without GUI dependencies

This module derives every currently-valid scoring option from a hand of five
dice. Each category is an immutable value with a fallible constructor
(``from_hand``) that returns None when the hand does not qualify, and the
menu for a roll is a filter over all of those attempts.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from dice import MAX_THROWS

logger = logging.getLogger(__name__)


class CategoryName(Enum):
    """The 13 Yahtzee score categories, in scorecard order"""
    ONES = "Ones"
    TWOS = "Twos"
    THREES = "Threes"
    FOURS = "Fours"
    FIVES = "Fives"
    SIXES = "Sixes"
    THREE_OF_A_KIND = "ThreeOfAKind"
    FOUR_OF_A_KIND = "FourOfAKind"
    FULL_HOUSE = "FullHouse"
    SMALL_STRAIGHT = "SmallStraight"
    LARGE_STRAIGHT = "LargeStraight"
    CHANCE = "Chance"
    YAHTZEE = "Yahtzee"

    @classmethod
    def parse(cls, value) -> CategoryName:
        """Look up a category by enum member, value ("FullHouse") or member name ("FULL_HOUSE").

        Raises:
            ValueError: if nothing matches
        """
        if isinstance(value, cls):
            return value
        for name in cls:
            if value == name.value or value == name.name:
                return name
        raise ValueError(f"Unknown category {value!r}")


UPPER_CATEGORIES = (
    CategoryName.ONES, CategoryName.TWOS, CategoryName.THREES,
    CategoryName.FOURS, CategoryName.FIVES, CategoryName.SIXES,
)

# Fixed scores
THREE_OF_A_KIND_SCORE = 20
FOUR_OF_A_KIND_SCORE = 40
FULL_HOUSE_SCORE = 30
SMALL_STRAIGHT_SCORE = 30
LARGE_STRAIGHT_SCORE = 40
YAHTZEE_SCORE = 50
BONUS_SCORE = 35
BONUS_THRESHOLD = 63

SMALL_STRAIGHT_LENGTH = 4
LARGE_STRAIGHT_LENGTH = 5


class InvalidCategoryError(ValueError):
    """A category constructor was given arguments it cannot work with."""


@dataclass(frozen=True)
class Rules:
    """Rules engine configuration.

    of_a_kind_scores_total switches three/four of a kind from their fixed
    scores to the sum of all five dice.
    """
    max_throws: int = MAX_THROWS
    of_a_kind_scores_total: bool = False


DEFAULT_RULES = Rules()


def hand_values(hand) -> tuple[int, ...]:
    """
    Validated face values of a hand

    Args:
        hand: A Hand, or any iterable of objects with a .value attribute

    Returns:
        Tuple of die values

    Raises:
        InvalidCategoryError: if a die is unset or outside 1..6
    """
    values = tuple(die.value for die in hand)
    for value in values:
        if not _is_die_value(value):
            raise InvalidCategoryError(f"{value} isn't a valid die value")
    return values


def _is_die_value(value) -> bool:
    return isinstance(value, int) and 1 <= value <= 6


def longest_run(values) -> int:
    """
    Length of the longest run of consecutive distinct values

    Duplicates neither break a run nor extend it: [2, 2, 3, 4, 5] has a run
    of 4.

    Args:
        values: Die values in any order

    Returns:
        Length of the longest consecutive run (0 for no values)
    """
    best = 0
    current = 0
    previous = None
    for value in sorted(set(values)):
        if previous is not None and value == previous + 1:
            current += 1
        else:
            current = 1
        best = max(best, current)
        previous = value
    return best


# ── Category variants ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NumberRun:
    """Ones through Sixes: n times the number of dice showing n."""
    number: int
    dice: tuple[int, ...]

    @classmethod
    def from_hand(cls, number: int, hand) -> Optional[NumberRun]:
        if not _is_die_value(number):
            raise InvalidCategoryError(f"{number} isn't a valid die number")
        values = hand_values(hand)
        if number not in values:
            return None
        return cls(number, values)

    @property
    def name(self) -> CategoryName:
        return UPPER_CATEGORIES[self.number - 1]

    @property
    def count(self) -> int:
        return self.dice.count(self.number)

    @property
    def score(self) -> int:
        return self.number * self.count

    def __str__(self) -> str:
        return f"Sequence of {self.number}s, got {self.count}, score = {self.score}"


@dataclass(frozen=True)
class OfAKind:
    """Three or four of a kind."""
    kind: int
    dice: tuple[int, ...]
    rules: Rules = field(default=DEFAULT_RULES, compare=False, repr=False)

    @classmethod
    def from_hand(cls, kind: int, hand, rules: Rules = DEFAULT_RULES) -> Optional[OfAKind]:
        if kind not in (3, 4):
            raise InvalidCategoryError(
                f"Category must be either a 3 or a 4 of a kind, got {kind} instead")
        values = hand_values(hand)
        if max(Counter(values).values()) < kind:
            return None
        return cls(kind, values, rules)

    @property
    def name(self) -> CategoryName:
        return CategoryName.THREE_OF_A_KIND if self.kind == 3 else CategoryName.FOUR_OF_A_KIND

    @property
    def score(self) -> int:
        if self.rules.of_a_kind_scores_total:
            return sum(self.dice)
        return THREE_OF_A_KIND_SCORE if self.kind == 3 else FOUR_OF_A_KIND_SCORE

    def __str__(self) -> str:
        return f"{self.kind} of a kind, score = {self.score}"


@dataclass(frozen=True)
class FullHouse:
    """Three of one value and two of another."""
    dice: tuple[int, ...]

    @classmethod
    def from_hand(cls, hand) -> Optional[FullHouse]:
        values = hand_values(hand)
        if sorted(Counter(values).values()) != [2, 3]:
            return None
        return cls(values)

    @property
    def name(self) -> CategoryName:
        return CategoryName.FULL_HOUSE

    @property
    def score(self) -> int:
        return FULL_HOUSE_SCORE

    def __str__(self) -> str:
        return f"Full house, score = {self.score}"


@dataclass(frozen=True)
class Straight:
    """Small (4 in a row) or large (5 in a row) straight."""
    length: int
    dice: tuple[int, ...]

    @classmethod
    def from_hand(cls, length: int, hand) -> Optional[Straight]:
        if length not in (SMALL_STRAIGHT_LENGTH, LARGE_STRAIGHT_LENGTH):
            raise InvalidCategoryError(f"A straight is 4 or 5 long, got {length}")
        values = hand_values(hand)
        if longest_run(values) < length:
            return None
        return cls(length, values)

    @property
    def is_small(self) -> bool:
        return self.length == SMALL_STRAIGHT_LENGTH

    @property
    def name(self) -> CategoryName:
        return CategoryName.SMALL_STRAIGHT if self.is_small else CategoryName.LARGE_STRAIGHT

    @property
    def score(self) -> int:
        return SMALL_STRAIGHT_SCORE if self.is_small else LARGE_STRAIGHT_SCORE

    def __str__(self) -> str:
        return f"{'Small' if self.is_small else 'Large'} straight, score = {self.score}"


@dataclass(frozen=True)
class Chance:
    """Sum of all dice, no pattern needed."""
    dice: tuple[int, ...]

    @classmethod
    def from_hand(cls, hand) -> Chance:
        return cls(hand_values(hand))

    @property
    def name(self) -> CategoryName:
        return CategoryName.CHANCE

    @property
    def score(self) -> int:
        return sum(self.dice)

    def __str__(self) -> str:
        return f"Chance, score = {self.score}"


@dataclass(frozen=True)
class Yahtzee:
    """All five dice the same."""
    dice: tuple[int, ...]

    @classmethod
    def from_hand(cls, hand) -> Optional[Yahtzee]:
        values = hand_values(hand)
        if len(set(values)) != 1:
            return None
        return cls(values)

    @property
    def name(self) -> CategoryName:
        return CategoryName.YAHTZEE

    @property
    def score(self) -> int:
        return YAHTZEE_SCORE

    def __str__(self) -> str:
        return f"Yahtzee!! score = {self.score}"


@dataclass(frozen=True)
class CancelledCategory:
    """A forfeited slot, committed with zero score."""
    name: CategoryName
    score: int = field(default=0, init=False)

    def __str__(self) -> str:
        return f"{self.name.value} cancelled"


Category = Union[NumberRun, OfAKind, FullHouse, Straight, Chance, Yahtzee, CancelledCategory]


# ── Menu building ────────────────────────────────────────────────────────────

def _attempt(build, *args) -> Optional[Category]:
    """Run one fallible constructor, turning validation failures into None."""
    try:
        return build(*args)
    except InvalidCategoryError as e:
        logger.debug("Skipping %s: %s", getattr(build, "__qualname__", build), e)
        return None


def possible_categories(hand, rules: Rules = DEFAULT_RULES) -> list[Category]:
    """
    Build the menu of every category the hand qualifies for

    Args:
        hand: A Hand (or iterable of dice with .value)
        rules: Rules engine configuration

    Returns:
        List of valid categories in scorecard order (empty for an unrolled hand)
    """
    attempts = [_attempt(NumberRun.from_hand, n, hand) for n in range(1, 7)]
    attempts += [
        _attempt(OfAKind.from_hand, 3, hand, rules),
        _attempt(OfAKind.from_hand, 4, hand, rules),
        _attempt(FullHouse.from_hand, hand),
        _attempt(Straight.from_hand, SMALL_STRAIGHT_LENGTH, hand),
        _attempt(Straight.from_hand, LARGE_STRAIGHT_LENGTH, hand),
        _attempt(Chance.from_hand, hand),
        _attempt(Yahtzee.from_hand, hand),
    ]
    return [category for category in attempts if category is not None]
