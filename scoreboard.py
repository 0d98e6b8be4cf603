"""ScoreBoard — the categories a player has committed to.

Holds at most one category per name and derives totals and the upper
section bonus from what has been committed.
"""
from __future__ import annotations

import logging

from game_engine import (
    BONUS_SCORE, BONUS_THRESHOLD, UPPER_CATEGORIES,
    CancelledCategory, Category, CategoryName,
)

logger = logging.getLogger(__name__)


class ScoreBoard:
    """Manages a player's committed categories"""

    def __init__(self) -> None:
        self.categories: list[Category] = []

    def add_category(self, category: Category) -> bool:
        """Commit a category. Returns False (and leaves the board unchanged) on a duplicate name."""
        if self.has_category(category.name):
            logger.warning("Category %s has already been done", category.name.value)
            return False
        self.categories.append(category)
        return True

    def has_category(self, name: CategoryName) -> bool:
        """Check if a category name has been committed"""
        return self.get(name) is not None

    def get(self, name: CategoryName) -> Category | None:
        """Return the committed category with that name, or None"""
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def is_cancelled(self, name: CategoryName) -> bool:
        return isinstance(self.get(name), CancelledCategory)

    @property
    def upper_total(self) -> int:
        """Sum of the committed Ones through Sixes"""
        return sum(c.score for c in self.categories if c.name in UPPER_CATEGORIES)

    @property
    def has_bonus(self) -> bool:
        return self.upper_total >= BONUS_THRESHOLD

    @property
    def bonus(self) -> int:
        return BONUS_SCORE if self.has_bonus else 0

    @property
    def total(self) -> int:
        """Grand total including bonus"""
        return sum(c.score for c in self.categories) + self.bonus

    def remaining_category_names(self) -> list[CategoryName]:
        """Names not yet committed, in scorecard order"""
        return [name for name in CategoryName if not self.has_category(name)]

    def is_complete(self) -> bool:
        """Check if all 13 categories are committed"""
        return len(self.categories) == len(CategoryName)

    def __repr__(self) -> str:
        return f"ScoreBoard({[str(c) for c in self.categories]}, total={self.total})"
