"""
Player — one player's hand, scoreboard and per-round state machine.

A round never blocks. ``new_round()`` and ``resume(decision)`` each advance
the machine as far as it can go, announce the decision they are waiting for
on the event bus, and return the phase they stopped in. Whoever holds the
player feeds the next decision message back through ``resume()``.

Phases:
    IDLE -> AWAITING_DICE_SELECTION -> ROLLED -> AWAITING_DECISION
    AWAITING_DECISION -> ROLLED (throw again) or ROUND_COMPLETE
    ROUND_COMPLETE -> IDLE, or DONE once the scoreboard is complete
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from dice import NUM_DICE, Hand
from events import STATE_CHANGED, Decisions, EventBus
from game_engine import (
    DEFAULT_RULES, CancelledCategory, Category, CategoryName, Rules,
    possible_categories,
)
from scoreboard import ScoreBoard

logger = logging.getLogger(__name__)


class RoundPhase(Enum):
    IDLE = "idle"
    AWAITING_DICE_SELECTION = "awaiting_dice_selection"
    ROLLED = "rolled"
    AWAITING_DECISION = "awaiting_decision"
    ROUND_COMPLETE = "round_complete"
    DONE = "done"


AWAITING_PHASES = (RoundPhase.AWAITING_DICE_SELECTION, RoundPhase.AWAITING_DECISION)
ROUND_OVER_PHASES = (RoundPhase.IDLE, RoundPhase.DONE)


# ── Decision messages ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SelectDice:
    """Throw the dice at these indices (all five on the first throw)."""
    indices: tuple[int, ...]


@dataclass(frozen=True)
class AddCategory:
    """Commit a category from the current menu."""
    name: CategoryName


@dataclass(frozen=True)
class CancelCategory:
    """Forfeit a not-yet-used category for zero points."""
    name: CategoryName


Decision = Union[SelectDice, AddCategory, CancelCategory]


def _select_dice(indices) -> SelectDice:
    return SelectDice(tuple(indices))


def _add_category(name) -> AddCategory:
    return AddCategory(CategoryName.parse(name))


def _cancel_category(name) -> CancelCategory:
    return CancelCategory(CategoryName.parse(name))


def valid_dice_indices(indices) -> bool:
    """Indices must be unique ints in 0..4."""
    return (all(isinstance(i, int) and 0 <= i < NUM_DICE for i in indices)
            and len(set(indices)) == len(indices))


def answer_directly(player: Player, prompt: int, decision: Decision) -> RoundPhase:
    """Default dispatch: hand the decision straight back to the player."""
    return player.answer(prompt, decision)


class Player:
    """A Yahtzee player running rounds one decision at a time."""

    def __init__(self, name: str, bus: EventBus | None = None, rules: Rules = DEFAULT_RULES,
                 dispatch: Optional[Callable[[Player, int, Decision], object]] = None) -> None:
        """
        Args:
            name: Display name
            bus: Event bus to announce state changes on (a private one if omitted)
            rules: Rules engine configuration
            dispatch: Where offered callbacks send ``(player, prompt, decision)``;
                      defaults to answer(). The Game queues them in Game.submit.
        """
        self.name = name
        self.id = uuid.uuid4().hex
        self.bus = bus if bus is not None else EventBus()
        self.rules = rules
        self.dispatch = dispatch if dispatch is not None else answer_directly
        self.hand = Hand(max_throws=rules.max_throws)
        self.scoreboard = ScoreBoard()
        self.current_categories: list[Category] = []
        self.phase = RoundPhase.IDLE
        self.done = False
        self._prompt = 0

    def __repr__(self) -> str:
        return f"Player({self.name!r}, phase={self.phase.value}, total={self.scoreboard.total})"

    # ── Derived state ────────────────────────────────────────────────────

    @property
    def throws(self) -> int:
        """Throws taken in the round in progress"""
        return self.hand.rolls

    @property
    def can_throw(self) -> bool:
        return self.hand.can_roll

    @property
    def remaining_throws(self) -> int:
        return self.rules.max_throws - self.throws

    @property
    def is_awaiting(self) -> bool:
        return self.phase in AWAITING_PHASES

    def menu_entry(self, name: CategoryName) -> Category | None:
        """The category of that name in the current menu, or None"""
        for category in self.current_categories:
            if category.name == name:
                return category
        return None

    # ── Transitions ──────────────────────────────────────────────────────

    def new_round(self) -> RoundPhase:
        """Start a round: fresh hand, then wait for the first dice selection."""
        self._emit()

        if self.done:
            logger.warning("%s is done, no more throws", self.name)
            return self.phase

        self.hand = Hand(max_throws=self.rules.max_throws)
        self.current_categories = []
        self.phase = RoundPhase.AWAITING_DICE_SELECTION
        self._ask(select_dice=True)
        return self.phase

    def resume(self, decision: Decision) -> RoundPhase:
        """Feed a decision into the state machine and return the phase it stops in.

        Decisions that don't fit the current phase are logged and ignored.
        """
        if self.phase is RoundPhase.AWAITING_DICE_SELECTION:
            return self._on_dice_selection(decision)
        if self.phase is RoundPhase.AWAITING_DECISION:
            return self._on_decision(decision)
        logger.warning("%s is not waiting for a decision (%s), ignoring %r",
                       self.name, self.phase.value, decision)
        return self.phase

    def answer(self, prompt: int, decision: Decision) -> RoundPhase:
        """Resume with a decision given to a published prompt.

        Decisions for a prompt that has since been replaced are ignored.
        """
        if prompt != self._prompt:
            logger.debug("%s: ignoring stale decision %r", self.name, decision)
            return self.phase
        return self.resume(decision)

    def interrupt(self) -> None:
        """Abandon the round in progress; callbacks already offered go stale."""
        self._prompt += 1
        self.current_categories = []
        self.phase = RoundPhase.DONE if self.done else RoundPhase.IDLE

    def _on_dice_selection(self, decision: Decision) -> RoundPhase:
        if not isinstance(decision, SelectDice):
            logger.warning("%s must throw the dice first, ignoring %r", self.name, decision)
            return self.phase
        # The first throw of a round is always all five dice
        return self._throw(range(NUM_DICE))

    def _on_decision(self, decision: Decision) -> RoundPhase:
        if isinstance(decision, SelectDice):
            if not self.can_throw:
                logger.warning("%s has no throws left, a category must be picked or cancelled",
                               self.name)
                self._ask_after_throw()
                return self.phase
            if not valid_dice_indices(decision.indices):
                logger.warning("%s: invalid dice selection %r", self.name, decision.indices)
                return self.phase
            return self._throw(decision.indices)

        if isinstance(decision, AddCategory):
            category = self.menu_entry(decision.name)
            if category is None:
                logger.warning("%s cannot score %s with %s", self.name,
                               decision.name.value, list(self.hand.values))
                return self.phase
            return self._end_round(category)

        if isinstance(decision, CancelCategory):
            if self.scoreboard.has_category(decision.name):
                logger.warning("%s already used %s, cannot cancel it", self.name, decision.name.value)
                return self.phase
            return self._end_round(CancelledCategory(decision.name))

        logger.warning("%s: unknown decision %r", self.name, decision)
        return self.phase

    def _throw(self, indices) -> RoundPhase:
        self.hand.roll(indices)
        self.phase = RoundPhase.ROLLED
        logger.info("%s - Got these values: %s", self.name, list(self.hand.values))

        self.current_categories = [
            category for category in possible_categories(self.hand, self.rules)
            if not self.scoreboard.has_category(category.name)
        ]
        logger.debug("%s - You could do: %s", self.name,
                     ", ".join(str(c) for c in self.current_categories))
        self._emit()

        self.phase = RoundPhase.AWAITING_DECISION
        self._ask_after_throw()
        return self.phase

    def _end_round(self, category: Category) -> RoundPhase:
        self.phase = RoundPhase.ROUND_COMPLETE
        self._prompt += 1
        self.scoreboard.add_category(category)
        self.current_categories = []
        logger.info("%s - %s, total %d", self.name, category, self.scoreboard.total)

        if self.scoreboard.is_complete():
            self.done = True
            self.phase = RoundPhase.DONE
        else:
            self.phase = RoundPhase.IDLE
        self._emit()
        return self.phase

    # ── Bus ──────────────────────────────────────────────────────────────

    def _emit(self) -> None:
        self.bus.emit(STATE_CHANGED)

    def _ask_after_throw(self) -> None:
        self._ask(select_dice=self.can_throw, choose_category=True)

    def _ask(self, select_dice: bool = False, choose_category: bool = False) -> None:
        """Publish the callbacks that resolve the pending decision.

        Each call invalidates the callbacks published before it. A callback
        returns True when its decision was taken before it returned; a
        decision the dispatcher queued for later returns False.
        """
        self._prompt += 1
        token = self._prompt

        def offer(build):
            def callback(arg) -> bool:
                if token != self._prompt:
                    logger.debug("%s: ignoring stale decision %r", self.name, arg)
                    return False
                try:
                    decision = build(arg)
                except (TypeError, ValueError) as e:
                    logger.warning("%s: rejected decision %r (%s)", self.name, arg, e)
                    return False
                self.dispatch(self, token, decision)
                return token != self._prompt
            return callback

        self.bus.emit(STATE_CHANGED, Decisions(
            select_dice=offer(_select_dice) if select_dice else None,
            select_category_to_add=offer(_add_category) if choose_category else None,
            select_category_to_cancel=offer(_cancel_category) if choose_category else None,
        ))
