"""
Yahtzee AI — Strategy interface, game loop, and computer player implementations.

Contains:
- YahtzeeStrategy abstract base class
- play_game() full-game loop driven through the event bus
- RandomStrategy, GreedyStrategy
"""
from abc import ABC, abstractmethod
from collections import Counter
import logging
import random

from dice import NUM_DICE
from frontend_adapter import FrontendAdapter
from game_coordinator import Game
from game_engine import DEFAULT_RULES, CategoryName
from player import AddCategory, CancelCategory, Decision, RoundPhase, SelectDice

logger = logging.getLogger(__name__)

# Categories worth taking as soon as they show up
_JACKPOTS = (
    CategoryName.YAHTZEE, CategoryName.LARGE_STRAIGHT,
    CategoryName.FULL_HOUSE, CategoryName.SMALL_STRAIGHT,
)

# Cheapest categories to give up first
_CANCEL_ORDER = (
    CategoryName.YAHTZEE, CategoryName.ONES, CategoryName.LARGE_STRAIGHT,
    CategoryName.TWOS, CategoryName.FOUR_OF_A_KIND, CategoryName.SMALL_STRAIGHT,
    CategoryName.FULL_HOUSE, CategoryName.THREES, CategoryName.THREE_OF_A_KIND,
    CategoryName.FOURS, CategoryName.FIVES, CategoryName.SIXES, CategoryName.CHANCE,
)


# ── Strategy Interface ──────────────────────────────────────────────────────

class YahtzeeStrategy(ABC):
    """Abstract base class for Yahtzee AI strategies."""

    @abstractmethod
    def choose_action(self, player) -> Decision:
        """Given a player waiting after a throw, decide: throw again, commit or cancel.

        Args:
            player: Player in RoundPhase.AWAITING_DECISION

        Returns:
            SelectDice to re-roll those dice, AddCategory from the player's
            menu, or CancelCategory for an unused category
        """
        ...


def cancel_cheapest(player) -> CancelCategory:
    """Forfeit the least valuable category still open."""
    remaining = player.scoreboard.remaining_category_names()
    for name in _CANCEL_ORDER:
        if name in remaining:
            return CancelCategory(name)
    raise ValueError(f"{player.name} has no categories left to cancel")


# ── Game Loop ───────────────────────────────────────────────────────────────

def play_game(names, strategy=None, rules=DEFAULT_RULES, bus=None) -> Game:
    """Play a complete game with every seat driven by one strategy.

    Args:
        names: Player names, in seat order
        strategy: Strategy for all players (GreedyStrategy if omitted)
        rules: Rules engine configuration
        bus: Optional event bus (to observe the game)

    Returns:
        The finished Game
    """
    strategy = strategy or GreedyStrategy()
    game = Game(bus=bus, rules=rules)
    for name in names:
        game.add_player(name)
    adapter = FrontendAdapter(game)
    game.start()

    while game.has_started:
        if not play_step(adapter, strategy):
            raise RuntimeError(f"No decision accepted for {game.current_player!r}")
    return game


def play_step(adapter, strategy) -> bool:
    """Take one decision for the current player. Returns True if it was accepted."""
    player = adapter.game.current_player
    if player.phase is RoundPhase.AWAITING_DICE_SELECTION:
        return adapter.select_dice(range(NUM_DICE))

    decision = strategy.choose_action(player)
    if adapter.apply(decision):
        return True
    logger.warning("%s: %r was refused, cancelling instead", player.name, decision)
    return adapter.apply(cancel_cheapest(player))


# ── Strategies ──────────────────────────────────────────────────────────────

class RandomStrategy(YahtzeeStrategy):
    """Throws again half the time, otherwise picks anything available."""

    def choose_action(self, player) -> Decision:
        if player.can_throw and random.random() < 0.5:
            indices = [i for i in range(NUM_DICE) if random.random() < 0.5]
            return SelectDice(tuple(indices))
        if player.current_categories:
            return AddCategory(random.choice(player.current_categories).name)
        return CancelCategory(random.choice(player.scoreboard.remaining_category_names()))


class GreedyStrategy(YahtzeeStrategy):
    """Takes fixed-score patterns at once, otherwise chases the most common value."""

    def choose_action(self, player) -> Decision:
        menu = player.current_categories

        for name in _JACKPOTS:
            category = player.menu_entry(name)
            if category is not None:
                return AddCategory(category.name)

        if player.can_throw:
            values = player.hand.values
            target, _ = Counter(values).most_common(1)[0]
            reroll = tuple(i for i, v in enumerate(values) if v != target)
            if reroll:
                return SelectDice(reroll)

        scoring = [c for c in menu if c.score > 0 and c.name is not CategoryName.CHANCE]
        if scoring:
            best = max(scoring, key=lambda c: c.score)
            return AddCategory(best.name)
        chance = player.menu_entry(CategoryName.CHANCE)
        if chance is not None:
            return AddCategory(chance.name)
        return cancel_cheapest(player)


STRATEGIES = {
    "random": RandomStrategy,
    "greedy": GreedyStrategy,
}


def make_strategy(token: str) -> YahtzeeStrategy:
    """Create a strategy instance from a CLI token ("random" or "greedy").

    Raises:
        ValueError: for an unknown token
    """
    try:
        return STRATEGIES[token]()
    except KeyError:
        raise ValueError(f"Unknown strategy {token!r}") from None
