"""
AI Strategy Test Suite

Tests:
    1. Legality — parametrized across all strategies: games complete without errors,
       strategies never make illegal moves
    2. Decisions — greedy choices on known hands, cancelling
    3. Quality — greedy > random, determinism
"""
import logging
import random

import pytest

from ai import (
    STRATEGIES, GreedyStrategy, RandomStrategy, YahtzeeStrategy,
    cancel_cheapest, make_strategy, play_game,
)
from dice import Hand
from events import STATE_CHANGED, EventBus
from game_engine import CancelledCategory, CategoryName, possible_categories
from player import AddCategory, CancelCategory, Player, SelectDice


# ── Helpers ─────────────────────────────────────────────────────────────────

def all_strategies():
    """Return instances of all available strategies for parametrized tests."""
    return [RandomStrategy(), GreedyStrategy()]


def strategy_ids():
    """Return readable names for parametrize IDs."""
    return ["Random", "Greedy"]


class CheckedStrategy(YahtzeeStrategy):
    """Wraps a strategy and asserts every decision it makes is legal."""

    def __init__(self, inner):
        self.inner = inner
        self.decisions = 0

    def choose_action(self, player):
        decision = self.inner.choose_action(player)
        self.decisions += 1
        if isinstance(decision, SelectDice):
            assert player.can_throw, f"Re-throw with {player.throws} throws used"
            assert all(0 <= i < 5 for i in decision.indices)
        elif isinstance(decision, AddCategory):
            assert player.menu_entry(decision.name) is not None, decision
        else:
            assert isinstance(decision, CancelCategory)
            assert not player.scoreboard.has_category(decision.name), decision
        return decision


def player_with_hand(*values, rolls=1):
    player = Player("Bot")
    player.hand = Hand.from_values(*values, rolls=rolls)
    player.current_categories = possible_categories(player.hand)
    return player


# ═══════════════════════════════════════════════════════════════════════════════
# 1. LEGALITY TESTS — parametrized across all strategies
# ═══════════════════════════════════════════════════════════════════════════════

class TestLegality:
    """Every strategy must produce legal moves that complete a full game."""

    @pytest.fixture(params=all_strategies(), ids=strategy_ids())
    def strategy(self, request):
        return request.param

    def test_completes_full_game(self, strategy):
        """Every player fills 13 categories and the game stops."""
        random.seed(42)
        game = play_game(["A", "B", "C"], strategy=strategy)
        assert game.is_done
        assert not game.has_started
        assert all(p.scoreboard.is_complete() for p in game.players)

    def test_never_makes_illegal_moves(self, strategy, caplog):
        """No decision is ever refused by the player."""
        random.seed(99)
        checked = CheckedStrategy(strategy)
        with caplog.at_level(logging.WARNING):
            play_game(["A", "B"], strategy=checked)
        assert checked.decisions > 0
        assert "was refused" not in caplog.text

    def test_stress_50_games(self, strategy):
        """Many seeds, no errors and sane totals."""
        for seed in range(50):
            random.seed(seed)
            game = play_game(["Solo"], strategy=strategy)
            assert 0 <= game.players[0].scoreboard.total <= 1575

    def test_play_game_on_given_bus(self, strategy):
        bus = EventBus()
        calls = []
        bus.on(STATE_CHANGED, lambda name, payload: calls.append(payload))
        random.seed(5)
        game = play_game(["A"], strategy=strategy, bus=bus)
        assert game.bus is bus
        assert len(calls) > 13


# ═══════════════════════════════════════════════════════════════════════════════
# 2. DECISIONS
# ═══════════════════════════════════════════════════════════════════════════════

class TestGreedyDecisions:

    def test_takes_yahtzee(self):
        action = GreedyStrategy().choose_action(player_with_hand(5, 5, 5, 5, 5))
        assert action == AddCategory(CategoryName.YAHTZEE)

    def test_takes_large_straight(self):
        action = GreedyStrategy().choose_action(player_with_hand(2, 3, 4, 5, 6))
        assert action == AddCategory(CategoryName.LARGE_STRAIGHT)

    def test_rethrows_non_matching_dice(self):
        action = GreedyStrategy().choose_action(player_with_hand(4, 1, 4, 2, 4))
        assert action == SelectDice((1, 3))

    def test_scores_best_category_without_throws(self):
        action = GreedyStrategy().choose_action(player_with_hand(4, 1, 4, 2, 4, rolls=3))
        assert action == AddCategory(CategoryName.THREE_OF_A_KIND)

    def test_cancels_when_nothing_fits(self):
        player = player_with_hand(1, 2, 4, 5, 6, rolls=3)
        for name in CategoryName:
            if name is not CategoryName.SIXES and name is not CategoryName.ONES:
                player.scoreboard.add_category(CancelledCategory(name))
        player.current_categories = []
        assert GreedyStrategy().choose_action(player) == CancelCategory(CategoryName.ONES)


class TestCancelCheapest:

    def test_yahtzee_goes_first(self):
        assert cancel_cheapest(Player("A")) == CancelCategory(CategoryName.YAHTZEE)

    def test_chance_goes_last(self):
        player = Player("A")
        for name in CategoryName:
            if name is not CategoryName.CHANCE:
                player.scoreboard.add_category(CancelledCategory(name))
        assert cancel_cheapest(player) == CancelCategory(CategoryName.CHANCE)

    def test_nothing_left(self):
        player = Player("A")
        for name in CategoryName:
            player.scoreboard.add_category(CancelledCategory(name))
        with pytest.raises(ValueError):
            cancel_cheapest(player)


class TestMakeStrategy:

    @pytest.mark.parametrize("token", sorted(STRATEGIES))
    def test_known_tokens(self, token):
        assert isinstance(make_strategy(token), STRATEGIES[token])

    def test_unknown_token(self):
        with pytest.raises(ValueError):
            make_strategy("optimal")


# ═══════════════════════════════════════════════════════════════════════════════
# 3. QUALITY
# ═══════════════════════════════════════════════════════════════════════════════

def _average_score(strategy, num_games=30, start_seed=0):
    """Average final total over a range of seeds."""
    total = 0
    for seed in range(start_seed, start_seed + num_games):
        random.seed(seed)
        total += play_game(["Solo"], strategy=strategy).players[0].scoreboard.total
    return total / num_games


class TestQuality:

    def test_greedy_beats_random(self):
        assert _average_score(GreedyStrategy()) > _average_score(RandomStrategy())

    def test_determinism_same_seed_same_score(self):
        random.seed(7)
        first = play_game(["A", "B"], strategy=GreedyStrategy())
        random.seed(7)
        second = play_game(["A", "B"], strategy=GreedyStrategy())
        assert [p.scoreboard.total for p in first.players] == \
               [p.scoreboard.total for p in second.players]
        assert [e.dice_values for e in first.game_log.entries] == \
               [e.dice_values for e in second.game_log.entries]
