"""
Game — turn orchestration for a multi-player Yahtzee game.

Owns the players, decides whose round it is, and computes the leaders.
Frontends never call into the players directly: they answer the decision
callbacks published on the event bus, and every decision flows through
``Game.submit``, which queues it and moves to the next player once a round
ends. Decisions are processed one at a time from the queue.
"""
from __future__ import annotations

import argparse
import logging
from collections import deque

from events import STATE_CHANGED, EventBus
from game_engine import DEFAULT_RULES, CancelledCategory, Rules
from game_log import GameLog
from player import AWAITING_PHASES, ROUND_OVER_PHASES, Decision, Player, RoundPhase

logger = logging.getLogger(__name__)


class Game:
    """Round-robin Yahtzee game for one or more players."""

    def __init__(self, bus: EventBus | None = None, rules: Rules = DEFAULT_RULES) -> None:
        """
        Args:
            bus: Event bus for this game session (a new one if omitted)
            rules: Rules engine configuration shared by all players
        """
        self.bus = bus if bus is not None else EventBus()
        self.rules = rules
        self.players: list[Player] = []
        self.current_player_index = -1
        self.has_started = False
        self.turn = 0
        self.game_log = GameLog()
        self._pending: deque = deque()
        self._dispatching = False

    # ── Setup ────────────────────────────────────────────────────────────

    def add_player(self, name: str) -> Player:
        """Add a player. Players join in seat order."""
        player = Player(name, bus=self.bus, rules=self.rules, dispatch=self.submit)
        self.players.append(player)
        self.bus.emit(STATE_CHANGED)
        return player

    def start(self) -> bool:
        """Start the game with the first player's first round.

        Returns False if there is nobody to play.
        """
        if not self.players:
            logger.warning("Cannot start a game without players")
            return False

        logger.info("The game starts with %s", ", ".join(p.name for p in self.players))
        # Offers from an earlier start must not reach the new rounds
        self._pending.clear()
        for player in self.players:
            player.interrupt()
        self.has_started = True
        self.current_player_index = -1
        self.turn = 0
        self.game_log.clear()
        self.bus.emit(STATE_CHANGED)

        self._dispatching = True
        try:
            self._play_next_round()
        finally:
            self._dispatching = False
        self._drain()
        return True

    def stop(self) -> None:
        logger.info("The game ends, leaders: %s", ", ".join(p.name for p in self.leaders))
        self.has_started = False
        self.bus.emit(STATE_CHANGED)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def is_done(self) -> bool:
        """Whether every player has a complete scoreboard."""
        return bool(self.players) and all(p.done for p in self.players)

    @property
    def current_player(self) -> Player | None:
        """The player whose round it is (None before the game starts)."""
        if not self.players or self.current_player_index < 0:
            return None
        return self.players[self.current_player_index % len(self.players)]

    @property
    def leaders(self) -> list[Player]:
        """Players sharing the highest total, in seat order."""
        if not self.players:
            return []
        best = max(p.scoreboard.total for p in self.players)
        return [p for p in self.players if p.scoreboard.total == best]

    # ── Turn flow ────────────────────────────────────────────────────────

    def submit(self, player: Player, prompt: int, decision: Decision) -> RoundPhase | None:
        """Queue a decision from a player's prompt and process the queue.

        Decisions made while the queue is being processed (by a listener
        answering inside an emit) are only queued; the outermost call works
        through them one at a time, so the call stack stays flat however the
        callbacks are driven.

        Returns the phase the player stopped in after this decision, or None
        when it was queued or refused.
        """
        self._pending.append((player, prompt, decision))
        if self._dispatching:
            return None
        return self._drain()

    def _drain(self) -> RoundPhase | None:
        """Handle queued decisions in order. Returns the first one's result."""
        results = []
        self._dispatching = True
        try:
            while self._pending:
                results.append(self._handle(*self._pending.popleft()))
        finally:
            self._dispatching = False
        return results[0] if results else None

    def _handle(self, player: Player, prompt: int, decision: Decision) -> RoundPhase | None:
        if not self.has_started:
            logger.warning("No game in progress, ignoring %r", decision)
            return None
        if player is not self.current_player:
            logger.warning("It is not %s's turn, ignoring %r", player.name, decision)
            return None

        was_waiting = player.phase in AWAITING_PHASES
        throws_before = player.throws
        phase = player.answer(prompt, decision)

        if player.throws > throws_before:
            self.game_log.log_roll(self.turn, self.current_player_index,
                                   player.throws, player.hand.values)

        if was_waiting and phase in ROUND_OVER_PHASES:
            self._finish_round(player)
        return phase

    def _finish_round(self, player: Player) -> None:
        category = player.scoreboard.categories[-1]
        if isinstance(category, CancelledCategory):
            self.game_log.log_cancel(self.turn, self.current_player_index,
                                     category.name, player.hand.values)
        else:
            self.game_log.log_score(self.turn, self.current_player_index,
                                    category.name, category.score, player.hand.values)

        self.bus.emit(STATE_CHANGED)

        if self.is_done:
            self.stop()
        else:
            self._play_next_round()

    def _play_next_round(self) -> RoundPhase | None:
        """Move to the next player who still has categories left and start their round."""
        for _ in range(len(self.players)):
            self.current_player_index = (self.current_player_index + 1) % len(self.players)
            if self.current_player_index == 0:
                self.turn += 1
            player = self.current_player
            if player.done:
                continue
            return player.new_round()

        self.stop()
        return None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Optional list of args (for testing). None uses sys.argv.

    Returns:
        Parsed argparse.Namespace.
    """
    parser = argparse.ArgumentParser(description="Yahtzee Game")
    parser.add_argument("players", nargs="*", metavar="NAME",
                        help="Human player names, in seat order")
    parser.add_argument("--bots", nargs="+", default=[], metavar="NAME",
                        help="Computer player names (seated after the humans)")
    parser.add_argument("--strategy", choices=["random", "greedy"], default="greedy",
                        help="Strategy used by computer players (default: greedy)")
    parser.add_argument("--ui", choices=["tui", "auto"], default="tui",
                        help="Interface: tui (terminal, default) or auto (bots play, results printed)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible games")
    parser.add_argument("--settings", default=None, metavar="PATH",
                        help="Settings file (default: ~/.yahtzee_settings.json)")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (overrides the settings file)")
    parser.add_argument("--max-throws", type=int, default=None, metavar="N",
                        help="Throws per round (overrides the settings file)")
    parser.add_argument("--sum-of-a-kind", action="store_const", const=True, default=None,
                        help="Score three and four of a kind as the sum of the dice")
    parser.add_argument("--save-settings", action="store_true",
                        help="Write the effective settings back to the settings file")
    return parser.parse_args(argv)
