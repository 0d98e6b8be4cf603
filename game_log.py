"""Game log for Yahtzee — records throws and commits for post-game replay.

Pure Python, kept in memory only. Captures every throw and every committed
or cancelled category, tagged with the game turn and the player's seat.
"""
from __future__ import annotations

from dataclasses import dataclass

from game_engine import CategoryName


@dataclass
class LogEntry:
    """A single logged game event."""
    turn: int                                   # 1-13
    player_index: int
    event_type: str                             # "roll", "score", "cancel"
    dice_values: tuple[int, ...]
    category: CategoryName | None = None
    score: int | None = None
    roll_number: int = 0                        # 1-3 for rolls


class GameLog:
    """Accumulates LogEntry records during a game."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def log_roll(self, turn: int, player_index: int, roll_number: int, dice_values) -> None:
        """Record a dice throw."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="roll",
            dice_values=tuple(dice_values),
            roll_number=roll_number,
        ))

    def log_score(self, turn: int, player_index: int, category: CategoryName, score: int, dice_values) -> None:
        """Record a committed category."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="score",
            dice_values=tuple(dice_values),
            category=category,
            score=score,
        ))

    def log_cancel(self, turn: int, player_index: int, category: CategoryName, dice_values) -> None:
        """Record a forfeited category."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="cancel",
            dice_values=tuple(dice_values),
            category=category,
            score=0,
        ))

    def get_turn_entries(self, turn: int, player_index: int = 0) -> list[LogEntry]:
        """Return all entries for a specific turn and player."""
        return [e for e in self.entries
                if e.turn == turn and e.player_index == player_index]

    def get_commit_entries(self, player_index: int | None = None) -> list[LogEntry]:
        """Return score and cancel entries, optionally for one player."""
        return [e for e in self.entries
                if e.event_type in ("score", "cancel")
                and (player_index is None or e.player_index == player_index)]

    def player_order(self) -> list[int]:
        """Seat of the player who ended each round, in play order."""
        return [e.player_index for e in self.get_commit_entries()]

    def clear(self) -> None:
        """Remove all entries."""
        self.entries = []
