"""
Game Log Test Suite

Tests for the game log recording system.

Sections:
    1. Individual logging — roll, score, cancel field verification
    2. Filtering — get_turn_entries, get_commit_entries
    3. Clear — empties all entries
    4. Multiplayer — entries with different player_index, play order
"""

from game_engine import CategoryName
from game_log import GameLog

# ── 1. Individual logging ────────────────────────────────────────────────────


def test_log_roll():
    """log_roll creates an entry with correct fields."""
    log = GameLog()
    log.log_roll(turn=1, player_index=0, roll_number=1, dice_values=[1, 2, 3, 4, 5])
    assert len(log.entries) == 1
    e = log.entries[0]
    assert e.turn == 1
    assert e.player_index == 0
    assert e.event_type == "roll"
    assert e.dice_values == (1, 2, 3, 4, 5)
    assert e.roll_number == 1
    assert e.category is None
    assert e.score is None


def test_log_score():
    """log_score creates an entry with category and score."""
    log = GameLog()
    log.log_score(turn=3, player_index=0, category=CategoryName.FULL_HOUSE,
                  score=30, dice_values=[2, 2, 3, 3, 3])
    e = log.entries[0]
    assert e.event_type == "score"
    assert e.category == CategoryName.FULL_HOUSE
    assert e.score == 30
    assert e.dice_values == (2, 2, 3, 3, 3)


def test_log_cancel():
    """log_cancel records the forfeited category with zero score."""
    log = GameLog()
    log.log_cancel(turn=5, player_index=1, category=CategoryName.YAHTZEE,
                   dice_values=[1, 2, 3, 4, 6])
    e = log.entries[0]
    assert e.event_type == "cancel"
    assert e.category == CategoryName.YAHTZEE
    assert e.score == 0
    assert e.player_index == 1


# ── 2. Filtering ─────────────────────────────────────────────────────────────


def test_get_turn_entries():
    """get_turn_entries returns only entries for the specified turn."""
    log = GameLog()
    log.log_roll(turn=1, player_index=0, roll_number=1, dice_values=[1, 1, 1, 1, 1])
    log.log_score(turn=1, player_index=0, category=CategoryName.ONES,
                  score=5, dice_values=[1, 1, 1, 1, 1])
    log.log_roll(turn=2, player_index=0, roll_number=1, dice_values=[2, 2, 2, 2, 2])

    turn1 = log.get_turn_entries(1)
    assert len(turn1) == 2
    assert all(e.turn == 1 for e in turn1)


def test_get_commit_entries():
    """get_commit_entries returns score and cancel events, in order."""
    log = GameLog()
    log.log_roll(turn=1, player_index=0, roll_number=1, dice_values=[1, 2, 3, 4, 5])
    log.log_score(turn=1, player_index=0, category=CategoryName.CHANCE,
                  score=15, dice_values=[1, 2, 3, 4, 5])
    log.log_roll(turn=2, player_index=0, roll_number=1, dice_values=[6, 6, 6, 6, 5])
    log.log_cancel(turn=2, player_index=0, category=CategoryName.YAHTZEE,
                   dice_values=[6, 6, 6, 6, 5])

    commits = log.get_commit_entries(player_index=0)
    assert [e.category for e in commits] == [CategoryName.CHANCE, CategoryName.YAHTZEE]
    assert [e.event_type for e in commits] == ["score", "cancel"]


# ── 3. Clear ──────────────────────────────────────────────────────────────────


def test_clear():
    """clear() empties the log."""
    log = GameLog()
    log.log_roll(turn=1, player_index=0, roll_number=1, dice_values=[1, 2, 3, 4, 5])
    log.log_score(turn=1, player_index=0, category=CategoryName.ONES,
                  score=1, dice_values=[1, 2, 3, 4, 5])
    assert len(log.entries) == 2
    log.clear()
    assert len(log.entries) == 0


# ── 4. Multiplayer ────────────────────────────────────────────────────────────


def test_multiplayer_entries():
    """Entries with different player_index are correctly filtered."""
    log = GameLog()
    log.log_roll(turn=1, player_index=0, roll_number=1, dice_values=[1, 2, 3, 4, 5])
    log.log_score(turn=1, player_index=0, category=CategoryName.ONES,
                  score=1, dice_values=[1, 2, 3, 4, 5])
    log.log_roll(turn=1, player_index=1, roll_number=1, dice_values=[6, 6, 6, 6, 6])
    log.log_score(turn=1, player_index=1, category=CategoryName.SIXES,
                  score=30, dice_values=[6, 6, 6, 6, 6])

    p0_scores = log.get_commit_entries(player_index=0)
    p1_scores = log.get_commit_entries(player_index=1)
    assert [e.score for e in p0_scores] == [1]
    assert [e.score for e in p1_scores] == [30]

    assert len(log.get_turn_entries(1, player_index=0)) == 2
    assert len(log.get_turn_entries(1, player_index=1)) == 2


def test_player_order():
    """player_order lists the seat that ended each round."""
    log = GameLog()
    for turn in (1, 2):
        for seat in (0, 1, 2):
            log.log_roll(turn=turn, player_index=seat, roll_number=1, dice_values=[seat + 1] * 5)
            log.log_cancel(turn=turn, player_index=seat, category=CategoryName.CHANCE,
                           dice_values=[seat + 1] * 5)
    assert log.player_order() == [0, 1, 2, 0, 1, 2]
