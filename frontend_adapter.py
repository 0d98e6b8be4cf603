"""FrontendAdapter — the presentation side of the event bus.

Listens for state changes, keeps the decision callbacks currently on offer,
and builds the read-only snapshot frontends render from. Pure Python, no
Textual or other frontend dependency: the TUI and the automatic players
both go through it.
"""

from events import STATE_CHANGED, Decisions
from game_engine import BONUS_SCORE, CategoryName
from player import AddCategory, CancelCategory, SelectDice


CATEGORY_ORDER = list(CategoryName)

CATEGORY_TOOLTIPS = {
    CategoryName.ONES: "Sum of all dice showing 1",
    CategoryName.TWOS: "Sum of all dice showing 2",
    CategoryName.THREES: "Sum of all dice showing 3",
    CategoryName.FOURS: "Sum of all dice showing 4",
    CategoryName.FIVES: "Sum of all dice showing 5",
    CategoryName.SIXES: "Sum of all dice showing 6",
    CategoryName.THREE_OF_A_KIND: "At least 3 of the same value",
    CategoryName.FOUR_OF_A_KIND: "At least 4 of the same value",
    CategoryName.FULL_HOUSE: "3 of one + 2 of another = 30",
    CategoryName.SMALL_STRAIGHT: "4 consecutive dice = 30",
    CategoryName.LARGE_STRAIGHT: "5 consecutive dice = 40",
    CategoryName.CHANCE: "Sum of all dice, no pattern needed",
    CategoryName.YAHTZEE: "All 5 dice the same = 50",
}


class FrontendAdapter:
    """Shared state for frontends driving a Game.

    Remembers the most recent decision bundle. A plain notification keeps
    the bundle, except once the game has stopped.
    """

    def __init__(self, game):
        self.game = game
        self.decisions = Decisions()
        self.notifications = 0
        game.bus.on(STATE_CHANGED, self._on_state_changed)

    def _on_state_changed(self, event_name, payload=None):
        self.notifications += 1
        if payload is not None:
            self.decisions = payload
        elif not self.game.has_started:
            self.decisions = Decisions()

    # ── What is on offer ──────────────────────────────────────────────────

    @property
    def can_select_dice(self):
        return self.decisions.select_dice is not None

    @property
    def can_choose_category(self):
        return self.decisions.select_category_to_add is not None

    # ── Game actions ──────────────────────────────────────────────────────

    def select_dice(self, indices):
        """Throw the given dice. Returns True if the decision was taken."""
        if self.decisions.select_dice is None:
            return False
        return self.decisions.select_dice(list(indices))

    def add_category(self, name):
        """Commit a category from the current menu. Returns True if taken."""
        if self.decisions.select_category_to_add is None:
            return False
        return self.decisions.select_category_to_add(name)

    def cancel_category(self, name):
        """Forfeit an unused category. Returns True if taken."""
        if self.decisions.select_category_to_cancel is None:
            return False
        return self.decisions.select_category_to_cancel(name)

    def apply(self, decision):
        """Route a decision message to the matching callback."""
        if isinstance(decision, SelectDice):
            return self.select_dice(decision.indices)
        if isinstance(decision, AddCategory):
            return self.add_category(decision.name)
        if isinstance(decision, CancelCategory):
            return self.cancel_category(decision.name)
        return False

    # ── Full state snapshot ───────────────────────────────────────────────

    def get_game_snapshot(self):
        return get_game_snapshot(self.game)


def _player_ref(player):
    return {"id": player.id, "name": player.name}


def _category_rows(game, player):
    rows = []
    for name in CATEGORY_ORDER:
        done = player.scoreboard.get(name)
        possible = player.menu_entry(name)
        rows.append({
            "name": name.value,
            "is_already_done": done is not None,
            "is_cancelled": player.scoreboard.is_cancelled(name),
            "score": done.score if done is not None else 0,
            "is_selectable": game.has_started and possible is not None,
            "score_if_selected": possible.score if possible is not None else 0,
        })
    return rows


def get_game_snapshot(game):
    """Return a complete JSON-serializable dict of game state."""
    current = game.current_player

    players = []
    for player in game.players:
        players.append({
            "id": player.id,
            "name": player.name,
            "score": player.scoreboard.total,
            "has_bonus": player.scoreboard.has_bonus,
            "bonus_amount": BONUS_SCORE,
            "is_current": current is not None and current.id == player.id,
            "is_done": player.done,
            "remaining_throws": player.remaining_throws,
            "categories": _category_rows(game, player),
        })

    current_hand = None
    if current is not None and current.hand.is_rolled:
        current_hand = [
            {"name": face, "value": value}
            for face, value in zip(current.hand.face_names, current.hand.values)
        ]

    return {
        "has_started": game.has_started,
        "is_done": game.is_done,
        "turn": game.turn,
        "current_player": _player_ref(current) if current is not None else None,
        "leaders": [_player_ref(p) for p in game.leaders],
        "players": players,
        "current_hand": current_hand,
    }
