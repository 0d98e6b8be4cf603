"""
Yahtzee TUI — Terminal-based frontend using Textual.

Keyboard-driven: mark dice with 1-5, throw with space, move through the
scorecard with the arrow keys, commit with enter or cancel with x.
Computer players take their turns on a timer.
"""
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Footer, Header, Static

from ai import make_strategy, play_step
from dice import NUM_DICE
from events import STATE_CHANGED
from frontend_adapter import CATEGORY_ORDER, CATEGORY_TOOLTIPS, FrontendAdapter
from game_coordinator import Game
from game_engine import DEFAULT_RULES


# ── Unicode die faces ─────────────────────────────────────────────────────────

DIE_FACES = {1: "⚀", 2: "⚁", 3: "⚂", 4: "⚃", 5: "⚄", 6: "⚅"}


def render_dice(hand, marked):
    """Dice faces with their key labels; dice marked for re-roll are highlighted."""
    if not hand.is_rolled:
        return "[dim]Press space to throw the dice[/dim]"
    faces = []
    labels = []
    for i, value in enumerate(hand.values):
        face = f"{DIE_FACES[value]} {value}"
        faces.append(f"[reverse]{face}[/reverse]" if i in marked else face)
        labels.append(f"[{i + 1}]{'*' if i in marked else ' '}")
    return "   ".join(faces) + "\n" + " ".join(label.ljust(5) for label in labels)


def format_cell(row, is_current):
    """Scorecard cell for one category of one player."""
    if row["is_cancelled"]:
        return "  x"
    if row["is_already_done"]:
        return f"{row['score']:>3}"
    if is_current and row["is_selectable"]:
        return f"[green]({row['score_if_selected']})[/green]"
    return "[dim]  —[/dim]"


class YahtzeeApp(App):
    """Textual app for one local game."""

    CSS = """
    #game-area { height: 1fr; }
    #dice-panel { width: 44; padding: 1 2; }
    #dice-display { height: 3; }
    #status-display { margin-top: 1; }
    #scorecard { width: 1fr; }
    """

    BINDINGS = [
        Binding("space", "throw", "Throw", show=True),
        Binding("1", "mark(0)", "Mark 1"),
        Binding("2", "mark(1)", "Mark 2"),
        Binding("3", "mark(2)", "Mark 3"),
        Binding("4", "mark(3)", "Mark 4"),
        Binding("5", "mark(4)", "Mark 5"),
        Binding("enter", "score", "Score", show=True),
        Binding("x", "cancel_category", "Cancel category", show=True),
        Binding("escape", "quit", "Quit"),
    ]

    def __init__(self, players, bots=(), strategy="greedy", rules=DEFAULT_RULES):
        super().__init__()
        self.game = Game(rules=rules)
        self.bot_ids = set()
        for name in players:
            self.game.add_player(name)
        for name in bots:
            self.bot_ids.add(self.game.add_player(name).id)
        self.strategy = make_strategy(strategy)
        self.marked = set()
        self.adapter = FrontendAdapter(self.game)
        self.game.bus.on(STATE_CHANGED, self._on_state_changed)
        self._bot_timer = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="round-display")
        with Horizontal(id="game-area"):
            with Vertical(id="dice-panel"):
                yield Static("", id="dice-display")
                yield Static("", id="status-display")
            yield DataTable(id="scorecard", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self):
        self.title = "Yahtzee"
        table = self.query_one("#scorecard", DataTable)
        table.add_columns("Category", *(p.name for p in self.game.players))
        self.game.start()
        self._bot_timer = self.set_interval(0.6, self._bot_tick)
        self._refresh_display()

    def _on_state_changed(self, event_name, payload=None):
        # A new round starts with nothing marked
        player = self.game.current_player
        if player is not None and not player.hand.is_rolled:
            self.marked.clear()

    # ── Display ──────────────────────────────────────────────────────────

    def _refresh_display(self):
        snapshot = self.adapter.get_game_snapshot()
        player = self.game.current_player

        self.query_one("#round-display", Static).update(self._round_text(snapshot))
        self.query_one("#dice-display", Static).update(
            render_dice(player.hand, self.marked) if player is not None else "")
        self.query_one("#status-display", Static).update(self._status_text(snapshot))

        table = self.query_one("#scorecard", DataTable)
        cursor_row = table.cursor_row
        table.clear()
        for index, name in enumerate(CATEGORY_ORDER):
            cells = [format_cell(p["categories"][index], p["is_current"]) for p in snapshot["players"]]
            table.add_row(name.value, *cells)
        table.add_row("Bonus", *(f"{p['bonus_amount'] if p['has_bonus'] else 0:>3}"
                                 for p in snapshot["players"]))
        table.add_row("[bold]Total[/bold]", *(f"[bold]{p['score']:>3}[/bold]"
                                              for p in snapshot["players"]))
        table.move_cursor(row=min(cursor_row, len(CATEGORY_ORDER) - 1))

    def _round_text(self, snapshot):
        parts = []
        for p in snapshot["players"]:
            marker = "▸" if p["is_current"] and snapshot["has_started"] else " "
            parts.append(f"{marker}{p['name']}:{p['score']}")
        return f"Turn {snapshot['turn']}/{len(CATEGORY_ORDER)} | " + "  ".join(parts)

    def _status_text(self, snapshot):
        if snapshot["is_done"]:
            winners = ", ".join(p["name"] for p in snapshot["leaders"])
            return f"[bold]GAME OVER![/bold]\nWinner: {winners}\n\n[dim]Press escape to quit[/dim]"
        player = self.game.current_player
        if player is None:
            return ""
        lines = [f"[bold]{player.name}'s turn[/bold]"]
        if player.id in self.bot_ids:
            lines.append("[dim]Computer is thinking...[/dim]")
        elif player.hand.is_rolled:
            lines.append(f"Throws left: {player.remaining_throws}")
        name = self._selected_category()
        if name is not None and player.hand.is_rolled:
            lines.append(f"\n[dim]{name.value}: {CATEGORY_TOOLTIPS[name]}[/dim]")
        return "\n".join(lines)

    def _selected_category(self):
        row = self.query_one("#scorecard", DataTable).cursor_row
        if 0 <= row < len(CATEGORY_ORDER):
            return CATEGORY_ORDER[row]
        return None

    # ── Actions ──────────────────────────────────────────────────────────

    def _human_turn(self):
        player = self.game.current_player
        return self.game.has_started and player is not None and player.id not in self.bot_ids

    def action_throw(self):
        if not self._human_turn() or not self.adapter.can_select_dice:
            return
        indices = sorted(self.marked) or range(NUM_DICE)
        self.marked.clear()
        self.adapter.select_dice(indices)
        self._refresh_display()

    def action_mark(self, index):
        player = self.game.current_player
        if not self._human_turn() or not player.hand.is_rolled:
            return
        self.marked ^= {index}
        self._refresh_display()

    def action_score(self):
        name = self._selected_category()
        if not self._human_turn() or name is None:
            return
        if not self.adapter.add_category(name):
            self.notify(f"{name.value} can't be scored with these dice", severity="warning")
        self._refresh_display()

    def action_cancel_category(self):
        name = self._selected_category()
        if not self._human_turn() or name is None:
            return
        if not self.adapter.cancel_category(name):
            self.notify(f"{name.value} is already used", severity="warning")
        self._refresh_display()

    def on_data_table_row_selected(self, event):
        # The focused table takes the enter key before the app binding does
        self.action_score()

    def on_data_table_row_highlighted(self, event):
        if self.game.current_player is not None:
            self.query_one("#status-display", Static).update(
                self._status_text(self.adapter.get_game_snapshot()))

    def _bot_tick(self):
        """One computer decision per tick, so humans can follow along."""
        player = self.game.current_player
        if not self.game.has_started or player is None or player.id not in self.bot_ids:
            return
        play_step(self.adapter, self.strategy)
        self._refresh_display()


def run(args, rules=DEFAULT_RULES):
    """Start the TUI from parsed command-line arguments."""
    players = args.players or ([] if args.bots else ["Player 1"])
    app = YahtzeeApp(players=players, bots=args.bots, strategy=args.strategy, rules=rules)
    app.run()
