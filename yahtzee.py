#!/usr/bin/env python3
"""
Unified entry point for Yahtzee.

Usage:
    python yahtzee.py Alice Bob                     # Terminal game for two
    python yahtzee.py Alice --bots Robo             # Alice against the computer
    python yahtzee.py --ui auto --bots A B C        # Computer-only game, results printed
    python yahtzee.py --ui auto --bots A --seed 7   # Reproducible run
    python yahtzee.py --max-throws 4 --save-settings # Remember a house rule
"""
import logging
import random

from game_coordinator import parse_args
from settings import load_settings, rules_from_settings, save_settings


def run_auto(args, rules):
    """Let the computer play every seat and print the final scores."""
    from ai import make_strategy, play_game

    names = list(args.players) + list(args.bots) or ["Player 1"]
    game = play_game(names, strategy=make_strategy(args.strategy), rules=rules)
    for player in game.players:
        bonus = " (bonus)" if player.scoreboard.has_bonus else ""
        print(f"{player.name}: {player.scoreboard.total}{bonus}")
    print("Winner: " + ", ".join(p.name for p in game.leaders))
    return game


def apply_overrides(settings, args):
    """Settings with the command-line options that were given laid over them."""
    settings = dict(settings)
    overrides = {
        "log_level": args.log_level,
        "max_throws": args.max_throws,
        "of_a_kind_scores_total": args.sum_of_a_kind,
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings


def main(argv=None):
    args = parse_args(argv)
    settings = apply_overrides(load_settings(args.settings), args)
    if args.save_settings:
        save_settings(settings, args.settings)
    level = settings["log_level"]
    rules = rules_from_settings(settings)

    if args.seed is not None:
        random.seed(args.seed)

    if args.ui == "auto":
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        run_auto(args, rules)

    elif args.ui == "tui":
        # Log lines would draw over the screen; send them to the Textual console
        from textual.logging import TextualHandler
        logging.basicConfig(level=level, handlers=[TextualHandler()])
        from tui import run as run_tui
        run_tui(args, rules)


if __name__ == "__main__":
    main()
