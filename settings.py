"""Persistent settings for Yahtzee.

Stores rules options and the log level in ~/.yahtzee_settings.json.
Missing or unreadable files fall back to the defaults.
"""

import json
from pathlib import Path

from game_engine import Rules

DEFAULTS = {
    "max_throws": 3,
    "of_a_kind_scores_total": False,
    "log_level": "WARNING",
}


def _default_path():
    """Return the default path for the settings file."""
    return Path.home() / ".yahtzee_settings.json"


def load_settings(path=None):
    """Load settings from JSON file. Returns DEFAULTS on missing/corrupt.

    Merges with DEFAULTS so missing keys get default values.
    Unknown keys are ignored.
    """
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        data = json.loads(path.read_text())
        if not isinstance(data, dict):
            return dict(DEFAULTS)
        result = dict(DEFAULTS)
        for key in DEFAULTS:
            if key in data:
                result[key] = data[key]
        return result
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return dict(DEFAULTS)


def save_settings(settings, path=None):
    """Write settings dict to JSON. Silently ignores write errors."""
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        path.write_text(json.dumps(settings, indent=2))
    except OSError:
        pass


def rules_from_settings(settings):
    """Build the rules engine configuration from a settings dict.

    A max_throws that isn't a positive int falls back to the default.
    """
    max_throws = settings.get("max_throws", DEFAULTS["max_throws"])
    if not isinstance(max_throws, int) or isinstance(max_throws, bool) or max_throws < 1:
        max_throws = DEFAULTS["max_throws"]
    return Rules(
        max_throws=max_throws,
        of_a_kind_scores_total=bool(settings.get("of_a_kind_scores_total", False)),
    )
