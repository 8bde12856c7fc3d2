# src/storage.py
from __future__ import annotations
import os, json, logging, copy
from dataclasses import asdict
from typing import Any, Dict
from models import DEFAULT_GRID_SIZE, DEFAULT_PLAYER_COUNT, GRID_SIZES, PLAYER_COLORS, PLAYER_COUNTS, Rules

logger = logging.getLogger(__name__)

DATA_DIR = os.environ.get("SOS_DATA_DIR") or os.path.join("data")
RULES_FILE = "rules.json"
PREFERENCES_FILE = "preferences.json"

DEFAULT_RULES = {
    "allowed_grid_sizes": list(GRID_SIZES),
    "allowed_player_counts": list(PLAYER_COUNTS),
    "player_colors": list(PLAYER_COLORS),
    "tap_slop_px": 5,
}

DEFAULT_PREFERENCES = {
    "grid_size": DEFAULT_GRID_SIZE,
    "player_count": DEFAULT_PLAYER_COUNT,
}


def rules_path() -> str:
    return os.path.join(DATA_DIR, RULES_FILE)


def preferences_path() -> str:
    return os.path.join(DATA_DIR, PREFERENCES_FILE)


def _safe_read_json(path: str, default: Dict[str, Any]) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("could not read %s, using defaults: %s", path, e)
        return copy.deepcopy(default)
    if not isinstance(data, dict):
        logger.warning("%s is not a JSON object, using defaults", path)
        return copy.deepcopy(default)
    # unknown keys dropped, missing keys filled in
    merged = copy.deepcopy(default)
    merged.update({k: v for k, v in data.items() if k in default})
    return merged


def _safe_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_rules() -> Rules:
    path = rules_path()
    if not os.path.exists(path):
        _safe_write_json(path, DEFAULT_RULES)
    return Rules(**_safe_read_json(path, DEFAULT_RULES))


def save_rules(rules: Rules) -> None:
    _safe_write_json(rules_path(), asdict(rules))


def load_preferences() -> Dict[str, Any]:
    """Last grid size / player count picked in setup."""
    path = preferences_path()
    if not os.path.exists(path):
        _safe_write_json(path, DEFAULT_PREFERENCES)
    return _safe_read_json(path, DEFAULT_PREFERENCES)


def save_preferences(preferences: Dict[str, Any]) -> None:
    _safe_write_json(preferences_path(), preferences)
