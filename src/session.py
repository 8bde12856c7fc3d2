# src/session.py
# Glue between the file-backed settings and a fresh engine. The engine
# itself never touches the disk.
from __future__ import annotations
import logging
from engine import Engine
from errors import InvalidSettingError
from models import Outcome
from pointer import BoardGeometry, PointerTracker
import storage

logger = logging.getLogger(__name__)


def create_engine() -> Engine:
    rules = storage.load_rules()
    prefs = storage.load_preferences()
    try:
        return Engine(rules, grid_size=prefs["grid_size"], player_count=prefs["player_count"])
    except InvalidSettingError as e:
        # stale preferences from an older rules file
        logger.warning("ignoring saved preferences: %s", e)
        return Engine(rules)


def start_match(engine: Engine) -> Outcome:
    outcome = engine.start()
    remember_settings(engine)
    return outcome


def remember_settings(engine: Engine) -> None:
    st = engine.state
    storage.save_preferences({"grid_size": st.grid_size, "player_count": st.player_count})


def create_pointer(engine: Engine, board_rect, window_size=None) -> PointerTracker:
    # window_size (w, h) enables touch; FINGER* positions are window-relative
    geometry = BoardGeometry(board_rect, engine.state.grid_size)
    return PointerTracker(geometry, tap_slop=engine.rules.tap_slop_px,
                          window_size=window_size)
