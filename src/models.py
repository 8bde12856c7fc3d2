# src/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

Cell = Optional[str]  # None, 'S' or 'O'
Coord = Tuple[int, int]  # (row, col)

LETTER_S = "S"
LETTER_O = "O"
LETTERS = (LETTER_S, LETTER_O)

GRID_SIZES = [7, 8, 9]
PLAYER_COUNTS = [2, 3, 4]
PLAYER_COLORS = ["#FF5733", "#33FF57", "#3357FF", "#F333FF"]

DEFAULT_GRID_SIZE = 7
DEFAULT_PLAYER_COUNT = 2

MUST_PLACE_FIRST = "Place a letter first!"


class Phase(str, Enum):
    SETUP = "setup"
    PLACEMENT = "placement"
    CLAIMING = "claiming"
    GAME_OVER = "game_over"


@dataclass
class Player:
    pid: int       # stable index in turn order
    name: str
    color: str
    score: int = 0


@dataclass(frozen=True)
class ScoredLine:
    line_id: str   # "r1,c1-r3,c3", endpoints in (row, col) order
    start: Coord
    end: Coord
    color: str


@dataclass(frozen=True)
class Outcome:
    """Result of feeding one event to the engine.

    accepted is False both for silently ignored input (message is None) and
    for rule rejections the player should see (message is set).
    """
    accepted: bool
    message: Optional[str] = None
    scored: Optional[ScoredLine] = None


IGNORED = Outcome(False)
ACCEPTED = Outcome(True)


@dataclass(frozen=True)
class Standings:
    ranking: Tuple[Player, ...]
    is_draw: bool

    @property
    def winner(self) -> Optional[Player]:
        if self.is_draw or not self.ranking:
            return None
        return self.ranking[0]


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the presentation layer after each event."""
    phase: Phase
    grid_size: int
    player_count: int
    grid: Tuple[Tuple[Cell, ...], ...]
    players: Tuple[Player, ...]
    current_idx: int
    pending_cell: Optional[Coord]
    drag_path: Tuple[Coord, ...]
    scored_lines: Tuple[ScoredLine, ...]
    bonus_placement: bool
    has_placed: bool

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_idx]


@dataclass
class Rules:
    allowed_grid_sizes: List[int] = field(default_factory=lambda: list(GRID_SIZES))
    allowed_player_counts: List[int] = field(default_factory=lambda: list(PLAYER_COUNTS))
    player_colors: List[str] = field(default_factory=lambda: list(PLAYER_COLORS))
    tap_slop_px: int = 5
