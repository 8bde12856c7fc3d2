# src/events.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
from models import Coord


@dataclass(frozen=True)
class ConfigureMatch:
    grid_size: Optional[int] = None
    player_count: Optional[int] = None


@dataclass(frozen=True)
class StartMatch:
    pass


@dataclass(frozen=True)
class PlacementTap:
    row: int
    col: int

    @property
    def cell(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class LetterChosen:
    letter: str


@dataclass(frozen=True)
class DismissSelector:
    pass


@dataclass(frozen=True)
class DragEnter:
    row: int
    col: int

    @property
    def cell(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class DragRelease:
    pass


@dataclass(frozen=True)
class EndTurn:
    pass


@dataclass(frozen=True)
class ResetMatch:
    pass


Event = Union[ConfigureMatch, StartMatch, PlacementTap, LetterChosen, DismissSelector,
              DragEnter, DragRelease, EndTurn, ResetMatch]
