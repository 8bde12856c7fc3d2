# src/roster.py
from __future__ import annotations
from dataclasses import replace
from typing import List, Optional, Sequence
from models import PLAYER_COLORS, Player, Standings
from errors import InvalidSettingError


class Roster:
    def __init__(self, count: int, colors: Optional[Sequence[str]] = None):
        colors = list(colors if colors is not None else PLAYER_COLORS)
        if count < 2:
            raise InvalidSettingError("a match needs at least two players", {"count": count})
        if count > len(colors):
            raise InvalidSettingError("not enough colors for player count",
                                      {"count": count, "colors": len(colors)})
        self.players: List[Player] = [
            Player(pid=i, name=f"P{i + 1}", color=colors[i]) for i in range(count)
        ]
        self.current_idx = 0

    def __len__(self) -> int:
        return len(self.players)

    def current(self) -> Player:
        return self.players[self.current_idx]

    def advance_turn(self) -> Player:
        self.current_idx = (self.current_idx + 1) % len(self.players)
        return self.current()

    def award(self, idx: int) -> int:
        pl = self.players[idx]
        pl.score += 1
        return pl.score

    def standings(self) -> Standings:
        # sorted() is stable, so tied players keep turn order.
        # draw = ranks 1 and 2 share a score; lower ranks are never compared
        ranking = sorted(self.players, key=lambda p: p.score, reverse=True)
        is_draw = len(ranking) > 1 and ranking[0].score == ranking[1].score
        return Standings(ranking=tuple(replace(p) for p in ranking), is_draw=is_draw)
