# src/gesture.py
"""
Turns a noisy drag over the grid into a straight 3-cell line.

The path is built cell by cell as the pointer enters cells:
  - the first cell is the fixed start,
  - the second must touch the start (8-neighbourhood) and sets the direction,
  - the third must continue that direction exactly; anything else that still
    touches the start replaces the second cell ("pivot"),
  - stepping back onto the previous cell undoes the last step.
A completed line is returned immediately and the path starts over.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
from models import Coord

MAX_PATH = 3


def is_adjacent(a: Coord, b: Coord) -> bool:
    return abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


def continuation(start: Coord, mid: Coord) -> Coord:
    dr, dc = mid[0] - start[0], mid[1] - start[1]
    return (mid[0] + dr, mid[1] + dc)


class GesturePath:
    def __init__(self):
        self.path: List[Coord] = []

    def __len__(self) -> int:
        return len(self.path)

    def reset(self) -> None:
        self.path = []

    def release(self) -> None:
        # an unfinished path is simply dropped
        self.reset()

    def enter(self, cell: Coord) -> Optional[Tuple[Coord, Coord, Coord]]:
        """Feed one cell-enter. Returns the finished line when this cell completes it."""
        cell = (cell[0], cell[1])
        prev = self.path

        if not prev:
            self.path = [cell]
            return None
        if cell == prev[-1]:
            return None
        if len(prev) >= 2 and cell == prev[-2]:
            self.path = prev[:-1]
            return None
        if len(prev) >= MAX_PATH:
            return None  # locked until reset

        start = prev[0]
        if len(prev) == 1:
            if is_adjacent(start, cell):
                self.path = [start, cell]
            return None

        mid = prev[1]
        if cell == continuation(start, mid):
            line = (start, mid, cell)
            self.reset()
            return line
        if is_adjacent(start, cell):
            self.path = [start, cell]  # pivot
        return None
