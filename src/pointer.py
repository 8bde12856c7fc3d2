# src/pointer.py
"""
Pointer input -> engine events.

Turns pygame mouse / touch events over the board into the grid-coordinate
events the engine understands. A press that moves less than the tap slop
before release counts as a tap on the cell under the pointer; any press
also feeds the drag recognizer, which the engine ignores outside the
claiming phase. Nothing here draws.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
import pygame
from models import Coord, Outcome
import events as ev


class BoardGeometry:
    def __init__(self, rect, grid_size: int):
        self.rect = pygame.Rect(rect)
        self.grid_size = grid_size

    @property
    def cell(self) -> float:
        return self.rect.w / self.grid_size

    def pixel_to_cell(self, x: float, y: float) -> Optional[Coord]:
        r = self.rect
        if not r.collidepoint(int(x), int(y)):
            return None
        n = self.grid_size
        col = min(n - 1, int((x - r.x) // self.cell))
        row = min(n - 1, int((y - r.y) // (r.h / n)))
        return (row, col)


class PointerTracker:
    def __init__(self, geometry: BoardGeometry, tap_slop: int = 5,
                 window_size: Optional[Tuple[int, int]] = None):
        self.geometry = geometry
        self.tap_slop = tap_slop
        self.window_size = window_size  # needed for FINGER* events
        self.down_pos: Optional[Tuple[float, float]] = None
        self.last_cell: Optional[Coord] = None
        self.finger_id: Optional[int] = None

    @property
    def pressed(self) -> bool:
        return self.down_pos is not None

    # ---- pygame events ----
    def translate(self, event) -> List[ev.Event]:
        et = event.type
        if et in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
            if getattr(event, "touch", False):
                return []  # SDL mirrors touches as mouse events; FINGER* handles them
            if et == pygame.MOUSEBUTTONDOWN and event.button == 1:
                return self.press(event.pos)
            if et == pygame.MOUSEMOTION:
                return self.move(event.pos)
            if et == pygame.MOUSEBUTTONUP and event.button == 1:
                return self.release(event.pos)
            return []

        if et in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
            if self.window_size is None:
                return []
            if et == pygame.FINGERDOWN:
                if self.finger_id is not None:
                    return []  # single-finger gestures only
                self.finger_id = event.finger_id
                return self.press(self._finger_pos(event))
            if event.finger_id != self.finger_id:
                return []
            if et == pygame.FINGERMOTION:
                return self.move(self._finger_pos(event))
            self.finger_id = None
            return self.release(self._finger_pos(event))
        return []

    def feed(self, engine, event) -> List[Outcome]:
        return [engine.dispatch(e) for e in self.translate(event)]

    def _finger_pos(self, event) -> Tuple[float, float]:
        w, h = self.window_size
        return (event.x * w, event.y * h)

    # ---- raw positions ----
    def press(self, pos) -> List[ev.Event]:
        self.down_pos = (pos[0], pos[1])
        self.last_cell = self.geometry.pixel_to_cell(*pos)
        if self.last_cell is None:
            return []
        return [ev.DragEnter(*self.last_cell)]

    def move(self, pos) -> List[ev.Event]:
        if self.down_pos is None:
            return []
        cell = self.geometry.pixel_to_cell(*pos)
        if cell is None or cell == self.last_cell:
            return []
        self.last_cell = cell
        return [ev.DragEnter(*cell)]

    def release(self, pos) -> List[ev.Event]:
        if self.down_pos is None:
            return []
        dx = pos[0] - self.down_pos[0]
        dy = pos[1] - self.down_pos[1]
        self.down_pos = None
        self.last_cell = None
        out: List[ev.Event] = []
        if abs(dx) < self.tap_slop and abs(dy) < self.tap_slop:
            cell = self.geometry.pixel_to_cell(*pos)
            if cell is not None:
                out.append(ev.PlacementTap(*cell))
        out.append(ev.DragRelease())
        return out
