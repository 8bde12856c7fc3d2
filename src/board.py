# src/board.py
from __future__ import annotations
from typing import List, Optional, Sequence, Set, Tuple
from models import Cell, Coord, LETTERS, LETTER_O, LETTER_S, ScoredLine
from errors import InvalidLetterError, OutOfBoundsError


class Grid:
    """NxN letter matrix. Cells are written once and never rewritten."""

    def __init__(self, size: int):
        self.size = size
        self.cells: List[List[Cell]] = [[None for _ in range(size)] for _ in range(size)]

    # ---- reads ----
    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def check_bounds(self, coord: Coord) -> None:
        r, c = coord
        if not self.in_bounds(r, c):
            raise OutOfBoundsError("coordinate outside grid",
                                   {"row": r, "col": c, "size": self.size})

    def get(self, coord: Coord) -> Cell:
        self.check_bounds(coord)
        r, c = coord
        return self.cells[r][c]

    def is_empty(self, coord: Coord) -> bool:
        return self.get(coord) is None

    def is_full(self) -> bool:
        return all(cell is not None for row in self.cells for cell in row)

    def empty_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is None)

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self.cells)

    # ---- writes ----
    def place_letter(self, coord: Coord, letter: str) -> bool:
        """Write letter into an empty in-bounds cell. False means nothing changed."""
        if letter not in LETTERS:
            raise InvalidLetterError("letter must be S or O", {"letter": letter})
        r, c = coord
        if not self.in_bounds(r, c) or self.cells[r][c] is not None:
            return False
        self.cells[r][c] = letter
        return True


def canonical_order(path: Sequence[Coord]) -> List[Coord]:
    # row first, then col; same result for either drag direction
    return sorted(path)


def line_id(first: Coord, last: Coord) -> str:
    return f"{first[0]},{first[1]}-{last[0]},{last[1]}"


def spells_sos(grid: Grid, path: Sequence[Coord]) -> bool:
    first, middle, last = canonical_order(path)
    return (grid.get(first) == LETTER_S
            and grid.get(middle) == LETTER_O
            and grid.get(last) == LETTER_S)


class LineLedger:
    """Every scored line, keyed by canonical id. Lines are never removed."""

    def __init__(self):
        self._ids: Set[str] = set()
        self.lines: List[ScoredLine] = []

    def __contains__(self, lid: str) -> bool:
        return lid in self._ids

    def __len__(self) -> int:
        return len(self.lines)

    def try_register(self, lid: str) -> bool:
        """True if lid was new. Registering an existing id changes nothing."""
        if lid in self._ids:
            return False
        self._ids.add(lid)
        return True

    def record(self, line: ScoredLine) -> None:
        self.lines.append(line)

    def get(self, lid: str) -> Optional[ScoredLine]:
        return next((ln for ln in self.lines if ln.line_id == lid), None)
