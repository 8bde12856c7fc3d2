import os
import sys
import pytest

# Ensure src/ (flat modules) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
SRC_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..', 'src'))
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)
os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

from engine import Engine
from models import LETTER_O, LETTER_S


def fill(engine, letters):
    """Write letters straight into the grid: {(r, c): 'S' | 'O'}."""
    for (r, c), letter in letters.items():
        engine.state.grid.cells[r][c] = letter


def place(engine, r, c, letter):
    """Tap a cell and pick a letter, asserting both are accepted."""
    assert engine.tap_cell(r, c).accepted
    assert engine.choose_letter(letter).accepted


def drag(engine, *cells):
    """Enter each cell in order; return the last outcome."""
    outcome = None
    for r, c in cells:
        outcome = engine.drag_enter(r, c)
    return outcome


@pytest.fixture()
def engine():
    eng = Engine()
    eng.start()
    return eng


@pytest.fixture()
def sos_row(engine):
    # S O S across row 0, current player still in placement
    fill(engine, {(0, 0): LETTER_S, (0, 1): LETTER_O, (0, 2): LETTER_S})
    return engine
