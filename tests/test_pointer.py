import pygame
import pytest

import events as ev
from conftest import fill
from models import Phase
from pointer import BoardGeometry, PointerTracker

# 7x7 board, 50px cells, top-left at (100, 50)
BOARD = (100, 50, 350, 350)


def center(r, c):
    return (100 + c * 50 + 25, 50 + r * 50 + 25)


def mouse(kind, pos, button=1):
    if kind == pygame.MOUSEMOTION:
        return pygame.event.Event(kind, pos=pos, rel=(0, 0), buttons=(1, 0, 0))
    return pygame.event.Event(kind, pos=pos, button=button)


@pytest.fixture()
def tracker():
    return PointerTracker(BoardGeometry(BOARD, 7))


def test_pixel_to_cell():
    geo = BoardGeometry(BOARD, 7)
    assert geo.pixel_to_cell(100, 50) == (0, 0)
    assert geo.pixel_to_cell(*center(3, 5)) == (3, 5)
    assert geo.pixel_to_cell(449, 399) == (6, 6)
    assert geo.pixel_to_cell(99, 60) is None
    assert geo.pixel_to_cell(450, 60) is None


def test_short_press_is_a_tap(tracker):
    down = tracker.translate(mouse(pygame.MOUSEBUTTONDOWN, center(2, 3)))
    assert down == [ev.DragEnter(2, 3)]
    x, y = center(2, 3)
    up = tracker.translate(mouse(pygame.MOUSEBUTTONUP, (x + 2, y - 3)))
    assert up == [ev.PlacementTap(2, 3), ev.DragRelease()]
    assert not tracker.pressed


def test_drag_emits_each_new_cell_once(tracker):
    out = []
    out += tracker.translate(mouse(pygame.MOUSEBUTTONDOWN, center(0, 0)))
    x, y = center(0, 0)
    out += tracker.translate(mouse(pygame.MOUSEMOTION, (x + 10, y)))
    out += tracker.translate(mouse(pygame.MOUSEMOTION, center(0, 1)))
    out += tracker.translate(mouse(pygame.MOUSEMOTION, center(0, 2)))
    out += tracker.translate(mouse(pygame.MOUSEBUTTONUP, center(0, 2)))
    assert out == [ev.DragEnter(0, 0), ev.DragEnter(0, 1), ev.DragEnter(0, 2), ev.DragRelease()]


def test_motion_without_press_is_ignored(tracker):
    assert tracker.translate(mouse(pygame.MOUSEMOTION, center(1, 1))) == []
    assert tracker.translate(mouse(pygame.MOUSEBUTTONUP, center(1, 1))) == []


def test_off_board_press_still_releases(tracker):
    assert tracker.translate(mouse(pygame.MOUSEBUTTONDOWN, (10, 10))) == []
    assert tracker.translate(mouse(pygame.MOUSEBUTTONUP, (10, 10))) == [ev.DragRelease()]


def test_right_button_ignored(tracker):
    assert tracker.translate(mouse(pygame.MOUSEBUTTONDOWN, center(1, 1), button=3)) == []


def test_touch_mirrored_mouse_events_ignored(tracker):
    e = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=center(1, 1), button=1, touch=True)
    assert tracker.translate(e) == []


def test_finger_events_use_window_size():
    tracker = PointerTracker(BoardGeometry(BOARD, 7), window_size=(550, 450))
    x, y = center(4, 2)
    down = pygame.event.Event(pygame.FINGERDOWN, finger_id=7, x=x / 550, y=y / 450, dx=0, dy=0)
    up = pygame.event.Event(pygame.FINGERUP, finger_id=7, x=x / 550, y=y / 450, dx=0, dy=0)
    assert tracker.translate(down) == [ev.DragEnter(4, 2)]
    assert tracker.translate(up) == [ev.PlacementTap(4, 2), ev.DragRelease()]


def test_second_finger_ignored():
    tracker = PointerTracker(BoardGeometry(BOARD, 7), window_size=(550, 450))
    first = pygame.event.Event(pygame.FINGERDOWN, finger_id=1, x=0.3, y=0.3, dx=0, dy=0)
    second = pygame.event.Event(pygame.FINGERDOWN, finger_id=2, x=0.5, y=0.5, dx=0, dy=0)
    tracker.translate(first)
    assert tracker.translate(second) == []


def test_feed_drives_the_engine(engine):
    tracker = PointerTracker(BoardGeometry(BOARD, 7))
    fill(engine, {(0, 0): 'S', (0, 1): 'O', (0, 2): 'S'})
    tracker.feed(engine, mouse(pygame.MOUSEBUTTONDOWN, center(5, 5)))
    tracker.feed(engine, mouse(pygame.MOUSEBUTTONUP, center(5, 5)))
    assert engine.snapshot().pending_cell == (5, 5)
    engine.choose_letter('O')
    assert engine.phase == Phase.CLAIMING

    outcomes = tracker.feed(engine, mouse(pygame.MOUSEBUTTONDOWN, center(0, 0)))
    outcomes += tracker.feed(engine, mouse(pygame.MOUSEMOTION, center(0, 1)))
    outcomes += tracker.feed(engine, mouse(pygame.MOUSEMOTION, center(0, 2)))
    outcomes += tracker.feed(engine, mouse(pygame.MOUSEBUTTONUP, center(0, 2)))
    assert [o.scored.line_id for o in outcomes if o.scored] == ['0,0-0,2']
    assert engine.snapshot().players[0].score == 1
