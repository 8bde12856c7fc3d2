# src/engine.py
from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional, Tuple
from models import (
    ACCEPTED, DEFAULT_GRID_SIZE, DEFAULT_PLAYER_COUNT, IGNORED, LETTERS, MUST_PLACE_FIRST,
    Coord, Outcome, Phase, Rules, ScoredLine, Snapshot, Standings,
)
from board import Grid, LineLedger, canonical_order, line_id, spells_sos
from roster import Roster
from gesture import GesturePath
from errors import InvalidLetterError, InvalidSettingError, PhaseError
import events as ev

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    grid_size: int = DEFAULT_GRID_SIZE
    player_count: int = DEFAULT_PLAYER_COUNT
    phase: Phase = Phase.SETUP
    grid: Optional[Grid] = None
    roster: Optional[Roster] = None
    ledger: LineLedger = field(default_factory=LineLedger)
    gesture: GesturePath = field(default_factory=GesturePath)
    pending_cell: Optional[Coord] = None
    has_placed: bool = False       # a letter went down this turn
    bonus_placement: bool = False  # earned by a slash, spent by the next placement


def validate_rules(rules: Rules) -> None:
    if not rules.allowed_grid_sizes or not rules.allowed_player_counts:
        raise InvalidSettingError("rules need at least one grid size and player count")
    if min(rules.allowed_grid_sizes) < 3:
        raise InvalidSettingError("grid too small for a line",
                                  {"sizes": rules.allowed_grid_sizes})
    if min(rules.allowed_player_counts) < 2:
        raise InvalidSettingError("a match needs at least two players",
                                  {"counts": rules.allowed_player_counts})
    if max(rules.allowed_player_counts) > len(rules.player_colors):
        raise InvalidSettingError("palette smaller than largest player count",
                                  {"colors": len(rules.player_colors),
                                   "counts": rules.allowed_player_counts})


def _first_allowed(default: int, allowed) -> int:
    return default if default in allowed else allowed[0]


class Engine:
    """
    Single owner of a match: grid, roster, scored lines, phase and the
    in-progress gesture. Every input is one method call that runs to
    completion; the presentation layer reads snapshot() afterwards.
    """

    def __init__(self, rules: Optional[Rules] = None,
                 grid_size: Optional[int] = None,
                 player_count: Optional[int] = None):
        self.rules = rules or Rules()
        validate_rules(self.rules)
        self.state = GameState()
        if grid_size is None:
            grid_size = _first_allowed(DEFAULT_GRID_SIZE, self.rules.allowed_grid_sizes)
        if player_count is None:
            player_count = _first_allowed(DEFAULT_PLAYER_COUNT, self.rules.allowed_player_counts)
        self.configure(grid_size, player_count)
        self._handlers: Dict[type, Callable[..., Outcome]] = {
            ev.ConfigureMatch: lambda e: self.configure(e.grid_size, e.player_count),
            ev.StartMatch: lambda e: self.start(),
            ev.PlacementTap: lambda e: self.tap_cell(e.row, e.col),
            ev.LetterChosen: lambda e: self.choose_letter(e.letter),
            ev.DismissSelector: lambda e: self.dismiss_selector(),
            ev.DragEnter: lambda e: self.drag_enter(e.row, e.col),
            ev.DragRelease: lambda e: self.drag_release(),
            ev.EndTurn: lambda e: self.end_turn(),
            ev.ResetMatch: lambda e: self.reset(),
        }

    # ---- helpers ----
    @property
    def phase(self) -> Phase:
        return self.state.phase

    def _set_phase(self, phase: Phase) -> None:
        st = self.state
        if st.phase != phase:
            logger.debug("phase %s -> %s", st.phase.value, phase.value)
        st.phase = phase
        st.gesture.reset()

    def _require(self, *phases: Phase, action: str) -> None:
        if self.state.phase not in phases:
            raise PhaseError(f"cannot {action} now",
                             {"phase": self.state.phase.value})

    def placement_allowed(self) -> bool:
        st = self.state
        return st.phase == Phase.PLACEMENT or (st.phase == Phase.CLAIMING and st.bonus_placement)

    def dispatch(self, event: ev.Event) -> Outcome:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"unknown event: {event!r}")
        return handler(event)

    # ---- setup ----
    def configure(self, grid_size: Optional[int] = None,
                  player_count: Optional[int] = None) -> Outcome:
        self._require(Phase.SETUP, action="change settings")
        if grid_size is not None and grid_size not in self.rules.allowed_grid_sizes:
            raise InvalidSettingError("grid size not allowed",
                                      {"grid_size": grid_size,
                                       "allowed": self.rules.allowed_grid_sizes})
        if player_count is not None and player_count not in self.rules.allowed_player_counts:
            raise InvalidSettingError("player count not allowed",
                                      {"player_count": player_count,
                                       "allowed": self.rules.allowed_player_counts})
        if grid_size is not None:
            self.state.grid_size = grid_size
        if player_count is not None:
            self.state.player_count = player_count
        return ACCEPTED

    def start(self) -> Outcome:
        self._require(Phase.SETUP, action="start a match")
        st = self.state
        st.grid = Grid(st.grid_size)
        st.roster = Roster(st.player_count, self.rules.player_colors)
        st.ledger = LineLedger()
        st.pending_cell = None
        st.has_placed = False
        st.bonus_placement = False
        self._set_phase(Phase.PLACEMENT)
        logger.info("match started: %dx%d grid, %d players",
                    st.grid_size, st.grid_size, st.player_count)
        return ACCEPTED

    def reset(self) -> Outcome:
        # keeps grid_size / player_count for the next setup
        st = self.state
        st.grid = None
        st.roster = None
        st.ledger = LineLedger()
        st.pending_cell = None
        st.has_placed = False
        st.bonus_placement = False
        self._set_phase(Phase.SETUP)
        return ACCEPTED

    # ---- placement ----
    def tap_cell(self, r: int, c: int) -> Outcome:
        if not self.placement_allowed():
            return IGNORED
        st = self.state
        cell = (r, c)
        if not st.grid.is_empty(cell):
            st.pending_cell = None
            return IGNORED
        st.pending_cell = None if st.pending_cell == cell else cell
        return ACCEPTED

    def dismiss_selector(self) -> Outcome:
        if self.state.pending_cell is None:
            return IGNORED
        self.state.pending_cell = None
        return ACCEPTED

    def choose_letter(self, letter: str) -> Outcome:
        if letter not in LETTERS:
            raise InvalidLetterError("letter must be S or O", {"letter": letter})
        st = self.state
        if st.pending_cell is None or not self.placement_allowed():
            return IGNORED
        cell = st.pending_cell
        st.pending_cell = None
        if not st.grid.place_letter(cell, letter):
            return IGNORED
        logger.debug("%s placed %s at %s", st.roster.current().name, letter, cell)
        if st.phase == Phase.PLACEMENT:
            st.has_placed = True
            self._set_phase(Phase.CLAIMING)
        else:
            st.bonus_placement = False
        return ACCEPTED

    # ---- claiming ----
    def drag_enter(self, r: int, c: int) -> Outcome:
        st = self.state
        if st.phase != Phase.CLAIMING:
            return IGNORED
        st.grid.check_bounds((r, c))
        line = st.gesture.enter((r, c))
        if line is None:
            return ACCEPTED
        return self._slash(line)

    def drag_release(self) -> Outcome:
        gesture = self.state.gesture
        if not len(gesture):
            return IGNORED
        gesture.release()
        return ACCEPTED

    def _slash(self, line: Tuple[Coord, Coord, Coord]) -> Outcome:
        st = self.state
        scored = self._score(line)
        if st.grid.is_full():
            self._set_phase(Phase.GAME_OVER)
            logger.info("grid full, match over")
        return Outcome(scored is not None, scored=scored)

    def _score(self, line: Tuple[Coord, Coord, Coord]) -> Optional[ScoredLine]:
        st = self.state
        if not spells_sos(st.grid, line):
            return None
        first, _, last = canonical_order(line)
        lid = line_id(first, last)
        if not st.ledger.try_register(lid):
            return None
        player = st.roster.current()
        scored = ScoredLine(line_id=lid, start=first, end=last, color=player.color)
        st.ledger.record(scored)
        total = st.roster.award(player.pid)
        st.bonus_placement = True
        logger.info("%s scored %s (total %d)", player.name, lid, total)
        return scored

    # ---- turn ----
    def end_turn(self) -> Outcome:
        self._require(Phase.PLACEMENT, Phase.CLAIMING, action="end the turn")
        st = self.state
        if not st.has_placed:
            return Outcome(False, message=MUST_PLACE_FIRST)
        if st.grid.is_full():
            self._set_phase(Phase.GAME_OVER)
            logger.info("grid full, match over")
            return ACCEPTED
        st.pending_cell = None
        st.has_placed = False
        st.bonus_placement = False
        self._set_phase(Phase.PLACEMENT)
        nxt = st.roster.advance_turn()
        logger.debug("turn passes to %s", nxt.name)
        return ACCEPTED

    # ---- views ----
    def standings(self) -> Standings:
        if self.state.roster is None:
            raise PhaseError("no match has been started", {"phase": self.state.phase.value})
        return self.state.roster.standings()

    def snapshot(self) -> Snapshot:
        st = self.state
        players = tuple(replace(p) for p in st.roster.players) if st.roster else ()
        return Snapshot(
            phase=st.phase,
            grid_size=st.grid_size,
            player_count=st.player_count,
            grid=st.grid.rows() if st.grid else (),
            players=players,
            current_idx=st.roster.current_idx if st.roster else 0,
            pending_cell=st.pending_cell,
            drag_path=tuple(st.gesture.path),
            scored_lines=tuple(st.ledger.lines),
            bonus_placement=st.bonus_placement,
            has_placed=st.has_placed,
        )


def transition(state: GameState, event: ev.Event,
               rules: Optional[Rules] = None) -> Tuple[GameState, Outcome]:
    """Pure form of Engine.dispatch: the given state is left untouched."""
    engine = Engine(rules)
    engine.state = copy.deepcopy(state)
    outcome = engine.dispatch(event)
    return engine.state, outcome
