from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from esper import World

from match3.components.board_position import BoardPosition
from match3.components.game_session import EnginePhase, GameSession
from match3.components.grid import Grid
from match3.events.bus import (EventBus, EVENT_GAME_STARTED, EVENT_GAME_STOPPED, EVENT_GAME_OVER,
                               EVENT_PHASE_CHANGED, EVENT_MOVES_CHANGED, EVENT_SCORE_CHANGED,
                               EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID,
                               EVENT_TILE_SWAP_REJECTED)
from match3.systems.board_ops import fill_layout, fill_random, get_config, get_grid, get_rng, get_session, get_tile_types
from match3.systems.deadlock import find_valid_swaps
from match3.systems.match_ops import has_combinations
from match3.systems.match_resolution import CascadeStep, MatchResolutionSystem

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SwapStatus(Enum):
    REJECTED = auto()
    NO_EFFECT = auto()
    RESOLVED = auto()


class RejectReason(Enum):
    NOT_STARTED = auto()
    ENGINE_BUSY = auto()
    GAME_OVER = auto()
    OUT_OF_BOUNDS = auto()
    NOT_ADJACENT = auto()


@dataclass(slots=True, frozen=True)
class SwapResult:
    status: SwapStatus
    moves_remaining: int
    reason: Optional[RejectReason] = None
    score_delta: int = 0
    cascade_steps: int = 0
    reshuffled: bool = False
    steps: Tuple[CascadeStep, ...] = ()

    @property
    def resolved(self) -> bool:
        return self.status is SwapStatus.RESOLVED


@dataclass(slots=True, frozen=True)
class TileView:
    uid: int
    tile_type: int
    column: int
    row: int


@dataclass(slots=True, frozen=True)
class BoardSnapshot:
    """Read-only copy of the board for rendering."""
    field_size: int
    tiles: Tuple[TileView, ...]
    score: int
    moves_remaining: int
    phase: EnginePhase

    def type_columns(self) -> List[List[int]]:
        columns: List[List[int]] = [[0] * self.field_size for _ in range(self.field_size)]
        for tile in self.tiles:
            columns[tile.column][tile.row] = tile.tile_type
        return columns


def is_adjacent(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


class BoardEngine:
    """Owns the board and session; the only writer of either.

    Every operation runs to completion synchronously. While a cascade is being
    resolved the phase is RESOLVING, so callbacks fired from the event bus
    cannot start another swap, start or stop.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.resolution = MatchResolutionSystem(world, event_bus)

    @property
    def session(self) -> GameSession:
        return get_session(self.world)

    @property
    def grid(self) -> Grid:
        return get_grid(self.world)

    @property
    def phase(self) -> EnginePhase:
        return self.session.phase

    @property
    def busy(self) -> bool:
        return self.phase is EnginePhase.RESOLVING

    def start(self, layout: Optional[Sequence[Sequence[int]]] = None) -> bool:
        """Fill a fresh board and settle it. ``layout`` is column-major tile types."""
        if self.busy:
            return False
        config = get_config(self.world)
        session = self.session
        grid = self.grid
        self._set_phase(EnginePhase.RESOLVING)
        try:
            session.reset(config.moves)
            if layout is None:
                fill_random(grid, get_rng(self.world), get_tile_types(self.world))
            else:
                fill_layout(grid, layout)
            logger.info("starting game: %dx%d board, %d moves", grid.size, grid.size, config.moves)
            self.event_bus.emit(EVENT_GAME_STARTED, field_size=grid.size, moves_remaining=session.moves_remaining)
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0)
            self.event_bus.emit(EVENT_MOVES_CHANGED, moves_remaining=session.moves_remaining)
            self.resolution.resolve_cascade(root=True)
        except Exception:
            self._abort()
            raise
        self._settle()
        return True

    def stop(self) -> bool:
        if self.busy:
            return False
        session = self.session
        final_score = session.score
        self.grid.clear()
        session.reset()
        self._set_phase(EnginePhase.IDLE)
        logger.info("game stopped with score %d", final_score)
        self.event_bus.emit(EVENT_GAME_STOPPED, score=final_score)
        return True

    def request_swap(self, src: Position, dst: Position) -> SwapResult:
        src = BoardPosition(*src)
        dst = BoardPosition(*dst)
        reason = self._reject_reason(src, dst)
        if reason is not None:
            logger.debug("swap %s <-> %s rejected: %s", src, dst, reason.name)
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=src, dst=dst, reason=reason)
            return SwapResult(SwapStatus.REJECTED, self.session.moves_remaining, reason=reason)

        session = self.session
        grid = self.grid
        self._set_phase(EnginePhase.RESOLVING)
        session.selection = None
        try:
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)
            grid.swap(src, dst)
            if not has_combinations(grid):
                grid.swap(src, dst)
                self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
                self._set_phase(EnginePhase.AWAITING_SELECTION)
                return SwapResult(SwapStatus.NO_EFFECT, session.moves_remaining)

            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
            session.moves_remaining -= 1
            self.event_bus.emit(EVENT_MOVES_CHANGED, moves_remaining=session.moves_remaining)
            report = self.resolution.resolve_cascade(root=True)
        except Exception:
            self._abort()
            raise
        logger.debug("swap %s <-> %s resolved in %d steps for %d points",
                     src, dst, len(report.steps), report.score_delta)
        self._settle()
        return SwapResult(
            SwapStatus.RESOLVED,
            session.moves_remaining,
            score_delta=report.score_delta,
            cascade_steps=len(report.steps),
            reshuffled=report.reshuffled or report.regenerated,
            steps=tuple(report.steps),
        )

    def snapshot(self) -> BoardSnapshot:
        session = self.session
        grid = self.grid
        tiles = tuple(TileView(tile.uid, tile.tile_type, tile.column, tile.row) for tile in grid.tiles())
        return BoardSnapshot(grid.size, tiles, session.score, session.moves_remaining, session.phase)

    def hint(self) -> Optional[Tuple[BoardPosition, BoardPosition]]:
        if self.phase is not EnginePhase.AWAITING_SELECTION:
            return None
        swaps = find_valid_swaps(self.grid)
        return swaps[0] if swaps else None

    def _reject_reason(self, src: BoardPosition, dst: BoardPosition) -> Optional[RejectReason]:
        session = self.session
        if session.phase is EnginePhase.IDLE:
            return RejectReason.NOT_STARTED
        if session.phase is EnginePhase.RESOLVING:
            return RejectReason.ENGINE_BUSY
        if session.phase is EnginePhase.GAME_OVER or session.moves_remaining <= 0:
            return RejectReason.GAME_OVER
        grid = self.grid
        if not (grid.in_bounds(src) and grid.in_bounds(dst)):
            return RejectReason.OUT_OF_BOUNDS
        if not is_adjacent(src, dst):
            return RejectReason.NOT_ADJACENT
        return None

    def _settle(self) -> None:
        session = self.session
        if session.moves_remaining <= 0:
            self._set_phase(EnginePhase.GAME_OVER)
            logger.info("game over with score %d", session.score)
            self.event_bus.emit(EVENT_GAME_OVER, score=session.score)
        else:
            self._set_phase(EnginePhase.AWAITING_SELECTION)

    def _abort(self) -> None:
        """Drop a board that failed to settle so the engine can be started again."""
        session = self.session
        final_score = session.score
        logger.error("board failed to settle, stopping game with score %d", final_score)
        self.grid.clear()
        session.reset()
        self._set_phase(EnginePhase.IDLE)
        self.event_bus.emit(EVENT_GAME_STOPPED, score=final_score)

    def _set_phase(self, phase: EnginePhase) -> None:
        session = self.session
        previous = session.phase
        if previous is phase:
            return
        session.phase = phase
        self.event_bus.emit(EVENT_PHASE_CHANGED, previous=previous, phase=phase)
