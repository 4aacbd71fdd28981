from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from esper import World

from match3.components.board_position import BoardPosition
from match3.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                               EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE,
                               EVENT_SCORE_CHANGED, EVENT_BOARD_RESHUFFLED, EVENT_BOARD_REGENERATED)
from match3.systems.board_ops import (ensure_board_full, fill_random, get_config, get_grid, get_rng,
                                      get_session, get_tile_types)
from match3.systems.deadlock import has_possible_moves
from match3.systems.gravity_ops import SpawnedTile, TileMove, apply_gravity
from match3.systems.match_ops import Match, find_combinations, has_combinations, matched_positions
from match3.systems.scoring import score_matches
from match3.systems.shuffle_ops import shuffle_grid

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CascadeStep:
    """Everything an animator needs to replay one matching pass."""
    depth: int
    matches: List[Match]
    score_delta: int
    removed: List[BoardPosition]
    moves: List[TileMove]
    spawned: List[SpawnedTile]


@dataclass(slots=True)
class CascadeReport:
    steps: List[CascadeStep] = field(default_factory=list)
    score_delta: int = 0
    reshuffled: bool = False
    regenerated: bool = False


class MatchResolutionSystem:
    """Runs the match -> score -> clear -> gravity loop until the board settles."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def resolve_cascade(self, root: bool = True) -> CascadeReport:
        """Settle the board.

        Only the root call checks for deadlock afterwards; the passes run after
        a reshuffle never trigger another nested check.
        """
        report = CascadeReport()
        self._run_passes(report)
        if root:
            self._ensure_playable(report)
        ensure_board_full(get_grid(self.world))
        return report

    def _run_passes(self, report: CascadeReport) -> None:
        grid = get_grid(self.world)
        session = get_session(self.world)
        rng = get_rng(self.world)
        tile_types = get_tile_types(self.world)
        start_depth = len(report.steps)
        max_passes = grid.size * grid.size
        for _ in range(max_passes):
            column_matches, row_matches = find_combinations(grid)
            matches = [*column_matches, *row_matches]
            if not matches:
                break
            depth = len(report.steps) + 1
            delta = score_matches(matches)
            session.score += delta
            report.score_delta += delta
            positions = matched_positions(matches)
            logger.debug("cascade depth %d: %d matches, %d cells, +%d points",
                         depth, len(matches), len(positions), delta)
            self.event_bus.emit(EVENT_MATCH_FOUND, matches=matches, positions=positions, depth=depth)
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=delta)
            gravity = apply_gravity(grid, column_matches, row_matches, rng, tile_types)
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=gravity.removed, types=gravity.cleared_types)
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=gravity.moves)
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=gravity.spawned)
            step = CascadeStep(depth, matches, delta, gravity.removed, gravity.moves, gravity.spawned)
            report.steps.append(step)
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, step=step)
        else:
            if has_combinations(grid):
                raise RuntimeError(f"cascade did not settle within {max_passes} passes")
        if len(report.steps) > start_depth:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=len(report.steps), score_delta=report.score_delta)

    def _ensure_playable(self, report: CascadeReport) -> None:
        grid = get_grid(self.world)
        session = get_session(self.world)
        config = get_config(self.world)
        rng = get_rng(self.world)
        attempts = 0
        regenerations = 0
        while not has_possible_moves(grid):
            if attempts < config.max_reshuffles:
                attempts += 1
                moves = shuffle_grid(grid, rng)
                session.reshuffles += 1
                report.reshuffled = True
                logger.info("no moves left, reshuffling board (attempt %d)", attempts)
                self.event_bus.emit(EVENT_BOARD_RESHUFFLED, moves=moves, attempt=attempts)
            else:
                regenerations += 1
                if regenerations > config.max_regenerations:
                    raise RuntimeError("Unable to produce a board with a valid move")
                attempts = 0
                fill_random(grid, rng, get_tile_types(self.world))
                report.regenerated = True
                logger.warning("reshuffles exhausted, regenerating board (attempt %d)", regenerations)
                self.event_bus.emit(EVENT_BOARD_REGENERATED, attempt=regenerations)
            self._run_passes(report)
