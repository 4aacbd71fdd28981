from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from match3.components.board_position import BoardPosition
from match3.components.grid import Grid
from match3.components.tile import Tile
from match3.components.tile_types import TileTypes
from match3.systems.board_ops import spawn_tile
from match3.systems.match_ops import Match, matched_positions

TypeEntry = Tuple[int, int, int]


@dataclass(slots=True, frozen=True)
class TileMove:
    uid: int
    source: BoardPosition
    target: BoardPosition
    tile_type: int


@dataclass(slots=True, frozen=True)
class SpawnedTile:
    """A fresh tile and where it lands.

    ``origin_row`` is negative: the virtual row above the board the tile drops
    from, so the stack of new tiles keeps its order while falling.
    """
    uid: int
    tile_type: int
    target: BoardPosition
    origin_row: int


@dataclass(slots=True)
class GravityResult:
    removed: List[BoardPosition] = field(default_factory=list)
    cleared_types: List[TypeEntry] = field(default_factory=list)
    moves: List[TileMove] = field(default_factory=list)
    spawned: List[SpawnedTile] = field(default_factory=list)


def mark_removed(grid: Grid, matches: Sequence[Match]) -> List[BoardPosition]:
    positions = matched_positions(matches)
    for column, row in positions:
        grid.get(column, row).removed = True
    return positions


def compact_column(
    grid: Grid,
    column: int,
    rng: random.Random,
    tile_types: TileTypes,
) -> Tuple[List[Tile], List[TileMove], List[SpawnedTile]]:
    """Drop kept tiles to the bottom of a column and top it up with new tiles."""
    size = grid.size
    kept = [tile for tile in grid.column(column) if not tile.removed]
    missing = size - len(kept)
    fresh = [spawn_tile(grid, rng, tile_types, column, row) for row in range(missing)]
    moves: List[TileMove] = []
    for target_row, tile in enumerate(kept, start=missing):
        if tile.row != target_row:
            moves.append(TileMove(tile.uid, tile.position, BoardPosition(column, target_row), tile.tile_type))
    spawned = [
        SpawnedTile(tile.uid, tile.tile_type, BoardPosition(column, tile.row), tile.row - missing)
        for tile in fresh
    ]
    rebuilt = fresh + kept
    if len(rebuilt) != size:
        raise RuntimeError(f"column {column} height {len(rebuilt)} != {size} after gravity")
    return rebuilt, moves, spawned


def apply_gravity(
    grid: Grid,
    column_matches: Sequence[Match],
    row_matches: Sequence[Match],
    rng: random.Random,
    tile_types: TileTypes,
) -> GravityResult:
    """Clear every matched cell, compact each column downward and refill from the top."""
    result = GravityResult()
    matches = [*column_matches, *row_matches]
    result.cleared_types = [
        (column, row, grid.get(column, row).tile_type) for column, row in matched_positions(matches)
    ]
    result.removed = mark_removed(grid, matches)
    if not result.removed:
        return result
    tiles: List[Tile] = []
    for column in range(grid.size):
        rebuilt, moves, spawned = compact_column(grid, column, rng, tile_types)
        tiles.extend(rebuilt)
        result.moves.extend(moves)
        result.spawned.extend(spawned)
    grid.replace_all(tiles)
    return result
