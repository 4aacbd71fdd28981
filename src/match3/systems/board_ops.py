from __future__ import annotations

import random
from typing import List, Sequence

from esper import World

from match3.components.board import Board
from match3.components.engine_config import EngineConfig
from match3.components.game_session import GameSession
from match3.components.grid import Grid
from match3.components.tile import Tile
from match3.components.tile_types import TileTypes


def get_grid(world: World) -> Grid:
    for _, (_, grid) in world.get_components(Board, Grid):
        return grid
    raise RuntimeError("Grid not found")


def get_session(world: World) -> GameSession:
    for _, session in world.get_component(GameSession):
        return session
    raise RuntimeError("GameSession not found")


def get_config(world: World) -> EngineConfig:
    for _, config in world.get_component(EngineConfig):
        return config
    raise RuntimeError("EngineConfig not found")


def get_tile_types(world: World) -> TileTypes:
    for _, tile_types in world.get_component(TileTypes):
        return tile_types
    raise RuntimeError("TileTypes definitions not found")


def get_rng(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if isinstance(rng, random.Random):
        return rng
    raise RuntimeError("World has no random source")


def spawn_tile(grid: Grid, rng: random.Random, tile_types: TileTypes, column: int, row: int) -> Tile:
    return Tile(tile_type=rng.choice(tile_types.all_types()), column=column, row=row, uid=grid.next_uid())


def fill_random(grid: Grid, rng: random.Random, tile_types: TileTypes) -> None:
    """Populate every cell with a uniformly random tile type."""
    tiles = [
        spawn_tile(grid, rng, tile_types, column, row)
        for column in range(grid.size)
        for row in range(grid.size)
    ]
    grid.replace_all(tiles)


def fill_layout(grid: Grid, layout: Sequence[Sequence[int]]) -> None:
    """Populate the grid from explicit ``[column][row]`` tile types."""
    if len(layout) != grid.size or any(len(column) != grid.size for column in layout):
        raise ValueError(f"layout must be {grid.size}x{grid.size} (column-major)")
    tiles: List[Tile] = []
    for column, types in enumerate(layout):
        for row, tile_type in enumerate(types):
            tiles.append(Tile(tile_type=int(tile_type), column=column, row=row, uid=grid.next_uid()))
    grid.replace_all(tiles)


def ensure_board_full(grid: Grid) -> None:
    if not grid.is_full():
        raise RuntimeError("Board invariant violated: empty or removed cell after resolution")
