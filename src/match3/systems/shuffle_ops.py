from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

from match3.components.grid import Grid
from match3.systems.gravity_ops import TileMove

T = TypeVar("T")


def shuffle_sequence(items: Sequence[T], rng: random.Random) -> List[T]:
    """Uniform permutation by repeatedly extracting a random remaining element."""
    pool = list(items)
    result: List[T] = []
    while pool:
        result.append(pool.pop(rng.randrange(len(pool))))
    return result


def shuffle_grid(grid: Grid, rng: random.Random) -> List[TileMove]:
    """Permute every tile on the board and return the moves that produced the new layout."""
    before = {tile.uid: tile.position for tile in grid.tiles()}
    shuffled = shuffle_sequence(list(grid.tiles()), rng)
    grid.replace_all(shuffled)
    return [
        TileMove(tile.uid, before[tile.uid], tile.position, tile.tile_type)
        for tile in grid.tiles()
        if before[tile.uid] != tile.position
    ]
