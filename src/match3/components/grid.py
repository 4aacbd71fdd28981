from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Iterator, List, Optional, Sequence

from match3.components.tile import Tile


@dataclass(slots=True)
class Grid:
    """Square tile arena stored column-major.

    The cell for ``(column, row)`` lives at ``column * size + row``. Row 0 is
    the top of a column, so gravity compacts tiles towards the end of each
    column slice.
    """
    size: int
    cells: List[Optional[Tile]] = field(default_factory=list)
    uids: Iterator[int] = field(default_factory=lambda: count(1), repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [None] * (self.size * self.size)
        elif len(self.cells) != self.size * self.size:
            raise ValueError(f"expected {self.size * self.size} cells, got {len(self.cells)}")

    def next_uid(self) -> int:
        return next(self.uids)

    def index(self, column: int, row: int) -> int:
        return column * self.size + row

    def in_bounds(self, position: Sequence[int]) -> bool:
        column, row = position
        return 0 <= column < self.size and 0 <= row < self.size

    def get(self, column: int, row: int) -> Tile:
        tile = self.cells[self.index(column, row)]
        if tile is None:
            raise RuntimeError(f"empty cell at ({column}, {row})")
        return tile

    def set(self, column: int, row: int, tile: Tile) -> None:
        tile.place(column, row)
        self.cells[self.index(column, row)] = tile

    def tiles(self) -> Iterator[Tile]:
        """Traverse every occupied cell in column-major order."""
        for tile in self.cells:
            if tile is not None:
                yield tile

    def column(self, column: int) -> List[Tile]:
        start = column * self.size
        return [tile for tile in self.cells[start:start + self.size] if tile is not None]

    def row(self, row: int) -> List[Tile]:
        return [self.get(column, row) for column in range(self.size)]

    def type_columns(self) -> List[List[int]]:
        """Tile types as ``[column][row]`` lists."""
        return [[tile.tile_type for tile in self.column(c)] for c in range(self.size)]

    def type_rows(self) -> List[List[int]]:
        return [[tile.tile_type for tile in self.row(r)] for r in range(self.size)]

    def swap(self, a: Sequence[int], b: Sequence[int]) -> None:
        """Exchange the tiles at two cells; each tile takes the other's coordinate."""
        tile_a = self.get(*a)
        tile_b = self.get(*b)
        self.set(a[0], a[1], tile_b)
        self.set(b[0], b[1], tile_a)

    def replace_all(self, tiles: Sequence[Tile]) -> None:
        """Rebuild from a column-major sequence, reassigning positions by index."""
        if len(tiles) != self.size * self.size:
            raise RuntimeError(f"grid needs {self.size * self.size} tiles, got {len(tiles)}")
        for index, tile in enumerate(tiles):
            tile.place(index // self.size, index % self.size)
        self.cells = list(tiles)

    def is_full(self) -> bool:
        return all(tile is not None and not tile.removed for tile in self.cells)

    def clear(self) -> None:
        self.cells = [None] * (self.size * self.size)
