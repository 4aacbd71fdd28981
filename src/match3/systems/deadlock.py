from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from match3.components.board_position import BoardPosition
from match3.components.grid import Grid
from match3.constants import MIN_RUN_LENGTH

Pattern = List[List[int]]

# Shapes left behind one move away from a run of three. A 1 marks a cell that
# must share the run's type; rotations cover every orientation.
MOVE_PATTERNS: Tuple[Pattern, ...] = (
    [[0, 1, 0],
     [1, 0, 1]],
    [[0, 1, 1],
     [1, 0, 0]],
    [[1, 1, 0],
     [0, 0, 1]],
    [[1, 1, 0, 1]],
)


def rotate_pattern(pattern: Pattern) -> Pattern:
    """Rotate a rectangular 0/1 matrix by 90 degrees."""
    height = len(pattern)
    width = len(pattern[0])
    return [[pattern[y][width - 1 - x] for y in range(height)] for x in range(width)]


def pattern_rotations(pattern: Pattern) -> Iterator[Pattern]:
    for _ in range(4):
        pattern = rotate_pattern(pattern)
        yield pattern


def sub_grid(types: Sequence[Sequence[int]], width: int, height: int, x: int, y: int) -> List[List[int]]:
    return [[types[x + dx][y + dy] for dy in range(height)] for dx in range(width)]


def masked_cells(part: Sequence[Sequence[int]], pattern: Pattern) -> List[int]:
    flags = [flag for line in pattern for flag in line]
    cells = [value for line in part for value in line]
    return [value for value, flag in zip(cells, flags) if flag]


def has_possible_moves(grid: Grid) -> bool:
    """True iff at least one adjacent swap would create a match.

    Pattern rows run along the column axis and pattern columns along the row
    axis, so the search works directly on the column-major type matrix.
    """
    types = grid.type_columns()
    size = grid.size
    for pattern in MOVE_PATTERNS:
        for rotated in pattern_rotations(pattern):
            width = len(rotated)
            height = len(rotated[0])
            for x in range(size - width + 1):
                for y in range(size - height + 1):
                    cells = masked_cells(sub_grid(types, width, height, x, y), rotated)
                    if len(set(cells)) == 1:
                        return True
    return False


def _has_line_match(types: Dict[Tuple[int, int], int], pos: Tuple[int, int]) -> bool:
    """Return True if a horizontal or vertical run of three passes through pos."""
    column, row = pos
    value = types[pos]
    for d_col, d_row in ((1, 0), (0, 1)):
        run = 1
        step = 1
        while types.get((column - d_col * step, row - d_row * step)) == value:
            run += 1
            step += 1
        step = 1
        while types.get((column + d_col * step, row + d_row * step)) == value:
            run += 1
            step += 1
        if run >= MIN_RUN_LENGTH:
            return True
    return False


def predict_swap_creates_match(types: Dict[Tuple[int, int], int], src: Tuple[int, int], dst: Tuple[int, int]) -> bool:
    """Return True if swapping src/dst would leave a run through either cell."""
    swapped = dict(types)
    swapped[src], swapped[dst] = swapped[dst], swapped[src]
    return _has_line_match(swapped, src) or _has_line_match(swapped, dst)


def find_valid_swaps(grid: Grid) -> List[Tuple[BoardPosition, BoardPosition]]:
    """Enumerate adjacent swaps that would produce a match by simulating each one."""
    types = {(tile.column, tile.row): tile.tile_type for tile in grid.tiles()}
    swaps: List[Tuple[BoardPosition, BoardPosition]] = []
    for column in range(grid.size):
        for row in range(grid.size):
            pos = BoardPosition(column, row)
            for neighbour in (BoardPosition(column + 1, row), BoardPosition(column, row + 1)):
                if not grid.in_bounds(neighbour):
                    continue
                if predict_swap_creates_match(types, pos, neighbour):
                    swaps.append((pos, neighbour))
    return swaps
