from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from match3.components.board_position import BoardPosition
from match3.components.grid import Grid
from match3.constants import MIN_RUN_LENGTH

COLUMN = "column"
ROW = "row"


@dataclass(slots=True, frozen=True)
class Match:
    """A run of identical tile types along one line.

    ``line`` is the column index for vertical runs and the row index for
    horizontal runs; ``start``/``end`` are inclusive indices along the line.
    """
    axis: str
    line: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def positions(self) -> List[BoardPosition]:
        if self.axis == COLUMN:
            return [BoardPosition(self.line, index) for index in range(self.start, self.end + 1)]
        return [BoardPosition(index, self.line) for index in range(self.start, self.end + 1)]


def find_line_runs(line: Sequence[int]) -> List[Tuple[int, int]]:
    """Return inclusive ``(start, end)`` spans of every run of MIN_RUN_LENGTH or more."""
    runs: List[Tuple[int, int]] = []
    run_start = 0
    for index in range(1, len(line) + 1):
        # A trailing run is flushed when index walks off the end of the line.
        if index < len(line) and line[index] == line[run_start]:
            continue
        if index - run_start >= MIN_RUN_LENGTH:
            runs.append((run_start, index - 1))
        run_start = index
    return runs


def find_combinations(grid: Grid) -> Tuple[List[Match], List[Match]]:
    """Scan every column then every row; return ``(column_matches, row_matches)``.

    Overlapping column and row runs are both reported.
    """
    column_matches = [
        Match(COLUMN, column, start, end)
        for column, types in enumerate(grid.type_columns())
        for start, end in find_line_runs(types)
    ]
    row_matches = [
        Match(ROW, row, start, end)
        for row, types in enumerate(grid.type_rows())
        for start, end in find_line_runs(types)
    ]
    return column_matches, row_matches


def has_combinations(grid: Grid) -> bool:
    column_matches, row_matches = find_combinations(grid)
    return bool(column_matches or row_matches)


def matched_positions(matches: Sequence[Match]) -> List[BoardPosition]:
    """Distinct positions covered by matches, sorted column-major."""
    return sorted({position for match in matches for position in match.positions})
