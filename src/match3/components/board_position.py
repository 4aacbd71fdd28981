from typing import NamedTuple


class BoardPosition(NamedTuple):
    """Zero-based grid coordinate. Column first, row 0 is the top of the board."""
    column: int
    row: int
