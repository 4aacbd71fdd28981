from dataclasses import dataclass

from match3.components.board_position import BoardPosition


@dataclass(slots=True)
class Tile:
    """A single playable unit occupying one grid cell.

    Tiles are plain value records. A tile that is cleared and replaced is a new
    Tile with a fresh ``uid`` drawn from its grid; the uid only lets an
    animator follow a tile across one update batch.
    """
    tile_type: int
    column: int
    row: int
    uid: int
    removed: bool = False

    @property
    def position(self) -> BoardPosition:
        return BoardPosition(self.column, self.row)

    def place(self, column: int, row: int) -> None:
        self.column = column
        self.row = row
