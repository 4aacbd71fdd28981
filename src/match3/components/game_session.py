"""Session resource describing score, move budget and engine phase."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from match3.components.board_position import BoardPosition


class EnginePhase(Enum):
    """States of the board engine; only AWAITING_SELECTION accepts swaps."""
    IDLE = auto()
    RESOLVING = auto()
    AWAITING_SELECTION = auto()
    GAME_OVER = auto()


@dataclass
class GameSession:
    """Singleton component storing the running game's counters."""
    score: int = 0
    moves_remaining: int = 0
    selection: Optional[BoardPosition] = None
    phase: EnginePhase = EnginePhase.IDLE
    reshuffles: int = 0

    def reset(self, moves: int = 0) -> None:
        self.score = 0
        self.moves_remaining = moves
        self.selection = None
        self.reshuffles = 0
