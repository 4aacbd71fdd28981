from dataclasses import dataclass
from typing import Optional

from match3.constants import (
    DEFAULT_FIELD_SIZE,
    DEFAULT_MAX_REGENERATIONS,
    DEFAULT_MAX_RESHUFFLES,
    DEFAULT_MOVES,
    DEFAULT_TILE_TYPES,
    MIN_FIELD_SIZE,
)


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Configuration fixed for the lifetime of a world.

    ``seed`` is only consulted by ``create_world`` when no explicit
    ``random.Random`` is supplied.
    """
    field_size: int = DEFAULT_FIELD_SIZE
    moves: int = DEFAULT_MOVES
    tile_types: int = DEFAULT_TILE_TYPES
    max_reshuffles: int = DEFAULT_MAX_RESHUFFLES
    max_regenerations: int = DEFAULT_MAX_REGENERATIONS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.field_size < MIN_FIELD_SIZE:
            raise ValueError(f"field_size must be at least {MIN_FIELD_SIZE}, got {self.field_size}")
        if self.tile_types < 2:
            raise ValueError(f"tile_types must be at least 2, got {self.tile_types}")
        if self.moves < 0:
            raise ValueError(f"moves cannot be negative, got {self.moves}")
        if self.max_reshuffles < 1:
            raise ValueError(f"max_reshuffles must be positive, got {self.max_reshuffles}")
        if self.max_regenerations < 1:
            raise ValueError(f"max_regenerations must be positive, got {self.max_regenerations}")
