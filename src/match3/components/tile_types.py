from dataclasses import dataclass
from typing import List

@dataclass(slots=True)
class TileTypes:
    """Canonical tile type range stored on a single entity.

    Types are the integers ``1..count``; spawning picks uniformly among them.
    """
    count: int

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"tile type count must be positive, got {self.count}")

    def all_types(self) -> List[int]:
        return list(range(1, self.count + 1))
