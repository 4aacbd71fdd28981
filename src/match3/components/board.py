from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    field_size: int
