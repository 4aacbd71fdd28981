from __future__ import annotations

import random
from typing import List

from match3.components.engine_config import EngineConfig
from match3.events.bus import EventBus
from match3.systems.board import BoardSystem
from match3.systems.engine import BoardEngine
from match3.world import create_engine

# Column-major 3x3 board without runs;
# swapping (0,2) with (1,2) completes column 0 as [1,1,1].
SCENARIO_LAYOUT = [
    [1, 1, 2],
    [2, 3, 1],
    [3, 2, 3],
]

# Diagonal stripes of three types: no runs and no productive swap anywhere.
def stalemate_layout(size: int = 5) -> List[List[int]]:
    return [[(column + row) % 3 + 1 for row in range(size)] for column in range(size)]


def build_engine(
    field_size: int = 3,
    moves: int = 30,
    tile_types: int = 5,
    seed: int = 1234,
    **overrides,
) -> tuple[BoardEngine, BoardSystem, EventBus]:
    bus = EventBus()
    config = EngineConfig(field_size=field_size, moves=moves, tile_types=tile_types, **overrides)
    engine, board_system = create_engine(config, rng=random.Random(seed), event_bus=bus)
    return engine, board_system, bus


def collect(bus: EventBus, name: str) -> list[dict]:
    events: list[dict] = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events


def random_layout_without_matches(
    rng: random.Random, size: int, tile_types: int
) -> List[List[int]]:
    """Column-major layout built so no cell completes a vertical or horizontal triple."""
    choices = list(range(1, tile_types + 1))
    layout: List[List[int]] = []
    for column in range(size):
        values: List[int] = []
        for row in range(size):
            available = list(choices)
            if row >= 2 and values[row - 1] == values[row - 2]:
                available = [t for t in available if t != values[row - 1]]
            if column >= 2 and layout[column - 1][row] == layout[column - 2][row]:
                available = [t for t in available if t != layout[column - 1][row]]
            values.append(rng.choice(available))
        layout.append(values)
    return layout


def type_columns(engine: BoardEngine) -> List[List[int]]:
    return engine.grid.type_columns()
