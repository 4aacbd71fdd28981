import random
from typing import Optional

from esper import World

from match3.components.board import Board
from match3.components.engine_config import EngineConfig
from match3.components.game_session import GameSession
from match3.components.grid import Grid
from match3.components.tile_types import TileTypes
from match3.events.bus import EventBus
from match3.systems.board import BoardSystem
from match3.systems.engine import BoardEngine


def create_world(
    event_bus: EventBus,
    config: Optional[EngineConfig] = None,
    *,
    rng: random.Random | None = None,
) -> World:
    config = config or EngineConfig()
    world = World()
    # Every random choice on the board goes through this one source.
    setattr(world, "random", rng or random.Random(config.seed))

    world.create_entity(config)
    world.create_entity(GameSession())
    world.create_entity(TileTypes(count=config.tile_types))
    world.create_entity(Board(field_size=config.field_size), Grid(size=config.field_size))
    return world


def create_engine(
    config: Optional[EngineConfig] = None,
    *,
    rng: random.Random | None = None,
    event_bus: EventBus | None = None,
) -> tuple[BoardEngine, BoardSystem]:
    """Wire a world, its bus, the engine and the click-selection system."""
    event_bus = event_bus or EventBus()
    world = create_world(event_bus, config, rng=rng)
    engine = BoardEngine(world, event_bus)
    board_system = BoardSystem(world, event_bus, engine)
    return engine, board_system
