"""Board resolution engine for a match-3 puzzle game."""
from match3.components.engine_config import EngineConfig
from match3.components.game_session import EnginePhase
from match3.events.bus import EventBus
from match3.systems.engine import BoardEngine, BoardSnapshot, RejectReason, SwapResult, SwapStatus
from match3.world import create_engine, create_world

__all__ = [
    "BoardEngine",
    "BoardSnapshot",
    "EngineConfig",
    "EnginePhase",
    "EventBus",
    "RejectReason",
    "SwapResult",
    "SwapStatus",
    "create_engine",
    "create_world",
]
