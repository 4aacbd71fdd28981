from typing import Optional, Tuple

from esper import World

from match3.components.board_position import BoardPosition
from match3.components.game_session import EnginePhase
from match3.events.bus import EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED
from match3.systems.board_ops import get_session
from match3.systems.engine import BoardEngine, SwapResult, is_adjacent


class BoardSystem:
    """Two-click interaction: the first click selects a tile, the second swaps with a neighbour."""

    def __init__(self, world: World, event_bus: EventBus, engine: BoardEngine):
        self.world = world
        self.event_bus = event_bus
        self.engine = engine
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    @property
    def selected(self) -> Optional[BoardPosition]:
        return get_session(self.world).selection

    def on_tile_click(self, sender, **kwargs):
        column = kwargs.get('column')
        row = kwargs.get('row')
        if column is None or row is None:
            return
        self.select((column, row))

    def select(self, position: Tuple[int, int]) -> Optional[SwapResult]:
        session = get_session(self.world)
        # Clicks are ignored while resolving or once the move budget is spent.
        if session.phase is not EnginePhase.AWAITING_SELECTION or session.moves_remaining <= 0:
            return None
        position = BoardPosition(*position)
        if not self.engine.grid.in_bounds(position):
            return None
        previous = session.selection
        if previous is None:
            session.selection = position
            self.event_bus.emit(EVENT_TILE_SELECTED, position=position)
            return None
        session.selection = None
        if not is_adjacent(previous, position):
            self.event_bus.emit(EVENT_TILE_DESELECTED, position=previous, reason='not_adjacent')
            return None
        self.event_bus.emit(EVENT_TILE_DESELECTED, position=previous, reason='swap')
        return self.engine.request_swap(previous, position)
