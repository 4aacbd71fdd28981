from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods and lambdas alive without the caller holding a reference.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SESSION LIFECYCLE
# ============================================================================
EVENT_GAME_STARTED = "game_started"        # payload: field_size=int, moves_remaining=int
EVENT_GAME_STOPPED = "game_stopped"        # payload: score=int
EVENT_GAME_OVER = "game_over"              # payload: score=int
EVENT_PHASE_CHANGED = "phase_changed"      # payload: previous=EnginePhase, phase=EnginePhase
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int
EVENT_MOVES_CHANGED = "moves_changed"      # payload: moves_remaining=int


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: column=int, row=int
EVENT_TILE_SELECTED = "tile_selected"              # payload: position=(c,r)
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: position=(c,r), reason=str


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(c,r), dst=(c,r)  (swapped back)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src, dst, reason=RejectReason


# ============================================================================
# RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: matches=list[Match], positions=list[(c,r)], depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=list[(c,r)], types=list[(c,r,type)]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[TileMove]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=list[SpawnedTile]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, step=CascadeStep
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score_delta=int
EVENT_BOARD_RESHUFFLED = "board_reshuffled"        # payload: moves=list[TileMove], attempt=int
EVENT_BOARD_REGENERATED = "board_regenerated"      # payload: attempt=int
