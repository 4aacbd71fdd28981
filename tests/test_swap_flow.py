import pytest

from match3.components.game_session import EnginePhase
from match3.events.bus import (EVENT_CASCADE_STEP, EVENT_GAME_OVER, EVENT_GAME_STARTED, EVENT_MOVES_CHANGED,
                               EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REQUEST,
                               EVENT_TILE_SWAP_REJECTED, EVENT_TILE_SWAP_VALID)
from match3.systems.engine import RejectReason, SwapStatus

from helpers import SCENARIO_LAYOUT, build_engine, collect


@pytest.fixture
def started():
    engine, board_system, bus = build_engine(field_size=3, moves=30)
    engine.start(layout=SCENARIO_LAYOUT)
    return engine, board_system, bus


def test_swap_without_match_reverts(started):
    engine, _, bus = started
    invalid = collect(bus, EVENT_TILE_SWAP_INVALID)
    before = [(t.uid, t.tile_type, t.column, t.row) for t in engine.grid.tiles()]

    result = engine.request_swap((1, 0), (2, 0))

    assert result.status is SwapStatus.NO_EFFECT
    assert result.moves_remaining == 30
    assert engine.session.moves_remaining == 30
    assert engine.session.score == 0
    assert [(t.uid, t.tile_type, t.column, t.row) for t in engine.grid.tiles()] == before
    assert invalid == [{"src": (1, 0), "dst": (2, 0)}]
    assert engine.phase is EnginePhase.AWAITING_SELECTION


def test_valid_swap_emits_valid_event(started):
    engine, _, bus = started
    valid = collect(bus, EVENT_TILE_SWAP_VALID)

    engine.request_swap((1, 2), (0, 2))

    assert valid == [{"src": (1, 2), "dst": (0, 2)}]


@pytest.mark.parametrize(
    "src,dst,reason",
    [
        ((0, 0), (2, 0), RejectReason.NOT_ADJACENT),
        ((0, 0), (1, 1), RejectReason.NOT_ADJACENT),
        ((1, 1), (1, 1), RejectReason.NOT_ADJACENT),
        ((2, 2), (3, 2), RejectReason.OUT_OF_BOUNDS),
        ((0, -1), (0, 0), RejectReason.OUT_OF_BOUNDS),
    ],
)
def test_invalid_positions_rejected_without_state_change(started, src, dst, reason):
    engine, _, bus = started
    rejected = collect(bus, EVENT_TILE_SWAP_REJECTED)
    before = engine.grid.type_columns()

    result = engine.request_swap(src, dst)

    assert result.status is SwapStatus.REJECTED
    assert result.reason is reason
    assert engine.grid.type_columns() == before
    assert engine.session.moves_remaining == 30
    assert rejected[-1]["reason"] is reason


def test_swap_before_start_rejected():
    engine, _, _ = build_engine()

    result = engine.request_swap((0, 0), (0, 1))

    assert result.status is SwapStatus.REJECTED
    assert result.reason is RejectReason.NOT_STARTED


def test_swaps_ignored_while_resolving(started):
    engine, _, bus = started
    nested = []

    def reenter(sender, **kwargs):
        nested.append((engine.request_swap((0, 0), (0, 1)), engine.start(), engine.stop()))

    bus.subscribe(EVENT_TILE_SWAP_REQUEST, reenter)
    bus.subscribe(EVENT_CASCADE_STEP, reenter)
    result = engine.request_swap((0, 2), (1, 2))

    assert result.status is SwapStatus.RESOLVED
    assert len(nested) == 1 + result.cascade_steps
    for swap, started_again, stopped in nested:
        assert swap.status is SwapStatus.REJECTED
        assert swap.reason is RejectReason.ENGINE_BUSY
        assert started_again is False
        assert stopped is False
    assert engine.session.moves_remaining == 29
    assert engine.phase is EnginePhase.AWAITING_SELECTION


def test_start_ignores_calls_from_its_own_events():
    engine, _, bus = build_engine(field_size=3)
    nested = []

    def reenter(sender, **kwargs):
        nested.append((engine.start(), engine.stop(), engine.request_swap((0, 2), (1, 2))))

    bus.subscribe(EVENT_GAME_STARTED, reenter)
    bus.subscribe(EVENT_MOVES_CHANGED, reenter)

    assert engine.start(layout=SCENARIO_LAYOUT)

    assert len(nested) == 2
    for started_again, stopped, swap in nested:
        assert started_again is False
        assert stopped is False
        assert swap.reason is RejectReason.ENGINE_BUSY
    assert engine.grid.type_columns() == SCENARIO_LAYOUT
    assert engine.phase is EnginePhase.AWAITING_SELECTION


def test_last_move_ends_game():
    engine, _, bus = build_engine(field_size=3, moves=1)
    game_over = collect(bus, EVENT_GAME_OVER)
    engine.start(layout=SCENARIO_LAYOUT)

    result = engine.request_swap((0, 2), (1, 2))

    assert result.status is SwapStatus.RESOLVED
    assert result.moves_remaining == 0
    assert engine.phase is EnginePhase.GAME_OVER
    assert game_over == [{"score": engine.session.score}]

    again = engine.request_swap((0, 0), (0, 1))
    assert again.status is SwapStatus.REJECTED
    assert again.reason is RejectReason.GAME_OVER


def test_zero_move_budget_starts_in_game_over():
    engine, _, _ = build_engine(field_size=3, moves=0)
    engine.start(layout=SCENARIO_LAYOUT)

    assert engine.phase is EnginePhase.GAME_OVER
    assert engine.request_swap((0, 2), (1, 2)).reason is RejectReason.GAME_OVER


def test_stop_clears_board_and_session(started):
    engine, _, _ = started
    engine.request_swap((0, 2), (1, 2))

    assert engine.stop()

    assert engine.phase is EnginePhase.IDLE
    assert engine.session.score == 0
    assert engine.session.moves_remaining == 0
    assert list(engine.grid.tiles()) == []
    assert engine.request_swap((0, 0), (0, 1)).reason is RejectReason.NOT_STARTED


def test_restart_resets_score_and_moves(started):
    engine, _, _ = started
    engine.request_swap((0, 2), (1, 2))
    assert engine.session.score > 0

    engine.start(layout=SCENARIO_LAYOUT)

    assert engine.session.score == 0
    assert engine.session.moves_remaining == 30
