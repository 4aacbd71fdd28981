import itertools
import random

import pytest

from match3.components.engine_config import EngineConfig
from match3.components.game_session import EnginePhase
from match3.events.bus import EVENT_BOARD_REGENERATED, EVENT_GAME_STOPPED, EventBus
from match3.systems.engine import SwapStatus
from match3.world import create_engine

from helpers import SCENARIO_LAYOUT, collect


class ConstantRandom(random.Random):
    """Always picks the first candidate, so every refill repeats one type."""

    def choice(self, seq):
        return seq[0]


class CyclingRandom(random.Random):
    """Picks tile types from a fixed repeating sequence."""

    types = iter(())

    def choice(self, seq):
        return next(self.types)


def cycling_random(types):
    rng = CyclingRandom(0)
    rng.types = itertools.cycle(types)
    return rng


def make_engine(rng, **config):
    bus = EventBus()
    engine, _ = create_engine(EngineConfig(**config), rng=rng, event_bus=bus)
    return engine, bus


def test_cascade_that_never_settles_raises_and_resets_engine():
    engine, bus = make_engine(ConstantRandom(0), field_size=3, tile_types=2)
    stopped = collect(bus, EVENT_GAME_STOPPED)

    with pytest.raises(RuntimeError, match="within 9 passes"):
        engine.start()

    assert engine.phase is EnginePhase.IDLE
    assert not engine.busy
    assert list(engine.grid.tiles()) == []
    assert engine.session.score == 0
    assert len(stopped) == 1
    assert engine.stop()


def test_swap_whose_cascade_never_settles_raises_and_resets_engine():
    engine, _ = make_engine(ConstantRandom(0), field_size=3, tile_types=3)
    engine.start(layout=SCENARIO_LAYOUT)

    with pytest.raises(RuntimeError):
        engine.request_swap((0, 2), (1, 2))

    assert engine.phase is EnginePhase.IDLE
    assert engine.session.moves_remaining == 0
    assert engine.start(layout=SCENARIO_LAYOUT)
    assert engine.phase is EnginePhase.AWAITING_SELECTION


def test_exhausted_regenerations_raise_and_reset_engine():
    # Every regenerated board repeats this column-major mix, where no type
    # appears three times, so no arrangement ever has a move.
    unplayable = [1, 1, 2, 2, 3, 3, 4, 4, 5]
    engine, bus = make_engine(
        cycling_random(unplayable), field_size=3, tile_types=5, max_reshuffles=1, max_regenerations=1,
    )
    regenerations = collect(bus, EVENT_BOARD_REGENERATED)

    with pytest.raises(RuntimeError, match="valid move"):
        engine.start()

    assert len(regenerations) == 1
    assert engine.phase is EnginePhase.IDLE
    assert list(engine.grid.tiles()) == []


def test_engine_recovers_after_failed_start():
    engine, _ = make_engine(ConstantRandom(0), field_size=3, tile_types=2)
    with pytest.raises(RuntimeError):
        engine.start()

    assert engine.start(layout=SCENARIO_LAYOUT)
    result = engine.request_swap((1, 0), (2, 0))

    assert result.status is SwapStatus.NO_EFFECT
    assert engine.phase is EnginePhase.AWAITING_SELECTION
