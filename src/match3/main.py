"""Terminal host for the match-3 board engine.

Starts a game, prints the board and reads commands from stdin:

    c1 r1 c2 r2   swap two neighbouring tiles
    hint          show one valid swap
    new           start over
    quit          stop and exit
"""
import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from match3.components.engine_config import EngineConfig
from match3.components.game_session import EnginePhase
from match3.constants import DEFAULT_FIELD_SIZE, DEFAULT_MOVES, DEFAULT_TILE_TYPES
from match3.events.bus import EVENT_BOARD_RESHUFFLED, EVENT_BOARD_REGENERATED
from match3.systems.engine import BoardEngine, BoardSnapshot, SwapStatus
from match3.utils.logger import setup_logging
from match3.world import create_engine

logger = logging.getLogger(__name__)


def render_board(snapshot: BoardSnapshot) -> str:
    """Rows top to bottom, column indices along the top."""
    columns = snapshot.type_columns()
    width = len(str(snapshot.field_size - 1))
    header = " " * (width + 1) + " ".join(f"{c:>{width}}" for c in range(snapshot.field_size))
    lines = [header]
    for row in range(snapshot.field_size):
        cells = " ".join(f"{columns[c][row]:>{width}}" for c in range(snapshot.field_size))
        lines.append(f"{row:>{width}} {cells}")
    lines.append(f"score: {snapshot.score}  moves: {snapshot.moves_remaining}")
    return "\n".join(lines)


def parse_swap(line: str) -> Optional[tuple[tuple[int, int], tuple[int, int]]]:
    parts = line.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        c1, r1, c2, r2 = (int(part) for part in parts)
    except ValueError:
        return None
    return (c1, r1), (c2, r2)


def play(engine: BoardEngine, commands: Iterable[str], out: TextIO) -> int:
    """Drive the engine from text commands; returns the final score."""
    engine.event_bus.subscribe(EVENT_BOARD_RESHUFFLED, lambda sender, **kw: print("No moves, reshuffling", file=out))
    engine.event_bus.subscribe(EVENT_BOARD_REGENERATED, lambda sender, **kw: print("Board regenerated", file=out))
    engine.start()
    print(render_board(engine.snapshot()), file=out)
    for raw in commands:
        line = raw.strip().lower()
        if not line:
            continue
        if line in ("quit", "exit", "q"):
            break
        if line == "new":
            engine.start()
        elif line == "hint":
            hint = engine.hint()
            print(f"try {hint[0].column} {hint[0].row} {hint[1].column} {hint[1].row}" if hint else "no hint", file=out)
            continue
        else:
            swap = parse_swap(line)
            if swap is None:
                print("expected: c1 r1 c2 r2 | hint | new | quit", file=out)
                continue
            result = engine.request_swap(*swap)
            if result.status is SwapStatus.REJECTED:
                print(f"rejected: {result.reason.name.lower()}", file=out)
                continue
            if result.status is SwapStatus.NO_EFFECT:
                print("no match, swapped back", file=out)
                continue
            print(f"+{result.score_delta} in {result.cascade_steps} steps", file=out)
        print(render_board(engine.snapshot()), file=out)
        if engine.phase is EnginePhase.GAME_OVER:
            print("Game over", file=out)
            break
    score = engine.session.score
    engine.stop()
    return score


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play match-3 in the terminal")
    parser.add_argument("--size", type=int, default=DEFAULT_FIELD_SIZE, help="Board width and height")
    parser.add_argument("--moves", type=int, default=DEFAULT_MOVES, help="Move budget")
    parser.add_argument("--types", type=int, default=DEFAULT_TILE_TYPES, help="Number of tile types")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        config = EngineConfig(field_size=args.size, moves=args.moves, tile_types=args.types, seed=args.seed)
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        return 2
    engine, _ = create_engine(config)
    score = play(engine, sys.stdin, sys.stdout)
    print(f"final score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
