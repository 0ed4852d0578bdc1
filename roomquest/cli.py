"""
Command line entry points.

roomquest-build: generate a random room set and write it to a fresh
{prefix}{pid} directory.

roomquest-play: load the most recent room set and play until the END room.

Both commands work without arguments. Any RoomQuestError is reported on
stderr and turns into exit status 1.
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path
from typing import List, Optional

from .clock import ClockService, FileHandoffClock, SystemClock
from .config import Config
from .errors import RoomQuestError
from .logging_utils import log_error, log_info, log_success
from .navigation import NavigationEngine
from .persistence import TextFileRoomRepository
from .rooms import generate_room_set
from .terminal import ConsoleTerminal, TerminalPort


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roomquest-build",
        description="Generate a random room set and write one file per room.",
    )
    parser.add_argument(
        "--seed", type=int, default=Config.RANDOM_SEED,
        help="Seed for reproducible room sets (default: RANDOM_SEED or system entropy)",
    )
    parser.add_argument(
        "--base-dir", type=Path, default=None,
        help="Directory in which the room set directory is created (default: ROOMS_BASE_DIR)",
    )
    return parser


def play_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roomquest-play",
        description="Walk from the START room to the END room of the newest room set.",
    )
    parser.add_argument(
        "--base-dir", type=Path, default=None,
        help="Directory searched for room sets (default: ROOMS_BASE_DIR)",
    )
    parser.add_argument(
        "--rooms-dir", type=Path, default=None,
        help="Play this room set directory instead of the most recent one",
    )
    parser.add_argument(
        "--time-file", type=Path, default=None,
        help="File used to hand the timestamp from the clock worker (default: TIME_FILE)",
    )
    parser.add_argument(
        "--direct-clock", action="store_true",
        help="Answer 'time' in memory instead of through the time file",
    )
    return parser


async def run_build(base_dir: Optional[Path] = None, seed: Optional[int] = None) -> str:
    """Generate, validate and save a room set. Returns the directory written."""
    rng = random.Random(seed)
    room_set = generate_room_set(rng)
    repository = TextFileRoomRepository(base_dir)
    await repository.initialize()
    try:
        return await repository.save_room_set(room_set)
    finally:
        await repository.close()


async def run_play(
    terminal: TerminalPort,
    clock: ClockService,
    *,
    base_dir: Optional[Path] = None,
    rooms_dir: Optional[Path] = None,
):
    repository = TextFileRoomRepository(base_dir)
    await repository.initialize()
    try:
        room_set = await repository.load_room_set(
            str(rooms_dir) if rooms_dir is not None else None
        )
    finally:
        await repository.close()

    engine = NavigationEngine(room_set, terminal, clock)
    return await engine.run()


def build_main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        Config.validate()
        directory = asyncio.run(run_build(args.base_dir, args.seed))
    except (RoomQuestError, ValueError) as exc:
        log_error(str(exc))
        return 1
    log_success(f"Room set written to {directory}")
    return 0


def play_main(argv: Optional[List[str]] = None) -> int:
    args = play_parser().parse_args(argv)
    clock: ClockService
    if args.direct_clock:
        clock = SystemClock()
    else:
        clock = FileHandoffClock(args.time_file)

    try:
        Config.validate()
        result = asyncio.run(
            run_play(
                ConsoleTerminal(),
                clock,
                base_dir=args.base_dir,
                rooms_dir=args.rooms_dir,
            )
        )
    except (RoomQuestError, ValueError) as exc:
        log_error(str(exc))
        return 1

    if not result.won:
        log_info(f"Input ended in {result.final_room} after {result.steps} steps")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Dispatch ``python -m roomquest build|play``."""
    argv = list(sys.argv[1:] if argv is None else argv)
    commands = {"build": build_main, "play": play_main}
    if not argv or argv[0] not in commands:
        print("usage: python -m roomquest {build,play} [options]", file=sys.stderr)
        return 2
    return commands[argv[0]](argv[1:])
