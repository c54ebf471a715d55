#!/usr/bin/env python3
"""
Run a headless powersnake round driven by an autopilot player.

Board settings come from POWERSNAKE_* environment variables (a local .env
file is loaded first); command line flags override them.

Usage:
    powersnake-sim [--width W] [--height H] [--wrap-walls] [--no-powerups]
                   [--fps N] [--max-ticks N] [--seed N] [--output FILE]

Examples:
    # Default 32x24 board, random autopilot
    powersnake-sim

    # Small wrap-around board, reproducible, with a replay file
    powersnake-sim --width 10 --height 8 --wrap-walls --seed 7 --output replay.json
"""

import argparse
import json
import logging
import os
import random
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..config import ConfigError, EngineConfig
from ..domain.constants import RoundState
from ..engine import SnakeEngine
from ..players import Player, RandomPlayer

logger = logging.getLogger(__name__)


def run_simulation(
    engine: SnakeEngine,
    player: Player,
    fps: float = 60.0,
    max_ticks: int = 1000
) -> Dict[str, Any]:
    """
    Play one round to the end (or max_ticks) at a fixed frame rate.

    Every frame the player is asked for a direction, then the engine is fed
    one frame of time.

    Returns:
        A dictionary summarizing the round.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    frame_dt = 1.0 / fps

    frames = 0
    while engine.round_state != RoundState.ENDED and engine.tick < max_ticks:
        engine.request_direction(player.get_move(engine.snapshot()))
        engine.update(frame_dt)
        frames += 1

    if engine.round_state != RoundState.ENDED:
        logger.info(f"Stopped after reaching {max_ticks} ticks")

    return {
        "game_id": engine.game_id,
        "player": player.name,
        "round_state": engine.round_state.value,
        "score": engine.score,
        "ticks": engine.tick,
        "frames": frames,
        "length": len(engine.snake),
        "death_reason": engine.snake.death_reason,
    }


def save_history_to_json(
    engine: SnakeEngine,
    summary: Dict[str, Any],
    filename: str,
    start_time: Optional[datetime] = None
) -> None:
    metadata = dict(summary)
    metadata.update({
        "start_time": start_time.isoformat() if start_time else None,
        "end_time": datetime.now(timezone.utc).isoformat(),
        "width": engine.grid.width,
        "height": engine.grid.height,
        "wrap_walls": engine.config.wrap_walls,
        "powerups_enabled": engine.config.powerups_enabled,
    })

    data = {
        "metadata": metadata,
        "ticks": engine.serialize_history(),
    }

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, "w") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Wrote replay with {len(data['ticks'])} ticks to {filename}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Run a headless powersnake round with an autopilot player',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--width", type=int, default=None, help="Board width in cells")
    parser.add_argument("--height", type=int, default=None, help="Board height in cells")
    parser.add_argument(
        "--wrap-walls", dest="wrap_walls", action="store_const", const=True, default=None,
        help="Wrap around the board edges instead of dying on them"
    )
    parser.add_argument(
        "--no-powerups", dest="powerups_enabled", action="store_const", const=False, default=None,
        help="Disable powerup spawning"
    )
    parser.add_argument("--fps", type=float, default=60.0, help="Simulated frames per second (default: 60)")
    parser.add_argument("--max-ticks", type=int, default=1000, help="Stop after this many ticks (default: 1000)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible round")
    parser.add_argument("--output", type=str, default=None, help="Write a JSON replay to this path")
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv()

    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = EngineConfig.from_env(
            width=args.width,
            height=args.height,
            wrap_walls=args.wrap_walls,
            powerups_enabled=args.powerups_enabled,
        )
    except ConfigError as exc:
        parser.error(str(exc))

    rng = random.Random(args.seed)
    engine = SnakeEngine(config=config, rng=rng, record_history=args.output is not None)
    player = RandomPlayer(wrap_walls=config.wrap_walls, rng=rng)

    start_time = datetime.now(timezone.utc)
    summary = run_simulation(engine, player, fps=args.fps, max_ticks=args.max_ticks)

    engine.print_board()
    if args.output:
        save_history_to_json(engine, summary, args.output, start_time=start_time)

    print("\nSimulation Result Summary:")
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
