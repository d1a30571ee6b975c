"""Entry point for the pogo course."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from pogo_rider import GameConfig
from pogo_rider.game import PogoGame


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ride a pogo stick across the course.")
    parser.add_argument(
        "--fps",
        type=int,
        help="Target frame rate (default: config value).",
    )
    parser.add_argument(
        "--width",
        type=int,
        help="Initial window width in pixels.",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Initial window height in pixels.",
    )
    parser.add_argument(
        "--max-frame-dt",
        type=float,
        help="Largest physics step in seconds taken after a slow frame.",
    )
    parser.add_argument(
        "--frames",
        type=int,
        help="Quit after this many frames (useful for smoke tests).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args()


def build_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig()
    overrides = {}
    if args.fps is not None:
        overrides["target_fps"] = args.fps
    if args.width is not None or args.height is not None:
        width, height = config.window_size
        overrides["window_size"] = (args.width or width, args.height or height)
    if args.max_frame_dt is not None:
        overrides["max_frame_dt"] = args.max_frame_dt
    if overrides:
        config = replace(config, **overrides)
    return config


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    game = PogoGame(config=build_config(args))
    try:
        game.run(max_frames=args.frames)
    finally:
        game.shutdown()


if __name__ == "__main__":
    main()
