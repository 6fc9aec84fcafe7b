"""
Command line entry point for Terminal Snake.

Usage:
    term-snake [--width 30] [--height 20] [--tick-ms 200] [--start-length 3]
               [--no-controller] [--seed N] [--log-level DEBUG]

Defaults can be overridden with TERM_SNAKE_* environment variables or a
.env file in the working directory.
"""

from __future__ import annotations

import argparse
import curses
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from . import config
from .config import GameConfig, validate_config
from .errors import ConfigError

logger = logging.getLogger(__name__)


def build_parser(defaults: GameConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-snake",
        description="Play Snake in the terminal.",
    )
    parser.add_argument("--width", type=int, default=defaults.width, help="grid width in cells")
    parser.add_argument("--height", type=int, default=defaults.height, help="grid height in cells")
    parser.add_argument(
        "--tick-ms",
        type=int,
        default=defaults.tick_interval_ms,
        help="starting tick interval in milliseconds",
    )
    parser.add_argument(
        "--start-length",
        type=int,
        default=defaults.start_length,
        help="starting snake length",
    )
    parser.add_argument(
        "--no-controller",
        dest="controller",
        action="store_false",
        default=defaults.controller_enabled,
        help="disable game controller input",
    )
    parser.add_argument(
        "--bonus-chance",
        type=float,
        default=defaults.bonus_chance,
        help="probability that a spawned food is bonus food",
    )
    parser.add_argument(
        "--bonus-lifetime",
        type=int,
        default=defaults.bonus_lifetime,
        help="ticks before uneaten bonus food disappears",
    )
    parser.add_argument("--seed", type=int, default=defaults.seed, help="random seed for food placement")
    parser.add_argument(
        "--highscore-file",
        type=Path,
        default=None,
        help="high score file (default: platform data directory)",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="log verbosity (written to the log file)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> tuple[GameConfig, argparse.Namespace]:
    """Parse and validate arguments; exits with a usage error on bad values."""
    try:
        defaults = GameConfig.from_env()
    except ConfigError as exc:
        build_parser(GameConfig()).error(str(exc))
    parser = build_parser(defaults)
    args = parser.parse_args(argv)
    game_config = replace(
        defaults,
        width=args.width,
        height=args.height,
        tick_interval_ms=args.tick_ms,
        start_length=args.start_length,
        controller_enabled=args.controller,
        bonus_chance=args.bonus_chance,
        bonus_lifetime=args.bonus_lifetime,
        seed=args.seed,
    )
    try:
        validate_config(game_config)
    except ConfigError as exc:
        parser.error(str(exc))
    return game_config, args


def setup_logging(level: str, path: Path | None = None) -> None:
    """Log to a file; the terminal belongs to curses."""
    path = path or config.log_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )


def run(game_config: GameConfig, highscore_path: Path | None = None) -> int:
    from .app import TerminalSnake

    def _play(window) -> int:
        return TerminalSnake(window, game_config, highscore_path=highscore_path).start()

    return curses.wrapper(_play)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    game_config, args = parse_args(argv)
    setup_logging(args.log_level)
    logger.info("Starting with %s", game_config)
    try:
        best = run(game_config, args.highscore_file)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 0
    print(f"Best score: {best}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
