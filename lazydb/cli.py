"""Command-line front door for lazydb.

Parses CLI options, loads the config file, and sets up file logging.
Then hands control to the orchestrator loop.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .config import load_config
from .database.connection import PostgresExecutor
from .errors import ConfigError
from .log import configure_logging
from .render.theme import available_theme_names, resolve_theme
from .runtime.app import DEFAULT_FRAME_RATE, DEFAULT_TICK_RATE, Orchestrator

logger = logging.getLogger(__name__)

CONFIG_ERROR_EXIT_CODE = 2


def _positive_float(value: str) -> float:
    """argparse type for positive rates in Hz."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if not parsed > 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydb",
        description="Browse PostgreSQL databases in the terminal.",
    )
    parser.add_argument(
        "-t",
        "--tick-rate",
        type=_positive_float,
        default=DEFAULT_TICK_RATE,
        help=f"Tick rate in ticks per second; pending key chords expire each tick (default: {DEFAULT_TICK_RATE}).",
    )
    parser.add_argument(
        "-f",
        "--frame-rate",
        type=_positive_float,
        default=DEFAULT_FRAME_RATE,
        help=f"Frame rate in frames per second (default: {DEFAULT_FRAME_RATE}).",
    )
    parser.add_argument("--config", default=None, help="Path to config.json (overrides LAZYDB_CONFIG).")
    parser.add_argument("--log-level", default=None, help="Log level (overrides LAZYDB_LOG_LEVEL, default INFO).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and run lazydb until the user quits."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        log_path = configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"lazydb: {exc}", file=sys.stderr)
        raise SystemExit(CONFIG_ERROR_EXIT_CODE) from exc

    logger.info("starting lazydb with config %s, logging to %s", config.path, log_path)
    orchestrator = Orchestrator(
        config,
        PostgresExecutor(),
        tick_rate=args.tick_rate,
        frame_rate=args.frame_rate,
        theme=resolve_theme(args.theme, no_color=args.no_color),
    )
    orchestrator.run()
