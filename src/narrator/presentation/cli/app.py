"""Command-line entry point for playing a story collection."""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Sequence

from narrator.presentation.auto_ui import AutoPlayUi
from narrator.presentation.cli import config
from narrator.presentation.cli.console import DebugConsole
from narrator.presentation.cli.terminal_ui import ConsoleUi
from narrator.services.errors import GameConfigError
from narrator.services.game import Game
from narrator.utils.logger import get_logger, setup_logging


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="narrator", description="Play a collection of stories.")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible session")
    parser.add_argument("--discard", type=int, default=0, help="Draws to skip after seeding the RNG")
    parser.add_argument(
        "--stories",
        action="append",
        metavar="DIR",
        help="Folder scanned recursively for *.story.py files (repeatable)",
    )
    parser.add_argument("--saves", metavar="DIR", help="Folder holding savegames")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--log-level", help="DEBUG, VERBOSE, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--auto", action="store_true", help="Let the RNG make every choice")
    return parser.parse_args(argv)


def build_game(args: argparse.Namespace, user_config: dict) -> Game:
    """Construct the game and its UI from CLI arguments and the user config."""
    debug = args.debug or user_config.get("debug", False) or config.debug_enabled_from_env()
    ui_factory = AutoPlayUi if args.auto else ConsoleUi
    game = Game(
        ui_factory,
        stories_folders=args.stories,
        savegames_folder=args.saves,
        debug=debug,
        seed=args.seed,
        discard=args.discard,
    )
    game.init()
    if isinstance(game.ui, ConsoleUi):
        game.ui.attach_console(DebugConsole(game))
    return game


def main(argv: List[str] | None = None) -> int:
    """Start the interactive CLI session."""
    args = parse_args(argv)
    user_config = config.load_config()
    setup_logging(level=args.log_level or user_config["log_level"], log_file=args.log_file)
    logger = get_logger("narrator.cli")

    try:
        game = build_game(args, user_config)
    except GameConfigError as exc:
        logger.error(str(exc))
        return 2

    status = game.rng.get_status()
    logger.info(f"Game started with seed: {status.seed}")
    try:
        asyncio.run(game.start())
    except (EOFError, KeyboardInterrupt):
        print()
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
