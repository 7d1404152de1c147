from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from conquest.console import ConsoleIO
from conquest.core.errors import StoreAllocationError
from conquest.game_loop import GameSession, run_game
from conquest.settings import GameSettings, load_dotenv_file, settings_from_env

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Single-player territory conquest")
    parser.add_argument("--territories", type=int, default=None,
                        help="Number of territories on the map (default: CONQUEST_TERRITORY_COUNT or 5)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for a reproducible game (default: CONQUEST_SEED or random)")
    parser.add_argument("--no-pause", action="store_true",
                        help="Don't wait for ENTER after each command")
    parser.add_argument("--log-level", default=None,
                        help="Logging level for stderr (default: CONQUEST_LOG_LEVEL or WARNING)")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, base: GameSettings) -> GameSettings:
    overrides: dict[str, object] = {}
    if args.territories is not None:
        overrides["territory_count"] = args.territories
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.no_pause:
        overrides["pause_after_command"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return dataclasses.replace(base, **overrides)


def main(argv: list[str] | None = None) -> int:
    load_dotenv_file(project_root=Path.cwd())
    args = _parse_args(argv)
    try:
        settings = resolve_settings(args, settings_from_env())
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    # Configure logging (stderr, so it never mixes with the game screen).
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        session = GameSession.new(territory_count=settings.territory_count, seed=settings.seed)
    except StoreAllocationError as e:
        logger.error("Could not create the map: %s", e)
        print(f"Error creating the map: {e}", file=sys.stderr)
        return 1

    run_game(session=session, io=ConsoleIO(), pause=settings.pause_after_command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
