# main.py
"""Debug entry point: generate a level, optionally walk the player, dump it."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

import structlog
import yaml

from game.config import CONFIG_FILE, AppConfig, load_config
from game.errors import DungeonError
from game.game_state import LevelState
from game.systems.movement_system import move_direction
from utils.logging_utils import setup_logging

log = structlog.get_logger()


def render_ascii(level: LevelState) -> List[str]:
    """Board as text with entity glyphs drawn bottom layer first."""
    rows = [list(row) for row in level.game_map.to_ascii()]
    for entity in level.entity_registry.entities_by_layer():
        rows[entity.y][entity.x] = entity.renderable.glyph
    return ["".join(row) for row in rows]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate and print a dungeon level.")
    parser.add_argument(
        "--config", type=Path, default=CONFIG_FILE, help="Path to config.yaml"
    )
    parser.add_argument("--seed", type=int, default=None, help="Dungeon seed")
    parser.add_argument(
        "--moves",
        default="",
        help="Comma separated player moves, e.g. up,up,left",
    )
    parser.add_argument(
        "--log-level", default=None, help="Override the configured log level"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    cli_level = None
    if args.log_level:
        cli_level = logging.getLevelName(args.log_level.upper())
        if not isinstance(cli_level, int):
            setup_logging(logging.INFO)
            log.critical("Unknown log level", level=args.log_level)
            return 2
    setup_logging(cli_level if cli_level is not None else logging.INFO)

    try:
        config: AppConfig = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, DungeonError) as e:
        log.critical("Configuration could not be loaded", error=str(e))
        return 1
    if cli_level is None:
        setup_logging(config.log_level)

    try:
        level = LevelState.create(config, seed=args.seed)
        moves = [m.strip() for m in args.moves.split(",") if m.strip()]
        for direction in moves:
            result = move_direction(level.player_id, direction, level)
            log.debug("Player move", direction=direction, moved=result.moved)
    except DungeonError as e:
        log.critical("Level could not be created", error=str(e))
        return 1
    except ValueError as e:
        log.critical("Invalid argument", error=str(e))
        return 2

    print(f"{config.title} (seed {level.seed})")
    print("\n".join(render_ascii(level)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
