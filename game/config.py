# game/config.py
"""Level and application configuration.

Values are read from ``config/config.yaml``.  Every key is optional; missing
keys fall back to the defaults below, which reproduce the classic 80x50
window with a 5-row UI strip, 6..10 tile rooms and 30 placement attempts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

from game.errors import ConfigurationError

log = structlog.get_logger()

PROJECT_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_WINDOW_WIDTH = 80
DEFAULT_WINDOW_HEIGHT = 50
DEFAULT_RESERVED_UI_ROWS = 5
DEFAULT_ROOM_MIN_SIZE = 6
DEFAULT_ROOM_MAX_SIZE = 10
DEFAULT_MAX_ROOM_ATTEMPTS = 30
DEFAULT_NPC_OFFSET_X = -5


@dataclass(frozen=True)
class LevelConfig:
    """Parameters for a single generated level.

    Room sizes are drawn from the half-open range
    ``[room_min_size, room_max_size)``.
    """

    map_width: int = DEFAULT_WINDOW_WIDTH
    map_height: int = DEFAULT_WINDOW_HEIGHT - DEFAULT_RESERVED_UI_ROWS
    room_min_size: int = DEFAULT_ROOM_MIN_SIZE
    room_max_size: int = DEFAULT_ROOM_MAX_SIZE
    max_room_attempts: int = DEFAULT_MAX_ROOM_ATTEMPTS
    random_seed: int | None = None

    @classmethod
    def from_window(
        cls,
        window_width: int,
        window_height: int,
        reserved_ui_rows: int = DEFAULT_RESERVED_UI_ROWS,
        **kwargs: Any,
    ) -> "LevelConfig":
        """Derives the map size from the window size minus the UI rows."""
        if reserved_ui_rows < 0:
            log.error("Negative reserved UI rows", reserved_ui_rows=reserved_ui_rows)
            raise ConfigurationError("reserved_ui_rows must not be negative.")
        return cls(
            map_width=window_width,
            map_height=window_height - reserved_ui_rows,
            **kwargs,
        )

    def validate(self) -> None:
        """Raises ConfigurationError if room placement ranges would be empty."""
        problems: list[str] = []
        if self.map_width <= 0 or self.map_height <= 0:
            problems.append(
                f"map size must be positive (got {self.map_width}x{self.map_height})"
            )
        if self.room_min_size < 2:
            problems.append(f"room_min_size must be >= 2 (got {self.room_min_size})")
        if self.room_min_size >= self.room_max_size:
            problems.append(
                "room_min_size must be smaller than room_max_size "
                f"(got {self.room_min_size} >= {self.room_max_size})"
            )
        # Rect.center() offsets x by h // 2 and y by w // 2, so the tallest
        # room's half-height must still fit inside the narrowest interior.
        elif (self.room_max_size - 1) // 2 > self.room_min_size - 1:
            problems.append(
                f"room sizes {self.room_min_size}..{self.room_max_size - 1} are too "
                "uneven: room centers could fall outside their room"
            )
        # Widest drawable room is room_max_size - 1, which leaves
        # map_dim - room_max_size possible anchor positions.
        if self.map_width - self.room_max_size <= 0:
            problems.append(
                f"map_width {self.map_width} leaves no room placement range "
                f"for rooms up to {self.room_max_size - 1} tiles"
            )
        if self.map_height - self.room_max_size <= 0:
            problems.append(
                f"map_height {self.map_height} leaves no room placement range "
                f"for rooms up to {self.room_max_size - 1} tiles"
            )
        if self.max_room_attempts < 0:
            problems.append(
                f"max_room_attempts must not be negative (got {self.max_room_attempts})"
            )
        if problems:
            log.error("Invalid level configuration", problems=problems, config=self)
            raise ConfigurationError("; ".join(problems))


@dataclass(frozen=True)
class EntityPreset:
    """Presentation data for an entity; the core only stores it."""

    glyph: str = "@"
    color: str = "white"
    layer: int = 0
    name: str = "Entity"


@dataclass(frozen=True)
class AppConfig:
    level: LevelConfig = field(default_factory=LevelConfig)
    player: EntityPreset = field(
        default_factory=lambda: EntityPreset(color="white", layer=1, name="Player")
    )
    npc: EntityPreset = field(
        default_factory=lambda: EntityPreset(color="yellow", layer=0, name="Stranger")
    )
    npc_offset_x: int = DEFAULT_NPC_OFFSET_X
    title: str = "r/roguelikedev"
    log_level: int = logging.INFO


def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a generic YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        log.error(
            f"{config_name} config must be a mapping",
            path=str(config_path),
            type=type(config_data).__name__,
        )
        raise ConfigurationError(f"{config_name} config must be a YAML mapping.")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Returns ``data[key]`` as a mapping; a missing or null section is empty."""
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        log.error(
            "Config section must be a mapping",
            section=key,
            type=type(section).__name__,
        )
        raise ConfigurationError(f"Config section '{key}' must be a YAML mapping.")
    return section


def _entity_preset(data: Dict[str, Any], default: EntityPreset) -> EntityPreset:
    return EntityPreset(
        glyph=str(data.get("glyph", default.glyph)),
        color=str(data.get("color", default.color)),
        layer=int(data.get("layer", default.layer)),
        name=str(data.get("name", default.name)),
    )


def _log_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


def config_from_dict(data: Dict[str, Any]) -> AppConfig:
    """Builds an AppConfig from the parsed YAML mapping and validates it.

    Any malformed value surfaces as ConfigurationError.
    """
    window_cfg = _section(data, "window")
    dungeon_cfg = _section(data, "dungeon")
    entities_cfg = _section(data, "entities")
    logging_cfg = _section(data, "logging")
    player_cfg = _section(entities_cfg, "player")
    npc_cfg = _section(entities_cfg, "npc")

    defaults = AppConfig()
    seed = dungeon_cfg.get("seed")
    try:
        level = LevelConfig.from_window(
            int(window_cfg.get("width", DEFAULT_WINDOW_WIDTH)),
            int(window_cfg.get("height", DEFAULT_WINDOW_HEIGHT)),
            int(window_cfg.get("reserved_ui_rows", DEFAULT_RESERVED_UI_ROWS)),
            room_min_size=int(dungeon_cfg.get("room_min_size", DEFAULT_ROOM_MIN_SIZE)),
            room_max_size=int(dungeon_cfg.get("room_max_size", DEFAULT_ROOM_MAX_SIZE)),
            max_room_attempts=int(
                dungeon_cfg.get("max_room_attempts", DEFAULT_MAX_ROOM_ATTEMPTS)
            ),
            random_seed=None if seed is None else int(seed),
        )
        app_config = AppConfig(
            level=level,
            player=_entity_preset(player_cfg, defaults.player),
            npc=_entity_preset(npc_cfg, defaults.npc),
            npc_offset_x=int(npc_cfg.get("offset_x", DEFAULT_NPC_OFFSET_X)),
            title=str(window_cfg.get("title", defaults.title)),
            log_level=_log_level(logging_cfg.get("level", defaults.log_level)),
        )
    except ConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        log.error("Invalid value in configuration", error=str(e))
        raise ConfigurationError(f"Invalid configuration value: {e}") from e
    level.validate()
    return app_config


def load_config(config_path: Path = CONFIG_FILE) -> AppConfig:
    return config_from_dict(load_yaml_config(config_path, "Main"))
