import logging

import pytest
import yaml

from game.config import (
    CONFIG_FILE,
    AppConfig,
    LevelConfig,
    config_from_dict,
    load_config,
    load_yaml_config,
)
from game.errors import ConfigurationError


def test_bundled_config_matches_defaults():
    config = load_config(CONFIG_FILE)
    assert config.level == LevelConfig(
        map_width=80,
        map_height=45,
        room_min_size=6,
        room_max_size=10,
        max_room_attempts=30,
        random_seed=None,
    )
    assert config.player.layer == 1 and config.npc.layer == 0
    assert config.npc_offset_x == -5
    assert config.log_level == logging.INFO


def test_from_window_reserves_ui_rows():
    level = LevelConfig.from_window(100, 60, reserved_ui_rows=8)
    assert (level.map_width, level.map_height) == (100, 52)
    with pytest.raises(ConfigurationError):
        LevelConfig.from_window(100, 60, reserved_ui_rows=-1)


def test_custom_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "window": {"width": 40, "height": 30, "reserved_ui_rows": 2},
                "dungeon": {
                    "room_min_size": 4,
                    "room_max_size": 7,
                    "max_room_attempts": 12,
                    "seed": 9,
                },
                "entities": {"npc": {"glyph": "N", "offset_x": 3}},
                "logging": {"level": "debug"},
            }
        )
    )
    config = load_config(path)
    assert config.level.map_width == 40
    assert config.level.map_height == 28
    assert config.level.max_room_attempts == 12
    assert config.level.random_seed == 9
    assert config.npc.glyph == "N"
    assert config.npc.color == "yellow"
    assert config.npc_offset_x == 3
    assert config.log_level == logging.DEBUG


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_yaml_config(path, "Empty") == {}
    assert load_config(path) == AppConfig()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("window: [80, 50\n")
    with pytest.raises(yaml.YAMLError):
        load_config(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"map_width": 10},  # 10 - 10 leaves no anchor positions
        {"map_height": 9},
        {"room_min_size": 10},  # empty size range
        {"room_min_size": 1},
        {"room_min_size": 2, "room_max_size": 10},  # centers may leave the room
        {"max_room_attempts": -1},
        {"map_width": 0},
    ],
)
def test_invalid_level_configs(overrides):
    with pytest.raises(ConfigurationError):
        LevelConfig(**overrides).validate()


def test_smallest_valid_map():
    LevelConfig(map_width=11, map_height=11).validate()


def test_non_integer_values_rejected():
    with pytest.raises(ConfigurationError):
        config_from_dict({"dungeon": {"room_min_size": "big"}})


def test_unknown_log_level_rejected():
    with pytest.raises(ConfigurationError):
        config_from_dict({"logging": {"level": "chatty"}})


@pytest.mark.parametrize(
    "data",
    [
        {"entities": {"npc": {"layer": "top"}}},
        {"entities": {"npc": {"offset_x": "left"}}},
        {"entities": {"player": {"layer": None}}},
        {"window": [80, 50]},
        {"entities": {"npc": "yellow"}},
        {"dungeon": "small"},
    ],
)
def test_malformed_sections_rejected(tmp_path, data):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump(data))
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_null_sections_use_defaults():
    assert config_from_dict({"window": None, "entities": {"npc": None}}) == AppConfig()
