import logging

import pytest
import structlog
import yaml

import main
from game.config import AppConfig
from game.game_state import LevelState


@pytest.fixture(autouse=True)
def reset_logging():
    # main() points handlers at the captured stderr of the running test.
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


def test_render_ascii_draws_entities_over_tiles():
    level = LevelState.create(AppConfig(), seed=21)
    rows = main.render_ascii(level)
    assert len(rows) == 45
    assert all(len(row) == 80 for row in rows)
    px, py = level.spawn_point
    assert rows[py][px] == "@"
    assert rows[0] == "#" * 80


def test_main_prints_seeded_map(capsys):
    assert main.main(["--seed", "42", "--log-level", "warning"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "r/roguelikedev (seed 42)"
    assert len(out) == 46
    assert "@" in "".join(out[1:])


def test_main_same_seed_same_output(capsys):
    main.main(["--seed", "7", "--log-level", "warning"])
    first = capsys.readouterr().out
    main.main(["--seed", "7", "--log-level", "warning"])
    assert capsys.readouterr().out == first


def test_main_missing_config(tmp_path):
    assert main.main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_main_bad_direction():
    assert main.main(["--seed", "1", "--moves", "up,sideways", "--log-level", "warning"]) == 2


def test_main_unknown_log_level():
    assert main.main(["--seed", "1", "--log-level", "loud"]) == 2


@pytest.mark.parametrize(
    "data",
    [
        {"entities": {"npc": {"layer": "top"}}},
        {"entities": {"npc": {"offset_x": "left"}}},
        {"window": [80, 50]},
    ],
)
def test_main_bad_config_values(tmp_path, data):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump(data))
    assert main.main(["--config", str(path)]) == 1
