import numpy as np
import pytest

from game.errors import MapIndexError
from game.world.game_map import FLOOR_TILE, WALL_TILE, GameMap, Tile


def test_new_map_is_fully_blocked():
    gm = GameMap(width=8, height=5)
    assert gm.blocked.shape == (5, 8)
    assert gm.blocked.all()
    assert gm.blocks_sight.all()
    assert gm.count_passable() == 0
    assert gm.get(7, 4) == WALL_TILE


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_dimensions_rejected(width, height):
    with pytest.raises(ValueError):
        GameMap(width, height)


def test_set_passable_clears_both_flags_for_one_cell():
    gm = GameMap(4, 4)
    gm.set_passable(1, 2)
    assert gm.get(1, 2) == FLOOR_TILE
    assert gm.get(2, 1) == Tile(blocked=True, blocks_sight=True)
    assert gm.count_passable() == 1


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
def test_out_of_bounds_access_fails_fast(x, y):
    gm = GameMap(4, 3)
    with pytest.raises(MapIndexError):
        gm.get(x, y)
    with pytest.raises(IndexError):
        gm.set_passable(x, y)
    # Nothing was carved by the failed writes.
    assert gm.count_passable() == 0


def test_is_blocked_treats_outside_as_wall():
    gm = GameMap(3, 3)
    gm.set_passable(0, 0)
    assert not gm.is_blocked(0, 0)
    assert gm.is_blocked(-1, 0)
    assert gm.is_blocked(0, 3)


def test_carve_area_is_half_open():
    gm = GameMap(6, 6)
    gm.carve_area(1, 4, 2, 3)
    expected = np.zeros((6, 6), dtype=bool)
    expected[2, 1:4] = True
    assert np.array_equal(gm.passable_mask(), expected)
    assert np.array_equal(gm.blocks_sight, ~expected)


def test_carve_area_out_of_bounds_raises():
    gm = GameMap(6, 6)
    with pytest.raises(MapIndexError):
        gm.carve_area(3, 7, 0, 2)
    assert gm.count_passable() == 0


def test_carve_area_empty_box_is_noop():
    gm = GameMap(6, 6)
    gm.carve_area(3, 3, 0, 2)
    assert gm.count_passable() == 0


def test_to_ascii():
    gm = GameMap(3, 2)
    gm.set_passable(1, 1)
    assert gm.to_ascii() == ["###", "#.#"]
