# game/world/game_map.py
from typing import NamedTuple

import numpy as np
import structlog

from game.errors import MapIndexError

log = structlog.get_logger()


class Tile(NamedTuple):
    blocked: bool
    blocks_sight: bool


WALL_TILE = Tile(blocked=True, blocks_sight=True)
FLOOR_TILE = Tile(blocked=False, blocks_sight=False)


class GameMap:
    def __init__(self, width: int, height: int):
        """
        Allocates a width x height board with every tile fully blocking.
        Arrays are indexed [y, x].
        """
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self._width = width
        self._height = height
        log.debug("Initializing GameMap", width=self._width, height=self._height)

        self.blocked: np.ndarray = np.ones((height, width), dtype=bool, order="C")
        self.blocks_sight: np.ndarray = np.ones(
            (height, width), dtype=bool, order="C"
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        # numpy would happily accept negative indices, so check explicitly
        if not self.in_bounds(x, y):
            log.error(
                "Map access out of bounds",
                pos=(x, y),
                width=self._width,
                height=self._height,
            )
            raise MapIndexError(x, y, self._width, self._height)

    def get(self, x: int, y: int) -> Tile:
        """Returns the tile at (x, y). Raises MapIndexError when out of bounds."""
        self._check_bounds(x, y)
        return Tile(bool(self.blocked[y, x]), bool(self.blocks_sight[y, x]))

    def is_blocked(self, x: int, y: int) -> bool:
        """Out-of-bounds coordinates count as blocked."""
        if not self.in_bounds(x, y):
            return True
        return bool(self.blocked[y, x])

    def set_passable(self, x: int, y: int) -> None:
        """Clears both blocking flags on a single tile."""
        self._check_bounds(x, y)
        self.blocked[y, x] = False
        self.blocks_sight[y, x] = False

    def carve_area(self, x_start: int, x_end: int, y_start: int, y_end: int) -> None:
        """Clears both flags for every tile in [x_start, x_end) x [y_start, y_end)."""
        if x_start >= x_end or y_start >= y_end:
            log.warning(
                "Attempted to carve zero-size area",
                x_slice=f"{x_start}:{x_end}",
                y_slice=f"{y_start}:{y_end}",
            )
            return
        self._check_bounds(x_start, y_start)
        self._check_bounds(x_end - 1, y_end - 1)
        self.blocked[y_start:y_end, x_start:x_end] = False
        self.blocks_sight[y_start:y_end, x_start:x_end] = False

    def passable_mask(self) -> np.ndarray:
        """Boolean [y, x] array, True where a tile can be entered."""
        return ~self.blocked

    def count_passable(self) -> int:
        return int(np.count_nonzero(~self.blocked))

    def to_ascii(self, wall: str = "#", floor: str = ".") -> list[str]:
        """Rows of the board as text, top row first."""
        return [
            "".join(wall if cell else floor for cell in row) for row in self.blocked
        ]
