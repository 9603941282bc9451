"""Exception types raised by the dungeon core."""

from __future__ import annotations


class DungeonError(Exception):
    """Base class for errors raised while building or using a level."""


class ConfigurationError(DungeonError, ValueError):
    """Level configuration cannot produce valid room placements."""


class GenerationError(DungeonError, RuntimeError):
    """Generation finished without a usable result (e.g. no spawn point)."""


class MapIndexError(IndexError):
    """Grid access outside the map bounds."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Tile ({x}, {y}) is outside the {width}x{height} map."
        )


__all__ = ["DungeonError", "ConfigurationError", "GenerationError", "MapIndexError"]
