from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Position:
    """Spatial position on the map."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Renderable:
    """Presentation data carried for the renderer; opaque to the core."""

    glyph: str
    color: str
    layer: int = 0


@dataclass(frozen=True)
class Entity:
    """Snapshot of one registry row."""

    entity_id: int
    name: str
    position: Position
    renderable: Renderable

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    @property
    def layer(self) -> int:
        return self.renderable.layer
