# game/entities/registry.py
from typing import Any, List, Self

import polars as pl
import structlog

from game.entities.components import Entity, Position, Renderable

log = structlog.get_logger()

ENTITY_SCHEMA: dict[str, pl.DataType] = {
    "entity_id": pl.UInt32,
    "name": pl.Utf8,
    "x": pl.Int32,
    "y": pl.Int32,
    "layer": pl.Int16,
    "glyph": pl.Utf8,
    "color": pl.Utf8,
}

PROTECTED_COMPONENTS = ("entity_id",)


class EntityRegistry:
    """Ordered table of entities; row order is creation order."""

    def __init__(self: Self):
        self.entities_df: pl.DataFrame = pl.DataFrame(schema=ENTITY_SCHEMA)
        self._next_entity_id: int = 0
        log.debug("EntityRegistry initialized", schema=list(ENTITY_SCHEMA.keys()))

    def __len__(self: Self) -> int:
        return self.entities_df.height

    def _get_next_id(self: Self) -> int:
        current_id = self._next_entity_id
        self._next_entity_id += 1
        if self._next_entity_id > 2**32 - 1:
            log.critical("Entity ID counter overflowed", next_id=self._next_entity_id)
            raise OverflowError("Entity ID counter overflowed (UInt32 limit reached).")
        return current_id

    def create_entity(
        self: Self,
        x: int,
        y: int,
        glyph: str,
        color: str,
        name: str,
        layer: int = 0,
    ) -> int:
        new_id = self._get_next_id()
        entity_data = {
            "entity_id": [new_id],
            "name": [name],
            "x": [x],
            "y": [y],
            "layer": [layer],
            "glyph": [glyph],
            "color": [color],
        }
        new_entity_df = pl.DataFrame(entity_data, schema=ENTITY_SCHEMA)
        if self.entities_df.height == 0:
            self.entities_df = new_entity_df
        else:
            self.entities_df = pl.concat(
                [self.entities_df, new_entity_df], how="vertical"
            )
        log.info(
            "Entity created", entity_id=new_id, name=name, pos=(x, y), layer=layer
        )
        return new_id

    def _check_component(self: Self, entity_id: int, component_name: str) -> None:
        if component_name not in ENTITY_SCHEMA:
            log.warning(
                "Component does not exist",
                entity_id=entity_id,
                component=component_name,
            )
            raise ValueError(
                f"Component '{component_name}' does not exist in ENTITY_SCHEMA."
            )

    def get_entity_component(
        self: Self, entity_id: int, component_name: str
    ) -> Any | None:
        """Returns one component value, or None if the entity is unknown."""
        self._check_component(entity_id, component_name)
        entity_df = self.entities_df.filter(pl.col("entity_id") == entity_id)
        if entity_df.height == 0:
            return None
        return entity_df.get_column(component_name).item()

    def set_entity_component(
        self: Self, entity_id: int, component_name: str, value: Any
    ) -> bool:
        """Overwrites one component; returns False if the entity is unknown."""
        self._check_component(entity_id, component_name)
        if component_name in PROTECTED_COMPONENTS:
            log.warning(
                "Attempted to set protected component",
                entity_id=entity_id,
                component=component_name,
            )
            raise ValueError(f"Cannot directly set '{component_name}' component.")
        mask = pl.col("entity_id") == entity_id
        if self.entities_df.filter(mask).height == 0:
            log.debug(
                "Entity not found, cannot set component",
                entity_id=entity_id,
                component=component_name,
            )
            return False
        target_dtype = ENTITY_SCHEMA[component_name]
        self.entities_df = self.entities_df.with_columns(
            pl.when(mask)
            .then(pl.lit(value, dtype=target_dtype))
            .otherwise(pl.col(component_name))
            .alias(component_name)
        )
        return True

    def get_position(self: Self, entity_id: int) -> Position | None:
        """Return the Position component for an entity if available."""
        entity_df = self.entities_df.filter(pl.col("entity_id") == entity_id)
        if entity_df.height == 0:
            return None
        row = entity_df.row(0, named=True)
        return Position(int(row["x"]), int(row["y"]))

    def set_position(self: Self, entity_id: int, position: Position) -> bool:
        """Update an entity's position component."""
        mask = pl.col("entity_id") == entity_id
        if self.entities_df.filter(mask).height == 0:
            return False
        self.entities_df = self.entities_df.with_columns(
            pl.when(mask)
            .then(pl.lit(position.x, dtype=pl.Int32))
            .otherwise(pl.col("x"))
            .alias("x"),
            pl.when(mask)
            .then(pl.lit(position.y, dtype=pl.Int32))
            .otherwise(pl.col("y"))
            .alias("y"),
        )
        return True

    @staticmethod
    def _row_to_entity(row: dict[str, Any]) -> Entity:
        return Entity(
            entity_id=int(row["entity_id"]),
            name=row["name"],
            position=Position(int(row["x"]), int(row["y"])),
            renderable=Renderable(
                glyph=row["glyph"], color=row["color"], layer=int(row["layer"])
            ),
        )

    def get_entity(self: Self, entity_id: int) -> Entity | None:
        entity_df = self.entities_df.filter(pl.col("entity_id") == entity_id)
        if entity_df.height == 0:
            return None
        return self._row_to_entity(entity_df.row(0, named=True))

    def entities(self: Self) -> List[Entity]:
        """All entities in creation order."""
        return [
            self._row_to_entity(row)
            for row in self.entities_df.iter_rows(named=True)
        ]

    def entities_by_layer(self: Self) -> List[Entity]:
        """Entities sorted bottom layer first; ties keep creation order."""
        ordered = self.entities_df.sort("layer", maintain_order=True)
        return [self._row_to_entity(row) for row in ordered.iter_rows(named=True)]
