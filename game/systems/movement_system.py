"""Movement helper utilities.

Entities move one tile at a time along the cardinal axes.  A step into a
blocked tile (or off the map) is rejected silently: nothing changes and the
caller learns about it only through the returned :class:`MoveResult`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, NamedTuple

import structlog

from game.entities.components import Position

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from game.game_state import LevelState

log = structlog.get_logger()

CARDINAL_DELTAS: Final[dict[str, tuple[int, int]]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


class MoveResult(NamedTuple):
    moved: bool
    position: Position | None


def try_move(entity_id: int, dx: int, dy: int, level: LevelState) -> MoveResult:
    """Attempt to move an entity.

    Parameters
    ----------
    entity_id:
        The identifier of the entity to move.
    dx, dy:
        Delta values to apply to the entity's current position.  Callers are
        expected to pass unit cardinal steps; other deltas are not rejected.
    level:
        The :class:`~game.game_state.LevelState` holding the map and entity
        registry.

    Returns
    -------
    MoveResult
        ``moved`` is ``True`` if the position changed.  ``position`` is the
        entity's position after the call, or ``None`` for unknown entities.
    """

    entity_reg = level.entity_registry
    game_map = level.game_map

    current_pos = entity_reg.get_position(entity_id)
    if current_pos is None:
        log.debug("Move requested for unknown entity", entity_id=entity_id)
        return MoveResult(False, None)

    dest_x, dest_y = current_pos.x + dx, current_pos.y + dy
    if game_map.is_blocked(dest_x, dest_y):
        log.debug(
            "Move blocked", entity_id=entity_id, pos=tuple(current_pos), dest=(dest_x, dest_y)
        )
        return MoveResult(False, current_pos)

    new_pos = Position(dest_x, dest_y)
    entity_reg.set_position(entity_id, new_pos)
    return MoveResult(True, new_pos)


def move_direction(entity_id: int, direction: str, level: LevelState) -> MoveResult:
    """Moves an entity one step in a named cardinal direction."""
    try:
        dx, dy = CARDINAL_DELTAS[direction.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown direction {direction!r}; expected one of {sorted(CARDINAL_DELTAS)}"
        ) from None
    return try_move(entity_id, dx, dy, level)
