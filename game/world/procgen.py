# game/world/procgen.py
from typing import List, NamedTuple, Optional, Tuple

import structlog

from game.config import LevelConfig
from game.world.game_map import GameMap
from game.world.geometry import Rect

try:
    from game_rng import GameRNG
except ImportError as e:
    structlog.get_logger().error("CRITICAL: GameRNG class not found.", error=str(e))
    raise


log = structlog.get_logger()


class GeneratedLevel(NamedTuple):
    game_map: GameMap
    spawn_point: Optional[Tuple[int, int]]
    rooms: List[Rect]
    seed: int


def carve_room(game_map: GameMap, room: Rect) -> None:
    """Marks the room interior as passable, leaving its outer ring as wall."""
    xs, ys = room.interior()
    game_map.carve_area(xs.start, xs.stop, ys.start, ys.stop)
    log.debug("Carved room", room=room)


def horizontal_tunnel(game_map: GameMap, x1: int, x2: int, y: int) -> None:
    """Carves row ``y`` from x1 to x2 inclusive, in either direction."""
    game_map.carve_area(min(x1, x2), max(x1, x2) + 1, y, y + 1)


def vertical_tunnel(game_map: GameMap, y1: int, y2: int, x: int) -> None:
    """Carves column ``x`` from y1 to y2 inclusive, in either direction."""
    game_map.carve_area(x, x + 1, min(y1, y2), max(y1, y2) + 1)


def connect_rooms(
    game_map: GameMap, prev_room: Rect, new_room: Rect, rng: GameRNG
) -> bool:
    """
    Joins two room centers with an L-shaped corridor.
    Returns True when the horizontal leg was carved first.
    """
    prev_x, prev_y = prev_room.center()
    new_x, new_y = new_room.center()
    horizontal_first = rng.coin_flip()
    if horizontal_first:
        # elbow at (new_x, prev_y)
        horizontal_tunnel(game_map, prev_x, new_x, prev_y)
        vertical_tunnel(game_map, prev_y, new_y, new_x)
    else:
        # elbow at (prev_x, new_y)
        vertical_tunnel(game_map, prev_y, new_y, prev_x)
        horizontal_tunnel(game_map, prev_x, new_x, new_y)
    log.debug(
        "Connected rooms",
        start=(prev_x, prev_y),
        end=(new_x, new_y),
        horizontal_first=horizontal_first,
    )
    return horizontal_first


def _random_room(config: LevelConfig, rng: GameRNG) -> Rect:
    # Draw order (w, h, x, y) is part of the seed contract.
    w = rng.get_randrange(config.room_min_size, config.room_max_size)
    h = rng.get_randrange(config.room_min_size, config.room_max_size)
    x = rng.get_randrange(config.map_width - w - 1)
    y = rng.get_randrange(config.map_height - h - 1)
    return Rect(x, y, w, h)


def generate_level(
    config: LevelConfig, rng: GameRNG | None = None
) -> GeneratedLevel:
    """Builds one level of rectangular rooms chained together by corridors.

    Each of ``config.max_room_attempts`` candidates is kept only if it does
    not touch any room accepted before it.  Every accepted room after the
    first is connected to the one accepted just before it, so all rooms are
    reachable from the first.  The first room's center is the spawn point;
    it is ``None`` when no room was accepted.
    """
    config.validate()
    if rng is None:
        rng = GameRNG(seed=config.random_seed)

    log.info(
        "Starting dungeon generation",
        width=config.map_width,
        height=config.map_height,
        room_size=(config.room_min_size, config.room_max_size),
        attempts=config.max_room_attempts,
        seed=rng.initial_seed,
    )

    game_map = GameMap(config.map_width, config.map_height)
    rooms: List[Rect] = []
    spawn_point: Optional[Tuple[int, int]] = None
    rejected = 0

    for attempt in range(config.max_room_attempts):
        new_room = _random_room(config, rng)
        if any(new_room.intersects(other) for other in rooms):
            rejected += 1
            log.debug("Rejected overlapping room", attempt=attempt, room=new_room)
            continue

        carve_room(game_map, new_room)
        if not rooms:
            spawn_point = new_room.center()
        else:
            connect_rooms(game_map, rooms[-1], new_room, rng)
        rooms.append(new_room)

    if not rooms:
        log.warning("Dungeon generation accepted no rooms", attempts=config.max_room_attempts)
    elif len(rooms) == 1:
        log.info("Dungeon generation produced a single room; no corridors carved")

    log.info(
        "Dungeon generation complete",
        rooms=len(rooms),
        rejected=rejected,
        passable=game_map.count_passable(),
        spawn=spawn_point,
        seed=rng.initial_seed,
    )
    return GeneratedLevel(game_map, spawn_point, rooms, rng.initial_seed)
