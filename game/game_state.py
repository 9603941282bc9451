# game/game_state.py
from __future__ import annotations

from typing import List, Tuple

import structlog

from game.config import AppConfig, LevelConfig
from game.entities.components import Entity, Position
from game.entities.registry import EntityRegistry
from game.errors import ConfigurationError, GenerationError
from game.systems.movement_system import MoveResult, try_move
from game.world.game_map import GameMap, Tile
from game.world.geometry import Rect
from game.world.procgen import GeneratedLevel, generate_level
from game_rng import GameRNG

log = structlog.get_logger()


class LevelState:
    """Owns everything belonging to one generated level.

    The map is fully carved before a ``LevelState`` exists, so every movement
    request sees the final board.  Use :meth:`create` to generate a level and
    place the player and the stranger on it.
    """

    def __init__(
        self,
        generated: GeneratedLevel,
        app_config: AppConfig,
    ):
        if generated.spawn_point is None:
            log.error(
                "Level has no spawn point",
                rooms=len(generated.rooms),
                seed=generated.seed,
            )
            raise GenerationError(
                "No room was accepted, so there is nowhere to place the player."
            )

        self.config: AppConfig = app_config
        self.game_map: GameMap = generated.game_map
        self.rooms: List[Rect] = list(generated.rooms)
        self.spawn_point: Tuple[int, int] = generated.spawn_point
        self.seed: int = generated.seed
        self.entity_registry: EntityRegistry = EntityRegistry()

        player = app_config.player
        spawn_x, spawn_y = self.spawn_point
        self.player_id: int = self.entity_registry.create_entity(
            x=spawn_x,
            y=spawn_y,
            glyph=player.glyph,
            color=player.color,
            name=player.name,
            layer=player.layer,
        )

        npc = app_config.npc
        npc_x = self.game_map.width // 2 + app_config.npc_offset_x
        npc_y = self.game_map.height // 2
        if not self.game_map.in_bounds(npc_x, npc_y):
            log.error(
                "Stranger position outside map",
                pos=(npc_x, npc_y),
                offset_x=app_config.npc_offset_x,
            )
            raise ConfigurationError(
                f"npc offset_x {app_config.npc_offset_x} places the stranger "
                f"at ({npc_x}, {npc_y}), outside the map."
            )
        self.npc_id: int = self.entity_registry.create_entity(
            x=npc_x,
            y=npc_y,
            glyph=npc.glyph,
            color=npc.color,
            name=npc.name,
            layer=npc.layer,
        )

        log.info(
            "Level state initialized",
            map_size=f"{self.game_map.width}x{self.game_map.height}",
            rooms=len(self.rooms),
            spawn=self.spawn_point,
            seed=self.seed,
        )

    @classmethod
    def create(
        cls,
        app_config: AppConfig | None = None,
        seed: int | None = None,
    ) -> "LevelState":
        """Generates a level and places its entities.

        ``seed`` overrides ``app_config.level.random_seed``.
        """
        app_config = app_config or AppConfig()
        level_config: LevelConfig = app_config.level
        rng = GameRNG(seed=seed if seed is not None else level_config.random_seed)
        return cls(generate_level(level_config, rng), app_config)

    @property
    def map_width(self) -> int:
        return self.game_map.width

    @property
    def map_height(self) -> int:
        return self.game_map.height

    @property
    def player_position(self) -> Position | None:
        return self.entity_registry.get_position(self.player_id)

    def query_tile(self, x: int, y: int) -> Tile:
        return self.game_map.get(x, y)

    def entities(self) -> List[Entity]:
        return self.entity_registry.entities()

    def move_player(self, dx: int, dy: int) -> MoveResult:
        return try_move(self.player_id, dx, dy, self)
