"""
Immutable per-game settings.
"""

import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .constants import (
    DEFAULT_FOOD_SPAWN_CHANCE,
    DEFAULT_HAZARD_DAMAGE_PER_TURN,
    DEFAULT_MINIMUM_FOOD,
    DEFAULT_SHRINK_EVERY_N_TURNS,
)
from .errors import ConfigurationError


@dataclass(frozen=True)
class SquadSettings:
    """
    Squad sub-settings. Every flag defaults to off so that a squad game
    without options plays exactly like a standard game.
    """
    squad_map: Mapping[str, str] = field(default_factory=dict)
    allow_body_collisions: bool = False
    shared_elimination: bool = False
    shared_health: bool = False
    shared_length: bool = False

    def __post_init__(self):
        object.__setattr__(self, "squad_map", MappingProxyType(dict(self.squad_map)))

    def squad_of(self, snake_id: str) -> Optional[str]:
        """Squad name of a snake, or None when it was not assigned one."""
        return self.squad_map.get(snake_id)

    def same_squad(self, snake_id: str, other_id: str) -> bool:
        # A snake missing from the map is alone in its own squad
        if snake_id not in self.squad_map or other_id not in self.squad_map:
            return snake_id == other_id
        return self.squad_map[snake_id] == self.squad_map[other_id]


@dataclass(frozen=True)
class Settings:
    food_spawn_chance: int = DEFAULT_FOOD_SPAWN_CHANCE
    minimum_food: int = DEFAULT_MINIMUM_FOOD
    hazard_damage_per_turn: int = DEFAULT_HAZARD_DAMAGE_PER_TURN
    shrink_every_n_turns: int = DEFAULT_SHRINK_EVERY_N_TURNS
    seed: int = 0
    squad_settings: Optional[SquadSettings] = None

    def __post_init__(self):
        if not 0 <= self.food_spawn_chance <= 100:
            raise ConfigurationError(
                f"food_spawn_chance must be between 0 and 100, got {self.food_spawn_chance}"
            )
        if self.minimum_food < 0:
            raise ConfigurationError(f"minimum_food must be >= 0, got {self.minimum_food}")
        if self.hazard_damage_per_turn < 0:
            raise ConfigurationError(
                f"hazard_damage_per_turn must be >= 0, got {self.hazard_damage_per_turn}"
            )
        if self.shrink_every_n_turns < 0:
            raise ConfigurationError(
                f"shrink_every_n_turns must be >= 0 (0 disables shrinking), got {self.shrink_every_n_turns}"
            )

    @property
    def squads(self) -> SquadSettings:
        return self.squad_settings or SquadSettings()

    def get_rand(self, turn: int) -> random.Random:
        """
        Random source for one turn. Derived only from the game seed and the
        turn number, so a game replays identically however moves were
        collected.
        """
        return random.Random(self.seed + turn)

    def to_dict(self) -> dict:
        """Settings as sent to snake agents in the ruleset block."""
        squads = self.squads
        return {
            "foodSpawnChance": self.food_spawn_chance,
            "minimumFood": self.minimum_food,
            "hazardDamagePerTurn": self.hazard_damage_per_turn,
            "royale": {"shrinkEveryNTurns": self.shrink_every_n_turns},
            "squad": {
                "allowBodyCollisions": squads.allow_body_collisions,
                "sharedElimination": squads.shared_elimination,
                "sharedHealth": squads.shared_health,
                "sharedLength": squads.shared_length,
            },
        }
