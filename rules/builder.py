"""
RulesetBuilder: turns string game parameters into a configured ruleset.

Parameters arrive as strings (CLI flags, agent-facing settings) and are
validated here, so that every malformed value is reported before the game
starts.
"""

import logging
from typing import Dict, Mapping, Optional

from domain.constants import (
    DEFAULT_FOOD_SPAWN_CHANCE,
    DEFAULT_HAZARD_DAMAGE_PER_TURN,
    DEFAULT_MINIMUM_FOOD,
    DEFAULT_SHRINK_EVERY_N_TURNS,
    GAME_TYPE_SOLO,
    GAME_TYPE_SQUAD,
    GAME_TYPE_STANDARD,
)
from domain.errors import ConfigurationError
from domain.settings import Settings, SquadSettings

from .rulesets import RULESETS, SquadRuleset, StandardRuleset

logger = logging.getLogger(__name__)

PARAM_GAME_TYPE = "name"
PARAM_FOOD_SPAWN_CHANCE = "foodSpawnChance"
PARAM_MINIMUM_FOOD = "minimumFood"
PARAM_HAZARD_DAMAGE_PER_TURN = "hazardDamagePerTurn"
PARAM_SHRINK_EVERY_N_TURNS = "shrinkEveryNTurns"
PARAM_ALLOW_BODY_COLLISIONS = "allowBodyCollisions"
PARAM_SHARED_ELIMINATION = "sharedElimination"
PARAM_SHARED_HEALTH = "sharedHealth"
PARAM_SHARED_LENGTH = "sharedLength"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


def param_int(params: Mapping[str, str], key: str, default: int) -> int:
    value = params.get(key)
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Parameter '{key}' must be an integer, got {value!r}") from None


def param_bool(params: Mapping[str, str], key: str, default: bool = False) -> bool:
    value = params.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Parameter '{key}' must be a boolean, got {value!r}")


class RulesetBuilder:
    """
    Example:
        ruleset = (
            RulesetBuilder()
            .with_seed(42)
            .with_params({"name": "squad", "sharedHealth": "true"})
            .add_snake_to_squad("snake-1", "red")
            .build()
        )
    """

    def __init__(self):
        self.seed = 0
        self.params: Dict[str, str] = {}
        self.solo = False
        self.squads: Dict[str, str] = {}

    def with_seed(self, seed: int) -> "RulesetBuilder":
        self.seed = seed
        return self

    def with_params(self, params: Mapping[str, str]) -> "RulesetBuilder":
        self.params.update(params)
        return self

    def with_solo(self, solo: bool) -> "RulesetBuilder":
        self.solo = solo
        return self

    def add_snake_to_squad(self, snake_id: str, squad: str) -> "RulesetBuilder":
        self.squads[snake_id] = squad
        return self

    def game_type(self) -> str:
        name = (self.params.get(PARAM_GAME_TYPE) or GAME_TYPE_STANDARD).strip().lower()
        if name == GAME_TYPE_STANDARD and self.solo:
            return GAME_TYPE_SOLO
        return name

    def settings(self) -> Settings:
        return Settings(
            food_spawn_chance=param_int(self.params, PARAM_FOOD_SPAWN_CHANCE, DEFAULT_FOOD_SPAWN_CHANCE),
            minimum_food=param_int(self.params, PARAM_MINIMUM_FOOD, DEFAULT_MINIMUM_FOOD),
            hazard_damage_per_turn=param_int(
                self.params, PARAM_HAZARD_DAMAGE_PER_TURN, DEFAULT_HAZARD_DAMAGE_PER_TURN
            ),
            shrink_every_n_turns=param_int(
                self.params, PARAM_SHRINK_EVERY_N_TURNS, DEFAULT_SHRINK_EVERY_N_TURNS
            ),
            seed=self.seed,
        )

    def squad_settings(self) -> SquadSettings:
        return SquadSettings(
            squad_map=self.squads,
            allow_body_collisions=param_bool(self.params, PARAM_ALLOW_BODY_COLLISIONS),
            shared_elimination=param_bool(self.params, PARAM_SHARED_ELIMINATION),
            shared_health=param_bool(self.params, PARAM_SHARED_HEALTH),
            shared_length=param_bool(self.params, PARAM_SHARED_LENGTH),
        )

    def build(self) -> StandardRuleset:
        """
        Build the configured ruleset.

        Raises:
            ConfigurationError: If the game type is unknown or a parameter
                is malformed or out of range.
        """
        game_type = self.game_type()
        if game_type not in RULESETS:
            available = ", ".join(RULESETS)
            raise ConfigurationError(f"Unknown game type '{game_type}'. Available game types: {available}")

        settings = self.settings()
        if game_type == GAME_TYPE_SQUAD:
            ruleset = SquadRuleset(settings, squad_settings=self.squad_settings())
        else:
            ruleset = RULESETS[game_type](settings)

        logger.debug(f"Built {ruleset!r} with seed {self.seed}")
        return ruleset


def get_ruleset(game_type: str, seed: int = 0, params: Optional[Mapping[str, str]] = None) -> StandardRuleset:
    """Shortcut for RulesetBuilder().with_seed(seed).with_params(...).build()."""
    merged = dict(params or {})
    merged[PARAM_GAME_TYPE] = game_type
    return RulesetBuilder().with_seed(seed).with_params(merged).build()
