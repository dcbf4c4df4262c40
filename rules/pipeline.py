"""
Stage registry and pipeline execution.

The registry maps a stage name to its function. It is built once at import
and exposed read-only; rulesets describe their turn as a list of names.
"""

import logging
from types import MappingProxyType
from typing import Callable, List, Sequence, Tuple

from domain.board_state import BoardState
from domain.errors import ConfigurationError
from domain.point import SnakeMove
from domain.settings import Settings

from . import squad_stages, stages, variant_stages

logger = logging.getLogger(__name__)

StageFunc = Callable[[BoardState, Settings, Sequence[SnakeMove]], bool]

STAGE_MOVEMENT_STANDARD = "snake.movement.standard"
STAGE_HEALTH_REDUCE_STANDARD = "health.reduce.standard"
STAGE_HAZARD_DAMAGE_STANDARD = "hazard.damage.standard"
STAGE_EAT_FOOD_STANDARD = "snake.eatfood.standard"
STAGE_SPAWN_FOOD_STANDARD = "food.spawn.standard"
STAGE_ELIMINATE_STANDARD = "snake.eliminate.standard"
STAGE_COLLISION_SQUAD = "snake.collision.squad"
STAGE_SHARE_SQUAD = "snake.share.squad"
STAGE_HAZARD_SPAWN_ROYALE = "hazard.spawn.royale"
STAGE_REMOVE_FOOD_CONSTRICTOR = "food.remove.constrictor"
STAGE_GROW_CONSTRICTOR = "snake.grow.constrictor"
STAGE_GAME_OVER_STANDARD = "gameover.standard"
STAGE_GAME_OVER_SOLO = "gameover.solo"
STAGE_GAME_OVER_SQUAD = "gameover.squad"

STAGE_REGISTRY = MappingProxyType({
    STAGE_MOVEMENT_STANDARD: stages.move_snakes_standard,
    STAGE_HEALTH_REDUCE_STANDARD: stages.reduce_snake_health,
    STAGE_HAZARD_DAMAGE_STANDARD: stages.damage_hazards_standard,
    STAGE_EAT_FOOD_STANDARD: stages.feed_snakes_standard,
    STAGE_SPAWN_FOOD_STANDARD: stages.spawn_food_standard,
    STAGE_ELIMINATE_STANDARD: stages.eliminate_snakes_standard,
    STAGE_COLLISION_SQUAD: squad_stages.resurrect_snakes_squad,
    STAGE_SHARE_SQUAD: squad_stages.share_attributes_squad,
    STAGE_HAZARD_SPAWN_ROYALE: variant_stages.populate_hazards_royale,
    STAGE_REMOVE_FOOD_CONSTRICTOR: variant_stages.remove_food_constrictor,
    STAGE_GROW_CONSTRICTOR: variant_stages.grow_snakes_constrictor,
    STAGE_GAME_OVER_STANDARD: stages.game_over_standard,
    STAGE_GAME_OVER_SOLO: stages.game_over_solo,
    STAGE_GAME_OVER_SQUAD: squad_stages.game_over_squad,
})


def get_stage(name: str) -> StageFunc:
    """
    Look up a registered stage.

    Raises:
        ConfigurationError: If no stage is registered under this name.
    """
    try:
        return STAGE_REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(STAGE_REGISTRY))
        raise ConfigurationError(f"Unknown stage '{name}'. Available stages: {available}") from None


class Pipeline:
    """
    An ordered list of named stages run against one board per turn.

    Every name is resolved when the pipeline is built, so an unknown stage
    fails at construction and never mid-game.
    """

    def __init__(self, *stage_names: str):
        self.stage_names: List[str] = list(stage_names)
        self._stages: List[Tuple[str, StageFunc]] = [(name, get_stage(name)) for name in stage_names]

    def execute(
        self,
        board: BoardState,
        settings: Settings,
        moves: Sequence[SnakeMove],
    ) -> Tuple[bool, BoardState]:
        """
        Run every stage in order on a private copy of ``board``.

        Args:
            board: Current board; never modified.
            settings: Game settings.
            moves: One move per living snake.

        Returns:
            (ended, next_board). ``ended`` is True when a stage asked the
            pipeline to stop.

        Raises:
            ConsistencyFault: Propagated from the failing stage; the turn
                is abandoned and no board is produced.
        """
        next_board = board.clone()
        for name, stage in self._stages:
            ended = stage(next_board, settings, moves)
            logger.debug(f"[turn {board.turn}] stage {name} ended={ended}")
            if ended:
                return True, next_board
        return False, next_board

    def __len__(self):
        return len(self._stages)

    def __repr__(self):
        return f"<Pipeline {self.stage_names}>"
