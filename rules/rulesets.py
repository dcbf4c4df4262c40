"""
Ruleset variants.

StandardRuleset holds the shared behavior; each variant overrides only the
stage list, the game-over stage, the initial board hook or the settings.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from domain.board_state import BoardState
from domain.constants import (
    GAME_TYPE_CONSTRICTOR,
    GAME_TYPE_ROYALE,
    GAME_TYPE_SOLO,
    GAME_TYPE_SQUAD,
    GAME_TYPE_STANDARD,
)
from domain.errors import ConfigurationError
from domain.point import SnakeMove
from domain.settings import Settings, SquadSettings

from .pipeline import (
    STAGE_COLLISION_SQUAD,
    STAGE_EAT_FOOD_STANDARD,
    STAGE_ELIMINATE_STANDARD,
    STAGE_GAME_OVER_SOLO,
    STAGE_GAME_OVER_SQUAD,
    STAGE_GAME_OVER_STANDARD,
    STAGE_GROW_CONSTRICTOR,
    STAGE_HAZARD_DAMAGE_STANDARD,
    STAGE_HAZARD_SPAWN_ROYALE,
    STAGE_HEALTH_REDUCE_STANDARD,
    STAGE_MOVEMENT_STANDARD,
    STAGE_REMOVE_FOOD_CONSTRICTOR,
    STAGE_SHARE_SQUAD,
    STAGE_SPAWN_FOOD_STANDARD,
    Pipeline,
    get_stage,
)
from .variant_stages import grow_snakes_constrictor, remove_food_constrictor

logger = logging.getLogger(__name__)

STANDARD_STAGES: Tuple[str, ...] = (
    STAGE_MOVEMENT_STANDARD,
    STAGE_HEALTH_REDUCE_STANDARD,
    STAGE_HAZARD_DAMAGE_STANDARD,
    STAGE_EAT_FOOD_STANDARD,
    STAGE_SPAWN_FOOD_STANDARD,
    STAGE_ELIMINATE_STANDARD,
)


class StandardRuleset:
    """
    The standard game: last snake standing.

    Subclasses customise STAGES, GAME_OVER_STAGE and NAME. The pipeline is
    resolved once in the constructor, so a bad stage list is a
    ConfigurationError when the ruleset is created.
    """

    NAME = GAME_TYPE_STANDARD
    STAGES: Tuple[str, ...] = STANDARD_STAGES + (STAGE_GAME_OVER_STANDARD,)
    GAME_OVER_STAGE = STAGE_GAME_OVER_STANDARD

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        self._pipeline = Pipeline(*self.STAGES)
        self._game_over = get_stage(self.GAME_OVER_STAGE)

    def name(self) -> str:
        return self.NAME

    def pipeline(self) -> Pipeline:
        return self._pipeline

    def settings(self) -> Settings:
        return self._settings

    def modify_initial_board_state(self, board: BoardState) -> BoardState:
        return board.clone()

    def create_next_board_state(self, board: BoardState, moves: Sequence[SnakeMove]) -> BoardState:
        """
        Resolve one turn.

        Args:
            board: The current board. It is not modified.
            moves: One SnakeMove per living snake.

        Returns:
            A new board with ``turn`` incremented.

        Raises:
            ConsistencyFault: An invariant broke while resolving the turn.
        """
        _, next_board = self._pipeline.execute(board, self._settings, moves)
        next_board.turn = board.turn + 1

        for snake in next_board.snakes:
            if snake.eliminated_on_turn == next_board.turn:
                culprit = f" by {snake.eliminated_by}" if snake.eliminated_by else ""
                logger.info(f"[{next_board.turn}] Snake {snake.id} eliminated: {snake.eliminated_cause}{culprit}")

        return next_board

    def is_game_over(self, board: BoardState) -> bool:
        return self._game_over(board, self._settings, [])

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name()}>"


class SoloRuleset(StandardRuleset):
    """Single-player practice: the game runs until every snake is eliminated."""

    NAME = GAME_TYPE_SOLO
    STAGES = STANDARD_STAGES + (STAGE_GAME_OVER_SOLO,)
    GAME_OVER_STAGE = STAGE_GAME_OVER_SOLO


class SquadRuleset(StandardRuleset):
    NAME = GAME_TYPE_SQUAD
    STAGES = STANDARD_STAGES + (
        STAGE_COLLISION_SQUAD,
        STAGE_SHARE_SQUAD,
        STAGE_GAME_OVER_SQUAD,
    )
    GAME_OVER_STAGE = STAGE_GAME_OVER_SQUAD

    def __init__(self, settings: Optional[Settings] = None, squad_settings: Optional[SquadSettings] = None):
        settings = settings or Settings()
        if squad_settings is not None:
            settings = replace(settings, squad_settings=squad_settings)
        super().__init__(settings)


class RoyaleRuleset(StandardRuleset):
    """Standard play on a board whose safe area shrinks every N turns."""

    NAME = GAME_TYPE_ROYALE
    STAGES = STANDARD_STAGES + (STAGE_HAZARD_SPAWN_ROYALE, STAGE_GAME_OVER_STANDARD)

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        if self._settings.shrink_every_n_turns < 1:
            raise ConfigurationError("royale game requires shrink_every_n_turns to be > 0")


class ConstrictorRuleset(StandardRuleset):
    """No food; every snake grows each turn and never starves."""

    NAME = GAME_TYPE_CONSTRICTOR
    STAGES = (
        STAGE_MOVEMENT_STANDARD,
        STAGE_HEALTH_REDUCE_STANDARD,
        STAGE_HAZARD_DAMAGE_STANDARD,
        STAGE_EAT_FOOD_STANDARD,
        STAGE_ELIMINATE_STANDARD,
        STAGE_REMOVE_FOOD_CONSTRICTOR,
        STAGE_GROW_CONSTRICTOR,
        STAGE_GAME_OVER_STANDARD,
    )

    def modify_initial_board_state(self, board: BoardState) -> BoardState:
        initial = board.clone()
        remove_food_constrictor(initial, self._settings, [])
        grow_snakes_constrictor(initial, self._settings, [])
        return initial


RULESETS = {
    GAME_TYPE_STANDARD: StandardRuleset,
    GAME_TYPE_SOLO: SoloRuleset,
    GAME_TYPE_SQUAD: SquadRuleset,
    GAME_TYPE_ROYALE: RoyaleRuleset,
    GAME_TYPE_CONSTRICTOR: ConstrictorRuleset,
}
