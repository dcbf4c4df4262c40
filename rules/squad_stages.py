"""
Stages used only by the squad ruleset.
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Sequence

from domain.board_state import BoardState
from domain.constants import ELIMINATED_BY_COLLISION, ELIMINATED_BY_SQUAD
from domain.errors import ConsistencyFault
from domain.point import SnakeMove
from domain.settings import Settings, SquadSettings
from domain.snake import Snake

from .stages import is_initialization

logger = logging.getLogger(__name__)


def group_by_squad(board: BoardState, squads: SquadSettings) -> List[List[Snake]]:
    """Member lists per squad, in board order. Unassigned snakes form one-snake groups."""
    groups: Dict[str, List[Snake]] = OrderedDict()
    loners: List[List[Snake]] = []
    for snake in board.snakes:
        squad = squads.squad_of(snake.id)
        if squad is None:
            loners.append([snake])
        else:
            groups.setdefault(squad, []).append(snake)
    return list(groups.values()) + loners


def resurrect_snakes_squad(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    """Undo this turn's body collisions between squad-mates."""
    if is_initialization(board, settings, moves):
        return False
    squads = settings.squads
    if not squads.allow_body_collisions:
        return False

    for snake in board.snakes:
        if snake.eliminated_cause != ELIMINATED_BY_COLLISION:
            continue
        if snake.eliminated_on_turn != board.turn + 1:
            continue
        if not snake.eliminated_by:
            raise ConsistencyFault(
                f"snake {snake.id} eliminated by collision without a culprit"
            )
        if snake.eliminated_by != snake.id and squads.same_squad(snake.id, snake.eliminated_by):
            logger.debug(f"Snake {snake.id} collided with squad-mate {snake.eliminated_by}, reverting")
            snake.revive()

    return False


def share_attributes_squad(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    if is_initialization(board, settings, moves):
        return False
    squads = settings.squads
    if not (squads.shared_elimination or squads.shared_length or squads.shared_health):
        return False

    for members in group_by_squad(board, squads):
        living = [snake for snake in members if not snake.is_eliminated]
        if not living:
            continue

        if squads.shared_health:
            max_health = max(snake.health for snake in living)
            for snake in living:
                snake.health = max_health

        if squads.shared_length:
            if any(not snake.body for snake in living):
                raise ConsistencyFault("found snake of zero length while sharing squad length")
            max_length = max(snake.length for snake in living)
            for snake in living:
                while snake.length < max_length:
                    snake.grow()

        if squads.shared_elimination and len(living) < len(members):
            # No single culprit: any fallen squad-mate could be the cause
            for snake in living:
                snake.eliminate(ELIMINATED_BY_SQUAD, "", board.turn + 1)

    return False


def game_over_squad(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    squads = settings.squads
    remaining = board.living_snakes()
    for snake in remaining:
        if not squads.same_squad(snake.id, remaining[0].id):
            return False
    # no snakes or a single squad remaining
    return True
