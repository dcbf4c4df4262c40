"""
Stages for the royale and constrictor rulesets.
"""

import random
from typing import List, Sequence

from domain.board_state import BoardState
from domain.constants import SNAKE_MAX_HEALTH
from domain.errors import ConsistencyFault
from domain.point import Point, SnakeMove
from domain.settings import Settings


def royale_hazards(width: int, height: int, turn: int, settings: Settings) -> List[Point]:
    """
    Hazard cells for a royale board on the given turn.

    Every shrink moves one side of the safe rectangle one cell inward. The
    side is drawn from a generator seeded with the game seed alone, so the
    sequence of shrinks is the same however often this is recomputed.
    """
    if settings.shrink_every_n_turns <= 0:
        return []

    num_shrinks = turn // settings.shrink_every_n_turns
    min_x, max_x = 0, width - 1
    min_y, max_y = 0, height - 1

    rand = random.Random(settings.seed)
    for _ in range(num_shrinks):
        side = rand.randrange(4)
        if side == 0:
            min_x += 1
        elif side == 1:
            max_x -= 1
        elif side == 2:
            min_y += 1
        else:
            max_y -= 1

    return [
        Point(x, y)
        for x in range(width)
        for y in range(height)
        if x < min_x or x > max_x or y < min_y or y > max_y
    ]


def populate_hazards_royale(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    board.hazards = royale_hazards(board.width, board.height, board.turn + 1, settings)
    return False


def remove_food_constrictor(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    board.food = []
    return False


def grow_snakes_constrictor(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    """Living snakes stay at full health and always have a growth pending."""
    for snake in board.living_snakes():
        if len(snake.body) < 2:
            raise ConsistencyFault(f"snake {snake.id} is too short to play constrictor")
        snake.health = SNAKE_MAX_HEALTH
        if snake.body[-1] != snake.body[-2]:
            snake.grow()
    return False
