"""
Standard stage functions.

Every stage has the signature ``stage(board, settings, moves) -> bool``. It
mutates ``board`` in place and returns True when the pipeline should stop
after it. Invariant violations are raised as ConsistencyFault.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from domain.board_state import BoardState
from domain.constants import (
    DIRECTION_VECTORS,
    DOWN,
    ELIMINATED_BY_COLLISION,
    ELIMINATED_BY_HEAD_TO_HEAD,
    ELIMINATED_BY_OUT_OF_HEALTH,
    ELIMINATED_BY_SELF_COLLISION,
    ELIMINATED_BY_WALL,
    LEFT,
    RIGHT,
    SNAKE_MAX_HEALTH,
    UP,
    VALID_MOVES,
)
from domain.errors import ConsistencyFault
from domain.point import Point, SnakeMove
from domain.settings import Settings
from domain.snake import Snake

logger = logging.getLogger(__name__)


def is_initialization(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    """Turn 0 with no moves submitted is the board setup, not a real turn."""
    return board.turn == 0 and not moves


def get_default_move(body: Sequence[Point]) -> str:
    """
    The direction the snake is already travelling in (neck -> head).
    Defaults to UP when the snake has no distinct neck yet.
    """
    if len(body) < 2 or body[0] == body[1]:
        return UP
    head, neck = body[0], body[1]
    if head.x == neck.x + 1:
        return RIGHT
    if head.x == neck.x - 1:
        return LEFT
    if head.y == neck.y - 1:
        return DOWN
    return UP


def resolve_move(snake: Snake, submitted: Optional[str]) -> str:
    """
    Pick the direction actually applied to a snake this turn.

    A missing or unknown move, or one that would reverse the snake onto its
    own neck, is replaced by the snake's current direction.
    """
    default = get_default_move(snake.body)
    if not isinstance(submitted, str):
        return default
    move = submitted.strip().lower()
    if move not in VALID_MOVES:
        return default
    if len(snake.body) > 1 and snake.body[1] != snake.head:
        dx, dy = DIRECTION_VECTORS[move]
        if snake.head.moved(dx, dy) == snake.body[1]:
            return default
    return move


def _check_bodies(snakes: Sequence[Snake]) -> None:
    for snake in snakes:
        if not snake.body:
            raise ConsistencyFault(f"snake {snake.id} has a zero-length body")


def move_snakes_standard(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    if is_initialization(board, settings, moves):
        return False

    living = board.living_snakes()
    _check_bodies(living)

    # First submitted move for a snake wins
    submitted: Dict[str, str] = {}
    for snake_move in moves:
        submitted.setdefault(snake_move.id, snake_move.move)

    for snake in living:
        move = resolve_move(snake, submitted.get(snake.id))
        dx, dy = DIRECTION_VECTORS[move]
        new_head = snake.head.moved(dx, dy)
        snake.body = [new_head] + snake.body[:-1]

    return False


def reduce_snake_health(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    if is_initialization(board, settings, moves):
        return False

    for snake in board.living_snakes():
        snake.health = max(0, snake.health - 1)
        if snake.health <= 0:
            snake.eliminate(ELIMINATED_BY_OUT_OF_HEALTH, "", board.turn + 1)

    return False


def damage_hazards_standard(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    if is_initialization(board, settings, moves):
        return False
    if settings.hazard_damage_per_turn <= 0 or not board.hazards:
        return False

    food = set(board.food)
    for snake in board.living_snakes():
        head = snake.head
        # Food negates hazard damage for the turn it is eaten
        if head in food:
            continue
        hits = board.hazards.count(head)
        if hits == 0:
            continue
        snake.health = max(0, snake.health - settings.hazard_damage_per_turn * hits)
        if snake.health <= 0:
            snake.eliminate(ELIMINATED_BY_OUT_OF_HEALTH, "", board.turn + 1)

    return False


def feed_snakes_standard(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    living = board.living_snakes()
    _check_bodies(living)

    remaining: List[Point] = []
    for food in board.food:
        eater = next((snake for snake in living if snake.head == food), None)
        if eater is None:
            remaining.append(food)
            continue
        eater.health = SNAKE_MAX_HEALTH
        eater.grow()

    board.food = remaining
    return False


def get_unoccupied_points(board: BoardState) -> List[Point]:
    """Cells holding no food, no hazard and no segment of a living snake, in row-major order."""
    occupied = set(board.food)
    occupied.update(board.hazards)
    for snake in board.living_snakes():
        occupied.update(snake.body)

    return [
        Point(x, y)
        for y in range(board.height)
        for x in range(board.width)
        if Point(x, y) not in occupied
    ]


def place_food_randomly(rand: random.Random, board: BoardState, n: int) -> int:
    """Place up to n food items on random free cells. Returns how many were placed."""
    placed = 0
    for _ in range(n):
        free = get_unoccupied_points(board)
        if not free:
            break
        board.food.append(rand.choice(free))
        placed += 1
    return placed


def spawn_food_standard(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    rand = settings.get_rand(board.turn)

    if settings.food_spawn_chance > 0 and rand.randrange(100) < settings.food_spawn_chance:
        place_food_randomly(rand, board, 1)

    shortfall = settings.minimum_food - len(board.food)
    if shortfall > 0:
        place_food_randomly(rand, board, shortfall)

    return False


def _resolve_head_to_head(group: List[Snake]) -> Dict[str, str]:
    """
    Decide who dies when several heads land on the same cell.

    Returns snake id -> culprit id for every eliminated member. A unique
    longest snake survives and takes everyone else. When several tie for
    longest they all die: shorter members are credited to the first longest
    member, each longest member to the first other longest member.
    """
    max_length = max(snake.length for snake in group)
    longest = [snake for snake in group if snake.length == max_length]

    result = {}
    for snake in group:
        if snake.length < max_length:
            result[snake.id] = longest[0].id
        elif len(longest) > 1:
            result[snake.id] = next(other.id for other in longest if other.id != snake.id)
    return result


def eliminate_snakes_standard(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    living = board.living_snakes()
    _check_bodies(living)

    # All checks run against the bodies as they were on entry
    snapshot = {snake.id: list(snake.body) for snake in living}
    eliminations: Dict[str, Tuple[str, str]] = {}

    for snake in living:
        head = snake.head
        if snake.health <= 0:
            eliminations[snake.id] = (ELIMINATED_BY_OUT_OF_HEALTH, "")
        elif not board.is_in_bounds(head):
            eliminations[snake.id] = (ELIMINATED_BY_WALL, "")
        elif head in snapshot[snake.id][1:]:
            eliminations[snake.id] = (ELIMINATED_BY_SELF_COLLISION, snake.id)
        else:
            for other in living:
                if other.id != snake.id and head in snapshot[other.id][1:]:
                    eliminations[snake.id] = (ELIMINATED_BY_COLLISION, other.id)
                    break

    heads: Dict[Point, List[Snake]] = {}
    for snake in living:
        heads.setdefault(snake.head, []).append(snake)

    for group in heads.values():
        if len(group) < 2:
            continue
        for snake_id, culprit in _resolve_head_to_head(group).items():
            eliminations.setdefault(snake_id, (ELIMINATED_BY_HEAD_TO_HEAD, culprit))

    for snake in living:
        if snake.id in eliminations:
            cause, by = eliminations[snake.id]
            snake.eliminate(cause, by, board.turn + 1)
            logger.debug(f"Snake {snake.id} eliminated on turn {board.turn + 1}: {cause} {by}".rstrip())

    return False


def game_over_standard(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    return len(board.living_snakes()) <= 1


def game_over_solo(board: BoardState, settings: Settings, moves: Sequence[SnakeMove]) -> bool:
    return all(snake.is_eliminated for snake in board.snakes)
