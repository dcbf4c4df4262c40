"""
Standard and empty maps: initial snake and food placement.
"""

import random
from typing import List, Sequence

from domain.board_state import BoardState
from domain.constants import SNAKE_MAX_HEALTH, SNAKE_START_SIZE
from domain.errors import ConfigurationError
from domain.point import Point
from domain.settings import Settings
from domain.snake import Snake
from rules.stages import get_unoccupied_points, place_food_randomly

# Square boards with hand-picked start positions
FIXED_START_SIZES = {7, 11, 19}


def fixed_start_points(width: int, height: int) -> List[Point]:
    mn, md, mx = 1, (width - 1) // 2, width - 2
    return [
        Point(mn, mn), Point(mn, md), Point(mn, mx),
        Point(md, mn), Point(md, mx),
        Point(mx, mn), Point(mx, md), Point(mx, mx),
    ]


def place_snakes(rand: random.Random, board: BoardState, snake_ids: Sequence[str]) -> None:
    """
    Add one stacked, full-health snake per id.

    Raises:
        ConfigurationError: If the board has no room for that many snakes.
    """
    if board.width == board.height and board.width in FIXED_START_SIZES:
        start_points = fixed_start_points(board.width, board.height)
        if len(snake_ids) > len(start_points):
            raise ConfigurationError(
                f"Too many snakes ({len(snake_ids)}) for a {board.width}x{board.height} board"
            )
        rand.shuffle(start_points)
    else:
        free = get_unoccupied_points(board)
        # Even cells keep snakes from starting face to face
        candidates = [p for p in free if (p.x + p.y) % 2 == 0]
        if len(snake_ids) > len(candidates):
            raise ConfigurationError(
                f"Too many snakes ({len(snake_ids)}) for a {board.width}x{board.height} board"
            )
        start_points = rand.sample(candidates, len(snake_ids))

    for snake_id, start in zip(snake_ids, start_points):
        board.snakes.append(Snake(snake_id, [start] * SNAKE_START_SIZE, SNAKE_MAX_HEALTH))


def place_initial_food(rand: random.Random, board: BoardState) -> None:
    """One food diagonal to each snake plus one in the centre on fixed boards."""
    if not (board.width == board.height and board.width in FIXED_START_SIZES):
        place_food_randomly(rand, board, len(board.snakes))
        return

    center = Point((board.width - 1) // 2, (board.height - 1) // 2)
    for snake in board.snakes:
        head = snake.head
        free = set(get_unoccupied_points(board))
        options = [
            p for p in (
                head.moved(-1, -1), head.moved(-1, 1),
                head.moved(1, -1), head.moved(1, 1),
            )
            if p in free and p != center
        ]
        if options:
            board.food.append(rand.choice(options))

    if center in set(get_unoccupied_points(board)):
        board.food.append(center)


class StandardMap:
    ID = "standard"

    def setup_board(self, settings: Settings, width: int, height: int, snake_ids: Sequence[str]) -> BoardState:
        rand = settings.get_rand(0)
        board = BoardState(width, height)
        place_snakes(rand, board, snake_ids)
        place_initial_food(rand, board)
        return board

    def update_board(self, board: BoardState, settings: Settings) -> BoardState:
        return board


class EmptyMap(StandardMap):
    """Snakes only: no food and no hazards at setup."""

    ID = "empty"

    def setup_board(self, settings: Settings, width: int, height: int, snake_ids: Sequence[str]) -> BoardState:
        board = BoardState(width, height)
        place_snakes(settings.get_rand(0), board, snake_ids)
        return board
