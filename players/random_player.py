"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.board_state import BoardState
from domain.constants import DIRECTION_VECTORS, UP
from .base import Player


class RandomPlayer(Player):
    """
    A local AI that picks a random direction avoiding walls, hazards and
    snake bodies (tails excluded, they move away).
    """

    def __init__(self, snake_id: str, name: str = "", rand: Optional[random.Random] = None):
        super().__init__(snake_id, name)
        self.rand = rand or random.Random()

    def get_move(self, board: BoardState) -> str:
        snake = board.get_snake(self.snake_id)
        if snake is None or not snake.body:
            return self.last_move

        blocked = set(board.hazards)
        for other in board.living_snakes():
            blocked.update(other.body[:-1])

        # Directions in a fixed order so a seeded player replays identically
        valid_moves: List[str] = []
        for move, (dx, dy) in sorted(DIRECTION_VECTORS.items()):
            target = snake.head.moved(dx, dy)
            if not board.is_in_bounds(target):
                continue
            if target in blocked:
                continue
            valid_moves.append(move)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return self.last_move or UP

        self.last_move = self.rand.choice(valid_moves)
        return self.last_move
