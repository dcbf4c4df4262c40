"""
BoardState entity - a snapshot of the board at a point in time.
"""

from typing import Iterable, List, Optional

from .point import Point
from .snake import Snake


class BoardState:
    """
    A snapshot of the board at a specific turn.

    Attributes:
        width, height: board dimensions, fixed for the whole game
        turn: which turn we are on (0-based)
        food: list of food Points, no duplicates
        hazards: list of hazard Points; a repeated point stacks damage
        snakes: ordered list of Snake; the order is stable for the whole
                game and breaks ties deterministically
    """

    def __init__(
        self,
        width: int,
        height: int,
        turn: int = 0,
        food: Optional[Iterable[Point]] = None,
        hazards: Optional[Iterable[Point]] = None,
        snakes: Optional[Iterable[Snake]] = None,
    ):
        self.width = width
        self.height = height
        self.turn = turn
        # Food cells are unique; hazards may repeat and stack
        self.food: List[Point] = list(dict.fromkeys(Point(*p) for p in (food or [])))
        self.hazards: List[Point] = [Point(*p) for p in (hazards or [])]
        self.snakes: List[Snake] = list(snakes or [])

    def clone(self) -> "BoardState":
        """Deep copy: snakes and point lists are never shared with the copy."""
        return BoardState(
            width=self.width,
            height=self.height,
            turn=self.turn,
            food=self.food,
            hazards=self.hazards,
            snakes=[snake.clone() for snake in self.snakes],
        )

    def get_snake(self, snake_id: str) -> Optional[Snake]:
        for snake in self.snakes:
            if snake.id == snake_id:
                return snake
        return None

    def living_snakes(self) -> List[Snake]:
        return [snake for snake in self.snakes if not snake.is_eliminated]

    def is_in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        # = hazard
        0,1,2... = snake head (snake index in board order)
        a,b,c... = snake body of the snake with the same index
        (0,0) is at bottom left, x-axis labels at bottom
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for p in self.hazards:
            if self.is_in_bounds(p):
                board[p.y][p.x] = '#'

        for p in self.food:
            if self.is_in_bounds(p):
                board[p.y][p.x] = 'F'

        for i, snake in enumerate(self.snakes):
            if snake.is_eliminated:
                continue
            body_char = chr(ord('a') + i % 26)
            # Draw tail first so the head wins on stacked segments
            for pos_idx in range(len(snake.body) - 1, -1, -1):
                p = snake.body[pos_idx]
                if not self.is_in_bounds(p):
                    continue
                board[p.y][p.x] = str(i % 10) if pos_idx == 0 else body_char

        result = []
        for y in range(self.height - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.turn == other.turn
            and self.food == other.food
            and self.hazards == other.hazards
            and self.snakes == other.snakes
        )

    def __repr__(self):
        return (
            f"<BoardState turn={self.turn}, {self.width}x{self.height}, "
            f"food={self.food}, hazards={len(self.hazards)}, snakes={self.snakes}>"
        )
