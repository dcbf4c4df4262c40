"""
Snake entity for the rules engine.
"""

from typing import Iterable, List, Optional

from .constants import NOT_ELIMINATED, SNAKE_MAX_HEALTH
from .point import Point


class Snake:
    """
    Represents a snake on the board.

    Attributes:
        id: immutable snake identifier
        body: list of Points from head at index 0 to tail at the end. A tail
              point repeated at the end means the snake grows next move.
        health: 0..100, starts at SNAKE_MAX_HEALTH
        eliminated_cause: NOT_ELIMINATED or one of the ELIMINATED_BY_* causes
        eliminated_by: id of the snake responsible, "" when none or ambiguous
        eliminated_on_turn: turn the snake was eliminated on, None while alive
    """

    def __init__(
        self,
        snake_id: str,
        body: Iterable[Point],
        health: int = SNAKE_MAX_HEALTH,
    ):
        self.id = snake_id
        self.body: List[Point] = [Point(*p) for p in body]
        self.health = health
        self.eliminated_cause = NOT_ELIMINATED
        self.eliminated_by = ""
        self.eliminated_on_turn: Optional[int] = None

    @property
    def head(self) -> Point:
        """Return the head position (first element)."""
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def is_eliminated(self) -> bool:
        return self.eliminated_cause != NOT_ELIMINATED

    def eliminate(self, cause: str, by: str, turn: int) -> None:
        self.eliminated_cause = cause
        self.eliminated_by = by
        self.eliminated_on_turn = turn

    def revive(self) -> None:
        self.eliminated_cause = NOT_ELIMINATED
        self.eliminated_by = ""
        self.eliminated_on_turn = None

    def grow(self) -> None:
        """Duplicate the tail so the next move keeps the current length."""
        self.body.append(self.body[-1])

    def clone(self) -> "Snake":
        other = Snake(self.id, self.body, self.health)
        other.eliminated_cause = self.eliminated_cause
        other.eliminated_by = self.eliminated_by
        other.eliminated_on_turn = self.eliminated_on_turn
        return other

    def __eq__(self, other):
        if not isinstance(other, Snake):
            return NotImplemented
        return (
            self.id == other.id
            and self.body == other.body
            and self.health == other.health
            and self.eliminated_cause == other.eliminated_cause
            and self.eliminated_by == other.eliminated_by
            and self.eliminated_on_turn == other.eliminated_on_turn
        )

    def __repr__(self):
        status = self.eliminated_cause or "alive"
        return f"<Snake {self.id} health={self.health} length={self.length} {status}>"
