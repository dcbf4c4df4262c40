"""
Point and SnakeMove value types.
"""

from typing import NamedTuple


class Point(NamedTuple):
    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


class SnakeMove(NamedTuple):
    """A move submitted for one snake: (snake id, direction)."""

    id: str
    move: str
