"""
Base player interface for the game driver.
"""

from typing import Any, Dict

from domain.board_state import BoardState


class Player:
    """
    Base class/interface for player logic.

    Each player is responsible for returning a move for its snake_id
    given the current board. start() and end() are called once per game.
    """

    def __init__(self, snake_id: str, name: str = ""):
        self.snake_id = snake_id
        self.name = name or snake_id
        self.last_move = "up"

    @property
    def metadata(self) -> Dict[str, Any]:
        """Display fields sent to other agents: name, color, head, tail."""
        return {"name": self.name}

    def start(self, board: BoardState) -> None:
        pass

    def get_move(self, board: BoardState) -> str:
        """
        Return a move direction given the current board.

        Args:
            board: Current board state

        Returns:
            One of: "up", "down", "left", "right"
        """
        raise NotImplementedError

    def end(self, board: BoardState) -> None:
        pass
