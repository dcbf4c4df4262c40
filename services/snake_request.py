"""
JSON payloads sent to snake agents.

The agent API is fixed by convention: every request carries the game
descriptor, the turn, the board (living snakes only) and the receiving
snake as ``you``. Coordinates are ``{"x": .., "y": ..}`` objects.
"""

from typing import Any, Dict, Mapping, Optional

from domain.board_state import BoardState
from domain.snake import Snake

RULESET_VERSION = "cli"


def build_game_info(
    game_id: str,
    ruleset,
    map_id: str,
    timeout_ms: int,
) -> Dict[str, Any]:
    """Game descriptor shared by every request of one game."""
    return {
        "id": game_id,
        "ruleset": {
            "name": ruleset.name(),
            "version": RULESET_VERSION,
            "settings": ruleset.settings().to_dict(),
        },
        "map": map_id,
        "timeout": timeout_ms,
        "source": "",
    }


def snake_to_dict(snake: Snake, meta: Optional[Mapping[str, Any]] = None, squad: str = "") -> Dict[str, Any]:
    meta = meta or {}
    return {
        "id": snake.id,
        "name": meta.get("name", snake.id),
        "health": snake.health,
        "body": [p.to_dict() for p in snake.body],
        "latency": "0",
        "head": snake.head.to_dict() if snake.body else None,
        "length": snake.length,
        "shout": "",
        "squad": squad,
        "customizations": {
            "color": meta.get("color", ""),
            "head": meta.get("head", ""),
            "tail": meta.get("tail", ""),
        },
    }


def board_to_dict(
    board: BoardState,
    snake_meta: Optional[Mapping[str, Mapping[str, Any]]] = None,
    squads: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    snake_meta = snake_meta or {}
    squads = squads or {}
    return {
        "height": board.height,
        "width": board.width,
        "food": [p.to_dict() for p in board.food],
        "hazards": [p.to_dict() for p in board.hazards],
        "snakes": [
            snake_to_dict(snake, snake_meta.get(snake.id), squads.get(snake.id, ""))
            for snake in board.living_snakes()
        ],
    }


def build_snake_request(
    game_info: Mapping[str, Any],
    board: BoardState,
    snake_id: str,
    snake_meta: Optional[Mapping[str, Mapping[str, Any]]] = None,
    squads: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Build the request body for one snake.

    Args:
        game_info: Output of build_game_info().
        board: Board to describe.
        snake_id: The snake receiving the request (``you``).
        snake_meta: snake id -> {"name", "color", "head", "tail"}.
        squads: snake id -> squad name.

    Raises:
        KeyError: If snake_id is not on the board.
    """
    snake_meta = snake_meta or {}
    squads = squads or {}
    you = board.get_snake(snake_id)
    if you is None:
        raise KeyError(f"Snake {snake_id} is not on the board")

    return {
        "game": dict(game_info),
        "turn": board.turn,
        "board": board_to_dict(board, snake_meta, squads),
        "you": snake_to_dict(you, snake_meta.get(snake_id), squads.get(snake_id, "")),
    }
