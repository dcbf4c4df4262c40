"""
HTTP player - a remote snake agent reached over the conventional snake API.

GET  /       -> metadata (color, head, tail, author, version)
POST /start  -> game is starting
POST /move   -> {"move": "up" | "down" | "left" | "right"}
POST /end    -> game is over
"""

import json
import logging
from typing import Any, Callable, Dict, Optional

import requests

from domain.board_state import BoardState
from .base import Player

logger = logging.getLogger(__name__)

RequestBuilder = Callable[[BoardState, str], Dict[str, Any]]


class HTTPPlayer(Player):
    """
    Player backed by a snake agent URL.

    Network problems never stop the game: a failed or malformed /move
    response repeats the snake's last move.
    """

    def __init__(
        self,
        snake_id: str,
        name: str,
        url: str,
        request_builder: RequestBuilder,
        timeout_ms: int = 500,
        session: Optional[requests.Session] = None,
        debug_requests: bool = False,
    ):
        super().__init__(snake_id, name)
        self.url = url.rstrip("/")
        self.request_builder = request_builder
        self.timeout = timeout_ms / 1000.0
        self.session = session or requests.Session()
        self.debug_requests = debug_requests

        self.color = ""
        self.head = ""
        self.tail = ""
        self.author = ""
        self.version = ""
        self.status_code: Optional[int] = None
        self.error: Optional[str] = None

    @property
    def metadata(self) -> Dict[str, Any]:
        return {"name": self.name, "color": self.color, "head": self.head, "tail": self.tail}

    def ping(self) -> bool:
        """Fetch the agent's metadata. Returns True if it answered with valid JSON."""
        try:
            response = self.session.get(self.url or "/", timeout=self.timeout)
            self.status_code = response.status_code
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {self.url} failed: {e}")
            self.error = str(e)
            return False
        except ValueError as e:
            logger.warning(f"Error reading response from {self.url}: {e}")
            self.error = str(e)
            return False

        self.color = data.get("color", "") or ""
        self.head = data.get("head", "") or ""
        self.tail = data.get("tail", "") or ""
        self.author = data.get("author", "") or ""
        self.version = data.get("version", "") or ""
        return True

    def _post(self, path: str, board: BoardState) -> Optional[requests.Response]:
        body = self.request_builder(board, self.snake_id)
        url = f"{self.url}/{path}"
        if self.debug_requests:
            logger.debug(f"POST {url}: {json.dumps(body)}")
        try:
            return self.session.post(url, json=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            return None

    def start(self, board: BoardState) -> None:
        self._post("start", board)

    def end(self, board: BoardState) -> None:
        self._post("end", board)

    def get_move(self, board: BoardState) -> str:
        response = self._post("move", board)
        if response is None:
            return self.last_move

        try:
            move = response.json().get("move")
        except (ValueError, AttributeError) as e:
            logger.warning(f"Invalid move response from {self.url} for snake {self.snake_id}: {e}")
            return self.last_move

        if not isinstance(move, str) or not move:
            logger.warning(f"Snake {self.snake_id} ({self.name}) returned no move, repeating {self.last_move}")
            return self.last_move

        self.last_move = move
        return move
