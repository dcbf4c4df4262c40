"""
JSONL game export.

Line 1 is the game descriptor, then one agent request per turn (the
request of the first snake, so that every line can be replayed as an API
call), and a final result line.
"""

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class GameExporter:
    def __init__(self, game_info: Mapping[str, Any]):
        self.game_info = dict(game_info)
        self.snake_requests: List[Dict[str, Any]] = []
        self.winner_id = ""
        self.winner_name = ""
        self.is_draw = False

    def add_snake_request(self, snake_request: Mapping[str, Any]) -> None:
        self.snake_requests.append(dict(snake_request))

    def set_result(self, winner_id: Optional[str], winner_name: Optional[str], is_draw: bool) -> None:
        self.winner_id = winner_id or ""
        self.winner_name = winner_name or ""
        self.is_draw = is_draw

    def to_jsonl(self) -> List[str]:
        lines = [json.dumps(self.game_info)]
        lines.extend(json.dumps(request) for request in self.snake_requests)
        lines.append(json.dumps({
            "winnerId": self.winner_id,
            "winnerName": self.winner_name,
            "isDraw": self.is_draw,
        }))
        return lines

    def flush_to_file(self, filepath: str) -> None:
        """
        Write the game to ``filepath``, overwriting any existing file.

        Raises:
            OSError: If the file cannot be written.
        """
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(filepath, "w") as f:
            for line in self.to_jsonl():
                f.write(line + "\n")

        logger.info(f"Exported {len(self.snake_requests)} turns to {filepath}")
