"""
Game maps: the board initializer and per-turn board updater used by the
game driver around each ruleset.
"""

from typing import Dict, List, Sequence, Type

from domain.board_state import BoardState
from domain.errors import ConfigurationError
from domain.settings import Settings

from .royale import RoyaleMap
from .standard import EmptyMap, StandardMap

GAME_MAPS: Dict[str, Type[StandardMap]] = {
    StandardMap.ID: StandardMap,
    EmptyMap.ID: EmptyMap,
    RoyaleMap.ID: RoyaleMap,
}


def get_map(map_id: str) -> StandardMap:
    """
    Raises:
        ConfigurationError: If map_id is not a known map.
    """
    if map_id not in GAME_MAPS:
        available = ", ".join(GAME_MAPS)
        raise ConfigurationError(f"Unknown map '{map_id}'. Available maps: {available}")
    return GAME_MAPS[map_id]()


def list_maps() -> List[str]:
    return list(GAME_MAPS)


def setup_board(map_id: str, settings: Settings, width: int, height: int, snake_ids: Sequence[str]) -> BoardState:
    return get_map(map_id).setup_board(settings, width, height, snake_ids)


def update_board(map_id: str, board: BoardState, settings: Settings) -> BoardState:
    return get_map(map_id).update_board(board, settings)


__all__ = [
    'GAME_MAPS',
    'StandardMap',
    'EmptyMap',
    'RoyaleMap',
    'get_map',
    'list_maps',
    'setup_board',
    'update_board',
]
