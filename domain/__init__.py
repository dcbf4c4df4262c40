"""
Domain entities for the SnakeRules engine.

This module contains the board data model shared by the rules engine,
the maps and the game driver. It has no behavior beyond bookkeeping.
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, SNAKE_MAX_HEALTH, SNAKE_START_SIZE
from .errors import RulesError, ConfigurationError, ConsistencyFault
from .point import Point, SnakeMove
from .snake import Snake
from .board_state import BoardState
from .settings import Settings, SquadSettings

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'SNAKE_MAX_HEALTH', 'SNAKE_START_SIZE',
    'RulesError', 'ConfigurationError', 'ConsistencyFault',
    'Point', 'SnakeMove',
    'Snake',
    'BoardState',
    'Settings', 'SquadSettings',
]
