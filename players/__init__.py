"""
Player implementations for the SnakeRules game driver.

This module contains the player abstraction and the implementations
that choose snake moves: a local random player and a remote HTTP agent.
"""

from .base import Player
from .random_player import RandomPlayer
from .http_player import HTTPPlayer

__all__ = [
    'Player',
    'RandomPlayer',
    'HTTPPlayer',
]
