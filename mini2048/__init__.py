# -*- coding: utf-8 -*-
"""
Grid engine of the 2048 puzzle game.
"""

from .core import (
    Direction,
    GameState,
    GameStatus,
    has_moves_available,
    legal_directions,
    move,
    new_game,
    parse_direction,
    place_random_tile,
)
from .addons import GameConfiguration
from .envs import GameSession

__all__ = [
    "Direction",
    "GameConfiguration",
    "GameSession",
    "GameState",
    "GameStatus",
    "has_moves_available",
    "legal_directions",
    "move",
    "new_game",
    "parse_direction",
    "place_random_tile",
]
