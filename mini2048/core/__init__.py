# -*- coding: utf-8 -*-
"""
This module provides the grid engine of a 2048 game.

It includes functions for rotating, sliding and merging the grid, placing random tiles,
detecting game over, mapping user inputs to directions, and playing moves on immutable game states.
"""

from .gameboard import (
    GRID_SIZE,
    TILE_SPAWN_PROBS,
    compress,
    compress_row,
    has_moves_available,
    merge,
    merge_row,
    place_random_tile,
    rotate,
    slide_and_merge,
    slide_grid,
    validate_grid,
)
from .gamemove import Direction, illegal_directions, legal_directions, parse_direction
from .gamestate import GameState, GameStatus, move, new_game

__all__ = [
    "GRID_SIZE",
    "TILE_SPAWN_PROBS",
    "Direction",
    "GameState",
    "GameStatus",
    "compress",
    "compress_row",
    "has_moves_available",
    "illegal_directions",
    "legal_directions",
    "merge",
    "merge_row",
    "move",
    "new_game",
    "parse_direction",
    "place_random_tile",
    "rotate",
    "slide_and_merge",
    "slide_grid",
    "validate_grid",
]
