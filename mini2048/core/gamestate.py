"""
Game state of the 2048 engine and its two transitions: starting a game and playing a move.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from numpy import array, int64, ndarray
from numpy.random import Generator

from mini2048.core.gameboard import (
    GRID_SIZE,
    empty_grid,
    grids_equal,
    has_moves_available,
    place_random_tile,
    slide_grid,
    validate_grid,
)
from mini2048.core.gamemove import parse_direction

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Lifecycle of a game."""

    PLAYING = 'playing'
    GAME_OVER = 'game_over'


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Immutable snapshot of a game.

    Attributes
    ----------
    grid : ndarray
        Read-only square grid, 0 for empty cells.
    score : int
        Sum of all merged values since the game started.
    game_over : bool
        True once no move can change the grid.

    Raises
    ------
    ValueError
        If the score is negative.

    Notes
    -----
    A writable grid is copied and frozen, so later writes to the caller's array never reach the state.
    """

    grid: ndarray
    score: int = 0
    game_over: bool = False

    def __post_init__(self):
        if self.score < 0:
            raise ValueError(f'Score must be non-negative, got {self.score}')

        # ##: Take a private read-only copy of any grid the caller could still write to.
        if not isinstance(self.grid, ndarray) or self.grid.flags.writeable or self.grid.dtype != int64:
            grid = array(self.grid, dtype=int64)
            grid.setflags(write=False)
            object.__setattr__(self, 'grid', grid)
        object.__setattr__(self, 'score', int(self.score))
        object.__setattr__(self, 'game_over', bool(self.game_over))

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]] | ndarray, score: int = 0) -> GameState:
        """
        Build a state from an existing grid.

        Raises
        ------
        ValueError
            If the grid is malformed or the score is negative.
        """
        checked = validate_grid(grid)
        return cls(grid=checked, score=int(score), game_over=not has_moves_available(checked))

    @property
    def status(self) -> GameStatus:
        return GameStatus.GAME_OVER if self.game_over else GameStatus.PLAYING

    @property
    def size(self) -> int:
        return self.grid.shape[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return self.score == other.score and self.game_over == other.game_over and grids_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash((self.score, self.game_over, self.grid.shape, self.grid.tobytes()))


def new_game(rng: Generator, size: int = GRID_SIZE) -> GameState:
    """
    Start a game: an empty grid with two random tiles, a zero score.

    Parameters
    ----------
    rng : Generator
        Random source for tile placement.
    size : int, optional
        Side of the square grid (default is 4).

    Returns
    -------
    GameState
        The initial state.
    """
    grid = empty_grid(size)
    grid = place_random_tile(grid, rng)
    grid = place_random_tile(grid, rng)
    return GameState(grid=grid)


def move(state: GameState, direction: Any, rng: Generator) -> GameState:
    """
    Play one move.

    Parameters
    ----------
    state : GameState
        The current state. It is never modified.
    direction : Any
        The move direction, or anything ``parse_direction`` understands.
    rng : Generator
        Random source for the tile spawned after the move.

    Returns
    -------
    GameState
        The next state, or ``state`` itself when the move is ignored.

    Notes
    -----
    - Unknown directions, terminal states and moves that leave the grid unchanged are ignored.
    - After a move that changes the grid, the gained score is added, one tile is spawned, and
      the game is over when no move is available anymore.
    """
    parsed = parse_direction(direction)
    if parsed is None:
        logger.debug('Unknown direction %r ignored', direction)
        return state
    if state.game_over:
        logger.debug('Game is over, move %s ignored', parsed.name)
        return state

    # ##: Rotate, slide and merge, rotate back.
    grid, gained = slide_grid(state.grid, parsed)
    if grids_equal(grid, state.grid):
        logger.debug('Move %s leaves the grid unchanged', parsed.name)
        return state

    # ##: Spawn a tile and check the end of the game.
    grid = place_random_tile(grid, rng)
    score = state.score + gained
    game_over = not has_moves_available(grid)
    if game_over:
        logger.info('Game over with a score of %d', score)
    return GameState(grid=grid, score=score, game_over=game_over)
