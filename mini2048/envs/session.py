"""2048 game session holding the current state for a presentation layer."""

import logging
from typing import Any

from numpy import ndarray
from numpy.random import Generator, default_rng

from mini2048.addons.config import GameConfiguration
from mini2048.core.gamemove import Direction, legal_directions
from mini2048.core.gamestate import GameState, GameStatus, move, new_game

logger = logging.getLogger(__name__)


class GameSession:
    """
    2048 game session.

    This class owns the current game state and its random source. The presentation layer
    sends directional inputs to ``step`` and reads the grid, score and game-over flag back.
    Moves on one session must not run concurrently.
    """

    # ##: All Actions.
    ACTIONS = {direction.name.lower(): direction for direction in Direction}

    def __init__(self, config: GameConfiguration | None = None):
        """
        Initialize the session and start a first game.

        Parameters
        ----------
        config : GameConfiguration, optional
            Grid size and seed (default is a 4x4 grid with an unseeded random source).
        """
        self.config = config or GameConfiguration()
        self._rng: Generator | None = None
        self._state: GameState | None = None

        self.reset()

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def state(self) -> GameState:
        """The current immutable game state."""
        return self._state

    @property
    def observation(self) -> ndarray:
        """
        Get the current grid.

        Returns
        -------
        ndarray
            The current grid as a read-only 2D numpy array.
        """
        return self._state.grid

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def is_finished(self) -> bool:
        """True if no more moves are possible."""
        return self._state.game_over

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def legal_directions(self) -> list[Direction]:
        """Directions that would change the grid, empty once the game is over."""
        if self._state.game_over:
            return []
        return legal_directions(self._state.grid)

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Start a new game.

        Parameters
        ----------
        seed : int, optional
            Seed of the new random source. The configured seed is used when omitted.

        Returns
        -------
        ndarray
            The new grid, with two tiles.
        """
        seed = self.config.seed if seed is None else seed
        self._rng = default_rng(seed)
        self._state = new_game(self._rng, size=self.config.size)
        logger.info('New game started (size=%d, seed=%s)', self.config.size, seed)
        return self.observation

    def step(self, direction: Any) -> tuple[ndarray, int, bool]:
        """
        Apply one directional input.

        Parameters
        ----------
        direction : Any
            A ``Direction``, an action index, a direction name or a browser key name.

        Returns
        -------
        tuple[ndarray, int, bool]
            A tuple containing:
            - The current grid after the input (ndarray)
            - The score gained by this input (int)
            - Whether the game is over (bool)

        Notes
        -----
        Unknown inputs, moves that change nothing and moves after game over leave the state as it is
        and gain 0.
        """
        previous = self._state
        self._state = move(previous, direction, self._rng)
        return self.observation, self._state.score - previous.score, self.is_finished
