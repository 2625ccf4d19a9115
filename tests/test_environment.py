"""
Tests for the 2048 game session.

Tests cover the session interface, seeding, input handling and game termination.
"""

from unittest import TestCase, main

import numpy as np

from mini2048 import Direction, GameConfiguration, GameSession, GameState, GameStatus

FULL_DISTINCT = [[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]]


class TestSessionInterface(TestCase):
    """Test GameSession API and state management."""

    def setUp(self):
        """Initialize fresh session before each test."""
        self.session = GameSession(GameConfiguration(seed=0))

    def test_reset_state_initialization(self):
        """Reset starts a game with exactly 2 tiles and zero score."""
        obs = self.session.reset()

        # ##>: Exactly 2 non-zero tiles after reset.
        self.assertEqual(np.count_nonzero(obs), 2)

        # ##>: Tiles are only 2 or 4.
        tiles = obs[obs != 0]
        self.assertTrue(np.all((tiles == 2) | (tiles == 4)))

        self.assertEqual(self.session.score, 0)
        self.assertFalse(self.session.is_finished)
        self.assertEqual(self.session.status, GameStatus.PLAYING)

    def test_reset_seed_reproducibility(self):
        """Same seed produces identical games."""
        board1 = self.session.reset(seed=42)
        moves1 = [self.session.step(direction)[0] for direction in "left up right down".split()]
        board2 = self.session.reset(seed=42)
        moves2 = [self.session.step(direction)[0] for direction in "left up right down".split()]

        np.testing.assert_array_equal(board1, board2)
        for first, second in zip(moves1, moves2):
            np.testing.assert_array_equal(first, second)

    def test_step_return_signature(self):
        """Step returns tuple of (observation, gained, finished)."""
        self.session.reset()
        obs, gained, done = self.session.step(Direction.LEFT)

        self.assertIsInstance(obs, np.ndarray)
        self.assertIsInstance(gained, int)
        self.assertIsInstance(done, bool)
        self.assertEqual(obs.shape, (4, 4))

    def test_actions(self):
        self.assertEqual(GameSession.ACTIONS, {"left": 0, "up": 1, "right": 2, "down": 3})

    def test_custom_size(self):
        session = GameSession(GameConfiguration(size=3, seed=1))
        self.assertEqual(session.size, 3)
        self.assertEqual(session.observation.shape, (3, 3))

    def test_first_game_is_logged(self):
        """Creating a session starts and logs its first game."""
        with self.assertLogs("mini2048.envs.session", level="INFO") as logs:
            session = GameSession(GameConfiguration(seed=1))
        self.assertIn("New game started (size=4, seed=1)", logs.output[0])
        self.assertEqual(np.count_nonzero(session.observation), 2)

    def test_invalid_configuration(self):
        with self.assertRaises(ValueError):
            GameConfiguration(size=1)


class TestSessionMoves(TestCase):
    """Test moves played through a session."""

    def setUp(self):
        self.session = GameSession(GameConfiguration(seed=5))

    def test_merge_reports_gain(self):
        """A merge adds its value to the score and reports it as the gain."""
        self.session._state = GameState.from_grid([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], score=6)
        obs, gained, done = self.session.step("ArrowLeft")

        self.assertEqual(obs[0, 0], 4)
        self.assertEqual(gained, 4)
        self.assertEqual(self.session.score, 10)
        self.assertEqual(np.count_nonzero(obs), 2)
        self.assertFalse(done)

    def test_unknown_key_is_ignored(self):
        """Keys that are not directions leave the game as it was."""
        state = self.session.state
        obs, gained, done = self.session.step("Enter")

        self.assertIs(self.session.state, state)
        np.testing.assert_array_equal(obs, state.grid)
        self.assertEqual(gained, 0)
        self.assertFalse(done)

    def test_no_change_move(self):
        """A blocked move gains nothing and spawns nothing."""
        self.session._state = GameState.from_grid([[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]])
        for _ in range(3):
            obs, gained, _ = self.session.step("left")
            self.assertEqual(gained, 0)
            self.assertEqual(np.count_nonzero(obs), 4)

    def test_finished_game(self):
        """A finished game ignores moves and offers no direction until reset."""
        self.session._state = GameState.from_grid(FULL_DISTINCT, score=64)
        self.assertTrue(self.session.is_finished)
        self.assertEqual(self.session.legal_directions, [])

        obs, gained, done = self.session.step(Direction.UP)
        np.testing.assert_array_equal(obs, np.array(FULL_DISTINCT))
        self.assertEqual(gained, 0)
        self.assertTrue(done)

        self.session.reset()
        self.assertFalse(self.session.is_finished)
        self.assertEqual(self.session.score, 0)

    def test_legal_directions(self):
        self.session._state = GameState.from_grid([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(self.session.legal_directions, [Direction.UP, Direction.RIGHT, Direction.DOWN])

    def test_play_until_finished(self):
        """Random play keeps the score growing and ends in a finished game."""
        generator = np.random.default_rng(0)
        previous = self.session.score
        done = False
        for _ in range(5000):
            legal = self.session.legal_directions
            if not legal:
                break
            _, gained, done = self.session.step(legal[int(generator.integers(len(legal)))])
            self.assertGreaterEqual(gained, 0)
            self.assertGreaterEqual(self.session.score, previous)
            previous = self.session.score
        self.assertTrue(done)
        self.assertTrue(self.session.is_finished)


if __name__ == "__main__":
    main()
