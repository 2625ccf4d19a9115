# -*- coding: utf-8 -*-
"""
Python implementation of a 2048 game session.

This module provides the `GameSession` class, which holds the current game state and applies directional inputs.
"""

from .session import GameSession

__all__ = ["GameSession"]
