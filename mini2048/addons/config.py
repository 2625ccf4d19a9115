# -*- coding: utf-8 -*-
"""
Set of configurations for this project.
"""
from dataclasses import dataclass
from typing import Optional

from mini2048.core.gameboard import GRID_SIZE


@dataclass
class GameConfiguration:
    """
    Game configuration.
    """

    size: int = GRID_SIZE
    seed: Optional[int] = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f"Grid size must be at least 2, got {self.size}")
