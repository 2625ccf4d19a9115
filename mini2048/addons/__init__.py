# -*- coding: utf-8 -*-
"""
Configuration for the 2048 engine.
"""
from .config import GameConfiguration

__all__ = ["GameConfiguration"]
