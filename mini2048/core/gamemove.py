"""
Move directions for the 2048 engine: input mapping and legal/illegal direction detection.
"""

from enum import IntEnum
from numbers import Integral
from typing import Any

from numpy import ndarray


class Direction(IntEnum):
    """Move direction. The value is the number of counter-clockwise rotations that aligns it with left."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


# ##>: Browser key names sent by the presentation layer.
KEY_MAPPING: dict[str, Direction] = {
    'ArrowLeft': Direction.LEFT,
    'ArrowUp': Direction.UP,
    'ArrowRight': Direction.RIGHT,
    'ArrowDown': Direction.DOWN,
}


def parse_direction(value: Any) -> Direction | None:
    """
    Map a user input to a direction.

    Parameters
    ----------
    value : Any
        A ``Direction``, an int between 0 and 3, a direction name such as ``"up"``
        (case-insensitive) or a browser key name such as ``"ArrowUp"``.

    Returns
    -------
    Direction | None
        The matching direction, or None when the input does not name one.
    """
    if isinstance(value, Direction):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return Direction(int(value)) if 0 <= value <= 3 else None
    if isinstance(value, str):
        if value in KEY_MAPPING:
            return KEY_MAPPING[value]
        return Direction.__members__.get(value.strip().upper())
    return None


def legal_directions_mask(grid: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask for all four directions in a single pass.

    Parameters
    ----------
    grid : ndarray
        The current grid.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down) where True means the move changes the grid.

    Notes
    -----
    A move changes the grid when a tile has an empty cell on the side it moves toward,
    or when two adjacent tiles along its axis are equal.
    """
    # ##>: Horizontal adjacency serves left and right.
    left_cols, right_cols = grid[:, :-1], grid[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Vertical adjacency serves up and down.
    top_rows, bottom_rows = grid[:-1, :], grid[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def legal_directions(grid: ndarray) -> list[Direction]:
    """Directions that would change the grid."""
    mask = legal_directions_mask(grid)
    return [direction for direction in Direction if mask[direction]]


def illegal_directions(grid: ndarray) -> list[Direction]:
    """Directions that would leave the grid unchanged."""
    mask = legal_directions_mask(grid)
    return [direction for direction in Direction if not mask[direction]]
