"""
Core grid mechanics for the 2048 engine: rotation, sliding, merging, tile placement and move detection.
"""

import logging
from collections.abc import Sequence

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, array_equal, int64, ndarray, rot90, zeros, zeros_like
from numpy.random import Generator

logger = logging.getLogger(__name__)

# ##>: Default side of the square grid.
GRID_SIZE = 4

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


def _freeze(grid: ndarray) -> ndarray:
    grid.setflags(write=False)
    return grid


def validate_grid(grid: Sequence[Sequence[int]] | ndarray) -> ndarray:
    """
    Convert a grid to a read-only integer array and check its invariants.

    Parameters
    ----------
    grid : Sequence[Sequence[int]] | ndarray
        Nested rows or a 2D array.

    Returns
    -------
    ndarray
        A fresh read-only ``int64`` array holding the same cells.

    Raises
    ------
    ValueError
        If the grid is not a square of side >= 2, holds negative values, or holds a
        non-zero value that is not a power of 2.
    """
    result = array(grid, dtype=int64)
    if result.ndim != 2 or result.shape[0] != result.shape[1]:
        raise ValueError(f'Expected a square grid, received shape {result.shape}')
    if result.shape[0] < 2:
        raise ValueError(f'Grid size must be at least 2, got {result.shape[0]}')
    if np_any(result < 0):
        raise ValueError(f'Grid cells must be non-negative, got {result[result < 0].tolist()}')

    tiles = result[result != 0]
    bad = tiles[(tiles < 2) | ((tiles & (tiles - 1)) != 0)]
    if len(bad):
        raise ValueError(f'Tiles must be powers of 2, got {bad.tolist()}')
    return _freeze(result)


def empty_grid(size: int = GRID_SIZE) -> ndarray:
    """Return a read-only all-zero grid of the given size."""
    if size < 2:
        raise ValueError(f'Grid size must be at least 2, got {size}')
    return _freeze(zeros((size, size), dtype=int64))


def rotate(grid: ndarray, times: int) -> ndarray:
    """
    Rotate the grid counter-clockwise by 90 degrees ``times`` times.

    Negative values rotate clockwise, so ``rotate(rotate(grid, k), -k)`` is the grid itself.
    The result is a new array, never a view of ``grid``.
    """
    return rot90(grid, k=times).copy()


def compress_row(row: ndarray) -> ndarray:
    """
    Slide all tiles of a row toward index 0, keeping their order.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the grid.

    Returns
    -------
    ndarray
        A new row of the same length with trailing cells set to 0.
    """
    tiles = row[row != 0]
    result = zeros_like(row)
    result[: len(tiles)] = tiles
    return result


def compress(grid: ndarray) -> ndarray:
    """Apply ``compress_row`` to every row of the grid."""
    result = zeros_like(grid)
    for i, row in enumerate(grid):
        result[i] = compress_row(row)
    return result


def merge_row(row: ndarray) -> tuple[int, ndarray]:
    """
    Merge adjacent equal tiles of a row in a single left-to-right pass.

    Parameters
    ----------
    row : ndarray
        A 1D array, usually already compressed.

    Returns
    -------
    gained : int
        Sum of the values created by merges.
    merged_row : ndarray
        A new row where each merged pair holds the doubled value on the left and 0 on the right.

    Notes
    -----
    - A consumed pair is skipped, so a freshly doubled tile never merges again in the same pass.
    - Gaps left by merges are not closed; compress the row again for that.
    """
    result = row.copy()
    gained = 0

    i = 0
    while i < len(result) - 1:
        if result[i] != 0 and result[i] == result[i + 1]:
            result[i] *= 2
            result[i + 1] = 0
            gained += int(result[i])
            i += 2
        else:
            i += 1

    return gained, result


def merge(grid: ndarray) -> tuple[int, ndarray]:
    """Apply ``merge_row`` to every row of the grid and sum the gains."""
    result = zeros_like(grid)
    gained = 0

    for i, row in enumerate(grid):
        gained_row, result[i] = merge_row(row)
        gained += gained_row

    return gained, result


def slide_and_merge(grid: ndarray) -> tuple[int, ndarray]:
    """
    Slide the grid to the left: compress, merge, then compress again.

    Parameters
    ----------
    grid : ndarray
        The grid as a 2D array.

    Returns
    -------
    gained : int
        The score obtained from all merges.
    updated_grid : ndarray
        A new grid after sliding and merging.

    Notes
    -----
    - The function operates on rows, effectively sliding left.
    - For other directions, rotate the grid before calling this function.
    """
    gained, merged = merge(compress(grid))
    return gained, compress(merged)


def slide_grid(grid: ndarray, direction: int) -> tuple[ndarray, int]:
    """
    Compute the grid after a move in one direction, without adding a new tile.

    Parameters
    ----------
    grid : ndarray
        The current grid.
    direction : int
        Rotation count of the move (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    new_grid : ndarray
        A new read-only grid after the move.
    gained : int
        The score obtained from this move.
    """
    gained, updated = slide_and_merge(rotate(grid, int(direction)))
    return _freeze(rotate(updated, -int(direction))), gained


def place_random_tile(grid: ndarray, rng: Generator) -> ndarray:
    """
    Put a new tile (2 or 4) on one empty cell chosen uniformly at random.

    Parameters
    ----------
    grid : ndarray
        The current grid. It is not modified.
    rng : Generator
        Random source. Any object with ``integers(high)`` and ``random()`` works.

    Returns
    -------
    ndarray
        A new read-only grid holding one more tile, or ``grid`` itself when it is full.

    Notes
    -----
    - Empty cells are enumerated in row-major order before one index is drawn.
    - The tile is a 2 when the drawn float is below ``TILE_SPAWN_PROBS[2]``, else a 4.
    """
    # ##: Nothing to do on a full grid.
    empty_cells = argwhere(grid == 0)
    if len(empty_cells) == 0:
        logger.debug('No empty cell left, tile placement skipped')
        return grid

    # ##: Choose the cell, then the value.
    row, col = empty_cells[int(rng.integers(len(empty_cells)))]
    value = 2 if rng.random() < TILE_SPAWN_PROBS[2] else 4

    result = grid.copy()
    result[row, col] = value
    return _freeze(result)


def grids_equal(first: ndarray, second: ndarray) -> bool:
    """Element-wise structural equality of two grids."""
    return bool(array_equal(first, second))


def has_moves_available(grid: ndarray) -> bool:
    """
    Check if at least one move could still change the grid.

    Parameters
    ----------
    grid : ndarray
        The current grid.

    Returns
    -------
    bool
        True if a cell is empty or two horizontally or vertically adjacent cells hold the same value.
    """
    return bool(
        not np_all(grid != 0) or np_any(grid[:-1] == grid[1:]) or np_any(grid[:, :-1] == grid[:, 1:])
    )
