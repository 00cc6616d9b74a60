"""Spiral index mapping: linear item index <-> integer grid coordinate.

Items spiral clockwise outward from the origin. Ring L (the cells at
Chebyshev distance L) holds 8*L cells and starts where the previous ring
ended:

    ring 1 starts at (1, 0) and ends at (1, 1)
    ring 2 starts at (2, 1) and ends at (2, 2)
    ring L starts at (L, L-1)

Within a ring the traversal visits five arcs in order:

    right    x = L,  y from start_y down to -L+1
    bottom   y = -L, x from L down to -L+1
    left     x = -L, y from -L up to L-1
    top      y = L,  x from -L up to L-1
    closing  x = L,  y from L down to start_y+1

Starting ring L at (L, L-1) rather than (L, L) is what keeps the spiral
one continuous path instead of a stack of disconnected squares.
"""

from __future__ import annotations

import math

import numpy as np

from geometry import GridPoint


def ring_start(layer: int) -> GridPoint:
    """First coordinate visited in ring *layer*."""
    if layer == 0:
        return GridPoint(0, 0)
    return GridPoint(layer, 0 if layer == 1 else layer - 1)


def layer_of(point: tuple[int, int]) -> int:
    """Chebyshev distance of *point* from the origin."""
    x, y = point
    return max(abs(x), abs(y))


def _ring_arcs(layer: int):
    """(length, start, step) for each arc of a ring, in traversal order."""
    start_y = ring_start(layer).y
    side = 2 * layer
    return (
        (start_y + layer, (layer, start_y), (0, -1)),
        (side, (layer, -layer), (-1, 0)),
        (side, (-layer, -layer), (0, 1)),
        (side, (-layer, layer), (1, 0)),
        (layer - start_y, (layer, layer), (0, -1)),
    )


def index_to_grid(index: int) -> GridPoint:
    """Grid coordinate of the item at *index* (0 is the origin)."""
    if index < 0:
        raise ValueError(f"Item index must be non-negative, got {index}")
    if index == 0:
        return GridPoint(0, 0)

    # Ring L covers indices [(2L-1)**2, (2L+1)**2)
    layer = (math.isqrt(index) + 1) // 2
    offset = index - (2 * layer - 1) ** 2

    for length, (sx, sy), (step_x, step_y) in _ring_arcs(layer):
        if offset < length:
            return GridPoint(sx + step_x * offset, sy + step_y * offset)
        offset -= length

    raise AssertionError(f"index {index} fell outside ring {layer}")


def grid_to_index(point: tuple[int, int]) -> int:
    """Item index at grid coordinate *point*; exact inverse of index_to_grid."""
    x, y = point
    layer = layer_of(point)
    if layer == 0:
        return 0

    start_y = ring_start(layer).y
    side = 2 * layer
    right_len = start_y + layer

    if x == layer and -layer < y <= start_y:
        offset = start_y - y
    elif y == -layer and x > -layer:
        offset = right_len + (layer - x)
    elif x == -layer and y < layer:
        offset = right_len + side + (y + layer)
    elif y == layer and x < layer:
        offset = right_len + 2 * side + (x + layer)
    else:
        # closing arc: x == layer, y above the ring start
        offset = right_len + 3 * side + (layer - y)

    return (2 * layer - 1) ** 2 + offset


def grid_to_index_array(xs, ys) -> np.ndarray:
    """Vectorized grid_to_index over coordinate arrays of any matching shape.

    Returns an int64 array with the same shape as the broadcast inputs.
    """
    x = np.asarray(xs, dtype=np.int64)
    y = np.asarray(ys, dtype=np.int64)
    layer = np.maximum(np.abs(x), np.abs(y))

    start_y = np.where(layer == 1, 0, layer - 1)
    side = 2 * layer
    right_len = start_y + layer

    conditions = [
        (x == layer) & (y > -layer) & (y <= start_y),
        (y == -layer) & (x > -layer),
        (x == -layer) & (y < layer),
        (y == layer) & (x < layer),
    ]
    offsets = [
        start_y - y,
        right_len + (layer - x),
        right_len + side + (y + layer),
        right_len + 2 * side + (x + layer),
    ]
    closing = right_len + 3 * side + (layer - y)
    offset = np.select(conditions, offsets, default=closing)

    return np.where(layer == 0, 0, (2 * layer - 1) ** 2 + offset)
