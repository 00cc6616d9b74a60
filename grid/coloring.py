"""Tile colors for the demo cell painter.

Item indices are hashed with the golden ratio to pseudo-random HSV, so
neighbouring items get visually distinct colors. All functions are
vectorized over (N,) int arrays and return (N, 4) uint8 BGRA.
"""

from __future__ import annotations

import math

import numpy as np

# Golden ratio for hash-based coloring
_PHI = (1.0 + math.sqrt(5.0)) / 2.0


def _hsv_to_bgra(
    h: np.ndarray, s: np.ndarray, v: np.ndarray,
) -> np.ndarray:
    """Convert HSV arrays to BGRA uint8 array.

    Args:
        h: Hue in [0, 360), float32.
        s: Saturation in [0, 1], float32.
        v: Value in [0, 1], float32.

    Returns:
        (N, 4) uint8 BGRA array.
    """
    c = v * s
    h_prime = h / 60.0
    x = c * (1.0 - np.abs(h_prime % 2.0 - 1.0))
    m = v - c

    sector = h_prime.astype(np.int32) % 6
    s0, s1, s2, s3, s4, s5 = (sector == k for k in range(6))

    r = np.select([s0, s1, s4, s5], [c, x, x, c], 0.0)
    g = np.select([s0, s1, s2, s3], [x, c, c, x], 0.0)
    b = np.select([s2, s3, s4, s5], [x, c, c, x], 0.0)

    bgra = np.empty((h.shape[0], 4), dtype=np.uint8)
    bgra[:, 0] = np.clip((b + m) * 255.0, 0, 255).astype(np.uint8)
    bgra[:, 1] = np.clip((g + m) * 255.0, 0, 255).astype(np.uint8)
    bgra[:, 2] = np.clip((r + m) * 255.0, 0, 255).astype(np.uint8)
    bgra[:, 3] = 255
    return bgra


def item_colors(indices: np.ndarray) -> np.ndarray:
    """Golden-ratio hash of item indices to BGRA tile colors.

    Item 0 gets a fixed dark slate so the origin is easy to find.

    Args:
        indices: (N,) int array of item indices.

    Returns:
        (N, 4) uint8 BGRA array.
    """
    idx = np.asarray(indices, dtype=np.float64)

    hue = ((idx * _PHI) % 1.0 * 360.0).astype(np.float32)
    s = (0.45 + 0.35 * ((idx * 0.7071) % 1.0)).astype(np.float32)
    v = (0.55 + 0.35 * ((idx * 1.7321) % 1.0)).astype(np.float32)

    at_origin = idx == 0
    s = np.where(at_origin, np.float32(0.25), s)
    v = np.where(at_origin, np.float32(0.30), v)

    return _hsv_to_bgra(hue, s, v)


def single_item_color(index: int) -> tuple[int, int, int]:
    """RGB tuple for one item index."""
    b, g, r, _ = item_colors(np.array([index]))[0]
    return int(r), int(g), int(b)
