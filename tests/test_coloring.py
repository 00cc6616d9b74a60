"""Tests for grid/coloring.py: item hash colors."""

import numpy as np

from grid.coloring import _hsv_to_bgra, item_colors, single_item_color


def _hsv(h, s=1.0, v=1.0):
    return _hsv_to_bgra(
        np.array([h], dtype=np.float32),
        np.array([s], dtype=np.float32),
        np.array([v], dtype=np.float32),
    )[0]


class TestHsvToBgra:
    """Primary hues land on the right channels (BGRA order)."""

    def test_red(self):
        b, g, r, a = _hsv(0.0)
        assert (r, g, b, a) == (255, 0, 0, 255)

    def test_green(self):
        b, g, r, _ = _hsv(120.0)
        assert (r, g, b) == (0, 255, 0)

    def test_blue(self):
        b, g, r, _ = _hsv(240.0)
        assert (r, g, b) == (0, 0, 255)

    def test_zero_saturation_is_grey(self):
        b, g, r, _ = _hsv(200.0, s=0.0, v=0.5)
        assert r == g == b


class TestItemColors:
    """Vectorized golden-ratio coloring."""

    def test_shape_and_dtype(self):
        colors = item_colors(np.arange(50))
        assert colors.shape == (50, 4)
        assert colors.dtype == np.uint8

    def test_opaque(self):
        assert np.all(item_colors(np.arange(50))[:, 3] == 255)

    def test_deterministic(self):
        np.testing.assert_array_equal(
            item_colors(np.arange(20)), item_colors(np.arange(20)),
        )

    def test_neighbours_differ(self):
        colors = item_colors(np.arange(100))
        assert len({tuple(c) for c in colors}) > 90

    def test_origin_is_dark(self):
        r, g, b = single_item_color(0)
        assert max(r, g, b) < 100

    def test_single_matches_batch(self):
        b, g, r, _ = item_colors(np.array([17]))[0]
        assert single_item_color(17) == (int(r), int(g), int(b))
