"""Tests for geometry.py value types."""

import pytest

from geometry import GridPoint, Offset, Size


class TestOffset:
    """Vector arithmetic on Offset."""

    def test_zero(self):
        assert Offset.zero() == Offset(0.0, 0.0)

    def test_distance(self):
        assert Offset(3.0, 4.0).distance == pytest.approx(5.0)

    def test_arithmetic(self):
        a = Offset(1.0, 2.0)
        b = Offset(10.0, 20.0)
        assert a + b == Offset(11.0, 22.0)
        assert b - a == Offset(9.0, 18.0)
        assert -a == Offset(-1.0, -2.0)
        assert a * 3 == Offset(3.0, 6.0)
        assert 3 * a == Offset(3.0, 6.0)

    def test_hashable(self):
        assert len({Offset(1.0, 1.0), Offset(1.0, 1.0)}) == 1


class TestTuples:
    """GridPoint and Size behave as plain tuples."""

    def test_grid_point_unpacks(self):
        x, y = GridPoint(2, -3)
        assert (x, y) == (2, -3)

    def test_grid_point_equals_tuple(self):
        assert GridPoint(1, 0) == (1, 0)

    def test_size(self):
        size = Size(400, 300)
        assert size.width == 400
        assert size.height == 300
