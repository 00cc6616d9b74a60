"""Tests for grid/layout.py: cell geometry and grid <-> world conversion."""

import pytest

from geometry import GridPoint, Offset
from grid.layout import GridLayout


class TestConstruction:
    """Validation and convenience constructors."""

    def test_effective_sizes(self):
        layout = GridLayout(cell_width=240, cell_height=360, spacing=12)
        assert layout.effective_cell_width == 252
        assert layout.effective_cell_height == 372

    def test_square(self):
        layout = GridLayout.square(100, spacing=10)
        assert layout.cell_width == layout.cell_height == 100
        assert layout.is_square

    def test_rectangular_not_square(self):
        assert not GridLayout(100, 150).is_square

    @pytest.mark.parametrize("offset", [-0.1, 1.01])
    def test_offset_out_of_range(self, offset):
        with pytest.raises(ValueError):
            GridLayout(100, 100, grid_offset=offset)

    def test_zero_effective_size_rejected(self):
        with pytest.raises(ValueError):
            GridLayout(0, 100)

    def test_frozen(self):
        layout = GridLayout(100, 100)
        with pytest.raises(AttributeError):
            layout.spacing = 5

    def test_copy_with(self):
        layout = GridLayout(100, 100, spacing=10)
        changed = layout.copy_with(grid_offset=0.5)
        assert changed.grid_offset == 0.5
        assert changed.spacing == 10
        assert layout.grid_offset == 0.0

    def test_equality(self):
        assert GridLayout(100, 100, 10, 0.5) == GridLayout.square(100, 10, 0.5)

    def test_str_square(self):
        assert str(GridLayout.square(100)).startswith("GridLayout(cell_size=")

    def test_str_rectangular(self):
        assert str(GridLayout(100, 200)).startswith("GridLayout.rectangular(")


class TestWorldPosition:
    """Grid coordinate -> world pixel position."""

    def test_no_offset(self):
        layout = GridLayout.square(100, spacing=10)
        assert layout.world_position((2, -3)) == Offset(220, -330)

    def test_column_offset_signs(self):
        layout = GridLayout.square(100, grid_offset=0.5)
        assert layout.column_offset(0) == 12.5
        assert layout.column_offset(1) == -12.5
        assert layout.column_offset(-1) == -12.5
        assert layout.column_offset(-2) == 12.5

    def test_adjacent_columns_differ_by_at_most_half_cell(self):
        layout = GridLayout(100, 200, grid_offset=1.0)
        diff = layout.column_offset(0) - layout.column_offset(1)
        assert diff == pytest.approx(layout.cell_height / 2)

    def test_item_world_positions_with_offset(self):
        layout = GridLayout.square(100, spacing=10, grid_offset=0.5)
        assert layout.item_world_position(0) == Offset(0, 12.5)
        assert layout.item_world_position(1) == Offset(110, -12.5)
        assert layout.item_world_position(5) == Offset(-110, -12.5)
        assert layout.item_world_position(2) == Offset(110, -122.5)
        assert layout.item_world_position(6) == Offset(-110, 97.5)


class TestWorldToGrid:
    """World pixel position -> nearest grid coordinate."""

    @pytest.mark.parametrize("grid_offset", [0.0, 0.5, 1.0])
    def test_round_trip(self, grid_offset):
        layout = GridLayout(120, 80, spacing=8, grid_offset=grid_offset)
        for x in range(-6, 7):
            for y in range(-6, 7):
                world = layout.world_position((x, y))
                assert layout.world_position_to_grid(world) == (x, y)

    def test_returns_grid_point(self):
        point = GridLayout.square(100).world_position_to_grid(Offset(240, -90))
        assert isinstance(point, GridPoint)
        assert point == (2, -1)

    def test_ties_round_away_from_zero(self):
        layout = GridLayout.square(100, spacing=10)
        assert layout.world_position_to_grid(Offset(55, 0)) == (1, 0)
        assert layout.world_position_to_grid(Offset(-55, 0)) == (-1, 0)
        assert layout.world_position_to_grid(Offset(0, -55)) == (0, -1)

    def test_nearby_point_snaps_to_cell(self):
        layout = GridLayout.square(100, spacing=10)
        assert layout.world_position_to_grid(Offset(118, -104)) == (1, -1)

    def test_item_index_at_world_position(self):
        layout = GridLayout.square(100, spacing=10, grid_offset=0.5)
        for i in range(200):
            world = layout.item_world_position(i)
            assert layout.item_index_at_world_position(world) == i
