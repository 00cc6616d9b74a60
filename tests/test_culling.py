"""Tests for grid/culling.py: visible-cell computation and item resolution."""

import math

import numpy as np
import pytest

from geometry import GridPoint, Offset, Size
from grid.culling import (
    VisibleCell, calculate_visible_cells, cyclic_item_index,
    render_cells, resolve_item,
)
from grid.layout import GridLayout
from grid.spiral import grid_to_index


def _coords(cells):
    return {(c.coordinate.x, c.coordinate.y) for c in cells}


class TestCyclicResolution:
    """Grid indices wrap around a finite item list."""

    def test_negative_wraps_to_end(self):
        assert cyclic_item_index(-1, 3) == 2
        assert resolve_item(["A", "B", "C"], -1) == "C"

    def test_past_end_wraps_to_start(self):
        assert cyclic_item_index(3, 3) == 0
        assert resolve_item(["A", "B", "C"], 3) == "A"

    def test_large_index(self):
        assert cyclic_item_index(10_007, 10_000) == 7

    def test_empty_list(self):
        assert cyclic_item_index(5, 0) is None
        assert resolve_item([], 5) is None


class TestScenario:
    """400x400 viewport, 100px cells, no spacing, no preload, at origin."""

    @pytest.fixture
    def cells(self):
        return calculate_visible_cells(
            Size(400, 400), Offset.zero(), GridLayout.square(100), preload_cells=0,
        )

    def test_covers_four_by_four_block(self, cells):
        expected = {(x, y) for x in range(-2, 2) for y in range(-2, 2)}
        assert _coords(cells) == expected
        assert len(cells) == 16

    def test_unique_keys(self, cells):
        keys = [c.key for c in cells]
        assert len(keys) == len(set(keys))

    def test_sized_to_layout(self, cells):
        assert all(c.cell_width == 100 and c.cell_height == 100 for c in cells)

    def test_x_major_order(self, cells):
        coords = [tuple(c.coordinate) for c in cells]
        assert coords == sorted(coords)

    def test_origin_cell_is_centered(self, cells):
        origin = next(c for c in cells if c.coordinate == (0, 0))
        assert origin.position == Offset(150.0, 150.0)
        assert origin.grid_index == 0

    def test_grid_index_matches_spiral(self, cells):
        for c in cells:
            assert c.grid_index == grid_to_index(c.coordinate)
            assert isinstance(c.coordinate, GridPoint)

    def test_item_index_defaults_to_grid_index(self, cells):
        assert all(c.item_index == c.grid_index for c in cells)


class TestCalculateVisibleCells:
    """General culling behavior."""

    def test_idempotent(self):
        args = (Size(640, 480), Offset(-37.5, 210.0), GridLayout(120, 90, 6, 0.7), 2)
        first = calculate_visible_cells(*args)
        second = calculate_visible_cells(*args)
        assert first == second

    def test_position_shifts_window(self):
        cells = calculate_visible_cells(
            Size(400, 400), Offset(-100.0, 0.0), GridLayout.square(100), preload_cells=0,
        )
        assert {x for x, _ in _coords(cells)} == {-1, 0, 1, 2}

    def test_preload_adds_cells(self):
        layout = GridLayout.square(100)
        plain = calculate_visible_cells(Size(400, 400), Offset.zero(), layout, 0)
        preloaded = calculate_visible_cells(Size(400, 400), Offset.zero(), layout, 2)
        assert _coords(plain) < _coords(preloaded)
        assert len(preloaded) == 81

    def test_screen_position_formula(self):
        layout = GridLayout(80, 120, spacing=10, grid_offset=0.0)
        position = Offset(25.0, -40.0)
        for c in calculate_visible_cells(Size(300, 500), position, layout, 1):
            assert c.position.dx == pytest.approx(
                c.world_position.dx + position.dx + 150 - 40,
            )
            assert c.position.dy == pytest.approx(
                c.world_position.dy + position.dy + 250 - 60,
            )

    def test_stagger_applied(self):
        layout = GridLayout.square(100, grid_offset=0.5)
        cells = calculate_visible_cells(Size(400, 400), Offset.zero(), layout, 0)
        for c in cells:
            assert c.world_position == layout.world_position(c.coordinate)

    def test_stagger_extends_rows(self):
        """Shifted columns reveal an extra row at the bottom edge."""
        layout = GridLayout.square(100, grid_offset=0.5)
        cells = calculate_visible_cells(Size(400, 400), Offset.zero(), layout, 0)
        assert {y for _, y in _coords(cells)} == {-2, -1, 0, 1, 2}
        assert len(cells) == 20

    def test_cells_intersect_viewport(self):
        layout = GridLayout(100, 60, spacing=4)
        for c in calculate_visible_cells(Size(500, 300), Offset(13.0, 7.0), layout, 0):
            assert c.position.dx + c.cell_width >= 0
            assert c.position.dx <= 500
            assert c.position.dy + c.cell_height >= 0
            assert c.position.dy <= 300

    def test_item_count_resolves_cyclically(self):
        cells = calculate_visible_cells(
            Size(400, 400), Offset.zero(), GridLayout.square(100), 0, item_count=3,
        )
        for c in cells:
            assert c.item_index == c.grid_index % 3

    def test_empty_items_resolve_to_none(self):
        cells = calculate_visible_cells(
            Size(400, 400), Offset.zero(), GridLayout.square(100), 0, item_count=0,
        )
        assert cells
        assert all(c.item_index is None for c in cells)

    def test_zero_viewport(self):
        cells = calculate_visible_cells(
            Size(0, 0), Offset.zero(), GridLayout.square(100), 0,
        )
        assert cells == []

    def test_far_from_origin(self):
        layout = GridLayout.square(100, spacing=10)
        position = -layout.item_world_position(1_000_000)
        cells = calculate_visible_cells(Size(400, 400), position, layout, 0)
        assert 1_000_000 in {c.grid_index for c in cells}


def _cells_touching_viewport(viewport, position, layout):
    """Brute-force set of coordinates whose rectangle overlaps the viewport."""
    width, height = viewport
    ecw = layout.effective_cell_width
    ech = layout.effective_cell_height
    stagger = layout.cell_height / 4

    x_lo = math.floor((-position.dx - width / 2 - layout.cell_width) / ecw) - 2
    x_hi = math.ceil((-position.dx + width / 2 + layout.cell_width) / ecw) + 2
    y_lo = math.floor((-position.dy - height / 2 - layout.cell_height - stagger) / ech) - 2
    y_hi = math.ceil((-position.dy + height / 2 + layout.cell_height + stagger) / ech) + 2

    touching = set()
    for x in range(x_lo, x_hi + 1):
        for y in range(y_lo, y_hi + 1):
            world = layout.world_position((x, y))
            left = world.dx + position.dx + width / 2 - layout.cell_width / 2
            top = world.dy + position.dy + height / 2 - layout.cell_height / 2
            if (left + layout.cell_width > 0 and left < width
                    and top + layout.cell_height > 0 and top < height):
                touching.add((x, y))
    return touching


class TestViewportCoverage:
    """With any preload, every cell overlapping the viewport is returned."""

    @pytest.mark.parametrize("preload_cells", [1, 2, 3])
    def test_matches_brute_force(self, preload_cells):
        rng = np.random.default_rng(7)
        for _ in range(150):
            layout = GridLayout(
                cell_width=float(rng.uniform(20, 300)),
                cell_height=float(rng.uniform(20, 300)),
                spacing=float(rng.uniform(0, 40)),
                grid_offset=float(rng.choice([0.0, 0.5, 1.0])),
            )
            position = Offset(float(rng.uniform(-2000, 2000)), float(rng.uniform(-2000, 2000)))
            viewport = Size(float(rng.uniform(50, 900)), float(rng.uniform(50, 900)))

            cells = calculate_visible_cells(viewport, position, layout, preload_cells)
            expected = _cells_touching_viewport(viewport, position, layout)
            missing = expected - _coords(cells)
            assert not missing, (layout, position, viewport, sorted(missing))

    def test_partial_column_at_right_edge(self):
        """A column whose left edge is just inside the width is kept."""
        layout = GridLayout(135.4, 49.1, spacing=29.7, grid_offset=0.5)
        position = Offset(443.7, -870.6)
        viewport = Size(479.7, 449.2)
        cells = calculate_visible_cells(viewport, position, layout, preload_cells=1)
        assert -1 in {x for x, _ in _coords(cells)}
        assert _cells_touching_viewport(viewport, position, layout) <= _coords(cells)


class TestRenderCells:
    """Host content building from cells and items."""

    @pytest.fixture
    def cells(self):
        return calculate_visible_cells(
            Size(400, 400), Offset.zero(), GridLayout.square(100), 0,
        )

    def test_empty_items_render_nothing(self, cells):
        assert render_cells(cells, [], lambda cell, item: item) == []

    def test_builder_receives_cyclic_items(self, cells):
        items = ["A", "B", "C"]
        built = render_cells(cells, items, lambda cell, item: (cell.grid_index, item))
        assert len(built) == len(cells)
        for grid_index, item in built:
            assert item == items[grid_index % 3]

    def test_cell_type(self, cells):
        assert all(isinstance(c, VisibleCell) for c in cells)
