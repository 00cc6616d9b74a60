"""Viewport culling: which grid cells to render for a given pan position.

Given the viewport size, pan position, layout, and a preload margin, this
computes the exact list of cells intersecting the (margin-expanded)
viewport. The whole candidate window is evaluated at once with numpy,
the same way the compute backends evaluate an initial-condition grid.

Everything here is a pure function of its inputs: calling it twice with
the same arguments yields identical lists.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import numpy as np

from geometry import GridPoint, Offset, Size
from grid.layout import GridLayout
from grid.spiral import grid_to_index_array

logger = logging.getLogger(__name__)

DEFAULT_PRELOAD_CELLS = 2

T = TypeVar("T")


@dataclass(frozen=True)
class VisibleCell:
    """One cell to render in the current pass."""

    coordinate: GridPoint
    grid_index: int          # spiral index of the coordinate
    item_index: int | None   # cyclic index into the items (None if no items)
    world_position: Offset   # layout position of the cell, stagger included
    position: Offset         # top-left corner in viewport pixels
    cell_width: float
    cell_height: float

    @property
    def key(self) -> int:
        """Stable identity for diffing rendered cells across passes."""
        return self.grid_index


def cyclic_item_index(grid_index: int, item_count: int) -> int | None:
    """Wrap a grid index into [0, item_count); None for an empty list."""
    if item_count <= 0:
        return None
    # Python's % is floored, so negative indices wrap to the end
    return grid_index % item_count


def resolve_item(items: Sequence[T], grid_index: int) -> T | None:
    """Look up the application item shown at *grid_index*."""
    index = cyclic_item_index(grid_index, len(items))
    return None if index is None else items[index]


def calculate_visible_cells(
    viewport: Size,
    position: Offset,
    layout: GridLayout,
    preload_cells: int = DEFAULT_PRELOAD_CELLS,
    item_count: int | None = None,
) -> list[VisibleCell]:
    """Compute the cells to render, in x-major order.

    Args:
        viewport: Viewport size in pixels.
        position: Current pan position (content translation).
        layout: Grid layout.
        preload_cells: Extra cell rows/columns kept beyond each edge.
        item_count: Length of the items list, used to resolve item_index.
            None leaves item_index equal to the spiral index.
    """
    width, height = viewport
    ecw = layout.effective_cell_width
    ech = layout.effective_cell_height

    cells_x = math.ceil(width / ecw) + 2 * preload_cells
    cells_y = math.ceil(height / ech) + 2 * preload_cells
    start_x = math.floor((-position.dx - width / 2) / ecw) - preload_cells
    start_y = math.floor((-position.dy - height / 2) / ech) - preload_cells

    if preload_cells > 0:
        # A partial cell can hang past the far edge of a centered window
        cells_x += 1
        cells_y += 1

    if layout.grid_offset > 0:
        # Staggered columns can shift a row partly into view
        start_y -= 1
        cells_y += 2

    if cells_x <= 0 or cells_y <= 0:
        return []

    xs, ys = np.meshgrid(
        np.arange(start_x, start_x + cells_x, dtype=np.int64),
        np.arange(start_y, start_y + cells_y, dtype=np.int64),
        indexing="ij",
    )
    xs = xs.ravel()
    ys = ys.ravel()

    shift = layout.grid_offset * layout.cell_height / 4
    column_offset = np.where(np.abs(xs) % 2 == 1, -shift, shift)
    world_x = xs * ecw
    world_y = ys * ech + column_offset

    # Cell (0, 0) sits centered in the viewport at position (0, 0)
    left = world_x + position.dx + width / 2 - layout.cell_width / 2
    top = world_y + position.dy + height / 2 - layout.cell_height / 2

    margin_x = preload_cells * ecw
    margin_y = preload_cells * ech
    visible = (
        (left + layout.cell_width >= -margin_x)
        & (left <= width + margin_x)
        & (top + layout.cell_height >= -margin_y)
        & (top <= height + margin_y)
    )

    grid_indices = grid_to_index_array(xs[visible], ys[visible])

    cells = [
        VisibleCell(
            coordinate=GridPoint(x, y),
            grid_index=g,
            item_index=g if item_count is None else cyclic_item_index(g, item_count),
            world_position=Offset(wx, wy),
            position=Offset(px, py),
            cell_width=layout.cell_width,
            cell_height=layout.cell_height,
        )
        for x, y, g, wx, wy, px, py in zip(
            xs[visible].tolist(),
            ys[visible].tolist(),
            grid_indices.tolist(),
            world_x[visible].tolist(),
            world_y[visible].tolist(),
            left[visible].tolist(),
            top[visible].tolist(),
        )
    ]

    logger.debug(
        "Culled %d of %d candidate cells", len(cells), cells_x * cells_y,
    )
    return cells


def render_cells(
    cells: Sequence[VisibleCell],
    items: Sequence[T],
    cell_builder: Callable[[VisibleCell, T], Any],
) -> list[Any]:
    """Build host content for each cell; an empty item list renders nothing."""
    if not items:
        return []
    count = len(items)
    return [
        cell_builder(cell, items[cyclic_item_index(cell.grid_index, count)])
        for cell in cells
    ]
