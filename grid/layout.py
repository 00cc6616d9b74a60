"""Grid layout: cell geometry and grid <-> world pixel conversion.

A GridLayout is immutable. Changing any dimension (e.g. from a slider)
produces a new instance that replaces the old one wholesale.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from geometry import GridPoint, Offset
from grid.spiral import grid_to_index, index_to_grid


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class GridLayout:
    """Cell dimensions, spacing, and column stagger for the infinite grid.

    ``grid_offset`` in [0, 1] staggers columns vertically: even columns
    (including 0) shift down by ``grid_offset * cell_height / 4`` and odd
    columns shift up by the same amount, so adjacent columns differ by at
    most half a cell height.
    """

    cell_width: float
    cell_height: float
    spacing: float = 0.0
    grid_offset: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.grid_offset <= 1.0:
            raise ValueError(f"grid_offset must be in [0, 1], got {self.grid_offset}")
        if self.effective_cell_width <= 0 or self.effective_cell_height <= 0:
            raise ValueError(
                "Effective cell size must be positive, got "
                f"{self.effective_cell_width} x {self.effective_cell_height}"
            )

    @classmethod
    def square(
        cls, cell_size: float, spacing: float = 0.0, grid_offset: float = 0.0,
    ) -> GridLayout:
        return cls(cell_size, cell_size, spacing, grid_offset)

    @property
    def effective_cell_width(self) -> float:
        """Horizontal stride between adjacent cells."""
        return self.cell_width + self.spacing

    @property
    def effective_cell_height(self) -> float:
        """Vertical stride between adjacent cells."""
        return self.cell_height + self.spacing

    @property
    def is_square(self) -> bool:
        return self.cell_width == self.cell_height

    def column_offset(self, column: int) -> float:
        """Vertical stagger shift for grid column *column*."""
        shift = self.grid_offset * self.cell_height / 4
        return -shift if abs(column) % 2 == 1 else shift

    def world_position(self, point: tuple[int, int]) -> Offset:
        x, y = point
        return Offset(
            x * self.effective_cell_width,
            y * self.effective_cell_height + self.column_offset(x),
        )

    def world_position_to_grid(self, position: Offset) -> GridPoint:
        """Nearest grid coordinate to a world position (stagger removed)."""
        x = _round_half_away(position.dx / self.effective_cell_width)
        adjusted_y = position.dy - self.column_offset(x)
        y = _round_half_away(adjusted_y / self.effective_cell_height)
        return GridPoint(x, y)

    def item_world_position(self, index: int) -> Offset:
        return self.world_position(index_to_grid(index))

    def item_index_at_world_position(self, position: Offset) -> int:
        return grid_to_index(self.world_position_to_grid(position))

    def copy_with(self, **changes) -> GridLayout:
        """Return a new layout with the given fields replaced."""
        return replace(self, **changes)

    def __str__(self) -> str:
        if self.is_square:
            return (
                f"GridLayout(cell_size={self.cell_width}, spacing={self.spacing}, "
                f"grid_offset={self.grid_offset})"
            )
        return (
            f"GridLayout.rectangular(cell_width={self.cell_width}, "
            f"cell_height={self.cell_height}, spacing={self.spacing}, "
            f"grid_offset={self.grid_offset})"
        )
