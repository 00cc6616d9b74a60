"""Shared 2D value types: continuous offsets, integer grid points, sizes.

Used by the physics engine, the grid core, and the Qt host alike.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Offset:
    """A real-valued 2D vector (pan positions, velocities, pixel positions)."""

    dx: float
    dy: float

    @classmethod
    def zero(cls) -> Offset:
        return cls(0.0, 0.0)

    @property
    def distance(self) -> float:
        """Euclidean magnitude."""
        return math.hypot(self.dx, self.dy)

    def __add__(self, other: Offset) -> Offset:
        return Offset(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: Offset) -> Offset:
        return Offset(self.dx - other.dx, self.dy - other.dy)

    def __neg__(self) -> Offset:
        return Offset(-self.dx, -self.dy)

    def __mul__(self, factor: float) -> Offset:
        return Offset(self.dx * factor, self.dy * factor)

    __rmul__ = __mul__


class GridPoint(NamedTuple):
    """Integer cell coordinate on the unbounded grid."""

    x: int
    y: int


class Size(NamedTuple):
    """Viewport dimensions in pixels."""

    width: float
    height: float
