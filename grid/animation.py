"""Tween primitives: easing curves, animation requests, position tweens.

Pure functions of elapsed time. The clock that advances them lives in
grid/animator.py (or any other host loop).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from geometry import Offset

DEFAULT_DURATION = 0.3  # seconds


class Curve(str, enum.Enum):
    """Easing curve identifiers for programmatic navigation."""

    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"
    DECELERATE = "decelerate"


def ease(curve: Curve, t: float) -> float:
    """Map linear progress t in [0, 1] to eased progress in [0, 1]."""
    t = min(1.0, max(0.0, t))
    if curve is Curve.LINEAR:
        return t
    if curve is Curve.EASE_IN:
        return t * t * t
    if curve is Curve.EASE_OUT:
        u = 1.0 - t
        return 1.0 - u * u * u
    if curve is Curve.EASE_IN_OUT:
        if t < 0.5:
            return 4.0 * t * t * t
        u = -2.0 * t + 2.0
        return 1.0 - u * u * u / 2.0
    if curve is Curve.DECELERATE:
        u = 1.0 - t
        return 1.0 - u * u
    raise ValueError(f"Unknown curve: {curve!r}")


@dataclass(frozen=True)
class AnimationRequest:
    """A pending programmatic animation, consumed once by the driver."""

    target_position: Offset
    duration: float = DEFAULT_DURATION
    curve: Curve = Curve.EASE_IN_OUT


@dataclass(frozen=True)
class TweenAnimation:
    """Eased interpolation from *begin* to the request's target."""

    begin: Offset
    request: AnimationRequest

    def position_at(self, elapsed: float) -> Offset:
        if self.is_complete(elapsed):
            return self.request.target_position
        progress = ease(self.request.curve, elapsed / self.request.duration)
        return self.begin + (self.request.target_position - self.begin) * progress

    def is_complete(self, elapsed: float) -> bool:
        return self.request.duration <= 0 or elapsed >= self.request.duration
