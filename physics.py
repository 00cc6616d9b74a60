"""Momentum scrolling physics.

Exponential velocity decay with a geometric-series closed form for the
position, so a release trajectory can be sampled at any time without
integrating frame by frame. Also provides pointer velocity estimation.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass

from geometry import Offset

# Velocity estimation window
SAMPLE_WINDOW = 0.05      # seconds
MAX_SAMPLES = 10
MIN_TRACKED_SPEED = 10.0  # px/s, anything slower is treated as noise


@dataclass(frozen=True)
class GridPhysics:
    """Tuning parameters for inertial scrolling."""

    friction: float = 0.015
    min_velocity: float = 50.0
    max_velocity: float = 3000.0
    deceleration_rate: float = 0.85

    def __post_init__(self):
        for name in ("friction", "min_velocity", "max_velocity"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not 0.0 < self.deceleration_rate < 1.0:
            raise ValueError(
                f"deceleration_rate must be in (0, 1), got {self.deceleration_rate}"
            )

    def create_momentum_simulation(
        self,
        initial_velocity: Offset,
        initial_position: Offset,
    ) -> MomentumScrollSimulation:
        return MomentumScrollSimulation(
            initial_velocity=initial_velocity,
            initial_position=initial_position,
            friction=self.friction,
            min_velocity=self.min_velocity,
            max_velocity=self.max_velocity,
            deceleration_rate=self.deceleration_rate,
        )

    def clamp_velocity(self, velocity: Offset) -> Offset:
        """Scale velocity down to max_velocity, preserving direction."""
        magnitude = velocity.distance
        if magnitude > self.max_velocity:
            return velocity * (self.max_velocity / magnitude)
        return velocity

    def is_velocity_significant(self, velocity: Offset) -> bool:
        """Momentum only starts above twice the stopping threshold."""
        return velocity.distance > self.min_velocity * 2


@dataclass(frozen=True)
class MomentumScrollSimulation:
    """Decaying-velocity trajectory for a single drag release.

    velocity(t) = v0 * r**t
    position(t) = p0 + v0 * (1 - r**t) / (1 - r)

    where r is the deceleration rate and t is in seconds.
    """

    initial_velocity: Offset
    initial_position: Offset
    friction: float
    min_velocity: float
    max_velocity: float
    deceleration_rate: float

    def position_at(self, time: float) -> Offset:
        decay = self.deceleration_rate ** time
        travelled = (1 - decay) / (1 - self.deceleration_rate)
        return self.initial_position + self.initial_velocity * travelled

    def velocity_at(self, time: float) -> Offset:
        return self.initial_velocity * (self.deceleration_rate ** time)

    def is_done(self, time: float) -> bool:
        return self.velocity_at(time).distance <= self.min_velocity

    def should_stop_immediately(self, time: float) -> bool:
        """Hard cutoff at half the minimum velocity (imperceptible creep)."""
        return self.velocity_at(time).distance <= self.min_velocity * 0.5

    def final_position(self) -> Offset:
        """Resting position in the limit t -> infinity."""
        return self.initial_position + self.initial_velocity * (
            1 / (1 - self.deceleration_rate)
        )

    def estimated_duration(self) -> float:
        """Time until the speed decays to min_velocity (0 if already below)."""
        initial_speed = self.initial_velocity.distance
        if initial_speed <= self.min_velocity:
            return 0.0
        return math.log(self.min_velocity / initial_speed) / math.log(
            self.deceleration_rate
        )


class VelocityTracker:
    """Estimates pointer velocity from recent (position, timestamp) samples."""

    def __init__(self):
        self._samples: deque[tuple[Offset, float]] = deque(maxlen=MAX_SAMPLES)

    def __len__(self) -> int:
        return len(self._samples)

    def add_sample(self, position: Offset, timestamp: float) -> None:
        """Record a pointer position. Timestamps are in seconds."""
        self._samples.append((position, timestamp))
        cutoff = timestamp - SAMPLE_WINDOW
        while self._samples and self._samples[0][1] < cutoff:
            self._samples.popleft()

    def velocity(self) -> Offset:
        if len(self._samples) < 2:
            return Offset.zero()

        earliest_pos, earliest_t = self._samples[0]
        latest_pos, latest_t = self._samples[-1]
        elapsed = latest_t - earliest_t
        if elapsed <= 0:
            return Offset.zero()

        velocity = (latest_pos - earliest_pos) * (1 / elapsed)
        if velocity.distance < MIN_TRACKED_SPEED:
            return Offset.zero()
        return velocity

    def clear(self) -> None:
        self._samples.clear()
