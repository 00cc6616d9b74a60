"""Animation driver: runs tweens and momentum against a GridController.

Pull-based: the host calls tick() once per frame (a QTimer, a game loop,
or a test with a fake clock). At most one animation is active at a time;
starting a new one replaces the old.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from geometry import Offset
from grid.animation import TweenAnimation
from grid.controller import EVENT_ANIMATION, EVENT_CANCEL, GridController, GridEvent
from physics import GridPhysics, MomentumScrollSimulation

logger = logging.getLogger(__name__)


class GridAnimator:
    """Drives the controller's pending animation requests and momentum."""

    def __init__(
        self,
        controller: GridController,
        physics: GridPhysics | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._controller = controller
        self.physics = physics if physics is not None else GridPhysics()
        self._clock = clock

        self._tween: TweenAnimation | None = None
        self._momentum: MomentumScrollSimulation | None = None
        self._momentum_duration = 0.0
        self._start_time = 0.0

        self._unsubscribe = controller.subscribe(self._on_controller_event)

        # A request may have been queued before we attached
        if controller.has_pending_animation:
            self._start_tween()

    # -- Controller events --

    def _on_controller_event(self, event: GridEvent) -> None:
        if event.kind == EVENT_ANIMATION:
            self._start_tween()
        elif event.kind == EVENT_CANCEL:
            self.cancel()

    def _start_tween(self) -> None:
        request = self._controller.take_pending_animation()
        if request is None:
            return
        self.cancel()
        self._tween = TweenAnimation(self._controller.position, request)
        self._start_time = self._clock()
        logger.debug(
            "Tween to (%.1f, %.1f) over %.3fs (%s)",
            request.target_position.dx, request.target_position.dy,
            request.duration, request.curve.value,
        )

    # -- Public interface --

    @property
    def is_animating(self) -> bool:
        return self._tween is not None or self._momentum is not None

    @property
    def is_momentum_active(self) -> bool:
        return self._momentum is not None

    def start_momentum(self, velocity: Offset) -> bool:
        """Begin inertial scrolling. Returns False if velocity is too small."""
        velocity = self.physics.clamp_velocity(velocity)
        if not self.physics.is_velocity_significant(velocity):
            return False

        self.cancel()
        self._momentum = self.physics.create_momentum_simulation(
            initial_velocity=velocity,
            initial_position=self._controller.position,
        )
        self._momentum_duration = self._momentum.estimated_duration()
        self._start_time = self._clock()
        logger.debug(
            "Momentum at %.0f px/s for %.2fs",
            velocity.distance, self._momentum_duration,
        )
        return True

    def cancel(self) -> None:
        """Stop the active tween or momentum, leaving the position as is."""
        if self.is_animating:
            logger.debug("Animation cancelled")
        self._tween = None
        self._momentum = None

    def tick(self) -> bool:
        """Advance the active animation. Returns True while still running."""
        elapsed = self._clock() - self._start_time

        if self._tween is not None:
            tween = self._tween
            self._controller.update_position(tween.position_at(elapsed))
            # update_position may have triggered a cancel or a new tween
            if self._tween is tween and tween.is_complete(elapsed):
                self._tween = None

        elif self._momentum is not None:
            momentum = self._momentum
            if (
                momentum.should_stop_immediately(elapsed)
                or momentum.is_done(elapsed)
                or elapsed >= self._momentum_duration
            ):
                self._momentum = None
            else:
                self._controller.update_position(momentum.position_at(elapsed))

        return self.is_animating

    def detach(self) -> None:
        """Stop animating and stop listening to the controller."""
        self.cancel()
        self._unsubscribe()
