"""Drag gesture handling: pointer deltas -> pan position, release -> momentum."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from geometry import Offset
from grid.animator import GridAnimator
from grid.controller import GridController
from physics import VelocityTracker

logger = logging.getLogger(__name__)


class DragHandler:
    """Translates drag start/update/end into controller and animator calls."""

    def __init__(
        self,
        controller: GridController,
        animator: GridAnimator,
        momentum_enabled: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._controller = controller
        self._animator = animator
        self.momentum_enabled = momentum_enabled
        self._clock = clock
        self._tracker = VelocityTracker()
        self._last_pointer: Offset | None = None

    @property
    def is_dragging(self) -> bool:
        return self._last_pointer is not None

    def on_drag_start(self, pointer: Offset) -> None:
        # A new drag always wins over a running tween or momentum
        self._animator.cancel()
        self._tracker.clear()
        self._tracker.add_sample(pointer, self._clock())
        self._last_pointer = pointer

    def on_drag_update(self, pointer: Offset) -> None:
        if self._last_pointer is None:
            self.on_drag_start(pointer)
            return
        delta = pointer - self._last_pointer
        self._last_pointer = pointer
        self._controller.update_position(self._controller.position + delta)
        self._tracker.add_sample(pointer, self._clock())

    def on_drag_end(self, velocity: Offset | None = None) -> bool:
        """Finish the drag. Returns True if momentum scrolling started.

        *velocity* is an optional final velocity sample from the host's
        gesture system; the tracker's estimate is used otherwise.
        """
        self._last_pointer = None
        if not self.momentum_enabled:
            return False

        if velocity is None:
            velocity = self._tracker.velocity()
        started = self._animator.start_momentum(velocity)
        if not started:
            logger.debug("Release velocity %.1f px/s below threshold", velocity.distance)
        return started

    def cancel(self) -> None:
        """Abort the drag without starting momentum."""
        self._last_pointer = None
        self._tracker.clear()
