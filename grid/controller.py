"""Grid controller: the single owner of the pan position.

A plain state container with subscribe/unsubscribe. Listeners receive an
immutable GridEvent snapshot for every change, so the core stays free of
any particular UI framework.

Position convention: ``position`` is the translation applied to the
content. Dragging adds the pointer delta to it, and the world point shown
at the viewport center is ``-position``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from geometry import Offset
from grid.animation import AnimationRequest, Curve, DEFAULT_DURATION
from grid.layout import GridLayout

logger = logging.getLogger(__name__)

# Event kinds
EVENT_POSITION = "position"    # position changed
EVENT_ANIMATION = "animation"  # a new AnimationRequest is pending
EVENT_CANCEL = "cancel"        # stop any running tween or momentum
EVENT_LAYOUT = "layout"        # layout replaced


class LayoutRequiredError(RuntimeError):
    """Item-aware navigation was used before a GridLayout was attached."""


@dataclass(frozen=True)
class GridEvent:
    """Snapshot delivered to controller listeners."""

    kind: str
    position: Offset
    layout: GridLayout | None


Listener = Callable[[GridEvent], None]


class GridController:
    """Programmatic control of the infinite grid's pan position."""

    def __init__(
        self,
        initial_position: Offset | None = None,
        layout: GridLayout | None = None,
    ):
        self._position = initial_position if initial_position is not None else Offset.zero()
        self._layout = layout
        self._pending_animation: AnimationRequest | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_item(cls, initial_item: int, layout: GridLayout) -> GridController:
        """Create a controller with *initial_item* centered in the viewport."""
        controller = cls(layout=layout)
        controller._position = controller.item_position(initial_item)
        return controller

    # -- State --

    @property
    def position(self) -> Offset:
        return self._position

    @property
    def layout(self) -> GridLayout | None:
        return self._layout

    @layout.setter
    def layout(self, layout: GridLayout | None) -> None:
        if layout != self._layout:
            self._layout = layout
            self._notify(EVENT_LAYOUT)

    def update_layout(self, layout: GridLayout | None) -> None:
        self.layout = layout

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    @property
    def has_pending_animation(self) -> bool:
        return self._pending_animation is not None

    # -- Subscription --

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, kind: str) -> None:
        event = GridEvent(kind, self._position, self._layout)
        for listener in list(self._listeners):
            listener(event)

    # -- Raw position navigation --

    def update_position(self, position: Offset) -> None:
        """Set the position, notifying only when it actually changes."""
        if position != self._position:
            self._position = position
            self._notify(EVENT_POSITION)

    def jump_to(self, position: Offset) -> None:
        """Move immediately, cancelling any pending or running animation."""
        self._pending_animation = None
        self._notify(EVENT_CANCEL)
        self.update_position(position)

    def animate_to(
        self,
        position: Offset,
        duration: float = DEFAULT_DURATION,
        curve: Curve = Curve.EASE_IN_OUT,
    ) -> None:
        """Request an animated move; the animation driver performs it."""
        self._pending_animation = AnimationRequest(position, duration, curve)
        self._notify(EVENT_ANIMATION)

    def take_pending_animation(self) -> AnimationRequest | None:
        """Return and clear the pending request (consumed exactly once)."""
        request = self._pending_animation
        self._pending_animation = None
        return request

    def move_by(self, delta: Offset) -> None:
        self.jump_to(self._position + delta)

    def animate_by(
        self,
        delta: Offset,
        duration: float = DEFAULT_DURATION,
        curve: Curve = Curve.EASE_IN_OUT,
    ) -> None:
        self.animate_to(self._position + delta, duration, curve)

    def reset(self) -> None:
        """Jump back to the origin."""
        self.jump_to(Offset.zero())

    # -- Item-aware navigation --

    def _require_layout(self) -> GridLayout:
        if self._layout is None:
            raise LayoutRequiredError(
                "A GridLayout must be set on the controller before using "
                "item-aware methods. Call "
                "controller.update_layout(GridLayout(...)) first."
            )
        return self._layout

    def item_position(self, item_index: int) -> Offset:
        """Position that centers *item_index*, stagger included."""
        return -self._require_layout().item_world_position(item_index)

    def jump_to_item(self, item_index: int) -> None:
        target = self.item_position(item_index)
        logger.info("Jumping to item %d", item_index)
        self.jump_to(target)

    def animate_to_item(
        self,
        item_index: int,
        duration: float = DEFAULT_DURATION,
        curve: Curve = Curve.EASE_IN_OUT,
    ) -> None:
        target = self.item_position(item_index)
        logger.info("Animating to item %d", item_index)
        self.animate_to(target, duration, curve)

    def get_current_center_item_index(self) -> int:
        """Item index at the viewport center."""
        layout = self._require_layout()
        return layout.item_index_at_world_position(-self._position)

    def dispose(self) -> None:
        self._pending_animation = None
        self._listeners.clear()
