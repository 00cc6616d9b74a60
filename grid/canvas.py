"""Grid canvas: paints the culled cells and turns input into navigation.

The canvas owns no position state. It subscribes to a GridController,
repaints on every event, and hands drag gestures to a DragHandler. A
frame timer drives the GridAnimator and runs only while something is
animating.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from PyQt6.QtCore import Qt, QTimer, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen, QFont
from PyQt6.QtWidgets import QWidget

from geometry import Offset, Size
from grid.animator import GridAnimator
from grid.coloring import single_item_color
from grid.controller import (
    EVENT_ANIMATION, EVENT_LAYOUT, EVENT_POSITION, GridController, GridEvent,
)
from grid.culling import (
    DEFAULT_PRELOAD_CELLS, VisibleCell, calculate_visible_cells, render_cells,
)
from grid.interaction import DragHandler
from physics import GridPhysics

logger = logging.getLogger(__name__)

# Frame timer
FRAME_INTERVAL_MS = 16     # ~60 fps while animating

# Wheel panning
WHEEL_NOTCH = 120          # angleDelta units per wheel notch
WHEEL_STEP_PX = 60.0       # pixels panned per notch

# Appearance
BACKGROUND_COLOR = QColor(20, 20, 30)
PLACEHOLDER_COLOR = QColor(100, 100, 120)
LABEL_COLOR = QColor(240, 240, 245)
CORNER_RADIUS = 8.0

CellPainter = Callable[[QPainter, QRectF, VisibleCell, Any], None]


def default_cell_painter(
    painter: QPainter, rect: QRectF, cell: VisibleCell, item: Any,
) -> None:
    """Rounded tile in the item's hash color with the item as its label."""
    r, g, b = single_item_color(cell.item_index)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QColor(r, g, b))
    painter.drawRoundedRect(rect, CORNER_RADIUS, CORNER_RADIUS)

    painter.setPen(QPen(LABEL_COLOR))
    painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, str(item))


class InfiniteGridCanvas(QWidget):
    """Widget that renders an infinite grid of items around a controller."""

    position_changed = pyqtSignal(float, float)  # dx, dy
    center_item_changed = pyqtSignal(int)        # spiral index at center

    def __init__(
        self,
        controller: GridController,
        items: Sequence[Any] = (),
        physics: GridPhysics | None = None,
        preload_cells: int = DEFAULT_PRELOAD_CELLS,
        momentum_enabled: bool = False,
        cell_painter: CellPainter = default_cell_painter,
        parent=None,
    ):
        super().__init__(parent)
        self.setMinimumSize(400, 400)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

        self._controller = controller
        self._items = items
        self._preload_cells = preload_cells
        self._cell_painter = cell_painter
        self._center_item: int | None = None

        self._animator = GridAnimator(controller, physics)
        self._drag = DragHandler(controller, self._animator, momentum_enabled)

        self._frame_timer = QTimer()
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        # Subscribed after the animator so a new request is already a tween
        self._unsubscribe = controller.subscribe(self._on_controller_event)

        self._font = QFont()
        self._font.setPointSize(14)
        self._font.setBold(True)

        if self._animator.is_animating:
            self._frame_timer.start()

    # -- Public interface --

    @property
    def controller(self) -> GridController:
        return self._controller

    @property
    def animator(self) -> GridAnimator:
        return self._animator

    def set_items(self, items: Sequence[Any]) -> None:
        self._items = items
        self.update()

    def set_preload_cells(self, preload_cells: int) -> None:
        self._preload_cells = preload_cells
        self.update()

    def set_momentum_enabled(self, enabled: bool) -> None:
        self._drag.momentum_enabled = enabled
        logger.info("Momentum scrolling %s", "enabled" if enabled else "disabled")

    def set_cell_painter(self, cell_painter: CellPainter) -> None:
        self._cell_painter = cell_painter
        self.update()

    def visible_cells(self) -> list[VisibleCell]:
        """Cells the next paint pass will draw."""
        layout = self._controller.layout
        if layout is None:
            return []
        return calculate_visible_cells(
            Size(self.width(), self.height()),
            self._controller.position,
            layout,
            self._preload_cells,
            len(self._items),
        )

    def detach(self) -> None:
        """Stop animating and disconnect from the controller."""
        self._frame_timer.stop()
        self._drag.cancel()
        self._animator.detach()
        self._unsubscribe()

    # -- Controller events --

    def _on_controller_event(self, event: GridEvent) -> None:
        if event.kind == EVENT_POSITION:
            self.position_changed.emit(event.position.dx, event.position.dy)
            self._update_center_item()
        elif event.kind == EVENT_LAYOUT:
            self._update_center_item()
        elif event.kind == EVENT_ANIMATION:
            self._ensure_frame_timer()
        self.update()

    def _update_center_item(self) -> None:
        if self._controller.layout is None:
            return
        index = self._controller.get_current_center_item_index()
        if index != self._center_item:
            self._center_item = index
            self.center_item_changed.emit(index)

    def _ensure_frame_timer(self) -> None:
        if self._animator.is_animating and not self._frame_timer.isActive():
            self._frame_timer.start()

    def _on_frame(self) -> None:
        if not self._animator.tick():
            self._frame_timer.stop()

    # -- Painting --

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), BACKGROUND_COLOR)

        if self._controller.layout is None or not self._items:
            painter.setPen(PLACEHOLDER_COLOR)
            painter.drawText(
                self.rect(),
                Qt.AlignmentFlag.AlignCenter,
                "Infinite Grid\nNo layout or items to show",
            )
            painter.end()
            return

        painter.setFont(self._font)

        def _paint(cell: VisibleCell, item: Any) -> None:
            rect = QRectF(
                cell.position.dx, cell.position.dy,
                cell.cell_width, cell.cell_height,
            )
            self._cell_painter(painter, rect, cell, item)

        render_cells(self.visible_cells(), self._items, _paint)
        painter.end()

    # -- Mouse events --

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self._frame_timer.stop()
            self._drag.on_drag_start(Offset(pos.x(), pos.y()))
            self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event):
        if self._drag.is_dragging:
            pos = event.position()
            self._drag.on_drag_update(Offset(pos.x(), pos.y()))

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and self._drag.is_dragging:
            self.setCursor(Qt.CursorShape.OpenHandCursor)
            if self._drag.on_drag_end():
                self._ensure_frame_timer()

    def wheelEvent(self, event):
        delta = event.angleDelta()
        dx, dy = delta.x(), delta.y()
        if event.modifiers() & Qt.KeyboardModifier.ShiftModifier and dx == 0:
            dx, dy = dy, 0
        if dx == 0 and dy == 0:
            event.ignore()
            return
        self._controller.move_by(Offset(
            dx / WHEEL_NOTCH * WHEEL_STEP_PX,
            dy / WHEEL_NOTCH * WHEEL_STEP_PX,
        ))
        event.accept()

    def keyPressEvent(self, event):
        """Home (center item 0), arrows (step one cell), Escape (stop)."""
        key = event.key()
        layout = self._controller.layout

        steps = {
            Qt.Key.Key_Left: (1, 0),
            Qt.Key.Key_Right: (-1, 0),
            Qt.Key.Key_Up: (0, 1),
            Qt.Key.Key_Down: (0, -1),
        }

        if key == Qt.Key.Key_Home and layout is not None:
            self._controller.animate_to_item(0)
        elif key in steps and layout is not None:
            sx, sy = steps[key]
            self._controller.animate_by(Offset(
                sx * layout.effective_cell_width,
                sy * layout.effective_cell_height,
            ))
        elif key == Qt.Key.Key_Escape:
            self._drag.cancel()
            self._animator.cancel()
            self._frame_timer.stop()
            self.setCursor(Qt.CursorShape.OpenHandCursor)
        else:
            super().keyPressEvent(event)
