"""Grid view: orchestrates controller, canvas, and controls.

This is the main coordinator for the grid explorer. It:
- Owns the GridController and the item list
- Rebuilds the GridLayout when the layout sliders move
- Routes navigation requests from the controls to the controller
- Keeps the status labels in sync with the canvas
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QSplitter, QLabel

from config import GridConfig
from grid.canvas import InfiniteGridCanvas
from grid.controller import GridController
from grid.controls import GridControls
from grid.culling import cyclic_item_index

logger = logging.getLogger(__name__)


def make_items(count: int) -> list[str]:
    """Demo item labels shown on the tiles."""
    return [f"Item {i}" for i in range(count)]


class GridView(QWidget):
    """Complete grid explorer: canvas + controls + navigation wiring."""

    def __init__(self, config: GridConfig | None = None, parent=None):
        super().__init__(parent)
        self._config = config if config is not None else GridConfig()

        layout = self._config.layout()
        self.controller = GridController.from_item(self._config.initial_item, layout)
        self._items = make_items(self._config.item_count)

        self.canvas = InfiniteGridCanvas(
            self.controller,
            self._items,
            physics=self._config.physics(),
            preload_cells=self._config.preload_cells,
            momentum_enabled=self._config.momentum,
        )
        self.controls = GridControls()
        self.controls.set_layout(layout)
        self.controls.set_momentum(self._config.momentum)
        self.controls.set_preload_cells(self._config.preload_cells)
        self.controls.set_navigate_index(self._config.initial_item)

        self._splitter = QSplitter(Qt.Orientation.Horizontal)
        self._splitter.addWidget(self.canvas)
        self._splitter.addWidget(self.controls)
        self._splitter.setStretchFactor(0, 3)
        self._splitter.setStretchFactor(1, 1)

        box = QHBoxLayout(self)
        box.setContentsMargins(0, 0, 0, 0)
        box.addWidget(self._splitter)

        # Status labels (AppWindow places these in its status bar)
        self.position_label = QLabel()
        self.center_label = QLabel()
        self.visible_label = QLabel()

        # Wire signals
        self.canvas.position_changed.connect(self._on_position_changed)
        self.canvas.center_item_changed.connect(self._on_center_item_changed)
        self.controls.layout_changed.connect(self._on_layout_changed)
        self.controls.momentum_toggled.connect(self.canvas.set_momentum_enabled)
        self.controls.preload_changed.connect(self._on_preload_changed)
        self.controls.navigate_requested.connect(self._on_navigate_requested)
        self.controls.center_clicked.connect(self.center_origin)
        self.controls.reset_clicked.connect(self.reset)

        position = self.controller.position
        self._on_position_changed(position.dx, position.dy)
        self._on_center_item_changed(self.controller.get_current_center_item_index())

    # -- Public interface --

    @property
    def items(self) -> list[str]:
        return self._items

    def center_origin(self) -> None:
        """Animate item 0 back to the viewport center."""
        self.controller.animate_to_item(0)

    def reset(self) -> None:
        """Restore the startup layout and jump to the origin."""
        layout = self._config.layout()
        self.controls.set_layout(layout)
        self.controller.update_layout(layout)
        self.controller.reset()
        logger.info("View reset to %s", layout)

    def navigate_to(self, item_index: int, animate: bool = True) -> None:
        if animate:
            self.controller.animate_to_item(item_index)
        else:
            self.controller.jump_to_item(item_index)

    def detach(self) -> None:
        self.canvas.detach()
        self.controller.dispose()

    # -- Callbacks --

    def _on_layout_changed(self):
        layout = self.controls.get_layout()
        center = self.controller.get_current_center_item_index()
        self.controller.update_layout(layout)
        # Keep the same item centered under the new geometry
        self.controller.jump_to_item(center)
        logger.debug("Layout changed to %s", layout)

    def _on_preload_changed(self, preload_cells: int):
        self.canvas.set_preload_cells(preload_cells)
        self._update_visible_label()

    def _on_navigate_requested(self, item_index: int, animate: bool):
        self.navigate_to(item_index, animate)

    def _on_position_changed(self, dx: float, dy: float):
        self.position_label.setText(f"  Position: ({dx:.0f}, {dy:.0f})  ")
        self._update_visible_label()

    def _on_center_item_changed(self, grid_index: int):
        item = cyclic_item_index(grid_index, len(self._items))
        if item is None:
            self.center_label.setText(f"  Center: #{grid_index}  ")
        else:
            self.center_label.setText(f"  Center: #{grid_index} (item {item})  ")

    def _update_visible_label(self):
        self.visible_label.setText(
            f"  Visible: {len(self.canvas.visible_cells())} cells  "
        )
