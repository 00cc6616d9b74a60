"""App window: the grid view with a navigation toolbar and status bar."""

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QMainWindow, QToolBar, QStatusBar

from grid.view import GridView

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window hosting the infinite grid explorer."""

    def __init__(self, config=None):
        super().__init__()
        self.setWindowTitle("Infinite Grid")
        self.resize(1200, 750)

        # --- View ---
        self.grid_view = GridView(config)
        self.setCentralWidget(self.grid_view)

        # --- Toolbar ---
        toolbar = QToolBar("Navigation")
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)

        self._center_action = QAction("Center", self)
        self._center_action.setShortcut("Ctrl+0")
        self._center_action.triggered.connect(self.grid_view.center_origin)
        toolbar.addAction(self._center_action)

        self._reset_action = QAction("Reset", self)
        self._reset_action.triggered.connect(self.grid_view.reset)
        toolbar.addAction(self._reset_action)

        toolbar.addSeparator()

        self._controls_action = QAction("Controls", self)
        self._controls_action.setCheckable(True)
        self._controls_action.setChecked(True)
        self._controls_action.toggled.connect(self._on_controls_toggled)
        toolbar.addAction(self._controls_action)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.addWidget(self.grid_view.position_label)
        self._status_bar.addWidget(self.grid_view.center_label)
        self._status_bar.addWidget(self.grid_view.visible_label)

        self.grid_view.canvas.setFocus()

    def _on_controls_toggled(self, visible: bool) -> None:
        self.grid_view.controls.setVisible(visible)
        logger.info("Controls panel %s", "shown" if visible else "hidden")

    def closeEvent(self, event):
        self.grid_view.detach()
        super().closeEvent(event)
