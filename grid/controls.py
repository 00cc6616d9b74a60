"""Grid controls: layout sliders, scrolling behavior, and item navigation.

All controls for the grid explorer, organized in grouped sections.
"""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QGroupBox, QCheckBox, QSpinBox,
)

from grid.culling import DEFAULT_PRELOAD_CELLS
from ui_common import LayoutParamsWidget

# Navigation spin box upper bound
MAX_NAVIGATE_INDEX = 1_000_000


class GridControls(QWidget):
    """Control panel for the infinite grid."""

    # Signals
    layout_changed = pyqtSignal()
    momentum_toggled = pyqtSignal(bool)
    preload_changed = pyqtSignal(int)
    navigate_requested = pyqtSignal(int, bool)  # item index, animate
    center_clicked = pyqtSignal()
    reset_clicked = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._building = True
        self._init_ui()
        self._building = False

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- Layout ---
        layout_group = QGroupBox("Layout")
        layout_box = QVBoxLayout()
        layout_group.setLayout(layout_box)

        self.layout_params = LayoutParamsWidget()
        layout_box.addWidget(self.layout_params)

        self.layout_hint = QLabel("Offset staggers alternate columns")
        self.layout_hint.setStyleSheet(
            "color: #888; font-style: italic; font-size: 11px;"
        )
        layout_box.addWidget(self.layout_hint)

        main_layout.addWidget(layout_group)

        # --- Scrolling ---
        scroll_group = QGroupBox("Scrolling")
        scroll_layout = QGridLayout()
        scroll_group.setLayout(scroll_layout)

        self.momentum_check = QCheckBox("Momentum")
        scroll_layout.addWidget(self.momentum_check, 0, 0, 1, 2)

        scroll_layout.addWidget(QLabel("Preload cells:"), 1, 0)
        self.preload_spin = QSpinBox()
        self.preload_spin.setRange(0, 10)
        self.preload_spin.setValue(DEFAULT_PRELOAD_CELLS)
        scroll_layout.addWidget(self.preload_spin, 1, 1)

        main_layout.addWidget(scroll_group)

        # --- Navigation ---
        nav_group = QGroupBox("Navigation")
        nav_layout = QVBoxLayout()
        nav_group.setLayout(nav_layout)

        item_row = QHBoxLayout()
        item_row.addWidget(QLabel("Item:"))
        self.item_spin = QSpinBox()
        self.item_spin.setRange(0, MAX_NAVIGATE_INDEX)
        item_row.addWidget(self.item_spin, 1)
        self.go_btn = QPushButton("Go")
        item_row.addWidget(self.go_btn)
        nav_layout.addLayout(item_row)

        self.animate_check = QCheckBox("Animate")
        self.animate_check.setChecked(True)
        nav_layout.addWidget(self.animate_check)

        button_row = QHBoxLayout()
        self.center_btn = QPushButton("Center")
        self.reset_btn = QPushButton("Reset")
        button_row.addWidget(self.center_btn)
        button_row.addWidget(self.reset_btn)
        nav_layout.addLayout(button_row)

        self.nav_hint = QLabel("Drag to pan, arrows step one cell")
        self.nav_hint.setStyleSheet(
            "color: #888; font-style: italic; font-size: 11px;"
        )
        nav_layout.addWidget(self.nav_hint)

        main_layout.addWidget(nav_group)
        main_layout.addStretch()

        # --- Wire signals ---
        for sl in self.layout_params.sliders:
            sl.valueChanged.connect(self._on_layout_changed)

        self.momentum_check.toggled.connect(self._on_momentum_toggled)
        self.preload_spin.valueChanged.connect(self._on_preload_changed)
        self.go_btn.clicked.connect(self._on_go_clicked)
        self.center_btn.clicked.connect(self._on_center_clicked)
        self.reset_btn.clicked.connect(self._on_reset_clicked)

    # -- Public accessors --

    def get_layout(self):
        return self.layout_params.get_layout()

    def set_layout(self, grid_layout):
        """Set the sliders without emitting layout_changed."""
        self._building = True
        try:
            self.layout_params.set_layout(grid_layout)
        finally:
            self._building = False

    def set_momentum(self, enabled: bool) -> None:
        self.momentum_check.setChecked(enabled)

    def set_preload_cells(self, preload_cells: int) -> None:
        self.preload_spin.setValue(preload_cells)

    def set_navigate_index(self, index: int) -> None:
        self.item_spin.setValue(index)

    # -- Callbacks --

    def _on_layout_changed(self, _value):
        if not self._building:
            self.layout_changed.emit()

    def _on_momentum_toggled(self, checked):
        if not self._building:
            self.momentum_toggled.emit(checked)

    def _on_preload_changed(self, value):
        if not self._building:
            self.preload_changed.emit(value)

    def _on_go_clicked(self):
        self.navigate_requested.emit(
            self.item_spin.value(), self.animate_check.isChecked(),
        )

    def _on_center_clicked(self):
        self.center_clicked.emit()

    def _on_reset_clicked(self):
        self.reset_clicked.emit()
