"""Shared UI widgets: float-valued slider helpers and the layout sliders.

LayoutParamsWidget groups the four GridLayout parameters so any panel can
read a fresh, immutable layout from the current slider values.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QGridLayout, QSlider, QLabel

from grid.layout import GridLayout


# ---------------------------------------------------------------------------
# Slider helpers
# ---------------------------------------------------------------------------

def make_slider(minimum, maximum, value, resolution=100):
    """Create an integer QSlider that maps to float values.

    The slider range is [minimum*resolution, maximum*resolution].
    """
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setMinimum(int(minimum * resolution))
    slider.setMaximum(int(maximum * resolution))
    slider.setValue(int(round(value * resolution)))
    slider.resolution = resolution
    return slider


def slider_value(slider):
    """Read the float value from a slider created by make_slider."""
    return slider.value() / slider.resolution


def set_slider_value(slider, value):
    """Move a make_slider slider to a float value."""
    slider.setValue(int(round(value * slider.resolution)))


# ---------------------------------------------------------------------------
# LayoutParamsWidget
# ---------------------------------------------------------------------------

class LayoutParamsWidget(QWidget):
    """Grouped sliders for cell width, cell height, spacing and grid offset.

    Emits no signals itself; call get_layout() to read current values.
    The parent can connect slider.valueChanged to detect changes.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.cell_width_slider = make_slider(40, 480, 240, resolution=1)
        self.cell_height_slider = make_slider(40, 480, 360, resolution=1)
        self.spacing_slider = make_slider(0, 64, 12, resolution=1)
        self.grid_offset_slider = make_slider(0.0, 1.0, 0.5)

        self._add_row(layout, 0, "Width", self.cell_width_slider, " px", 0)
        self._add_row(layout, 1, "Height", self.cell_height_slider, " px", 0)
        self._add_row(layout, 2, "Spacing", self.spacing_slider, " px", 0)
        self._add_row(layout, 3, "Offset", self.grid_offset_slider, "", 2)

    @property
    def sliders(self):
        return [
            self.cell_width_slider,
            self.cell_height_slider,
            self.spacing_slider,
            self.grid_offset_slider,
        ]

    def _add_row(self, layout, row, label_text, slider, unit="", decimals=2):
        label = QLabel(label_text)
        value_label = QLabel()
        value_label.setMinimumWidth(55)
        value_label.setAlignment(
            Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        )
        layout.addWidget(label, row, 0)
        layout.addWidget(slider, row, 1)
        layout.addWidget(value_label, row, 2)

        def _update(_val, vl=value_label, sl=slider, u=unit, d=decimals):
            vl.setText(f"{slider_value(sl):.{d}f}{u}")

        slider.valueChanged.connect(_update)
        _update(slider.value())

    def get_layout(self):
        """Return a GridLayout from the current slider values."""
        return GridLayout(
            cell_width=slider_value(self.cell_width_slider),
            cell_height=slider_value(self.cell_height_slider),
            spacing=slider_value(self.spacing_slider),
            grid_offset=slider_value(self.grid_offset_slider),
        )

    def set_layout(self, grid_layout):
        """Set slider positions from a GridLayout."""
        set_slider_value(self.cell_width_slider, grid_layout.cell_width)
        set_slider_value(self.cell_height_slider, grid_layout.cell_height)
        set_slider_value(self.spacing_slider, grid_layout.spacing)
        set_slider_value(self.grid_offset_slider, grid_layout.grid_offset)
