"""Application configuration: defaults and command-line parsing.

GridConfig is the single configuration surface for the demo app. It
builds the GridLayout and GridPhysics handed to the grid core.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from grid.layout import GridLayout
from physics import GridPhysics

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class GridConfig:
    """Startup configuration for the infinite grid app."""

    cell_width: float = 240.0
    cell_height: float = 360.0
    spacing: float = 12.0
    grid_offset: float = 0.5
    item_count: int = 10000
    preload_cells: int = 2
    momentum: bool = False
    initial_item: int = 0
    log_level: str = "INFO"

    def layout(self) -> GridLayout:
        return GridLayout(
            cell_width=self.cell_width,
            cell_height=self.cell_height,
            spacing=self.spacing,
            grid_offset=self.grid_offset,
        )

    def physics(self) -> GridPhysics:
        return GridPhysics()


def build_parser() -> argparse.ArgumentParser:
    defaults = GridConfig()
    parser = argparse.ArgumentParser(
        description="Infinite, spiral-indexed grid explorer.",
    )
    parser.add_argument(
        "--cell-width", type=float, default=defaults.cell_width,
        help=f"Cell width in pixels (default: {defaults.cell_width:g})",
    )
    parser.add_argument(
        "--cell-height", type=float, default=defaults.cell_height,
        help=f"Cell height in pixels (default: {defaults.cell_height:g})",
    )
    parser.add_argument(
        "--spacing", type=float, default=defaults.spacing,
        help=f"Gap between cells in pixels (default: {defaults.spacing:g})",
    )
    parser.add_argument(
        "--grid-offset", type=float, default=defaults.grid_offset,
        help=f"Column stagger in [0, 1] (default: {defaults.grid_offset:g})",
    )
    parser.add_argument(
        "--items", dest="item_count", type=int, default=defaults.item_count,
        help=f"Number of items cycled through the grid (default: {defaults.item_count})",
    )
    parser.add_argument(
        "--preload", dest="preload_cells", type=int, default=defaults.preload_cells,
        help=f"Extra cells rendered beyond each edge (default: {defaults.preload_cells})",
    )
    parser.add_argument(
        "--momentum", action="store_true",
        help="Enable momentum scrolling on drag release",
    )
    parser.add_argument(
        "--start-item", dest="initial_item", type=int, default=defaults.initial_item,
        help="Item centered at startup (default: 0)",
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, default=defaults.log_level,
        help=f"Logging level (default: {defaults.log_level})",
    )
    return parser


def parse_config(argv: list[str] | None = None) -> GridConfig:
    """Parse command-line arguments into a validated GridConfig.

    Invalid values exit through parser.error() with a usage message.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cell_width <= 0 or args.cell_height <= 0:
        parser.error("--cell-width and --cell-height must be positive")
    if args.spacing < 0:
        parser.error("--spacing must be non-negative")
    if args.item_count < 0:
        parser.error("--items must be non-negative")
    if args.preload_cells < 0:
        parser.error("--preload must be non-negative")
    if args.initial_item < 0:
        parser.error("--start-item must be non-negative")

    config = GridConfig(**vars(args))
    try:
        config.layout()
    except ValueError as exc:
        parser.error(str(exc))
    return config
