"""Entry point for the Infinite Grid application.

Drag to pan an unbounded, spiral-indexed grid of items. Run with --help
for layout and scrolling options.
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from app_window import AppWindow
from config import parse_config


def main():
    config = parse_config(sys.argv[1:])

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "Starting with %s, %d items", config.layout(), config.item_count,
    )

    app = QApplication(sys.argv[:1])
    window = AppWindow(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
