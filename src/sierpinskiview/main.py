"""
Application Initialization
==========================
This module wires the render settings, the main window and the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the composition root. It:
1. Sets up logging for the 'sierpinskiview' namespace.
2. Creates the QApplication (organisation/app names drive QSettings).
3. Loads the render settings (defaults + QSettings overrides).
4. Shows the Main Window and runs the event loop.
"""
import logging
import sys

from sierpinskiview.application import create_app
from sierpinskiview.config import load_settings
from sierpinskiview.logging_config import setup_logging
from sierpinskiview.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    setup_logging()

    app = create_app()
    settings = load_settings()

    window = MainWindow(settings)
    window.show()

    logger.info("Main window shown; entering event loop.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
