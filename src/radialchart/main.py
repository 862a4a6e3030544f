"""
Application Initialization
==========================
Sets up logging, creates the Qt application and shows the main window.

Run with: python -m radialchart
"""
import logging
import sys

from radialchart.app.application import create_app
from radialchart.app.main_window import MainWindow
from radialchart.logging_config import setup_logging


def main() -> int:
    # Use logging.DEBUG to see clamping and overlay details during development
    setup_logging(level=logging.INFO)

    app = create_app()
    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
