from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from qnote.di.container import Container
from qnote.utils.constants import APP_NAME, APP_ORG
from qnote.utils.logging import setup_logging

LOGGER = logging.getLogger(__name__)


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default()
    setup_logging(container.config.log_level())
    LOGGER.info("Starting %s %s", APP_NAME, container.config.get_version())

    # Files given on the command line open as tabs next to the restored session;
    # arguments() no longer holds the options Qt consumed (-style, -platform, ...)
    start_paths = [Path(a) for a in app.arguments()[1:]]

    win = container.build_main_window(start_paths=start_paths, app_title=APP_NAME)
    win.show()

    return app.exec()
