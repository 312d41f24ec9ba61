# main.py

from __future__ import annotations

import sys

# QtWebEngineWidgets must be imported before the QApplication is created.
from PyQt6 import QtWebEngineWidgets  # noqa: F401
from PyQt6 import QtWidgets

from messenger_shell.controller import ShellController
from messenger_shell.core.config import ShellConfig
from messenger_shell.core.logger import default_log_dir, setup_logging
from messenger_shell.ui import screen_layout


def bootstrap(config_path=None):
    """Logging first, so first-run config messages are recorded; then config."""
    setup_logging(default_log_dir())
    config = ShellConfig(config_path)
    # Follow a logs_path override from the config file
    logger = setup_logging(config.logs_path)
    return config, logger


def main():
    app = QtWidgets.QApplication(sys.argv)
    # macOS apps stay alive after their last window closes
    app.setQuitOnLastWindowClosed(sys.platform != "darwin")

    config, logger = bootstrap()

    controller = ShellController(
        config,
        layout_provider=lambda: screen_layout(config.default_width, config.default_height),
        logger=logger,
    )
    controller.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
