# messenger_shell/core/navigation.py

"""
Navigation guard: one allowed origin, everything else goes to the system browser.
"""

from __future__ import annotations

import webbrowser
from typing import Callable

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices


def open_external(url: str) -> None:
    """Open a URL using the desktop services with a webbrowser fallback."""
    qurl = QUrl(url)
    if qurl.isValid() and QDesktopServices.openUrl(qurl):
        return
    webbrowser.open(url)


class NavigationGuard:
    """
    Allow-list filter with a single entry.

    - allow_navigation()  -> in-place navigation; off-origin targets are
                             cancelled and handed to the external opener
    - handle_new_window() -> new windows are never created in-app
    """

    def __init__(
        self,
        allowed_origin: str,
        opener: Callable[[str], None] = open_external,
        logger=None,
    ):
        self.allowed_origin = allowed_origin
        self.opener = opener
        self.logger = logger

    def is_allowed(self, url: str) -> bool:
        return url.startswith(self.allowed_origin)

    def allow_navigation(self, url: str) -> bool:
        if self.is_allowed(url):
            return True
        if self.logger:
            self.logger.info(f"Navigation to {url} redirected to external browser.")
        self.opener(url)
        return False

    def handle_new_window(self, url: str) -> None:
        if not url:
            return
        if self.logger:
            self.logger.info(f"New window for {url} opened in external browser.")
        self.opener(url)
