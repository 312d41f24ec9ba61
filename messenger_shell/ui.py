# messenger_shell/ui.py

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QEvent, QLocale, QObject, QUrl, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QGuiApplication, QIcon, QKeySequence, QShortcut
from PyQt6.QtWebEngineCore import QWebEngineContextMenuRequest, QWebEnginePage
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QMainWindow, QWidget

from .core.bounds import DisplayLayout, Rect
from .core.context_menu import external_entries
from .core.navigation import NavigationGuard


# -----------------------------------------------------------------------------
# Display geometry
# -----------------------------------------------------------------------------

def screen_layout(default_width: int = 1100, default_height: int = 800) -> DisplayLayout:
    """
    Current work areas of all screens, queried live from the toolkit.
    With no screens at all, a single default-sized area at the origin stands in.
    """
    screens = QGuiApplication.screens()
    if not screens:
        return DisplayLayout(work_areas=[Rect(0, 0, default_width, default_height)])
    primary = QGuiApplication.primaryScreen()

    areas = []
    primary_index = 0
    for i, screen in enumerate(screens):
        g = screen.availableGeometry()
        areas.append(Rect(g.x(), g.y(), g.width(), g.height()))
        if screen == primary:
            primary_index = i
    return DisplayLayout(work_areas=areas, primary=primary_index)


# -----------------------------------------------------------------------------
# Web surface
# -----------------------------------------------------------------------------

class ShellPage(QWebEnginePage):
    """
    Page that routes off-origin navigation and new-window requests through
    the navigation guard.
    """

    # Only navigations the page itself starts are filtered. Programmatic loads
    # (Typed) and server redirects belong to the allowed page.
    GUARDED_TYPES = (
        QWebEnginePage.NavigationType.NavigationTypeLinkClicked,
        QWebEnginePage.NavigationType.NavigationTypeFormSubmitted,
        QWebEnginePage.NavigationType.NavigationTypeOther,
    )

    def __init__(self, guard: NavigationGuard, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.guard = guard
        self.newWindowRequested.connect(self._on_new_window_requested)

    def acceptNavigationRequest(  # noqa: N802
        self,
        url: QUrl,
        nav_type: QWebEnginePage.NavigationType,
        is_main_frame: bool,
    ) -> bool:
        if is_main_frame and nav_type in self.GUARDED_TYPES:
            if not self.guard.allow_navigation(url.toString()):
                return False
        return super().acceptNavigationRequest(url, nav_type, is_main_frame)

    def _on_new_window_requested(self, request):
        # Not calling request.openIn() leaves the request denied.
        self.guard.handle_new_window(request.requestedUrl().toString())


class ShellView(QWebEngineView):
    """
    Web view with:
    - Ctrl+wheel turned into zoom requests (the engine's own zoom is suppressed)
    - optional "open externally" entries on top of the standard context menu
    """

    zoom_requested = pyqtSignal(str)

    def __init__(
        self,
        opener: Callable[[str], None],
        context_menu_enabled: bool = True,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._opener = opener
        self._context_menu_enabled = context_menu_enabled

    # ------------------------------------------------------------------ #
    # Zoom via Ctrl+wheel
    # ------------------------------------------------------------------ #

    def event(self, e: QEvent) -> bool:
        # Wheel events land on the render widget child, not on the view.
        if e.type() == QEvent.Type.ChildPolished:
            child = e.child()
            if isinstance(child, QWidget):
                child.installEventFilter(self)
        return super().event(e)

    def eventFilter(self, obj: QObject, e: QEvent) -> bool:  # noqa: N802
        if e.type() == QEvent.Type.Wheel and e.modifiers() & Qt.KeyboardModifier.ControlModifier:
            delta = e.angleDelta().y()
            if delta:
                self.zoom_requested.emit("in" if delta > 0 else "out")
            return True
        return super().eventFilter(obj, e)

    # ------------------------------------------------------------------ #
    # Context menu
    # ------------------------------------------------------------------ #

    def contextMenuEvent(self, event):  # noqa: N802
        if not self._context_menu_enabled:
            super().contextMenuEvent(event)
            return

        menu = self.createStandardContextMenu()
        request = self.lastContextMenuRequest()

        link_url = image_url = video_url = ""
        if request is not None:
            link_url = request.linkUrl().toString()
            media_type = request.mediaType()
            if media_type == QWebEngineContextMenuRequest.MediaType.MediaTypeImage:
                image_url = request.mediaUrl().toString()
            elif media_type == QWebEngineContextMenuRequest.MediaType.MediaTypeVideo:
                video_url = request.mediaUrl().toString()

        entries = external_entries(QLocale.system().name(), link_url, image_url, video_url)
        if entries:
            first = menu.actions()[0] if menu.actions() else None
            for entry in entries:
                action = QAction(entry.label, menu)
                action.triggered.connect(lambda _checked=False, url=entry.url: self._opener(url))
                menu.insertAction(first, action)
            if first is not None:
                menu.insertSeparator(first)

        menu.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        menu.popup(event.globalPos())


# -----------------------------------------------------------------------------
# Main window
# -----------------------------------------------------------------------------

class ShellWindow(QMainWindow):
    """
    The one top-level window: a web view filling the whole client area.

    Created hidden; the controller positions it, shows it and persists its
    geometry through the signals below.
    """

    # Emitted on every resize and move
    geometry_changed = pyqtSignal()
    # Emitted before the window closes
    closing = pyqtSignal()
    # "in" / "out", from Ctrl+wheel or the zoom shortcuts
    zoom_requested = pyqtSignal(str)
    # First sign of page activity; the window can be shown
    ready_to_show = pyqtSignal()
    # Page load result (False on network/load failure)
    load_finished = pyqtSignal(bool)

    def __init__(
        self,
        guard: NavigationGuard,
        title: str,
        icon_path=None,
        width: int = 1100,
        height: int = 800,
        zoom_factor: float = 1.0,
        context_menu_enabled: bool = True,
    ):
        super().__init__()

        self.setWindowTitle(title)
        if icon_path is not None and icon_path.exists():
            self.setWindowIcon(QIcon(str(icon_path)))
        self.resize(width, height)

        self.view = ShellView(guard.opener, context_menu_enabled, self)
        self.page = ShellPage(guard, self.view)
        self.view.setPage(self.page)
        self.view.setZoomFactor(zoom_factor)
        self.setCentralWidget(self.view)

        self.view.zoom_requested.connect(self.zoom_requested)
        self.view.loadStarted.connect(self.ready_to_show)
        self.view.loadFinished.connect(self.load_finished)

        for keys in (QKeySequence.StandardKey.ZoomIn, QKeySequence("Ctrl+=")):
            shortcut = QShortcut(keys, self)
            shortcut.activated.connect(lambda: self.zoom_requested.emit("in"))
        shortcut = QShortcut(QKeySequence.StandardKey.ZoomOut, self)
        shortcut.activated.connect(lambda: self.zoom_requested.emit("out"))

    # ------------------------------------------------------------------ #
    # Qt event hooks
    # ------------------------------------------------------------------ #

    def resizeEvent(self, event):  # noqa: N802
        super().resizeEvent(event)
        self.geometry_changed.emit()

    def moveEvent(self, event):  # noqa: N802
        super().moveEvent(event)
        self.geometry_changed.emit()

    def closeEvent(self, event):  # noqa: N802
        self.closing.emit()
        super().closeEvent(event)

    # ------------------------------------------------------------------ #
    # Public methods used by controller
    # ------------------------------------------------------------------ #

    def load(self, url: str):
        self.view.load(QUrl(url))

    def set_bounds(self, rect: Rect):
        self.setGeometry(rect.x, rect.y, rect.width, rect.height)

    def is_maximized(self) -> bool:
        return self.isMaximized()

    def normal_bounds(self) -> Rect:
        g = self.normalGeometry()
        return Rect(g.x(), g.y(), g.width(), g.height())

    def zoom_factor(self) -> float:
        return self.view.zoomFactor()

    def set_zoom_factor(self, factor: float):
        self.view.setZoomFactor(factor)
