# messenger_shell/controller.py

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Optional

from PyQt6 import QtCore

from .core.bounds import BoundsNormalizer, Candidate, DisplayLayout
from .core.config import ShellConfig
from .core.logger import setup_logging
from .core.navigation import NavigationGuard, open_external
from .core.state_store import DEFAULT_STATE, WindowStateStore


class ShellController(QtCore.QObject):
    """
    Owns the single shell window:
    - restores persisted bounds/zoom at startup
    - persists normal bounds + zoom on resize/move/close while maximized
    - owns the zoom step (the engine's own zoom handling is suppressed)
    """

    def __init__(
        self,
        config: ShellConfig,
        layout_provider: Callable[[], DisplayLayout],
        window_factory: Optional[Callable[..., Any]] = None,
        opener: Callable[[str], None] = open_external,
        logger=None,
    ):
        super().__init__()
        self.config = config

        # ---- Core components ----
        self.logger = logger or setup_logging(config.logs_path)
        self.store = WindowStateStore(config.state_path, logger=self.logger)
        self.normalizer = BoundsNormalizer(layout_provider)
        self.guard = NavigationGuard(config.allowed_origin, opener=opener, logger=self.logger)

        # ---- Runtime state ----
        self._shown = False
        self._zoom_restored = False

        # ---- Window ----
        state = self.store.load()
        self.initial_zoom = self._zoom_from_state(state)
        bounds = self.normalizer.normalize(self._candidate_from_state(state))

        if window_factory is None:
            from .ui import ShellWindow

            window_factory = ShellWindow
        self.window = window_factory(
            guard=self.guard,
            title=config.window_title,
            icon_path=config.icon_path,
            width=config.default_width,
            height=config.default_height,
            zoom_factor=self.initial_zoom,
            context_menu_enabled=config.context_menu_enabled,
        )
        self.window.set_bounds(bounds)
        self.logger.info(
            f"Window created at {bounds.x},{bounds.y} {bounds.width}x{bounds.height}, "
            f"zoom {self.initial_zoom}"
        )

        # ---- Wire window signals ----
        self.window.ready_to_show.connect(self.on_ready_to_show)
        self.window.load_finished.connect(self.on_load_finished)
        self.window.geometry_changed.connect(self.persist)
        self.window.closing.connect(self.persist)
        self.window.zoom_requested.connect(self.on_zoom_requested)

    def start(self):
        """Load the start page; the window shows itself once the page starts loading."""
        self.window.load(self.config.start_url)

    # -------------------------------------------------------------------------
    # Startup
    # -------------------------------------------------------------------------

    def _candidate_from_state(self, state: Dict[str, Any]) -> Candidate:
        return Candidate(
            x=_as_int(state.get("x")),
            y=_as_int(state.get("y")),
            width=_as_positive_int(state.get("width")) or self.config.default_width,
            height=_as_positive_int(state.get("height")) or self.config.default_height,
        )

    def _zoom_from_state(self, state: Dict[str, Any]) -> float:
        zoom = _as_float(state.get("zoomFactor", DEFAULT_STATE["zoomFactor"]))
        if zoom is None or zoom <= 0:
            return float(DEFAULT_STATE["zoomFactor"])
        return zoom

    @QtCore.pyqtSlot()
    def on_ready_to_show(self):
        if self._shown:
            return
        self._shown = True
        self.window.show()

    @QtCore.pyqtSlot(bool)
    def on_load_finished(self, ok: bool):
        if not ok:
            self.logger.debug(f"Page load failed for {self.config.start_url}; ignoring.")
            return
        if self._zoom_restored:
            return
        self._zoom_restored = True
        self.window.set_zoom_factor(self.initial_zoom)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    @QtCore.pyqtSlot()
    def persist(self) -> Optional[Dict[str, Any]]:
        """
        Save normal bounds and zoom, but only while the window is maximized.
        Geometry changes of a restored window are not recorded.
        """
        if not self.window.is_maximized():
            return None

        bounds = self.window.normal_bounds()
        update = {
            "zoomFactor": self.window.zoom_factor(),
            "x": bounds.x,
            "y": bounds.y,
            "width": bounds.width,
            "height": bounds.height,
        }
        return self.store.save(update)

    # -------------------------------------------------------------------------
    # Zoom
    # -------------------------------------------------------------------------

    def next_zoom(self, current: float, direction: str) -> float:
        step = self.config.zoom_step
        value = current + step if direction == "in" else current - step
        value = max(self.config.zoom_min, min(self.config.zoom_max, value))
        return round(value, 2)

    @QtCore.pyqtSlot(str)
    def on_zoom_requested(self, direction: str) -> float:
        zoom = self.next_zoom(self.window.zoom_factor(), direction)
        self.window.set_zoom_factor(zoom)
        self.logger.debug(f"Zoom {direction} -> {zoom}")
        self.persist()
        return zoom


def _as_float(value: Any) -> Optional[float]:
    """Finite float for a JSON number; None for anything else, huge ints included."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    return None if number is None else int(number)


def _as_positive_int(value: Any) -> Optional[int]:
    number = _as_int(value)
    return number if number is not None and number > 0 else None
