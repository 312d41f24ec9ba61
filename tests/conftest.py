"""Shared pytest fixtures for shell tests."""

import json
import logging
import os

# Qt runs headless in tests; the web engine sandbox does not work as root in CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QTWEBENGINE_DISABLE_SANDBOX", "1")
os.environ.setdefault("QTWEBENGINE_CHROMIUM_FLAGS", "--no-sandbox --disable-gpu")

import pytest

from messenger_shell.core.bounds import DisplayLayout, Rect
from messenger_shell.core.config import ShellConfig
from messenger_shell.core.logger import LOGGER_NAME


class FakeSignal:
    """Stands in for a pyqtSignal on the fake window."""

    def __init__(self):
        self._slots = []

    def connect(self, slot):
        self._slots.append(slot)

    def emit(self, *args):
        for slot in list(self._slots):
            slot(*args)


class FakeWindow:
    """Records what the controller does to the window."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.geometry_changed = FakeSignal()
        self.closing = FakeSignal()
        self.zoom_requested = FakeSignal()
        self.ready_to_show = FakeSignal()
        self.load_finished = FakeSignal()

        self.bounds = None
        self.maximized = False
        self.normal = Rect(10, 20, 1100, 800)
        self.zoom = kwargs.get("zoom_factor", 1.0)
        self.show_calls = 0
        self.loaded = []

    def set_bounds(self, rect):
        self.bounds = rect

    def is_maximized(self):
        return self.maximized

    def normal_bounds(self):
        return self.normal

    def zoom_factor(self):
        return self.zoom

    def set_zoom_factor(self, factor):
        self.zoom = factor

    def show(self):
        self.show_calls += 1

    def load(self, url):
        self.loaded.append(url)


@pytest.fixture
def single_display():
    return DisplayLayout(work_areas=[Rect(0, 0, 1920, 1080)])


@pytest.fixture
def dual_display():
    # Primary on the left, a smaller secondary to the right with a taskbar offset
    return DisplayLayout(work_areas=[Rect(0, 0, 1920, 1040), Rect(1920, 40, 1280, 984)], primary=0)


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "data" / "state.json"


@pytest.fixture
def write_state(state_path):
    def _write(payload):
        state_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, str):
            state_path.write_text(payload, encoding="utf-8")
        else:
            state_path.write_text(json.dumps(payload), encoding="utf-8")
    return _write


@pytest.fixture
def config(tmp_path, state_path):
    cfg = ShellConfig(tmp_path / "config" / "config.json")
    cfg.set("state_file", str(state_path))
    cfg.set("logs_path", str(tmp_path / "logs"))
    return cfg


@pytest.fixture
def opened():
    """Collects URLs handed to the external opener."""
    return []


@pytest.fixture
def test_logger():
    return logging.getLogger("messenger_shell.tests")


@pytest.fixture(scope="session")
def qapp():
    # QtWebEngineWidgets must be imported before the QApplication is created.
    from PyQt6 import QtWebEngineWidgets  # noqa: F401
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def isolated_logger():
    """Strip the shell logger's handlers for one test and restore them afterwards."""
    logger = logging.getLogger(LOGGER_NAME)
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved
