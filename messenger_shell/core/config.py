"""
Configuration management for the shell.
Loads settings from config.json and provides access to configuration values.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir, user_data_dir

from .logger import default_log_dir, get_logger

APP_NAME = "messenger-shell"
PACKAGE_DIR = Path(__file__).resolve().parents[1]

DEFAULT_CONFIG: Dict[str, Any] = {
    "start_url": "https://www.messenger.com",
    "allowed_origin": "https://www.messenger.com",
    "window": {
        "title": "Messenger",
        "icon": "icon.ico",
        "default_width": 1100,
        "default_height": 800,
    },
    "zoom": {
        "step": 0.1,
        "min": 0.25,
        "max": 5.0,
    },
    "context_menu": {
        "enabled": True,
    },
    "logs_path": "",
    "state_file": "",
}


def default_config_path() -> Path:
    return Path(user_config_dir(APP_NAME, appauthor=False)) / "config.json"


def default_state_path() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / "state.json"


class ShellConfig:
    """
    Configuration manager for the shell.
    Loads settings from config.json and provides typed access.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration JSON file
        """
        self.logger = get_logger("config")
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.config: Dict[str, Any] = {}
        self.load()

    def load(self) -> bool:
        """
        Load configuration from JSON file.
        Creates default config if file doesn't exist.

        Returns:
            True if loaded successfully, False otherwise
        """
        if not self.config_path.exists():
            self.logger.warning(f"Config file not found: {self.config_path}, using defaults")
            self._create_default_config()
            return False

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            self.logger.error(f"Error loading configuration: {e}")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            return False

        if not isinstance(data, dict):
            self.logger.error(f"Configuration in {self.config_path} is not a JSON object, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            return False

        self.config = data
        self.logger.info(f"Configuration loaded from {self.config_path}")
        return True

    def _create_default_config(self):
        """Create default configuration."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        if self.save():
            self.logger.info("Created default configuration file")

    def save(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
            self.logger.info(f"Configuration saved to {self.config_path}")
            return True
        except OSError as e:
            self.logger.error(f"Error saving configuration: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (e.g., "window.title").
        Keys missing from the file fall back to the built-in defaults.

        Args:
            key: Configuration key (supports dot notation for nested keys)
            default: Default value if key not found anywhere

        Returns:
            Configuration value or default
        """
        value = _lookup(self.config, key)
        if value is _MISSING:
            value = _lookup(DEFAULT_CONFIG, key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> bool:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation for nested keys)
            value: Value to set

        Returns:
            True if set successfully, False otherwise
        """
        keys = key.split(".")
        config = self.config

        # Navigate to parent dict
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        return True

    # Convenience properties
    @property
    def start_url(self) -> str:
        return str(self.get("start_url"))

    @property
    def allowed_origin(self) -> str:
        return str(self.get("allowed_origin"))

    @property
    def window_title(self) -> str:
        return str(self.get("window.title"))

    @property
    def icon_path(self) -> Path:
        """Window icon; relative paths are resolved against the package directory."""
        path = Path(str(self.get("window.icon")))
        return path if path.is_absolute() else PACKAGE_DIR / path

    @property
    def default_width(self) -> int:
        return _positive_int(self.get("window.default_width"), DEFAULT_CONFIG["window"]["default_width"])

    @property
    def default_height(self) -> int:
        return _positive_int(self.get("window.default_height"), DEFAULT_CONFIG["window"]["default_height"])

    @property
    def zoom_step(self) -> float:
        return _positive_float(self.get("zoom.step"), DEFAULT_CONFIG["zoom"]["step"])

    @property
    def zoom_min(self) -> float:
        return _positive_float(self.get("zoom.min"), DEFAULT_CONFIG["zoom"]["min"])

    @property
    def zoom_max(self) -> float:
        return _positive_float(self.get("zoom.max"), DEFAULT_CONFIG["zoom"]["max"])

    @property
    def context_menu_enabled(self) -> bool:
        value = self.get("context_menu.enabled")
        return value if isinstance(value, bool) else DEFAULT_CONFIG["context_menu"]["enabled"]

    @property
    def logs_path(self) -> Path:
        raw = self.get("logs_path")
        return Path(raw).expanduser() if raw else default_log_dir()

    @property
    def state_path(self) -> Path:
        raw = self.get("state_file")
        return Path(raw).expanduser() if raw else default_state_path()


_MISSING = object()


def _lookup(data: Dict[str, Any], key: str) -> Any:
    value: Any = data
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return _MISSING
    return value


def _positive_int(value: Any, fallback: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    return number if number > 0 else fallback


def _positive_float(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    return number if number > 0 else fallback
