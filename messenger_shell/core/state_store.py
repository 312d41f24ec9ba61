# messenger_shell/core/state_store.py

"""
Persisted window state.

The record is a flat JSON object:

    {"x": 40, "y": 30, "width": 1100, "height": 800, "zoomFactor": 1.0}

x/y are optional. Unknown keys are kept verbatim across saves because every
save is a shallow merge over whatever is on disk.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_STATE: Dict[str, Any] = {
    "width": 1100,
    "height": 800,
    "zoomFactor": 1,
}


def default_state() -> Dict[str, Any]:
    return dict(DEFAULT_STATE)


class WindowStateStore:
    """
    JSON-file backed window state.

    - load()  -> current record, or the defaults on any read/parse problem
    - save()  -> shallow-merge an update over the current record and write it

    Neither method raises: the record is cosmetic, so failures are logged
    and dropped.
    """

    def __init__(self, path: Path, logger=None):
        self.path = Path(path)
        self.logger = logger

    def load(self) -> Dict[str, Any]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return default_state()
        except (OSError, ValueError, RecursionError) as e:
            if self.logger:
                self.logger.debug(f"Window state unreadable at {self.path}: {e}")
            return default_state()

        if not isinstance(data, dict):
            if self.logger:
                self.logger.debug(f"Window state at {self.path} is not an object, using defaults.")
            return default_state()
        return data

    def save(self, update: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Merge `update` over the stored record and write the result.

        Returns the record that was written, or None if the write failed.
        """
        state = self.load()
        state.update(update)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state, f)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if self.logger:
                self.logger.warning(f"Failed to save window state to {self.path}: {e}")
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            return None

        return state
