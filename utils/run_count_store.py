"""Persistent count of the lessons uploaded by the last run.

The count lives in a small per-user JSON file so that updateConfig can
default totalLessonCount to whatever uploadLessons last wrote.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

COUNT_KEY = "uploadedLessonCount"


def default_store_path(app_name: str) -> Path:
    """Get the per-user config file for an application.

    Args:
        app_name: Application identity.

    Returns:
        $XDG_CONFIG_HOME/configstore/<app_name>.json (XDG_CONFIG_HOME
        defaults to ~/.config).
    """
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / "configstore" / f"{app_name}.json"


class RunCountStore:
    """Reads and writes the uploaded lesson count.

    Other keys already in the file are preserved.
    """

    def __init__(self, app_name: str, path: Optional[str] = None) -> None:
        """Initialize the store.

        Args:
            app_name: Application identity used to locate the file.
            path: Optional custom path for the JSON file.
        """
        self._app_name = app_name
        self._path = Path(path) if path else default_store_path(app_name)

    @property
    def path(self) -> Path:
        """Get the JSON file backing this store."""
        return self._path

    def _read(self) -> dict:
        """Read file contents.

        Returns:
            Stored data, or an empty dict if missing or unreadable.
        """
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt config store at {self._path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent="\t")

    def save_count(self, count: int) -> None:
        """Persist the uploaded lesson count.

        Args:
            count: Number of lessons uploaded.
        """
        data = self._read()
        data[COUNT_KEY] = count
        self._write(data)
        logger.debug(f"Saved {COUNT_KEY}={count} to {self._path}")

    def read_count(self) -> Optional[int]:
        """Get the last persisted lesson count.

        Returns:
            The count, or None if never saved.
        """
        value = self._read().get(COUNT_KEY)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value
