import os
import json
import logging
import tempfile
import threading
from .exceptions import PreferencesError

logger = logging.getLogger("Dirview.Preferences")

PREFERENCES_FILE = "preferences.json"


class Preferences:
    """
    The two values that survive a restart: the last opened path and whether
    hidden files are shown. Stored as JSON in the user's storage directory.
    """

    def __init__(self, storage_path, default_path=None):
        self.file_path = os.path.join(storage_path, PREFERENCES_FILE)
        self.default_path = default_path or os.path.expanduser("~")
        self._lock = threading.RLock()
        self._data = self._read()

    def _read(self):
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt preferences at {self.file_path}: {e}")
            return {}
        except OSError as e:
            raise PreferencesError(
                f"Could not read preferences from {self.file_path}"
            ) from e
        return data if isinstance(data, dict) else {}

    def _write(self):
        directory = os.path.dirname(self.file_path)
        tmp = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix=".prefs-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2)
            os.replace(tmp, self.file_path)
        except (OSError, TypeError, ValueError) as e:
            if tmp is not None and os.path.exists(tmp):
                try:
                    os.unlink(tmp)
                except OSError as cleanup_error:
                    logger.debug(f"Could not remove {tmp}: {cleanup_error}")
            raise PreferencesError(
                f"Could not save preferences to {self.file_path}"
            ) from e

    @property
    def path(self):
        with self._lock:
            return self._data.get("path") or self.default_path

    @path.setter
    def path(self, value):
        with self._lock:
            self._data["path"] = value
            self._write()

    @property
    def show_hidden_files(self):
        with self._lock:
            return bool(self._data.get("show_hidden_files", False))

    @show_hidden_files.setter
    def show_hidden_files(self, value):
        with self._lock:
            self._data["show_hidden_files"] = bool(value)
            self._write()

    def to_dict(self):
        return {"path": self.path, "show_hidden_files": self.show_hidden_files}
