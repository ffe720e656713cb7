import os
import logging
import threading
from .dispatcher import ListingRequest
from .exceptions import PreferencesError
from .utils import path_segments

logger = logging.getLogger("Dirview.State")

STATE_UPDATE_EVENT = "dirview:state-update"


class BrowserState:
    """
    Display-side state of the browser: the current path, its listing and the
    hidden-files flag. Every change is pushed to the window through ``emit``.

    Only the response to the most recent request is applied. A slow listing
    that finishes after the user has moved on is dropped.
    """

    def __init__(self, dispatcher, preferences, emit=None):
        self._lock = threading.RLock()
        self._dispatcher = dispatcher
        self._preferences = preferences
        self._emit = emit
        self._pending_id = None
        self.path = preferences.path
        self.items = []
        self.error = None

    @property
    def show_hidden_files(self):
        return self._preferences.show_hidden_files

    def open(self, path, type="directory", background=False):
        """
        Navigate to ``path``. Anything that is not a directory (or a link to
        one) is ignored and None is returned.
        """
        if type == "symlink" and os.path.isdir(path):
            type = "directory"
        if type != "directory":
            logger.debug(f"Not opening {path}: {type} is not a directory")
            return None

        with self._lock:
            self.path = path
        response = self.read_current_directory(background=background)
        self.save_preference("path", path)
        return response

    def save_preference(self, key, value):
        try:
            setattr(self._preferences, key, value)
        except PreferencesError as e:
            logger.warning(f"Could not save preference '{key}': {e}")

    def refresh(self, background=False):
        return self.read_current_directory(background=background)

    def read_current_directory(self, background=False):
        """
        Request the listing of the current path. Returns the response, or a
        Future resolving to it when ``background`` is set.
        """
        with self._lock:
            request = ListingRequest(path=self.path)
            self._pending_id = request.id

        if background:
            return self._dispatcher.submit(request, callback=self.apply)

        response = self._dispatcher.handle(request)
        self.apply(response)
        return response

    def apply(self, response):
        """Store a listing response. Returns False if it was superseded."""
        with self._lock:
            if response.id != self._pending_id:
                logger.debug(f"Dropping stale response {response.id} for {response.path}")
                return False
            self._pending_id = None
            self.items = response.entries if response.ok else []
            self.error = response.error
        self._publish()
        return True

    def toggle_hidden_files(self):
        value = not self._preferences.show_hidden_files
        self.save_preference("show_hidden_files", value)
        self._publish()
        return value

    def visible_items(self):
        with self._lock:
            items = list(self.items)
        if self.show_hidden_files:
            return items
        return [item for item in items if not item.is_hidden]

    def to_dict(self):
        with self._lock:
            path = self.path
            error = self.error
        return {
            "path": path,
            "segments": path_segments(path),
            "current_directory": os.path.basename(path.rstrip(os.sep)) or path,
            "show_hidden_files": self.show_hidden_files,
            "items": [item.to_dict() for item in self.visible_items()],
            "error": error.to_dict() if error else None,
        }

    def _publish(self):
        if not self._emit:
            return
        try:
            self._emit(STATE_UPDATE_EVENT, self.to_dict())
        except Exception as e:
            logger.warning(f"Failed to publish state update: {e}")
