import os
from concurrent.futures import ThreadPoolExecutor
import webview
from .apputils.config import ConfigMixin
from .dispatcher import Dispatcher
from .exceptions import WindowError
from .preferences import Preferences
from .state import BrowserState
from .utils import path_segments
from .window import Window


class App(ConfigMixin):
    """
    Owns everything a running browser needs: configuration, the worker pools,
    the dispatcher, saved preferences and at most one window.
    """

    def __init__(self, config_file="settings.json", **overrides):
        self._setup_logging()
        self._load_config(config_file)
        self.config.update(overrides)
        self._setup_storage()
        self._resolve_resources()

        workers = self.config["max_workers"]
        # Separate pools: a request waits on its own stat calls.
        self.request_pool = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="dirview-request"
        )
        self.stat_pool = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="dirview-stat"
        )
        self.dispatcher = Dispatcher(
            stat_pool=self.stat_pool,
            request_pool=self.request_pool,
            resolve_symlinks=self.config.get("resolve_symlinks", False),
        )
        self.preferences = Preferences(
            self.storage_path, default_path=self.config.get("start_path")
        )
        self.state = BrowserState(self.dispatcher, self.preferences, emit=self.emit)

        self.window = None
        self.is_running = False
        self._exposed_functions = {}
        self._on_exit_callbacks = []
        self._register_core_apis()

        @self.on_exit
        def _cleanup_pools():
            self.logger.debug("Shutting down worker pools...")
            self.request_pool.shutdown(wait=False, cancel_futures=True)
            self.stat_pool.shutdown(wait=False, cancel_futures=True)

    def on_exit(self, func):
        """
        Register a function to run when the application is exiting.
        Can be used as a decorator: @app.on_exit
        """
        self._on_exit_callbacks.append(func)
        return func

    def expose(self, func=None, name=None):
        """
        Expose a function to the window's JavaScript bridge.
        Can be used as a decorator: @app.expose or @app.expose(name="foo")
        """
        if func is None:

            def decorator(f):
                self.expose(f, name=name)
                return f

            return decorator

        if name is None:
            name = func.__name__
        self._exposed_functions[name] = func
        return func

    def _register_core_apis(self):
        self.expose(self.read_path, name="read_path")
        self.expose(self.open_path, name="open_path")
        self.expose(self.refresh, name="refresh")
        self.expose(self.toggle_hidden_files, name="toggle_hidden_files")
        self.expose(self.get_state, name="get_state")
        self.expose(path_segments, name="path_segments")

    # --- Bridge API ---

    def read_path(self, path, request_id=None):
        """List ``path``. The response echoes ``request_id``."""
        return self.dispatcher.read_path(path, request_id=request_id)

    def open_path(self, path, type="directory"):
        response = self.state.open(path, type=type)
        return response is not None

    def refresh(self):
        return self.state.refresh()

    def toggle_hidden_files(self):
        return self.state.toggle_hidden_files()

    def get_state(self):
        return self.state.to_dict()

    # --- Window lifecycle ---

    def create_window(self, **kwargs):
        if self.window is not None:
            raise WindowError("A window is already open", code="window_exists")

        window_config = {
            "title": self.config.get("title", "Dirview"),
            "url": self.config.get("url"),
            "width": self.config.get("width", 800),
            "height": self.config.get("height", 600),
            "resizable": self.config.get("resizable", True),
        }
        window_config.update(kwargs)
        window = Window(
            on_loaded=self._on_window_loaded,
            on_closed=self._on_window_closed,
            **window_config,
        )
        for name, func in self._exposed_functions.items():
            window.expose(func, name=name)
        self.window = window.create()
        self.logger.info(f"Window created: {window.title}")
        return self.window

    def close_window(self):
        window, self.window = self.window, None
        if window is not None:
            window.destroy()

    def activate(self):
        """Recreate the window if none is open (dock icon click on macOS)."""
        if self.window is None:
            return self.create_window()
        return self.window

    def _on_window_loaded(self):
        self.state.refresh(background=True)

    def _on_window_closed(self, window):
        if self.window is window:
            self.window = None
            self.logger.debug("Window closed")

    def emit(self, event_name, data=None):
        if self.window is not None:
            self.window.emit(event_name, data)

    def run(self, path=None):
        if path:
            self.state.path = os.path.abspath(path)
            self.state.save_preference("path", self.state.path)

        if self.window is None:
            self.create_window()

        self.is_running = True
        try:
            webview.start(debug=self.config.get("debug", False))
        finally:
            self.is_running = False
            self.window = None
            for callback in self._on_exit_callbacks:
                try:
                    callback()
                except Exception as e:
                    self.logger.error(f"Error in on_exit callback: {e}")
