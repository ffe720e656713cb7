import os
import json
import logging
from ..utils import get_resource_path, user_storage_path
from ..exceptions import ConfigError

DEFAULT_CONFIG = {
    "title": "Dirview",
    "width": 800,
    "height": 600,
    "resizable": True,
    "debug": False,
    "url": "static/index.html",
    "max_workers": 10,
    "resolve_symlinks": False,
    "start_path": None,
}


class ConfigMixin:
    def _setup_logging(self):
        logging.basicConfig(
            level=logging.INFO,
            format="[Dirview] %(asctime)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        self.logger = logging.getLogger("Dirview")

    def _load_config(self, config_file):
        self.config = dict(DEFAULT_CONFIG)
        path = get_resource_path(config_file)
        self.logger.debug(f"Resolved settings path: {path}")

        if os.path.exists(path):
            try:
                with open(path, "r") as f:
                    loaded = json.load(f)
            except json.JSONDecodeError as e:
                self.logger.error(f"Failed to parse settings: {e}")
                raise ConfigError(f"Invalid JSON in settings file: {path}") from e
            except OSError as e:
                self.logger.error(f"Failed to load settings: {e}")
                raise ConfigError(f"Could not load settings from {path}") from e

            if not isinstance(loaded, dict):
                raise ConfigError(f"Settings file must contain a JSON object: {path}")
            self.config.update(loaded)
        else:
            self.logger.warning(
                f"Settings file not found at {path}. Using default configuration."
            )

        if os.environ.get("DIRVIEW_DEBUG") == "1":
            self.config["debug"] = True

        if self.config.get("debug", False):
            self.logger.setLevel(logging.DEBUG)
            for handler in logging.root.handlers:
                handler.setLevel(logging.DEBUG)
            self.logger.debug("Debug mode enabled.")

        try:
            self.config["max_workers"] = int(self.config["max_workers"])
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"max_workers must be an integer, got {self.config['max_workers']!r}"
            ) from e
        if self.config["max_workers"] < 1:
            raise ConfigError("max_workers must be at least 1")

    def _setup_storage(self):
        self.storage_path = self.config.get("storage_path") or user_storage_path(
            self.config.get("title", "Dirview"), self.config.get("debug", False)
        )
        try:
            os.makedirs(self.storage_path, exist_ok=True)
            self.logger.debug(f"Storage directory: {self.storage_path}")
        except OSError as e:
            self.logger.warning(
                f"Could not create storage directory at {self.storage_path}: {e}"
            )

    def _resolve_resources(self):
        url = self.config.get("url")
        if not url or url.startswith(("http:", "https:", "file:")):
            return
        resolved = get_resource_path(url)
        if os.path.exists(resolved):
            self.config["url"] = resolved
        else:
            self.logger.warning(f"Could not find UI entry point at: {url}")
