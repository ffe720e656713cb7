from .entry import Entry, EntryType, classify
from .exceptions import (
    DirviewError,
    ConfigError,
    PreferencesError,
    WindowError,
    ListingError,
    DirectoryReadError,
    MetadataError,
)
from .lister import list_directory
from .sorter import sort_entries
from .dispatcher import Dispatcher, ListingRequest, ListingResponse

__version__ = "0.1.0"


def __getattr__(name):
    # The GUI stack is only imported when the App is actually used.
    if name == "App":
        from .application import App

        return App
    raise AttributeError(f"module 'dirview' has no attribute {name!r}")
