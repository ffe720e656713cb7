class DirviewError(Exception):
    """Base class for all Dirview exceptions."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class ConfigError(DirviewError):
    """Raised when there is an error loading or parsing configuration."""

    pass


class PreferencesError(DirviewError):
    """Raised when the saved preferences cannot be read or written."""

    pass


class WindowError(DirviewError):
    """Raised when the window lifecycle is misused (e.g. a second window)."""

    pass


class ListingError(DirviewError):
    """Base class for directory listing failures."""

    def __init__(self, message, path=None, cause=None, code=None):
        super().__init__(message, code)
        self.path = path
        self.cause = cause

    def to_dict(self):
        return {
            "type": type(self).__name__,
            "path": self.path,
            "message": str(self),
            "code": self.code,
        }


class DirectoryReadError(ListingError):
    """Raised when a directory cannot be opened or enumerated."""

    def __init__(self, path, cause=None):
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(
            f"Cannot read directory '{path}': {reason}",
            path=path,
            cause=cause,
            code=getattr(cause, "errno", None),
        )


class MetadataError(ListingError):
    """Raised when metadata for a single child of a listing cannot be read."""

    def __init__(self, path, cause=None):
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(
            f"Cannot read metadata for '{path}': {reason}",
            path=path,
            cause=cause,
            code=getattr(cause, "errno", None),
        )
