"""Exception types raised by the docsite core."""


class DocsiteError(Exception):
    """Base class for docsite errors."""


class MalformedContentNodeError(DocsiteError, ValueError):
    """Content tree node is missing required data or is nested too deeply.

    Raised while loading or stripping the content tree. The tree is produced
    at build time, so this indicates broken input rather than a runtime
    condition worth recovering from.
    """

    def __init__(self, message: str, location: str = "") -> None:
        self.location = location
        if location:
            message = f"{message} (at {location})"
        super().__init__(message)


class StorageError(DocsiteError, OSError):
    """Persistent key-value store could not be read or written."""
