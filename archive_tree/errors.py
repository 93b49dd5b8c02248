"""Exception classes raised by the archive directory view."""


class DirectoryError(Exception):
    """Base exception class for archive directory errors."""
    pass


class OpenFailure(DirectoryError):
    """Raised when the archive container cannot be opened."""
    pass


class PathNotExist(DirectoryError):
    """Raised when a queried name has no matching archive entry."""
    pass


class UnsupportedOperation(DirectoryError, NotImplementedError):
    """Raised on any attempt to mutate the read-only view."""
    pass


class EntryReadError(DirectoryError):
    """Raised when the backend fails to open an entry's content."""
    pass


class ArchiveClosedError(DirectoryError):
    """Raised when a node is used after its archive was closed."""
    pass


class UnsafeEntryName(DirectoryError, ValueError):
    """Raised when an entry name is absolute, escapes the root or is malformed.

    Attributes
    ----------
    name : str
        The raw name that was rejected.
    reason : str
        One of ``malformed``, ``absolute``, ``traversal``, ``empty-segment``.

    """

    def __init__(self, name: object, reason: str) -> None:
        super().__init__(f"Unsafe entry name {name!r}: {reason}")
        self.name = name
        self.reason = reason
