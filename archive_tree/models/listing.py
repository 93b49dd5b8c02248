"""Data models to describe a walked directory tree."""
from dataclasses import dataclass, field


@dataclass
class FileListing:
    """Class defining one file found while walking a directory.

    Attributes
    ----------
    name : str
        The file name, a single path segment.
    path : str
        The normalized path from the archive root.
    size : int, optional
        Uncompressed size, when the backing entry could be resolved.
    compressed_size : int, optional
        Stored size, when the backing entry could be resolved.
    compression_method : int, optional
        Container-specific method identifier.

    """

    name: str
    path: str
    size: int | None = None
    compressed_size: int | None = None
    compression_method: int | None = None


@dataclass
class DirectoryListing:
    """Class defining a directory and, optionally, its walked descendants."""

    name: str
    path: str
    files: list[FileListing] = field(default_factory=list)
    directories: list["DirectoryListing"] = field(default_factory=list)
