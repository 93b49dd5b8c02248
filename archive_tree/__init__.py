"""Archive Tree - read-only directory view over archive containers.

Rebuilds the directory hierarchy of ZIP, RAR and 7-Zip archives from
their flat entry lists, leaving out entries whose names try to escape
the archive's root.
"""

from .errors import (
    ArchiveClosedError,
    DirectoryError,
    EntryReadError,
    OpenFailure,
    PathNotExist,
    UnsafeEntryName,
    UnsupportedOperation,
)
from .models import ArchiveEntry, CompressionMethod
from .tree import ArchiveTree, DirectoryNode, open_archive

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ArchiveClosedError",
    "DirectoryError",
    "EntryReadError",
    "OpenFailure",
    "PathNotExist",
    "UnsafeEntryName",
    "UnsupportedOperation",
    "ArchiveEntry",
    "CompressionMethod",
    "ArchiveTree",
    "DirectoryNode",
    "open_archive",
]
