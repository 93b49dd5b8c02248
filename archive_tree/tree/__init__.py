"""
This module rebuilds a directory tree over the flat entry list of an
archive. Entry names are sanitized before use so that no entry can be
listed outside of the archive's root.
"""
from .archive import ArchiveTree, open_archive, read_archive
from .index import (
    DirectoryIndex,
    EagerDirectoryIndex,
    LazyDirectoryIndex,
    Listing,
    build_index,
    scan_directory,
)
from .node import DirectoryNode
from .paths import NormalizedPath, normalize_entry_name, try_normalize, validate_segments

__all__ = [
    "ArchiveTree",
    "open_archive",
    "read_archive",
    "DirectoryIndex",
    "EagerDirectoryIndex",
    "LazyDirectoryIndex",
    "Listing",
    "build_index",
    "scan_directory",
    "DirectoryNode",
    "NormalizedPath",
    "normalize_entry_name",
    "try_normalize",
    "validate_segments",
]
