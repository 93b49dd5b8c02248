"""Module that contains data models."""
from .archive_wrapper import ArchiveWrapper
from .directory_wrapper import DirectoryArchiveWrapper
from .entry import ArchiveEntry, CompressionMethod
from .listing import DirectoryListing, FileListing

__all__ = [
    "ArchiveWrapper",
    "DirectoryArchiveWrapper",
    "ArchiveEntry",
    "CompressionMethod",
    "DirectoryListing",
    "FileListing",
]
