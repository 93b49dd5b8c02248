"""Directory listing component."""
from __future__ import annotations

from verboselogs import VerboseLogger

from archive_tree.errors import PathNotExist
from archive_tree.models import DirectoryListing, FileListing
from archive_tree.tree.node import DirectoryNode


class TreeWalker:
    """Turns directory nodes into listing records."""

    def __init__(self, logger: VerboseLogger):
        self.logger = logger

    def walk(self, node: DirectoryNode, recursive: bool = False) -> DirectoryListing:
        """
        List a directory's files with their metadata, and its subdirectories.

        Subdirectories are listed by name only unless `recursive` is set.
        """
        listing = DirectoryListing(name=node.name, path=node.prefix)

        for name in node.list_files():
            file = FileListing(name=name, path=node.prefix + name)
            try:
                file.size = node.get_size(name)
                file.compressed_size = node.get_compressed_size(name)
                file.compression_method = int(node.get_compression_method(name))
            except PathNotExist as err:
                self.logger.warning(f"No metadata for {file.path}: {err}")
            listing.files.append(file)

        for name in node.list_subdirectories():
            child = node.get_subdirectory(name)
            if recursive:
                listing.directories.append(self.walk(child, recursive=True))
            else:
                listing.directories.append(DirectoryListing(name=name, path=child.prefix))

        self.logger.spam(
            f"Walked '{node.prefix}': {len(listing.files)} files, "
            f"{len(listing.directories)} directories"
        )
        return listing

    def render(self, listing: DirectoryListing, indent: str = "  ") -> list[str]:
        """Render a listing as indented text lines, directories first."""
        lines: list[str] = []
        self._render(listing, lines, indent, depth=0)
        return lines

    def _render(self, listing: DirectoryListing, lines: list[str], indent: str, depth: int) -> None:
        pad = indent * depth
        for directory in listing.directories:
            lines.append(f"{pad}{directory.name}/")
            self._render(directory, lines, indent, depth + 1)
        for file in listing.files:
            size = "?" if file.size is None else str(file.size)
            lines.append(f"{pad}{file.name} ({size} bytes)")
