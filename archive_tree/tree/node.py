"""Lazily populated, read-only directory handles."""
from __future__ import annotations

import threading
from typing import IO, TYPE_CHECKING, Optional

from archive_tree.errors import PathNotExist, UnsafeEntryName, UnsupportedOperation
from archive_tree.models.entry import ArchiveEntry

from .index import Segments
from .paths import SEPARATOR, normalize_entry_name, to_prefix

if TYPE_CHECKING:
    from .archive import ArchiveTree


class DirectoryNode:
    """One directory of an archive's reconstructed tree.

    The node's children are computed on first access and kept for the
    node's lifetime. Subdirectory nodes are created once, while their
    parent is populated. The node never owns the archive: every query
    goes through the `ArchiveTree` that created the root, and fails with
    `ArchiveClosedError` once that tree is closed.
    """

    def __init__(
        self,
        tree: ArchiveTree,
        segments: Segments = (),
        parent: Optional[DirectoryNode] = None,
    ) -> None:
        self._tree = tree
        self.segments: Segments = tuple(segments)
        self.parent = parent
        self._files: tuple[str, ...] = ()
        self._subdirectories: dict[str, DirectoryNode] = {}
        self._populated = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<DirectoryNode {self._tree.filename}:{self.prefix!r}>"

    @property
    def prefix(self) -> str:
        """Path of the node from the root: empty for the root, else ``a/b/``."""
        return to_prefix(self.segments)

    @property
    def name(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def populated(self) -> bool:
        return self._populated

    def _populate(self) -> None:
        self._tree.check_open()
        if self._populated:
            return
        with self._lock:
            if self._populated:
                return
            listing = self._tree.index.listing(self.segments)
            self._files = listing.files
            self._subdirectories = {
                name: DirectoryNode(self._tree, self.segments + (name,), parent=self)
                for name in listing.subdirectories
            }
            self._populated = True

    # Listing

    def list_files(self) -> list[str]:
        self._populate()
        return list(self._files)

    def list_subdirectories(self) -> list[str]:
        self._populate()
        return list(self._subdirectories)

    def get_subdirectory(self, name: str) -> DirectoryNode:
        self._populate()
        try:
            return self._subdirectories[name]
        except KeyError:
            raise PathNotExist(f"Directory not found: {self.prefix}{name}") from None

    def get_directory(self, path: str) -> DirectoryNode:
        """Walk down `path`, a relative directory path such as ``a/b``."""
        node = self
        for segment in self._relative_segments(path, allow_empty=True):
            node = node.get_subdirectory(segment)
        return node

    def contains_directory(self, path: str) -> bool:
        try:
            self.get_directory(path)
        except PathNotExist:
            return False
        return True

    def contains_file(self, path: str) -> bool:
        try:
            segments = self._relative_segments(path)
            node = self
            for segment in segments[:-1]:
                node = node.get_subdirectory(segment)
        except PathNotExist:
            return False
        return segments[-1] in node.list_files()

    def get_files(self, recursive: bool = False) -> list[str]:
        """List file paths relative to this node, descending when `recursive`."""
        files = self.list_files()
        if recursive:
            for name, child in list(self._subdirectories.items()):
                files.extend(name + SEPARATOR + path for path in child.get_files(True))
        return files

    def get_directories(self, recursive: bool = False) -> list[str]:
        directories = []
        for name in self.list_subdirectories():
            directories.append(name)
            if recursive:
                child = self._subdirectories[name]
                directories.extend(name + SEPARATOR + path for path in child.get_directories(True))
        return directories

    # Entry content and metadata

    def open_file(self, name: str) -> IO[bytes]:
        """Open a readable byte stream for the file `name` below this node.

        Raises
        ------
        archive_tree.errors.PathNotExist
            If no entry of the backing archive resolves to the name.

        """
        return self._tree.open_entry(self._resolve(name))

    def read_file(self, name: str) -> bytes:
        with self.open_file(name) as stream:
            return stream.read()

    def get_size(self, name: str) -> int:
        return self._resolve(name).size

    def get_compressed_size(self, name: str) -> int:
        return self._resolve(name).compressed_size

    def get_compression_method(self, name: str) -> int:
        return self._resolve(name).compression_method

    def _resolve(self, name: str) -> ArchiveEntry:
        self._tree.check_open()
        try:
            segments = self._relative_segments(name)
        except PathNotExist:
            raise PathNotExist(f"Entry not found: {self.prefix}{name}") from None
        entry = self._tree.index.find_file(self.segments + segments)
        if entry is None:
            raise PathNotExist(f"Entry not found: {self.prefix}{name}")
        return entry

    def _relative_segments(self, path: str, allow_empty: bool = False) -> Segments:
        if allow_empty and path in ("", SEPARATOR):
            return ()
        try:
            return normalize_entry_name(path).segments
        except UnsafeEntryName as err:
            raise PathNotExist(f"Invalid path: {path!r}") from err

    # Mutations are not supported on archives

    def create_subdirectory(self, name: str) -> DirectoryNode:
        raise UnsupportedOperation(f"Cannot create directory {name!r}: archive is read-only")

    def create_file(self, name: str) -> IO[bytes]:
        raise UnsupportedOperation(f"Cannot create file {name!r}: archive is read-only")

    def remove_file(self, name: str) -> None:
        raise UnsupportedOperation(f"Cannot remove file {name!r}: archive is read-only")

    def open_file_for_writing(self, name: str) -> IO[bytes]:
        raise UnsupportedOperation(f"Cannot write file {name!r}: archive is read-only")
