"""Ownership of an opened archive and the root of its directory tree."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import IO
from zipfile import BadZipFile, LargeZipFile, ZipFile

from py7zr import SevenZipFile
from py7zr.exceptions import ArchiveError, Bad7zFile, PasswordRequired
from rarfile import Error as RarError
from rarfile import RarFile
from verboselogs import VerboseLogger

from archive_tree.errors import ArchiveClosedError, EntryReadError, OpenFailure, PathNotExist
from archive_tree.models import ArchiveEntry, ArchiveWrapper, DirectoryArchiveWrapper

from .index import build_index
from .node import DirectoryNode

ZIP_SUFFIXES = (".zip", ".jar", ".apk")

OPEN_ERRORS = (
    OSError,
    BadZipFile,
    LargeZipFile,
    RarError,
    Bad7zFile,
    ArchiveError,
    PasswordRequired,
)

READ_ERRORS = (
    OSError,
    RuntimeError,
    NotImplementedError,
    BadZipFile,
    RarError,
    ArchiveError,
    PasswordRequired,
)


class ArchiveTree:
    """Owns an opened archive and exposes it as a read-only directory tree.

    Every `DirectoryNode` derived from `root` shares the archive held
    here. `close` releases it exactly once; afterwards every node
    operation raises `ArchiveClosedError`.

    Parameters
    ----------
    wrapper : ArchiveWrapper or DirectoryArchiveWrapper
        The opened archive. Ownership is transferred to the tree.
    index_strategy : str, optional
        ``eager`` to index every directory upfront, ``lazy`` to rescan the
        entries for each directory on first access.
    logger : verboselogs.VerboseLogger, optional
        The program's logger.

    """

    def __init__(
        self,
        wrapper: ArchiveWrapper | DirectoryArchiveWrapper,
        index_strategy: str = "eager",
        logger: VerboseLogger | None = None,
    ) -> None:
        self.wrapper = wrapper
        self.logger = logger or VerboseLogger(__name__)
        self.index = build_index(index_strategy, wrapper.entries(), logger=self.logger)
        self._closed = False
        self._close_lock = threading.Lock()
        self.root = DirectoryNode(self)

    def __enter__(self) -> ArchiveTree:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def filename(self) -> str:
        return self.wrapper.filename

    @property
    def closed(self) -> bool:
        return self._closed

    def check_open(self) -> None:
        if self._closed:
            raise ArchiveClosedError(f"Archive {self.filename} is closed")

    def open_entry(self, entry: ArchiveEntry) -> IO[bytes]:
        self.check_open()
        try:
            return self.wrapper.open(entry.name)
        except KeyError as err:
            raise PathNotExist(f"Entry not found: {entry.name}") from err
        except READ_ERRORS as err:
            raise EntryReadError(f"Failed to read {entry.name}: {err}") from err

    def close(self) -> None:
        """Release the archive. Calling it again has no effect."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self.wrapper.close()
        self.logger.info(f"Closed {self.filename}")


def read_archive(
    filename: str | Path, password: str | None = None
) -> ArchiveWrapper | DirectoryArchiveWrapper:
    """Open an archive, or a plain directory, and return a reader object.

    Parameters
    ----------
    filename : str or pathlib.Path
        The archive filename (handled extensions: .zip, .jar, .apk, .rar,
        .7z) or a directory.
    password : str, optional
        If applicable, the password required to read the archive.

    Returns
    -------
    archive_tree.models.ArchiveWrapper or archive_tree.models.DirectoryArchiveWrapper

    Raises
    ------
    archive_tree.errors.OpenFailure
        If the extension is not handled or the container can't be read.

    """
    path = Path(filename)
    archive: ZipFile | RarFile | SevenZipFile | None = None

    try:
        if path.is_dir():
            return DirectoryArchiveWrapper(path)

        match path.suffix.lower():
            case suffix if suffix in ZIP_SUFFIXES:
                archive = ZipFile(path)

            case ".rar":
                archive = RarFile(path)

            case ".7z":
                archive = SevenZipFile(path, password=password)

            case other_ext:
                raise OpenFailure(f"{other_ext or 'Missing extension'} not handled: {path}")

        return ArchiveWrapper(archive, filename=str(path), password=password)

    except OPEN_ERRORS as err:
        if archive is not None:
            archive.close()
        raise OpenFailure(f"Failed to open {path}: {err}") from err


def open_archive(
    filename: str | Path,
    password: str | None = None,
    index_strategy: str = "eager",
    logger: VerboseLogger | None = None,
) -> ArchiveTree:
    """Open `filename` and return its directory tree.

    The caller owns the returned tree and must close it, preferably by
    using it as a context manager.
    """
    wrapper = read_archive(filename, password)
    try:
        tree = ArchiveTree(wrapper, index_strategy=index_strategy, logger=logger)
    except Exception:
        wrapper.close()
        raise
    tree.logger.info(f"Opened {tree.filename} ({len(tree.index.entries)} entries)")
    return tree
