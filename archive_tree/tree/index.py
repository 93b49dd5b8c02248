"""Reconstruction of the directory tree from a flat entry list."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from verboselogs import VerboseLogger

from archive_tree.errors import UnsafeEntryName
from archive_tree.models.entry import ArchiveEntry

from .paths import NormalizedPath, to_prefix, try_normalize, validate_segments

Segments = tuple[str, ...]


@dataclass(frozen=True)
class Listing:
    """Immediate children of one directory, in first-encounter order."""

    files: tuple[str, ...] = ()
    subdirectories: tuple[str, ...] = ()


EMPTY_LISTING = Listing()


class _ListingBuilder:
    """Ordered file and subdirectory sets for one directory.

    A name registered as a subdirectory is never reported as a file.
    """

    def __init__(self) -> None:
        self.files: dict[str, None] = {}
        self.subdirectories: dict[str, None] = {}

    def add_file(self, name: str) -> None:
        if name not in self.subdirectories:
            self.files.setdefault(name, None)

    def add_subdirectory(self, name: str) -> None:
        self.files.pop(name, None)
        self.subdirectories.setdefault(name, None)

    def build(self) -> Listing:
        return Listing(tuple(self.files), tuple(self.subdirectories))


def _is_directory_marker(entry: ArchiveEntry, normalized: NormalizedPath) -> bool:
    return entry.is_directory or normalized.trailing_separator


def _immediate_child(
    entry: ArchiveEntry, normalized: NormalizedPath, prefix: Segments
) -> Optional[tuple[str, bool]]:
    """Return ``(head, is_file)`` for an entry below `prefix`, None to skip it."""
    if not normalized.is_within(prefix):
        return None

    relative = normalized.relative_to(prefix)
    if not relative:
        return None

    try:
        validate_segments(relative)
    except UnsafeEntryName:
        return None

    is_file = len(relative) == 1 and not _is_directory_marker(entry, normalized)
    return relative[0], is_file


def scan_directory(
    entries: Iterable[ArchiveEntry],
    prefix: Segments = (),
    logger: VerboseLogger | None = None,
) -> Listing:
    """Compute the immediate children of `prefix` with one pass over `entries`.

    Parameters
    ----------
    entries : iterable of ArchiveEntry
        Every entry of the archive, in container order.
    prefix : tuple of str
        Segments of the directory to list, empty for the root.
    logger : verboselogs.VerboseLogger, optional
        Receives one VERBOSE record per entry skipped for an unsafe name.

    Returns
    -------
    Listing
        File names and subdirectory names, each a single path segment.
        Entries whose name is unsafe are left out.

    """
    prefix = validate_segments(prefix)
    builder = _ListingBuilder()
    for entry in entries:
        normalized = try_normalize(entry.name)
        if normalized is None:
            if logger is not None:
                logger.verbose(f"Skipping unsafe entry name {entry.name!r}")
            continue
        child = _immediate_child(entry, normalized, prefix)
        if child is None:
            continue
        head, is_file = child
        if is_file:
            builder.add_file(head)
        else:
            builder.add_subdirectory(head)
    return builder.build()


class DirectoryIndex(ABC):
    """Answers listing and lookup queries over one archive's entries."""

    def __init__(
        self,
        entries: Sequence[ArchiveEntry],
        logger: VerboseLogger | None = None,
    ) -> None:
        self.entries: tuple[ArchiveEntry, ...] = tuple(entries)
        self.logger = logger or VerboseLogger(__name__)

    @abstractmethod
    def listing(self, prefix: Segments) -> Listing: ...

    @abstractmethod
    def find_file(self, segments: Segments) -> Optional[ArchiveEntry]:
        """Return the first file entry normalizing to `segments`, if any."""


class LazyDirectoryIndex(DirectoryIndex):
    """Rescans every entry on each listing request."""

    def listing(self, prefix: Segments) -> Listing:
        result = scan_directory(self.entries, prefix, logger=self.logger)
        self.logger.debug(
            f"Scanned {len(self.entries)} entries for '{to_prefix(prefix)}': "
            f"{len(result.files)} files, {len(result.subdirectories)} directories"
        )
        return result

    def find_file(self, segments: Segments) -> Optional[ArchiveEntry]:
        segments = tuple(segments)
        for entry in self.entries:
            normalized = try_normalize(entry.name)
            if (
                normalized is not None
                and normalized.segments == segments
                and not _is_directory_marker(entry, normalized)
            ):
                return entry
        return None


class EagerDirectoryIndex(DirectoryIndex):
    """Builds every directory listing in a single pass at construction."""

    def __init__(
        self,
        entries: Sequence[ArchiveEntry],
        logger: VerboseLogger | None = None,
    ) -> None:
        super().__init__(entries, logger)
        self._listings: dict[Segments, Listing] = {}
        self._files: dict[Segments, ArchiveEntry] = {}
        self._build()

    def listing(self, prefix: Segments) -> Listing:
        return self._listings.get(tuple(prefix), EMPTY_LISTING)

    def find_file(self, segments: Segments) -> Optional[ArchiveEntry]:
        return self._files.get(tuple(segments))

    def _build(self) -> None:
        builders: dict[Segments, _ListingBuilder] = {}
        skipped = 0

        for entry in self.entries:
            normalized = try_normalize(entry.name)
            if normalized is None:
                skipped += 1
                self.logger.verbose(f"Skipping unsafe entry name {entry.name!r}")
                continue

            segments = normalized.segments
            is_directory = _is_directory_marker(entry, normalized)
            last = len(segments) - 1
            for depth, head in enumerate(segments):
                builder = builders.setdefault(segments[:depth], _ListingBuilder())
                if depth == last and not is_directory:
                    builder.add_file(head)
                else:
                    builder.add_subdirectory(head)

            if not is_directory:
                self._files.setdefault(segments, entry)

        self._listings = {prefix: b.build() for prefix, b in builders.items()}
        self.logger.debug(
            f"Indexed {len(self.entries)} entries into {len(self._listings)} "
            f"directories ({skipped} skipped)"
        )


INDEX_STRATEGIES: dict[str, type[DirectoryIndex]] = {
    "eager": EagerDirectoryIndex,
    "lazy": LazyDirectoryIndex,
}


def build_index(
    strategy: str,
    entries: Sequence[ArchiveEntry],
    logger: VerboseLogger | None = None,
) -> DirectoryIndex:
    """Instantiate the index implementation registered under `strategy`."""
    try:
        index_cls = INDEX_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown index strategy: {strategy!r}") from None
    return index_cls(entries, logger=logger)
