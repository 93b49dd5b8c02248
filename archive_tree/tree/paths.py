"""Entry name normalization and traversal checks.

Every name read from a container is untrusted. A name is accepted only
when it can be reduced to a sequence of plain segments below the
logical root; anything absolute, anything with a ``..`` segment and
anything with an empty segment is rejected outright rather than being
partially repaired.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from archive_tree.errors import UnsafeEntryName

SEPARATOR = "/"
ALT_SEPARATOR = "\\"
PARENT_DIR = ".."
CURRENT_DIR = "."

MALFORMED = "malformed"
ABSOLUTE = "absolute"
TRAVERSAL = "traversal"
EMPTY_SEGMENT = "empty-segment"

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


@dataclass(frozen=True)
class NormalizedPath:
    """A validated entry path.

    Attributes
    ----------
    raw : str
        The name the path was computed from.
    segments : tuple of str
        Non-empty segments, none of them ``..`` or containing a separator.
    trailing_separator : bool
        Whether the raw name ended with a separator (directory form).

    """

    raw: str
    segments: tuple[str, ...]
    trailing_separator: bool = False

    @property
    def path(self) -> str:
        return SEPARATOR.join(self.segments)

    def is_within(self, prefix: tuple[str, ...]) -> bool:
        """Return True when the path's segments begin with `prefix`."""
        return self.segments[: len(prefix)] == tuple(prefix)

    def relative_to(self, prefix: tuple[str, ...]) -> tuple[str, ...]:
        if not self.is_within(prefix):
            raise ValueError(f"{self.path!r} is not below {SEPARATOR.join(prefix)!r}")
        return self.segments[len(prefix):]


def normalize_entry_name(raw: str) -> NormalizedPath:
    """Normalize a raw entry name into a NormalizedPath.

    Parameters
    ----------
    raw : str
        The untrusted name, using either ``/`` or ``\\`` as separator.

    Returns
    -------
    NormalizedPath

    Raises
    ------
    archive_tree.errors.UnsafeEntryName
        If the name is malformed, absolute, contains a ``..`` segment or
        an empty segment.

    """
    if not isinstance(raw, str) or not raw or "\x00" in raw:
        raise UnsafeEntryName(raw, MALFORMED)

    unified = raw.replace(ALT_SEPARATOR, SEPARATOR)
    if unified.startswith(SEPARATOR) or _DRIVE_PATTERN.match(unified):
        raise UnsafeEntryName(raw, ABSOLUTE)

    trailing = unified.endswith(SEPARATOR)
    parts = (unified[:-1] if trailing else unified).split(SEPARATOR)

    if PARENT_DIR in parts:
        raise UnsafeEntryName(raw, TRAVERSAL)
    if "" in parts:
        raise UnsafeEntryName(raw, EMPTY_SEGMENT)

    segments = tuple(part for part in parts if part != CURRENT_DIR)
    if not segments:
        raise UnsafeEntryName(raw, EMPTY_SEGMENT)

    return NormalizedPath(raw=raw, segments=segments, trailing_separator=trailing)


def try_normalize(raw: str) -> Optional[NormalizedPath]:
    """Same as `normalize_entry_name` but returns None on rejection."""
    try:
        return normalize_entry_name(raw)
    except UnsafeEntryName:
        return None


def validate_segments(segments: Iterable[str]) -> tuple[str, ...]:
    """Check that every segment is a single well-formed path component.

    Raises
    ------
    archive_tree.errors.UnsafeEntryName
        On the first offending segment.

    """
    checked = tuple(segments)
    for segment in checked:
        if not isinstance(segment, str) or "\x00" in segment:
            raise UnsafeEntryName(segment, MALFORMED)
        if segment in ("", CURRENT_DIR):
            raise UnsafeEntryName(segment, EMPTY_SEGMENT)
        if segment == PARENT_DIR:
            raise UnsafeEntryName(segment, TRAVERSAL)
        if SEPARATOR in segment or ALT_SEPARATOR in segment:
            raise UnsafeEntryName(segment, MALFORMED)
    return checked


def to_prefix(segments: Iterable[str]) -> str:
    """Render segments as a directory prefix: empty for root, else ``a/b/``."""
    joined = SEPARATOR.join(segments)
    return joined + SEPARATOR if joined else ""
