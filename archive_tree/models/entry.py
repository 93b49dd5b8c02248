"""Data model to define a single archive entry."""
from dataclasses import dataclass
from enum import IntEnum


class CompressionMethod(IntEnum):
    """Compression method identifiers, numbered after the ZIP format."""

    UNKNOWN = -1
    STORED = 0
    DEFLATED = 8
    DEFLATE64 = 9
    BZIP2 = 12
    LZMA = 14
    ZSTANDARD = 93
    XZ = 95
    PPMD = 98

    @classmethod
    def from_value(cls, value: int | None) -> "CompressionMethod":
        """Return the member matching `value`, UNKNOWN otherwise."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ArchiveEntry:
    """Class defining one record of an archive's flat entry list.

    Attributes
    ----------
    name : str
        The raw entry name as stored in the container. Untrusted.
    is_directory : bool
        Whether the entry is an explicit directory marker.
    size : int
        Uncompressed size in bytes.
    compressed_size : int
        Stored size in bytes.
    compression_method : int
        Container-specific method identifier, see `CompressionMethod`.

    """

    name: str
    is_directory: bool = False
    size: int = 0
    compressed_size: int = 0
    compression_method: int = CompressionMethod.STORED
