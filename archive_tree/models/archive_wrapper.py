"""Uniform read access to ZIP, RAR and 7-Zip containers."""
from __future__ import annotations

from io import BytesIO
from typing import IO, Any
from zipfile import ZipFile, ZipInfo

from py7zr import SevenZipFile
from rarfile import RarFile, RarInfo

from .entry import ArchiveEntry, CompressionMethod

SEVENZIP_METHODS: dict[str, CompressionMethod] = {
    "COPY": CompressionMethod.STORED,
    "DEFLATE": CompressionMethod.DEFLATED,
    "DEFLATE64": CompressionMethod.DEFLATE64,
    "BZIP2": CompressionMethod.BZIP2,
    "LZMA": CompressionMethod.LZMA,
    "LZMA2": CompressionMethod.LZMA,
    "ZSTD": CompressionMethod.ZSTANDARD,
    "PPMD": CompressionMethod.PPMD,
}


class ArchiveWrapper:
    """Wrap an opened container behind a single entry-oriented interface.

    The entry list is read once, on construction, and kept in container
    order. Lookups by raw name resolve to the first entry carrying it.

    Parameters
    ----------
    archive : zipfile.ZipFile or rarfile.RarFile or py7zr.SevenZipFile
        The opened container. The wrapper takes ownership of it.
    filename : str
        The container's filename, for display.
    password : str, optional
        If applicable, the password required to read entries.

    """

    def __init__(
        self,
        archive: ZipFile | RarFile | SevenZipFile,
        filename: str,
        password: str | None = None,
    ) -> None:
        self.archive = archive
        self._filename = filename
        self.password = password
        self._members: dict[str, Any] = {}
        self._entries: list[ArchiveEntry] = self._read_entries()

    @property
    def filename(self) -> str:
        return self._filename

    def entries(self) -> list[ArchiveEntry]:
        """Return every entry, in container order."""
        return list(self._entries)

    def namelist(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def open(self, name: str) -> IO[bytes]:
        """Open the content of the entry stored under the raw `name`.

        Raises
        ------
        KeyError
            If no entry carries that name.

        """
        if name not in self._members:
            raise KeyError(name)
        member = self._members[name]

        if isinstance(self.archive, ZipFile):
            pwd = self.password.encode() if self.password else None
            return self.archive.open(member, pwd=pwd)

        if isinstance(self.archive, RarFile):
            return self.archive.open(member, pwd=self.password)

        # 7-Zip archives must be rewound before every read.
        self.archive.reset()
        content = self.archive.read(targets=[name]) or {}
        if name not in content:
            raise KeyError(name)
        return BytesIO(content[name].read())

    def read_file(self, name: str) -> bytes:
        with self.open(name) as stream:
            return stream.read()

    def close(self) -> None:
        self.archive.close()

    def _read_entries(self) -> list[ArchiveEntry]:
        if isinstance(self.archive, ZipFile):
            return [self._remember(info.filename, info, self._zip_entry(info))
                    for info in self.archive.infolist()]

        if isinstance(self.archive, RarFile):
            return [self._remember(info.filename, info, self._rar_entry(info))
                    for info in self.archive.infolist()]

        method = self._sevenzip_method()
        entries = []
        for info in self.archive.list():
            entry = ArchiveEntry(
                name=info.filename,
                is_directory=bool(info.is_directory),
                size=info.uncompressed or 0,
                compressed_size=info.compressed or 0,
                compression_method=method,
            )
            entries.append(self._remember(info.filename, info, entry))
        return entries

    def _remember(self, name: str, member: Any, entry: ArchiveEntry) -> ArchiveEntry:
        self._members.setdefault(name, member)
        return entry

    @staticmethod
    def _zip_entry(info: ZipInfo) -> ArchiveEntry:
        return ArchiveEntry(
            name=info.filename,
            is_directory=info.is_dir(),
            size=info.file_size,
            compressed_size=info.compress_size,
            compression_method=CompressionMethod.from_value(info.compress_type),
        )

    @staticmethod
    def _rar_entry(info: RarInfo) -> ArchiveEntry:
        return ArchiveEntry(
            name=info.filename,
            is_directory=info.is_dir(),
            size=info.file_size or 0,
            compressed_size=info.compress_size or 0,
            compression_method=info.compress_type,
        )

    def _sevenzip_method(self) -> int:
        # 7-Zip only reports methods per archive, not per entry.
        names = self.archive.archiveinfo().method_names or []
        if not names:
            return CompressionMethod.UNKNOWN
        head = str(names[0]).split(":")[0].upper()
        return SEVENZIP_METHODS.get(head, CompressionMethod.UNKNOWN)
