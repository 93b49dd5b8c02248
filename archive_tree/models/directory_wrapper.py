from __future__ import annotations

from pathlib import Path
from typing import IO

from .entry import ArchiveEntry, CompressionMethod


class DirectoryArchiveWrapper:
    """A directory-backed wrapper exposing the same interface as ArchiveWrapper.

    Entries are listed once, on construction, in sorted order so that the
    tree built over them is deterministic.
    """

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = Path(root_dir)
        if not self.root_dir.exists() or not self.root_dir.is_dir():
            raise NotADirectoryError(f"Not a directory: {root_dir}")
        self._filename = str(self.root_dir)
        self._entries = self._read_entries()

    @property
    def filename(self) -> str:
        return self._filename

    def entries(self) -> list[ArchiveEntry]:
        return list(self._entries)

    def namelist(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def open(self, name: str) -> IO[bytes]:
        root = self.root_dir.resolve()
        path = (root / name).resolve()
        if root not in path.parents or not path.is_file():
            raise KeyError(name)
        return path.open("rb")

    def read_file(self, name: str) -> bytes:
        with self.open(name) as stream:
            return stream.read()

    def close(self) -> None:
        return None

    def _read_entries(self) -> list[ArchiveEntry]:
        entries: list[ArchiveEntry] = []
        for p in sorted(self.root_dir.rglob("*")):
            rel = p.relative_to(self.root_dir).as_posix()
            if p.is_dir():
                entries.append(ArchiveEntry(name=rel + "/", is_directory=True))
            else:
                size = p.stat().st_size
                entries.append(
                    ArchiveEntry(
                        name=rel,
                        size=size,
                        compressed_size=size,
                        compression_method=CompressionMethod.STORED,
                    )
                )
        return entries
