"""Archive opening component."""
from __future__ import annotations

from pathlib import Path

from verboselogs import VerboseLogger

from archive_tree.config import Settings
from archive_tree.tree.archive import ArchiveTree, open_archive


class ArchiveOpener:
    """Opens archives with the configured index strategy and password."""

    def __init__(self, logger: VerboseLogger, settings: Settings | None = None):
        self.logger = logger
        self.settings = settings or Settings()

    def open(self, filename: str | Path, password: str | None = None) -> ArchiveTree:
        return open_archive(
            filename,
            password=password or self.settings.archive_password,
            index_strategy=self.settings.index_strategy,
            logger=self.logger,
        )
