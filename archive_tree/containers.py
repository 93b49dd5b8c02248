"""Dependency injection containers for the archive-tree application."""

from __future__ import annotations

from dependency_injector import containers, providers

from archive_tree.config import Settings
from archive_tree.helpers import init_logger
from archive_tree.services.archive_opener import ArchiveOpener
from archive_tree.services.tree_walker import TreeWalker


class AppContainer(containers.DeclarativeContainer):
    """Main application container."""

    config = providers.Singleton(Settings)
    logger = providers.Singleton(
        init_logger,
        "archive_tree",
        config.provided.log_level,
        config.provided.log_format,
    )

    archive_opener = providers.Factory(
        ArchiveOpener,
        logger=logger,
        settings=config,
    )

    tree_walker = providers.Factory(
        TreeWalker,
        logger=logger,
    )
