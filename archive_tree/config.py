"""Centralized configuration management using Pydantic Settings."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defines application settings, loaded from environment variables or .env file.

    Attributes
    ----------
    index_strategy : str
        ``eager`` builds every directory listing when the archive is
        opened, ``lazy`` rescans the entries for each directory visited.
    archive_password : str, optional
        Default password used when none is given on the command line.
    log_level : str
        Minimum level of the program's logger.
    log_format : str
        The log format.
    """

    index_strategy: Literal["eager", "lazy"] = "eager"
    archive_password: Optional[str] = None
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_prefix="ARCHIVE_TREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# Create a single instance of settings to be used throughout the application
settings = Settings()
