"""Helper functions."""
from argparse import ArgumentParser, Namespace
from dataclasses import asdict, is_dataclass
from json import JSONEncoder, dumps
from pathlib import Path
from typing import Any

import coloredlogs
from verboselogs import VerboseLogger

LOG_LEVELS: list[str] = ["INFO", "VERBOSE", "DEBUG", "SPAM"]


class EnhancedJSONEncoder(JSONEncoder):
    """Enhanced JSON encoder for specific classes."""

    def default(self, o: Any) -> Any:  # type: ignore[override]
        """Handle custom types JSON serialization."""
        if is_dataclass(o) and not isinstance(o, type):
            return asdict(o)
        if isinstance(o, (set, tuple)):
            return list(o)
        return super().default(o)


def dump_to_file(
    logger: VerboseLogger, filename: str, content: str | Any
) -> bool:
    """Save data to local file.

    Parameters
    ----------
    logger : verboselogs.VerboseLogger
        The program's logger.
    filename : str
        The file to write to.
    content : str or Any
        The data to write. Anything but a string is written as JSON.

    Returns
    -------
    bool
        Whether the file was written.

    """
    filepath = Path(filename)

    try:
        if not filepath.parent.exists():
            filepath.parent.mkdir(parents=True)

        if not isinstance(content, str):
            filepath.write_text(
                dumps(
                    content,
                    ensure_ascii=False,
                    cls=EnhancedJSONEncoder,
                    indent=4,
                )
            )
        else:
            filepath.write_text(content)

    except (FileNotFoundError, OSError, PermissionError, ValueError) as err:
        logger.error(f"Failed to write file to '{str(filepath)}': {err}")
        return False

    logger.info(f"Successfully wrote '{str(filepath)}'.")
    return True


def parse_options(description: str, argv: list[str] | None = None) -> Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    description : str
        The program's description.
    argv : list of str, optional
        Arguments to parse instead of ``sys.argv``.

    Returns
    -------
    argparse.Namespace
        Parsed command-line arguments as an object.

    """
    parser = ArgumentParser(description=description)

    parser.add_argument(
        "filename",
        type=str,
        help="the archive to browse (handled extensions: .zip, .jar, .apk, "
        ".rar, .7z) or a directory",
    )
    parser.add_argument(
        "--path",
        metavar="DIRECTORY",
        type=str,
        default="",
        help="the directory inside the archive to list (default: root)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="also list every subdirectory",
    )
    parser.add_argument(
        "-p",
        "--password",
        metavar="ARCHIVE_PASSWORD",
        type=str,
        default=None,
        help="the archive's password if required",
    )
    parser.add_argument(
        "--dump-json",
        metavar="FILENAME.json",
        type=str,
        default=None,
        help="also write the listing to a JSON file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase logs output verbosity (default: info, -v: verbose, "
        "-vv: debug, -vvv: spam)",
    )

    return parser.parse_args(argv)


def verbosity_to_level(verbosity: int) -> str:
    """Map a ``-v`` count to a log level name."""
    return LOG_LEVELS[max(0, min(verbosity, len(LOG_LEVELS) - 1))]


def init_logger(
    name: str,
    verbosity_level: str,
    formatting: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> VerboseLogger:
    """Initialize the program's logger.

    Parameters
    ----------
    name : str
        The logger's name.
    verbosity_level : str
        Verbosity log level name, one of INFO, VERBOSE, DEBUG or SPAM.
        Standard level names are accepted too.
    formatting : str, optional
        The log format.

    Returns
    -------
    verboselogs.VerboseLogger
        The logger.

    """
    logger = VerboseLogger(name)

    coloredlogs.install(
        logger=logger,
        level=verbosity_level.upper(),
        fmt=formatting,
        isatty=True,
    )

    return logger


def set_verbosity(
    logger: VerboseLogger,
    verbosity: int,
    formatting: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Reinstall the logger's handler at the level matching a ``-v`` count."""
    coloredlogs.install(
        logger=logger,
        level=verbosity_to_level(verbosity),
        fmt=formatting,
        isatty=True,
    )
