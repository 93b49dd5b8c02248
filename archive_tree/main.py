"""Read-only archive directory browser."""
from argparse import Namespace

from dependency_injector.wiring import Provide, inject
from verboselogs import VerboseLogger

from archive_tree.config import Settings
from archive_tree.containers import AppContainer
from archive_tree.errors import DirectoryError
from archive_tree.helpers import dump_to_file, parse_options, set_verbosity
from archive_tree.services.archive_opener import ArchiveOpener
from archive_tree.services.tree_walker import TreeWalker


@inject
def main(
    argv: list[str] | None = None,
    archive_opener: ArchiveOpener = Provide[AppContainer.archive_opener],
    tree_walker: TreeWalker = Provide[AppContainer.tree_walker],
    logger: VerboseLogger = Provide[AppContainer.logger],
    settings: Settings = Provide[AppContainer.config],
) -> int:
    """Program's entrypoint. Returns the process exit status."""
    args: Namespace = parse_options("List the content of an archive.", argv)
    if args.verbose:
        set_verbosity(logger, args.verbose, settings.log_format)

    try:
        with archive_opener.open(args.filename, args.password) as tree:
            node = tree.root.get_directory(args.path)
            listing = tree_walker.walk(node, recursive=args.recursive)

    except DirectoryError as err:
        logger.error(f"Failed reading {args.filename}: {err}")
        return 1

    for line in tree_walker.render(listing):
        print(line)

    if args.dump_json and not dump_to_file(logger, args.dump_json, listing):
        return 1
    return 0


def run() -> int:
    """Console script entrypoint."""
    app_container = AppContainer()
    app_container.wire(modules=[__name__])
    try:
        return main()
    finally:
        app_container.unwire()


if __name__ == "__main__":
    raise SystemExit(run())
