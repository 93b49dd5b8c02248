import json

from archive_tree.helpers import dump_to_file, init_logger, verbosity_to_level
from archive_tree.main import main
from archive_tree.models import DirectoryListing
from archive_tree.services.archive_opener import ArchiveOpener
from archive_tree.services.tree_walker import TreeWalker

from conftest import write_zip


def _walker() -> TreeWalker:
    return TreeWalker(logger=init_logger("test_walker", "INFO"))


def test_walk_shallow(make_tree):
    tree = make_tree({"a/b/c.txt": b"hello", "d.txt": b"0123456789"})
    listing = _walker().walk(tree.root)
    assert listing.path == ""
    assert [f.name for f in listing.files] == ["d.txt"]
    assert listing.files[0].size == 10
    assert [d.name for d in listing.directories] == ["a"]
    assert listing.directories[0].path == "a/"
    assert listing.directories[0].directories == []


def test_walk_recursive_and_render(make_tree):
    tree = make_tree({"a/b/c.txt": b"hello", "d.txt": b"0123456789", "../e.txt": b""})
    walker = _walker()
    listing = walker.walk(tree.root, recursive=True)
    c = listing.directories[0].directories[0].files[0]
    assert (c.name, c.path, c.size) == ("c.txt", "a/b/c.txt", 5)
    assert walker.render(listing) == [
        "a/",
        "  b/",
        "    c.txt (5 bytes)",
        "d.txt (10 bytes)",
    ]


def test_dump_to_file_writes_json(tmp_path):
    logger = init_logger("test_dump", "INFO")
    listing = DirectoryListing(name="", path="")
    target = tmp_path / "out" / "listing.json"
    assert dump_to_file(logger, str(target), listing)
    assert json.loads(target.read_text()) == {
        "name": "",
        "path": "",
        "files": [],
        "directories": [],
    }


def test_verbosity_levels():
    assert verbosity_to_level(0) == "INFO"
    assert verbosity_to_level(1) == "VERBOSE"
    assert verbosity_to_level(2) == "DEBUG"
    assert verbosity_to_level(9) == "SPAM"


def test_main_lists_and_dumps(tmp_path, capsys):
    archive = tmp_path / "in.zip"
    write_zip(archive, {"docs/readme.md": b"# hi", "top.bin": b"\x00\x01\x02"})
    out = tmp_path / "listing.json"
    logger = init_logger("test_main", "INFO")

    status = main(
        [str(archive), "-r", "--dump-json", str(out)],
        archive_opener=ArchiveOpener(logger=logger),
        tree_walker=TreeWalker(logger=logger),
        logger=logger,
    )

    assert status == 0
    printed = capsys.readouterr().out.splitlines()
    assert printed == ["docs/", "  readme.md (4 bytes)", "top.bin (3 bytes)"]
    dumped = json.loads(out.read_text())
    assert dumped["directories"][0]["files"][0]["path"] == "docs/readme.md"


def test_main_reports_missing_directory(tmp_path):
    archive = tmp_path / "in.zip"
    write_zip(archive, {"top.bin": b"\x00"})
    logger = init_logger("test_main_missing", "INFO")

    status = main(
        [str(archive), "--path", "nope"],
        archive_opener=ArchiveOpener(logger=logger),
        tree_walker=TreeWalker(logger=logger),
        logger=logger,
    )
    assert status == 1
