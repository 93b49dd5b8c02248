from io import BytesIO
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

import pytest

from archive_tree.models import ArchiveEntry, ArchiveWrapper
from archive_tree.tree.archive import ArchiveTree


def entries_from_names(*names: str) -> list[ArchiveEntry]:
    """Build entries the way a ZIP reader reports them."""
    return [ArchiveEntry(name=name, is_directory=name.endswith("/")) for name in names]


def write_zip(target, members: dict[str, bytes]) -> None:
    with ZipFile(target, "w") as zf:
        for name, data in members.items():
            info = ZipInfo(name)
            info.compress_type = ZIP_STORED if name.endswith("/") else ZIP_DEFLATED
            zf.writestr(info, data)


def zip_wrapper(members: dict[str, bytes]) -> ArchiveWrapper:
    buffer = BytesIO()
    write_zip(buffer, members)
    buffer.seek(0)
    return ArchiveWrapper(ZipFile(buffer), filename="memory.zip")


@pytest.fixture(params=["eager", "lazy"])
def index_strategy(request) -> str:
    return request.param


@pytest.fixture
def make_tree(index_strategy):
    trees: list[ArchiveTree] = []

    def _make(members: dict[str, bytes]) -> ArchiveTree:
        tree = ArchiveTree(zip_wrapper(members), index_strategy=index_strategy)
        trees.append(tree)
        return tree

    yield _make
    for tree in trees:
        tree.close()


@pytest.fixture
def zip_path(tmp_path: Path) -> Path:
    path = tmp_path / "sample.zip"
    write_zip(
        path,
        {
            "a/b/c.txt": b"hello",
            "a/b/": b"",
            "d.txt": b"0123456789",
            "../secret.txt": b"nope",
        },
    )
    return path
