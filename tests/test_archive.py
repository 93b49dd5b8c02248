from pathlib import Path
from zipfile import ZIP_DEFLATED, ZIP_STORED

import pytest

from py7zr import SevenZipFile
from rarfile import Error as RarError

from archive_tree.errors import DirectoryError, EntryReadError, OpenFailure, PathNotExist
from archive_tree.models import ArchiveWrapper, CompressionMethod, DirectoryArchiveWrapper
from archive_tree.tree.archive import ArchiveTree, open_archive, read_archive

from conftest import write_zip, zip_wrapper


def test_zip_wrapper_entries_keep_container_order():
    wrapper = zip_wrapper({"b.txt": b"bb", "a/": b"", "a/c.txt": b"c"})
    try:
        entries = wrapper.entries()
        assert [e.name for e in entries] == ["b.txt", "a/", "a/c.txt"]
        assert wrapper.namelist() == ["b.txt", "a/", "a/c.txt"]
        assert entries[0].size == 2
        assert entries[0].compression_method == ZIP_DEFLATED
        assert entries[1].is_directory
        assert entries[1].compression_method == ZIP_STORED
        assert wrapper.read_file("a/c.txt") == b"c"
    finally:
        wrapper.close()


def test_zip_wrapper_unknown_name_is_key_error():
    wrapper = zip_wrapper({"b.txt": b"bb"})
    try:
        with pytest.raises(KeyError):
            wrapper.open("missing")
    finally:
        wrapper.close()


def test_open_archive_from_file(zip_path: Path, index_strategy):
    with open_archive(zip_path, index_strategy=index_strategy) as tree:
        assert isinstance(tree, ArchiveTree)
        assert tree.filename == str(zip_path)
        assert tree.root.list_files() == ["d.txt"]
        assert tree.root.list_subdirectories() == ["a"]
        assert tree.root.get_directory("a/b").read_file("c.txt") == b"hello"
    assert tree.closed


def test_read_archive_handles_zip_family(tmp_path: Path, zip_path: Path):
    jar = tmp_path / "sample.JAR"
    jar.write_bytes(zip_path.read_bytes())
    wrapper = read_archive(jar)
    try:
        assert isinstance(wrapper, ArchiveWrapper)
        assert "d.txt" in wrapper.namelist()
    finally:
        wrapper.close()


def test_open_failure_on_corrupt_zip(tmp_path: Path):
    broken = tmp_path / "broken.zip"
    broken.write_bytes(b"this is not a zip file")
    with pytest.raises(OpenFailure) as exc_info:
        open_archive(broken)
    assert exc_info.value.__cause__ is not None


def test_open_failure_on_missing_file(tmp_path: Path):
    with pytest.raises(OpenFailure) as exc_info:
        open_archive(tmp_path / "missing.zip")
    assert isinstance(exc_info.value.__cause__, OSError)


def test_open_failure_on_unhandled_extension(tmp_path: Path):
    other = tmp_path / "notes.txt"
    other.write_text("hello")
    with pytest.raises(OpenFailure, match="not handled"):
        open_archive(other)


def test_directory_wrapper(tmp_path: Path):
    (tmp_path / "sub" / "deeper").mkdir(parents=True)
    (tmp_path / "sub" / "deeper" / "f.txt").write_bytes(b"abc")
    (tmp_path / "top.txt").write_bytes(b"12345")

    wrapper = read_archive(tmp_path)
    assert isinstance(wrapper, DirectoryArchiveWrapper)
    assert wrapper.namelist() == ["sub/", "sub/deeper/", "sub/deeper/f.txt", "top.txt"]

    with ArchiveTree(wrapper) as tree:
        root = tree.root
        assert root.list_files() == ["top.txt"]
        assert root.list_subdirectories() == ["sub"]
        assert root.get_size("top.txt") == 5
        assert root.get_compression_method("top.txt") == CompressionMethod.STORED
        assert root.get_directory("sub/deeper").read_file("f.txt") == b"abc"


def test_directory_wrapper_refuses_escaping_names(tmp_path: Path):
    inner = tmp_path / "inner"
    inner.mkdir()
    (tmp_path / "outside.txt").write_text("secret")
    wrapper = DirectoryArchiveWrapper(inner)
    with pytest.raises(KeyError):
        wrapper.open("../outside.txt")


def test_directory_wrapper_requires_directory(tmp_path: Path):
    with pytest.raises(NotADirectoryError):
        DirectoryArchiveWrapper(tmp_path / "missing")


def test_traversal_entry_unreachable_through_tree(zip_path: Path):
    with open_archive(zip_path) as tree:
        for path in tree.root.get_files(recursive=True):
            assert "secret" not in path
        with pytest.raises(PathNotExist):
            tree.root.open_file("../secret.txt")


def test_compression_method_lookup():
    assert CompressionMethod.from_value(8) is CompressionMethod.DEFLATED
    assert CompressionMethod.from_value(12345) is CompressionMethod.UNKNOWN
    assert CompressionMethod.from_value(None) is CompressionMethod.UNKNOWN


def test_zip_compression_method_is_enum():
    wrapper = zip_wrapper({"f.txt": b"data", "dir/": b""})
    try:
        methods = [entry.compression_method for entry in wrapper.entries()]
        assert methods == [CompressionMethod.DEFLATED, CompressionMethod.STORED]
        assert all(isinstance(method, CompressionMethod) for method in methods)
    finally:
        wrapper.close()


def test_damaged_member_header_raises_read_error(tmp_path: Path, index_strategy):
    path = tmp_path / "damaged.zip"
    write_zip(path, {"d.txt": b"0123456789"})
    data = bytearray(path.read_bytes())
    assert data[:4] == b"PK\x03\x04"
    data[:4] = b"XXXX"
    path.write_bytes(bytes(data))

    with open_archive(path, index_strategy=index_strategy) as tree:
        assert tree.root.list_files() == ["d.txt"]
        assert tree.root.get_size("d.txt") == 10
        with pytest.raises(EntryReadError) as exc_info:
            tree.root.open_file("d.txt")
    assert isinstance(exc_info.value, DirectoryError)
    assert exc_info.value.__cause__ is not None


def test_sevenzip_archive(tmp_path: Path, index_strategy):
    path = tmp_path / "sample.7z"
    with SevenZipFile(path, "w") as archive:
        archive.writestr(b"hello", "a/b/c.txt")
        archive.writestr(b"0123456789", "d.txt")

    with open_archive(path, index_strategy=index_strategy) as tree:
        root = tree.root
        assert root.list_files() == ["d.txt"]
        assert root.list_subdirectories() == ["a"]
        assert root.get_size("d.txt") == 10
        assert root.get_compression_method("d.txt") == CompressionMethod.LZMA
        assert root.read_file("d.txt") == b"0123456789"
        b = root.get_directory("a/b")
        assert b.list_files() == ["c.txt"]
        assert b.get_size("c.txt") == 5
        assert b.read_file("c.txt") == b"hello"
        with pytest.raises(PathNotExist):
            b.read_file("missing.txt")


def test_open_failure_on_corrupt_sevenzip(tmp_path: Path):
    broken = tmp_path / "broken.7z"
    broken.write_bytes(b"not a 7z archive at all")
    with pytest.raises(OpenFailure) as exc_info:
        open_archive(broken)
    assert exc_info.value.__cause__ is not None


def test_open_failure_on_corrupt_rar(tmp_path: Path):
    broken = tmp_path / "broken.rar"
    broken.write_bytes(b"not a rar archive at all")
    with pytest.raises(OpenFailure) as exc_info:
        open_archive(broken)
    assert isinstance(exc_info.value.__cause__, RarError)
