import errno
import os

import pytest

from fsops.directory import DirectoryEntry, DirectoryIterator
from fsops.errors import FilesystemError
from fsops.status import FileStatus, FileType


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / "b.txt").write_text("")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "inner.txt").write_text("x")
    return tmp_path


def test_iterates_top_level_names_only(tree):
    names = {os.path.basename(e.path) for e in DirectoryIterator(tree)}
    assert names == {"a.txt", "b.txt", "sub"}


def test_entries_are_joined_with_directory(tree):
    for entry in DirectoryIterator(tree):
        assert os.path.dirname(entry.path) == str(tree)


def test_empty_directory_yields_nothing(tmp_path):
    assert list(DirectoryIterator(tmp_path)) == []


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FilesystemError) as info:
        DirectoryIterator(tmp_path / "nope")
    assert info.value.errno == errno.ENOENT


def test_empty_path_raises_not_found():
    with pytest.raises(FilesystemError) as info:
        DirectoryIterator("")
    assert info.value.errno == errno.ENOENT


def test_regular_file_is_not_a_directory(tree):
    with pytest.raises(FilesystemError) as info:
        DirectoryIterator(tree / "a.txt")
    assert info.value.errno == errno.ENOTDIR


def test_entry_statuses(tree):
    entries = {os.path.basename(e.path): e for e in DirectoryIterator(tree)}
    assert entries["a.txt"].status().type is FileType.regular_file
    assert entries["a.txt"].symlink_status().type is FileType.regular_file
    assert entries["sub"].status().type is FileType.directory_file


def test_symlink_entry(tmp_path):
    (tmp_path / "target.txt").write_text("t")
    os.symlink(tmp_path / "target.txt", tmp_path / "link")
    os.symlink(tmp_path / "missing", tmp_path / "dangling")
    entries = {os.path.basename(e.path): e for e in DirectoryIterator(tmp_path)}
    assert entries["link"].symlink_status().type is FileType.symlink_file
    assert entries["link"].status().type is FileType.regular_file
    assert entries["dangling"].symlink_status().type is FileType.symlink_file
    assert entries["dangling"].status().type is FileType.file_not_found


def test_close_ends_iteration(tree):
    it = DirectoryIterator(tree)
    next(it)
    it.close()
    assert list(it) == []


def test_context_manager_closes(tree):
    with DirectoryIterator(tree) as it:
        first = next(it)
    assert first.path.startswith(str(tree))
    assert list(it) == []


def test_status_copied_from_known_non_symlink_status():
    entry = DirectoryEntry(
        "no-such-file-here", symlink_status=FileStatus(FileType.regular_file)
    )
    assert entry.status().type is FileType.regular_file


def test_unknown_status_is_queried(tree):
    entry = DirectoryEntry(tree / "sub")
    assert entry.status().type is FileType.directory_file
    assert entry.symlink_status().type is FileType.directory_file


def test_missing_path_status_not_found(tmp_path):
    entry = DirectoryEntry(tmp_path / "gone")
    assert entry.status().type is FileType.file_not_found
    assert entry.symlink_status().type is FileType.file_not_found


def test_replace_filename_resets_cache(tree):
    entry = DirectoryEntry(tree / "a.txt")
    assert entry.status().type is FileType.regular_file
    entry.replace_filename("sub")
    assert entry.path == os.path.join(str(tree), "sub")
    assert entry.status().type is FileType.directory_file


def test_replace_filename_without_parent():
    entry = DirectoryEntry("old")
    entry.replace_filename("new", FileStatus(FileType.fifo_file))
    assert entry.path == "new"
    assert entry.status().type is FileType.fifo_file


def test_entry_is_path_like(tree):
    entry = DirectoryEntry(tree / "a.txt")
    assert os.fspath(entry) == str(tree / "a.txt")
    with open(entry) as fh:
        assert fh.read() == "alpha"


def test_entries_compare_by_path(tree):
    entries = sorted(DirectoryIterator(tree))
    assert [e.path for e in entries] == sorted(e.path for e in entries)
    assert DirectoryEntry("x") == DirectoryEntry("x", FileStatus(FileType.regular_file))