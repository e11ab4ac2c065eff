import os

import pytest

from fsops.errors import FilesystemError
from fsops.status import (
    FileStatus,
    FileType,
    Perms,
    exists,
    is_directory,
    is_other,
    is_regular_file,
    is_symlink,
    status,
    status_known,
    symlink_status,
)


@pytest.fixture
def regular(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("contents")
    return f


def test_regular_file_status(regular):
    s = status(regular)
    assert s.type is FileType.regular_file
    assert s.exists()
    assert is_regular_file(regular)
    assert not is_directory(regular)


def test_directory_status(tmp_path):
    s = status(tmp_path)
    assert s.type is FileType.directory_file
    assert is_directory(tmp_path)
    assert not is_regular_file(tmp_path)


def test_missing_path_is_not_found(tmp_path):
    s = status(tmp_path / "nothing")
    assert s == FileStatus(FileType.file_not_found, Perms.no_perms)
    assert not s.exists()
    assert status_known(s)
    assert not exists(tmp_path / "nothing")


def test_not_a_directory_component_is_not_found(regular):
    assert status(regular / "child").type is FileType.file_not_found
    assert symlink_status(regular / "child").type is FileType.file_not_found


def test_permissions_are_reported(regular):
    os.chmod(regular, 0o640)
    assert status(regular).permissions == Perms(0o640)
    assert status(regular).permissions & Perms.owner_read


def test_symlink_followed_and_not_followed(regular, tmp_path):
    link = tmp_path / "link"
    os.symlink(regular, link)
    assert status(link).type is FileType.regular_file
    assert symlink_status(link).type is FileType.symlink_file
    assert is_symlink(link)
    assert not is_symlink(regular)
    assert is_regular_file(link)


def test_dangling_symlink(tmp_path):
    link = tmp_path / "dangling"
    os.symlink(tmp_path / "absent", link)
    assert status(link).type is FileType.file_not_found
    assert symlink_status(link).type is FileType.symlink_file
    assert not exists(link)
    assert exists(symlink_status(link))


def test_symlink_loop_raises(tmp_path):
    loop = tmp_path / "loop"
    os.symlink(loop, loop)
    with pytest.raises(FilesystemError) as info:
        status(loop)
    assert info.value.message == "status"
    assert info.value.path1 == str(loop)


def test_status_known():
    assert not status_known(FileStatus(FileType.status_error))
    assert status_known(FileStatus(FileType.type_unknown))
    assert not FileStatus(FileType.status_error).exists()


def test_default_status_is_unknown():
    s = FileStatus()
    assert s.type is FileType.status_error
    assert s.permissions is Perms.perms_not_known


def test_predicates_accept_status_objects():
    dir_status = FileStatus(FileType.directory_file, Perms.owner_all)
    assert is_directory(dir_status)
    assert exists(dir_status)
    assert not is_other(dir_status)
    assert is_other(FileStatus(FileType.fifo_file))
    assert is_symlink(FileStatus(FileType.symlink_file))


def test_fifo_is_other(tmp_path):
    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)
    assert status(fifo).type is FileType.fifo_file
    assert is_other(fifo)
    assert not is_other(tmp_path)


def test_missing_is_not_other(tmp_path):
    assert not is_other(tmp_path / "absent")


def test_status_is_hashable_and_comparable(regular):
    assert status(regular) == status(regular)
    assert len({status(regular), status(regular)}) == 1