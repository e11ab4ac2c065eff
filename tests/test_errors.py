import errno
import os
import pickle
from pathlib import Path

import pytest

from fsops.errors import FilesystemError


def test_message_without_paths():
    err = FilesystemError("fsops.current_path", errno.ENOENT)
    assert str(err) == "fsops.current_path: " + os.strerror(errno.ENOENT)


def test_message_with_one_path():
    err = FilesystemError("fsops.remove", errno.EACCES, "a/b")
    assert str(err) == 'fsops.remove: ' + os.strerror(errno.EACCES) + ': "a/b"'


def test_message_with_two_paths():
    err = FilesystemError("fsops.rename", errno.EXDEV, "old", "new")
    expected = 'fsops.rename: ' + os.strerror(errno.EXDEV) + ': "old", "new"'
    assert str(err) == expected


def test_empty_paths_are_left_out():
    err = FilesystemError("op", errno.EPERM, "", "")
    assert str(err) == "op: " + os.strerror(errno.EPERM)
    assert err.filename is None
    assert err.filename2 is None


def test_is_oserror_with_attributes():
    err = FilesystemError("fsops.copy_file", errno.EEXIST, "src", "dst")
    assert isinstance(err, OSError)
    assert err.errno == errno.EEXIST
    assert err.strerror == os.strerror(errno.EEXIST)
    assert err.filename == "src"
    assert err.filename2 == "dst"
    assert err.path1 == "src"
    assert err.path2 == "dst"
    assert err.message == "fsops.copy_file"


def test_accepts_path_objects():
    err = FilesystemError("op", errno.ENOTDIR, Path("x") / "y")
    assert err.path1 == os.path.join("x", "y")
    assert str(err).endswith('"' + os.path.join("x", "y") + '"')


def test_can_be_raised_and_caught_as_oserror():
    with pytest.raises(OSError) as info:
        raise FilesystemError("op", errno.ENOENT, "missing")
    assert info.value.errno == errno.ENOENT
    assert isinstance(info.value, FilesystemError)


def test_pickle_round_trip():
    err = FilesystemError("op", errno.EACCES, "p1", "p2")
    clone = pickle.loads(pickle.dumps(err))
    assert str(clone) == str(err)
    assert clone.errno == err.errno
    assert (clone.path1, clone.path2) == ("p1", "p2")