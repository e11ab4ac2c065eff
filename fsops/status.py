"""File types, permission bits and the status queries built on them."""

from __future__ import annotations

import enum
import errno
import os
import stat as _stat
from dataclasses import dataclass
from typing import Union

from .errors import FilesystemError, PathLike

_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})

# Windows error codes that mean "there is nothing at this path".
_NOT_FOUND_WINERRORS = frozenset(
    {
        2,    # ERROR_FILE_NOT_FOUND
        3,    # ERROR_PATH_NOT_FOUND
        15,   # ERROR_INVALID_DRIVE
        21,   # ERROR_NOT_READY
        53,   # ERROR_BAD_NETPATH
        87,   # ERROR_INVALID_PARAMETER
        123,  # ERROR_INVALID_NAME
        161,  # ERROR_BAD_PATHNAME
    }
)
_ERROR_SHARING_VIOLATION = 32

_FILE_ATTRIBUTE_REPARSE_POINT = 0x400
_IO_REPARSE_TAG_SYMLINK = 0xA000000C
_IO_REPARSE_TAG_MOUNT_POINT = 0xA0000003


class FileType(enum.Enum):
    """The kind of object a path names."""

    status_error = 0
    file_not_found = 1
    regular_file = 2
    directory_file = 3
    symlink_file = 4
    block_file = 5
    character_file = 6
    fifo_file = 7
    socket_file = 8
    reparse_file = 9
    type_unknown = 10


class Perms(enum.IntFlag):
    """Permission bits plus the modifier flags used by ``permissions()``."""

    no_perms = 0
    owner_read = 0o400
    owner_write = 0o200
    owner_exe = 0o100
    owner_all = 0o700
    group_read = 0o40
    group_write = 0o20
    group_exe = 0o10
    group_all = 0o70
    others_read = 0o4
    others_write = 0o2
    others_exe = 0o1
    others_all = 0o7
    all_all = 0o777
    set_uid_on_exe = 0o4000
    set_gid_on_exe = 0o2000
    sticky_bit = 0o1000
    perms_mask = 0o7777
    add_perms = 0x1000
    remove_perms = 0x2000
    symlink_perms = 0x4000
    perms_not_known = 0xFFFF


@dataclass(frozen=True)
class FileStatus:
    """The type and permissions of a filesystem object."""

    type: FileType = FileType.status_error
    permissions: Perms = Perms.perms_not_known

    def exists(self) -> bool:
        """True if the status is known and names an existing object."""
        return status_known(self) and self.type is not FileType.file_not_found


def _is_not_found(exc: OSError) -> bool:
    if exc.errno in _NOT_FOUND_ERRNOS:
        return True
    return getattr(exc, "winerror", None) in _NOT_FOUND_WINERRORS


def _failure_status(p: PathLike, exc: OSError) -> FileStatus:
    if _is_not_found(exc):
        return FileStatus(FileType.file_not_found, Perms.no_perms)
    if getattr(exc, "winerror", None) == _ERROR_SHARING_VIOLATION:
        return FileStatus(FileType.type_unknown)
    raise FilesystemError("status", exc.errno or 0, p) from exc


def _type_of(st: os.stat_result, follow: bool) -> FileType:
    mode = st.st_mode
    if not follow:
        attributes = getattr(st, "st_file_attributes", 0)
        if attributes & _FILE_ATTRIBUTE_REPARSE_POINT:
            tag = getattr(st, "st_reparse_tag", 0)
            if tag in (_IO_REPARSE_TAG_SYMLINK, _IO_REPARSE_TAG_MOUNT_POINT):
                return FileType.symlink_file
            return FileType.reparse_file
        if _stat.S_ISLNK(mode):
            return FileType.symlink_file
    checks = (
        (_stat.S_ISDIR, FileType.directory_file),
        (_stat.S_ISREG, FileType.regular_file),
        (_stat.S_ISBLK, FileType.block_file),
        (_stat.S_ISCHR, FileType.character_file),
        (_stat.S_ISFIFO, FileType.fifo_file),
        (_stat.S_ISSOCK, FileType.socket_file),
    )
    for test, kind in checks:
        if test(mode):
            return kind
    return FileType.type_unknown


def _status_from(st: os.stat_result, follow: bool) -> FileStatus:
    kind = _type_of(st, follow)
    if kind is FileType.type_unknown:
        return FileStatus(FileType.type_unknown)
    return FileStatus(kind, Perms(st.st_mode & Perms.perms_mask))


def status(p: PathLike) -> FileStatus:
    """Status of ``p``, following symbolic links.

    A missing path yields ``file_not_found``; other failures raise
    :class:`FilesystemError`.
    """
    try:
        st = os.stat(p)
    except OSError as exc:
        return _failure_status(p, exc)
    return _status_from(st, follow=True)


def symlink_status(p: PathLike) -> FileStatus:
    """Status of ``p`` itself, without following a final symbolic link."""
    try:
        st = os.lstat(p)
    except OSError as exc:
        return _failure_status(p, exc)
    return _status_from(st, follow=False)


def status_known(s: FileStatus) -> bool:
    """True unless ``s`` records a failed status query."""
    return s.type is not FileType.status_error


StatusOrPath = Union[FileStatus, PathLike]


def _resolve(p: StatusOrPath) -> FileStatus:
    return p if isinstance(p, FileStatus) else status(p)


def exists(p: StatusOrPath) -> bool:
    """True if the status (or the path's status) names an existing object."""
    return _resolve(p).exists()


def is_directory(p: StatusOrPath) -> bool:
    """True if the status (or the path, followed) is a directory."""
    return _resolve(p).type is FileType.directory_file


def is_regular_file(p: StatusOrPath) -> bool:
    """True if the status (or the path, followed) is a regular file."""
    return _resolve(p).type is FileType.regular_file


def is_symlink(p: StatusOrPath) -> bool:
    """True if the status (or the path itself, not followed) is a symbolic link."""
    s = p if isinstance(p, FileStatus) else symlink_status(p)
    return s.type is FileType.symlink_file


def is_other(p: StatusOrPath) -> bool:
    """True if it exists but is not a regular file, directory or symlink."""
    s = _resolve(p)
    return (
        s.exists()
        and s.type
        not in (FileType.regular_file, FileType.directory_file, FileType.symlink_file)
    )