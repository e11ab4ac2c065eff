"""Operations that create, copy, query, change and remove filesystem objects."""

from __future__ import annotations

import enum
import errno
import os
import shutil
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .directory import DirectoryIterator
from .errors import FilesystemError, PathLike
from .status import FileStatus, FileType, Perms
from .status import status as _status
from .status import symlink_status as _symlink_status

_BUFFER_SIZE = 32768
_ACTIVE_BITS = Perms.all_all | Perms.set_uid_on_exe | Perms.set_gid_on_exe | Perms.sticky_bit
_ANY_WRITE = Perms.owner_write | Perms.group_write | Perms.others_write
_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


class CopyOption(enum.Enum):
    """What ``copy_file`` does when the target already exists."""

    fail_if_exists = 0
    overwrite_if_exists = 1


@dataclass(frozen=True)
class SpaceInfo:
    """Sizes, in bytes, of the filesystem holding a path."""

    capacity: int
    free: int
    available: int


@contextmanager
def _reporting(operation: str, *paths: Optional[PathLike]) -> Iterator[None]:
    """Turn an ``OSError`` raised inside the block into a :class:`FilesystemError`."""
    try:
        yield
    except FilesystemError:
        raise
    except OSError as exc:
        raise FilesystemError(operation, exc.errno or 0, *paths) from exc


def _quiet_status(p: PathLike) -> FileStatus:
    """Status of ``p``; a failed query yields ``status_error`` instead of raising."""
    try:
        return _status(p)
    except FilesystemError:
        return FileStatus(FileType.status_error)


def _query_type(p: PathLike, operation: str) -> FileType:
    try:
        return _symlink_status(p).type
    except FilesystemError as exc:
        raise FilesystemError(operation, exc.errno or 0, p) from exc


def _remove_file_or_directory(p: PathLike, kind: FileType, operation: str) -> bool:
    if kind is FileType.file_not_found:
        return False
    use_rmdir = kind is FileType.directory_file or (
        os.name == "nt" and kind is FileType.symlink_file and os.path.isdir(p)
    )
    try:
        if use_rmdir:
            os.rmdir(p)
        else:
            os.unlink(p)
    except OSError as exc:
        # Something else removed it first: the goal is met all the same.
        if exc.errno not in _NOT_FOUND_ERRNOS:
            raise FilesystemError(operation, exc.errno or 0, p) from exc
    return True


def _remove_all(p: PathLike, kind: FileType) -> int:
    count = 1
    if kind is FileType.directory_file:
        with DirectoryIterator(p) as entries:
            children = [entry.path for entry in entries]
        for child in children:
            count += _remove_all(child, _query_type(child, "remove_all"))
    _remove_file_or_directory(p, kind, "remove")
    return count


def copy(source: PathLike, target: PathLike) -> None:
    """Copy a symlink, directory or regular file, according to what ``source`` is."""
    try:
        kind = _symlink_status(source).type
    except FilesystemError as exc:
        raise FilesystemError("copy", exc.errno or 0, source, target) from exc
    if kind is FileType.symlink_file:
        copy_symlink(source, target)
    elif kind is FileType.directory_file:
        copy_directory(source, target)
    elif kind is FileType.regular_file:
        copy_file(source, target, CopyOption.fail_if_exists)
    else:
        raise FilesystemError("copy", errno.ENOSYS, source, target)


def copy_directory(source: PathLike, target: PathLike) -> None:
    """Create directory ``target`` with the permissions of directory ``source``."""
    with _reporting("copy_directory", source, target):
        mode = os.stat(source).st_mode
        os.mkdir(target, mode & Perms.perms_mask)


def copy_file(
    source: PathLike,
    target: PathLike,
    option: CopyOption = CopyOption.fail_if_exists,
) -> None:
    """Copy the contents and permissions of ``source`` into ``target``."""
    flags = os.O_CREAT | os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0)
    if option is CopyOption.fail_if_exists:
        flags |= os.O_EXCL
    with _reporting("copy_file", source, target):
        with open(source, "rb") as src:
            mode = os.fstat(src.fileno()).st_mode & Perms.perms_mask
            fd = os.open(target, flags, mode)
            with open(fd, "wb") as dst:
                shutil.copyfileobj(src, dst, _BUFFER_SIZE)


def copy_symlink(existing_symlink: PathLike, new_symlink: PathLike) -> None:
    """Create ``new_symlink`` pointing where ``existing_symlink`` points."""
    create_symlink(read_symlink(existing_symlink), new_symlink)


def create_directories(p: PathLike) -> bool:
    """Create ``p`` and any missing parents; True if ``p`` itself was created."""
    text = os.fspath(p)
    head, name = os.path.split(text)
    # A trailing separator or a final "." or ".." stands for the parent itself.
    if name in ("", ".", "..") and head and head != text:
        return create_directories(head)

    if _quiet_status(text).type is FileType.directory_file:
        return False

    parent = os.path.dirname(text)
    if parent and parent != text:
        if _quiet_status(parent).type is FileType.file_not_found:
            try:
                create_directories(parent)
            except FilesystemError as exc:
                raise FilesystemError(
                    "create_directories", exc.errno or 0, parent
                ) from exc

    return create_directory(text)


def create_directory(p: PathLike) -> bool:
    """Create directory ``p``; False if it already exists as a directory."""
    try:
        os.mkdir(p, 0o777)
    except OSError as exc:
        if exc.errno == errno.EEXIST and _quiet_status(p).type is FileType.directory_file:
            return False
        raise FilesystemError("create_directory", exc.errno or 0, p) from exc
    return True


def create_directory_symlink(target: PathLike, link: PathLike) -> None:
    """Create ``link`` as a symbolic link to the directory ``target``."""
    with _reporting("create_directory_symlink", target, link):
        os.symlink(target, link, target_is_directory=True)


def create_hard_link(target: PathLike, link: PathLike) -> None:
    """Create ``link`` as a new hard link to ``target``."""
    with _reporting("create_hard_link", target, link):
        os.link(target, link)


def create_symlink(target: PathLike, link: PathLike) -> None:
    """Create ``link`` as a symbolic link to ``target``."""
    with _reporting("create_symlink", target, link):
        os.symlink(target, link)


def equivalent(p1: PathLike, p2: PathLike) -> bool:
    """True if both paths resolve to the same file.

    If only one path exists the answer is False; if neither does it is an error.
    """
    failures: list[Optional[OSError]] = []
    results: list[Optional[os.stat_result]] = []
    for p in (p1, p2):
        try:
            results.append(os.stat(p))
            failures.append(None)
        except OSError as exc:
            results.append(None)
            failures.append(exc)

    s1, s2 = results
    if s1 is None or s2 is None:
        if s1 is None and s2 is None:
            first = failures[0]
            raise FilesystemError(
                "equivalent", (first.errno if first else 0) or 0, p1, p2
            )
        return False

    return (
        os.path.samestat(s1, s2)
        and s1.st_size == s2.st_size
        and s1.st_mtime_ns == s2.st_mtime_ns
    )


def file_size(p: PathLike) -> int:
    """Size in bytes of the regular file ``p``."""
    with _reporting("file_size", p):
        st = os.stat(p)
    if _status_type(st) is not FileType.regular_file:
        raise FilesystemError("file_size", errno.EPERM, p)
    return st.st_size


def _status_type(st: os.stat_result) -> FileType:
    import stat as _stat

    if _stat.S_ISREG(st.st_mode):
        return FileType.regular_file
    if _stat.S_ISDIR(st.st_mode):
        return FileType.directory_file
    return FileType.type_unknown


def hard_link_count(p: PathLike) -> int:
    """Number of hard links to ``p``."""
    with _reporting("hard_link_count", p):
        return os.stat(p).st_nlink


def is_empty(p: PathLike) -> bool:
    """True for a directory with no entries or a file of size zero."""
    with _reporting("is_empty", p):
        st = os.stat(p)
    if _status_type(st) is FileType.directory_file:
        with DirectoryIterator(p) as entries:
            return next(entries, None) is None
    return st.st_size == 0


def last_write_time(p: PathLike) -> int:
    """Modification time of ``p`` in whole seconds since the epoch."""
    with _reporting("last_write_time", p):
        return os.stat(p).st_mtime_ns // 1_000_000_000


def set_last_write_time(p: PathLike, new_time: Union[int, float]) -> None:
    """Set the modification time of ``p``, keeping its access time."""
    with _reporting("last_write_time", p):
        st = os.stat(p)
        os.utime(p, ns=(st.st_atime_ns, int(new_time * 1_000_000_000)))


def permissions(p: PathLike, prms: Union[Perms, int]) -> None:
    """Set, add (``add_perms``) or remove (``remove_perms``) permission bits of ``p``.

    With ``symlink_perms`` the link itself is changed where the system allows it.
    """
    prms = Perms(prms)
    if prms & Perms.add_perms and prms & Perms.remove_perms:
        raise ValueError("add_perms and remove_perms are mutually exclusive")

    if (
        os.name == "nt"
        and prms & (Perms.add_perms | Perms.remove_perms)
        and not prms & _ANY_WRITE
    ):
        # Only the read-only attribute can change there, and it would not.
        return

    follow = not prms & Perms.symlink_perms
    try:
        current = _status(p) if follow else _symlink_status(p)
    except FilesystemError as exc:
        raise FilesystemError("permissions", exc.errno or 0, p) from exc
    if current.type is FileType.file_not_found:
        raise FilesystemError("permissions", errno.ENOENT, p)

    bits = int(prms)
    if prms & Perms.add_perms:
        bits |= int(current.permissions)
    elif prms & Perms.remove_perms:
        bits = int(current.permissions) & ~bits
    mode = bits & int(_ACTIVE_BITS)

    no_follow_supported = (
        os.chmod in os.supports_follow_symlinks
        and not sys.platform.startswith(("linux", "sunos"))
    )
    with _reporting("permissions", p):
        if not follow and no_follow_supported:
            os.chmod(p, mode, follow_symlinks=False)
        else:
            os.chmod(p, mode)


def read_symlink(p: PathLike) -> str:
    """Target of the symbolic link ``p``."""
    with _reporting("read_symlink", p):
        return os.readlink(p)


def remove(p: PathLike) -> bool:
    """Remove the file, empty directory or symlink ``p``; False if it did not exist."""
    kind = _query_type(p, "remove")
    return _remove_file_or_directory(p, kind, "remove")


def remove_all(p: PathLike) -> int:
    """Remove ``p`` and, for a directory, everything in it; return how many were removed."""
    kind = _query_type(p, "remove_all")
    if kind in (FileType.status_error, FileType.file_not_found):
        return 0
    return _remove_all(p, kind)


def rename(old_p: PathLike, new_p: PathLike) -> None:
    """Move ``old_p`` to ``new_p``, replacing an existing ``new_p``."""
    with _reporting("rename", old_p, new_p):
        os.replace(old_p, new_p)


def resize_file(p: PathLike, size: int) -> None:
    """Truncate or extend the file ``p`` to ``size`` bytes."""
    with _reporting("resize_file", p):
        os.truncate(p, size)


def space(p: PathLike) -> SpaceInfo:
    """Capacity, free and available bytes of the filesystem holding ``p``."""
    with _reporting("space", p):
        if hasattr(os, "statvfs"):
            vfs = os.statvfs(p)
            unit = vfs.f_frsize or vfs.f_bsize
            return SpaceInfo(
                capacity=vfs.f_blocks * unit,
                free=vfs.f_bfree * unit,
                available=vfs.f_bavail * unit,
            )
        usage = shutil.disk_usage(p)
        return SpaceInfo(capacity=usage.total, free=usage.free, available=usage.free)