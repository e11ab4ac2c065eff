"""Directory entries with cached status, and a non-recursive directory iterator."""

from __future__ import annotations

import errno
import functools
import os
from typing import Iterator, Optional

from .errors import FilesystemError, PathLike
from .status import FileStatus, FileType, is_symlink, status_known
from .status import status as _status_of
from .status import symlink_status as _symlink_status_of

_UNKNOWN = FileStatus(FileType.status_error)


@functools.total_ordering
class DirectoryEntry:
    """A path found in a directory, with lazily filled status caches."""

    __slots__ = ("path", "_status", "_symlink_status")

    def __init__(
        self,
        path: PathLike,
        status: FileStatus = _UNKNOWN,
        symlink_status: FileStatus = _UNKNOWN,
    ) -> None:
        self.path = os.fspath(path)
        self._status = status
        self._symlink_status = symlink_status

    def status(self) -> FileStatus:
        """Status of the entry, following symbolic links; cached after the first query."""
        if not status_known(self._status):
            # If the entry is known not to be a symlink, both statuses agree.
            if status_known(self._symlink_status) and not is_symlink(
                self._symlink_status
            ):
                self._status = self._symlink_status
            else:
                self._status = _status_of(self.path)
        return self._status

    def symlink_status(self) -> FileStatus:
        """Status of the entry itself, not following a symlink; cached."""
        if not status_known(self._symlink_status):
            self._symlink_status = _symlink_status_of(self.path)
        return self._symlink_status

    def replace_filename(
        self,
        filename: str,
        status: FileStatus = _UNKNOWN,
        symlink_status: FileStatus = _UNKNOWN,
    ) -> None:
        """Replace the last path element and reset the cached statuses."""
        parent = os.path.dirname(self.path)
        self.path = os.path.join(parent, filename) if parent else filename
        self._status = status
        self._symlink_status = symlink_status

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectoryEntry):
            return NotImplemented
        return self.path == other.path

    def __lt__(self, other: "DirectoryEntry") -> bool:
        if not isinstance(other, DirectoryEntry):
            return NotImplemented
        return self.path < other.path

    def __hash__(self) -> int:
        return hash(self.path)


def _cached_statuses(entry: os.DirEntry) -> tuple[FileStatus, FileStatus]:
    """Statuses known from the directory listing alone, without following links."""
    try:
        if entry.is_symlink():
            return _UNKNOWN, FileStatus(FileType.symlink_file)
        if entry.is_dir(follow_symlinks=False):
            known = FileStatus(FileType.directory_file)
            return known, known
        if entry.is_file(follow_symlinks=False):
            known = FileStatus(FileType.regular_file)
            return known, known
    except OSError:
        pass
    return _UNKNOWN, _UNKNOWN


class DirectoryIterator:
    """Iterates the entries of one directory, skipping ``.`` and ``..``."""

    def __init__(self, path: PathLike) -> None:
        self.path = os.fspath(path)
        if not self.path:
            raise FilesystemError(
                "directory_iterator::construct", errno.ENOENT, self.path
            )
        try:
            self._scanner: Optional[Iterator[os.DirEntry]] = os.scandir(self.path)
        except OSError as exc:
            raise FilesystemError(
                "directory_iterator::construct", exc.errno or 0, self.path
            ) from exc

    def __iter__(self) -> "DirectoryIterator":
        return self

    def __next__(self) -> DirectoryEntry:
        if self._scanner is None:
            raise StopIteration
        while True:
            try:
                found = next(self._scanner)
            except StopIteration:
                self.close()
                raise
            except OSError as exc:
                self.close()
                raise FilesystemError(
                    "directory_iterator::operator++", exc.errno or 0, self.path
                ) from exc
            if found.name in (".", ".."):
                continue
            sf, symlink_sf = _cached_statuses(found)
            return DirectoryEntry(os.path.join(self.path, found.name), sf, symlink_sf)

    def close(self) -> None:
        """Release the directory handle; further iteration yields nothing."""
        if self._scanner is not None:
            self._scanner.close()
            self._scanner = None

    def __enter__(self) -> "DirectoryIterator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()