"""The exception raised by filesystem operations."""

from __future__ import annotations

import os
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def _path_text(p: Optional[PathLike]) -> str:
    if p is None:
        return ""
    return os.fspath(p)


class FilesystemError(OSError):
    """An operating-system error tied to a named operation and up to two paths.

    ``message`` names the operation that failed, ``errno_value`` is the system
    error number, and ``path1``/``path2`` are the paths involved, if any.
    """

    def __init__(
        self,
        message: str,
        errno_value: int,
        path1: Optional[PathLike] = None,
        path2: Optional[PathLike] = None,
    ) -> None:
        first = _path_text(path1)
        second = _path_text(path2)
        super().__init__(
            errno_value,
            os.strerror(errno_value),
            first or None,
            None,
            second or None,
        )
        self.message = message
        self.path1 = first
        self.path2 = second

    def __str__(self) -> str:
        text = f"{self.message}: {self.strerror}"
        if self.path1:
            text += f': "{self.path1}"'
        if self.path2:
            text += f', "{self.path2}"'
        return text

    def __reduce__(self):
        return (
            type(self),
            (self.message, self.errno, self.path1 or None, self.path2 or None),
        )