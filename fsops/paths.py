"""Path composition: absolute, canonical and relative forms, and well-known directories."""

from __future__ import annotations

import errno
import functools
import os
import re
from typing import Iterable, List, Optional, Tuple

from .errors import FilesystemError, PathLike
from .status import FileType, is_directory
from .status import status as _status
from .status import symlink_status as _symlink_status

_WINDOWS = os.name == "nt"
_SEPARATORS = "/\\" if _WINDOWS else "/"
_SPLIT = re.compile(r"[/\\]+" if _WINDOWS else r"/+")


def _rewrap(operation: str, exc: FilesystemError, *paths: PathLike) -> FilesystemError:
    return FilesystemError(operation, exc.errno or 0, *paths)


def _parse(text: str) -> Tuple[str, str, str]:
    """Split ``text`` into root name, root directory and relative path."""
    root_name = ""
    i = 0
    if (
        len(text) > 2
        and text[0] in _SEPARATORS
        and text[1] in _SEPARATORS
        and text[2] not in _SEPARATORS
    ):
        # Network form: "//name".
        j = 2
        while j < len(text) and text[j] not in _SEPARATORS:
            j += 1
        root_name, i = text[:j], j
    elif _WINDOWS and len(text) >= 2 and text[1] == ":":
        root_name, i = text[:2], 2

    root_directory = ""
    if i < len(text) and text[i] in _SEPARATORS:
        root_directory = text[i]
        while i < len(text) and text[i] in _SEPARATORS:
            i += 1
    return root_name, root_directory, text[i:]


def _root_elements(text: str) -> List[str]:
    root_name, root_directory, _ = _parse(text)
    return [part for part in (root_name, root_directory) if part]


def _elements(text: str) -> List[str]:
    """The elements of ``text``: root name, root directory, names, and a
    final ``.`` standing for a trailing separator."""
    root_name, root_directory, rel = _parse(text)
    out = [part for part in (root_name, root_directory) if part]
    names = [name for name in _SPLIT.split(rel) if name]
    out.extend(names)
    if names and rel[-1] in _SEPARATORS:
        out.append(".")
    return out


def _is_absolute(text: str) -> bool:
    root_name, root_directory, _ = _parse(text)
    if _WINDOWS:
        return bool(root_name and root_directory)
    return bool(root_directory)


def _append(left: str, right: str) -> str:
    if not right:
        return left
    if not left:
        return right
    if (
        left[-1] in _SEPARATORS
        or right[0] in _SEPARATORS
        or (_WINDOWS and left.endswith(":"))
    ):
        return left + right
    return left + os.sep + right


def _join(parts: Iterable[str]) -> str:
    return functools.reduce(_append, parts, "")


def absolute(p: PathLike, base: Optional[PathLike] = None) -> str:
    """Compose ``p`` with ``base`` (default: the current directory) into an absolute path."""
    text = os.fspath(p)
    base_text = current_path() if base is None else os.fspath(base)
    abs_base = base_text if _is_absolute(base_text) else absolute(base_text)

    if not text:
        return abs_base

    root_name, root_directory, _ = _parse(text)
    base_root_name, base_root_directory, base_rel = _parse(abs_base)
    _, _, rel = _parse(text)

    if root_name:
        if not root_directory:
            return _join([root_name, base_root_directory, base_rel, rel])
        return text
    if root_directory:
        if not _WINDOWS and not base_root_name:
            return text
        return _append(base_root_name, text)
    return _append(abs_base, text)


def canonical(p: PathLike, base: Optional[PathLike] = None) -> str:
    """Absolute path to ``p`` with no ``.``, ``..`` or symbolic-link elements.

    ``p`` must exist; otherwise :class:`FilesystemError` is raised.
    """
    text = os.fspath(p)
    source = text if _is_absolute(text) else absolute(text, base)

    try:
        found = _status(source)
    except FilesystemError as exc:
        raise _rewrap("canonical", exc, source) from exc
    if found.type is FileType.file_not_found:
        raise FilesystemError("canonical", errno.ENOENT, source)

    while True:
        parts = _elements(source)
        root = _root_elements(source)
        result: List[str] = []
        for index, element in enumerate(parts):
            if element == ".":
                continue
            if element == "..":
                if result and result != root:
                    result.pop()
                continue
            result.append(element)
            current = _join(result)
            try:
                is_link = _symlink_status(current).type is FileType.symlink_file
            except FilesystemError as exc:
                raise _rewrap("canonical", exc, current) from exc
            if is_link:
                try:
                    link = os.readlink(current)
                except OSError as exc:
                    raise FilesystemError(
                        "read_symlink", exc.errno or 0, current
                    ) from exc
                result.pop()
                rest = parts[index + 1:]
                if _is_absolute(link):
                    source = _join([link, *rest])
                else:
                    source = _join([*result, link, *rest])
                break
        else:
            return _join(result)


def weakly_canonical(p: PathLike) -> str:
    """Canonical form of the longest existing leading part of ``p``, followed by
    the rest of ``p``, normalised lexically."""
    text = os.fspath(p)
    head = _elements(text)
    tail: List[str] = []
    while head:
        current = _join(head)
        try:
            found = _status(current)
        except FilesystemError as exc:
            raise _rewrap("weakly_canonical", exc, current) from exc
        if found.type is not FileType.file_not_found:
            break
        tail.insert(0, head.pop())

    if not head:
        return lexically_normal(text)

    head_text = _join(head)
    try:
        resolved = canonical(head_text)
    except FilesystemError as exc:
        raise _rewrap("weakly_canonical", exc, head_text) from exc
    if not tail:
        return resolved
    combined = _join([resolved, *tail])
    if any(element in (".", "..") for element in tail):
        return lexically_normal(combined)
    return combined


def lexically_normal(p: PathLike) -> str:
    """Remove redundant ``.`` and ``name/..`` elements without touching the filesystem."""
    text = os.fspath(p)
    if not text:
        return text
    parts = _elements(text)
    root_count = len(_root_elements(text))
    has_root_directory = bool(_parse(text)[1])
    last = len(parts) - 1

    out: List[str] = []
    for index, element in enumerate(parts):
        if element == "." and 0 < index < last:
            continue
        if element == "..":
            if len(out) > root_count and out[-1] not in (".", ".."):
                out.pop()
                continue
            if len(out) == root_count and has_root_directory:
                continue
        out.append(element)

    if not out:
        return "."
    return _join(out)


def lexically_relative(p: PathLike, base: PathLike) -> str:
    """Path from ``base`` to ``p``, by elements alone; empty if there is none."""
    mine = _elements(os.fspath(p))
    theirs = _elements(os.fspath(base))
    common = 0
    for a, b in zip(mine, theirs):
        if a != b:
            break
        common += 1
    if common == 0:
        return ""
    if common == len(mine) and common == len(theirs):
        return "."
    ups = [".."] * (len(theirs) - common)
    return _join([*ups, *mine[common:]])


def lexically_proximate(p: PathLike, base: PathLike) -> str:
    """``lexically_relative(p, base)``, or ``p`` itself when that is empty."""
    found = lexically_relative(p, base)
    return found if found else os.fspath(p)


def relative(p: PathLike, base: Optional[PathLike] = None) -> str:
    """Path from ``base`` (default: the current directory) to ``p``, after
    resolving both with :func:`weakly_canonical`."""
    base_text = current_path() if base is None else os.fspath(base)
    try:
        wc_base = weakly_canonical(base_text)
        wc_p = weakly_canonical(p)
    except FilesystemError as exc:
        raise _rewrap("relative", exc, base_text) from exc
    return lexically_relative(wc_p, wc_base)


def current_path() -> str:
    """The current working directory."""
    try:
        return os.getcwd()
    except OSError as exc:
        raise FilesystemError("current_path", exc.errno or 0) from exc


def set_current_path(p: PathLike) -> None:
    """Change the current working directory to ``p``."""
    try:
        os.chdir(p)
    except OSError as exc:
        raise FilesystemError("current_path", exc.errno or 0, p) from exc


@functools.lru_cache(maxsize=None)
def initial_path() -> str:
    """The working directory at the first call; the same value ever after."""
    return current_path()


def system_complete(p: PathLike) -> str:
    """``p`` made absolute the way the operating system resolves it."""
    text = os.fspath(p)
    if not text:
        return text
    if _WINDOWS:
        try:
            return os.path.abspath(text)
        except OSError as exc:
            raise FilesystemError("system_complete", exc.errno or 0, text) from exc
    if _is_absolute(text):
        return text
    return _append(current_path(), text)


def _windows_temp_directory() -> str:
    for index, name in enumerate(("TMP", "TEMP", "LOCALAPPDATA", "USERPROFILE")):
        value = os.environ.get(name, "")
        if not value:
            continue
        candidate = _append(value, "Temp") if index >= 2 else value
        try:
            if is_directory(candidate):
                return candidate
        except FilesystemError:
            continue
    windows = os.environ.get("SystemRoot") or os.environ.get("windir")
    if not windows:
        raise FilesystemError("temp_directory_path", errno.ENOENT)
    return _append(windows, "Temp")


def temp_directory_path() -> str:
    """Directory for temporary files, from the environment or the system default."""
    if _WINDOWS:
        return _windows_temp_directory()
    value = None
    for name in ("TMPDIR", "TMP", "TEMP", "TEMPDIR"):
        if name in os.environ:
            value = os.environ[name]
            break
    candidate = "/tmp" if value is None else value
    if not candidate or not is_directory(candidate):
        raise FilesystemError("temp_directory_path", errno.ENOTDIR, candidate)
    return candidate