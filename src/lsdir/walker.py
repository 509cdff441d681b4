from __future__ import annotations

import errno
import os
import stat
from typing import Iterator

from .errors import FilesystemError


def clean(path: str) -> str:
    """Drop "." segments and redundant separators from *path*.

    ".." segments are kept: the OS resolves "link/.." through the symlink
    target, so folding them lexically could name a different directory.
    """
    if os.pardir not in path.replace(os.altsep or os.sep, os.sep).split(os.sep):
        return os.path.normpath(path)
    drive, rest = os.path.splitdrive(path)
    if os.altsep:
        rest = rest.replace(os.altsep, os.sep)
    head = os.sep if rest.startswith(os.sep) else ""
    parts = [p for p in rest.split(os.sep) if p and p != os.curdir]
    return drive + head + os.sep.join(parts)


def _join(parent: str, name: str) -> str:
    return clean(os.path.join(parent, name))


def _is_dir(path: str) -> bool:
    try:
        st = os.stat(path)
    except OSError as e:
        raise FilesystemError(path, e) from e
    return stat.S_ISDIR(st.st_mode)


def _read_dir(path: str) -> list[tuple[str, bool]]:
    """List the immediate children of *path* as (name, is_dir), in name order.

    Children are classified without following symlinks.
    """
    try:
        with os.scandir(path) as it:
            children = [(e.name, e.is_dir(follow_symlinks=False)) for e in it]
    except OSError as e:
        raise FilesystemError(path, e) from e
    children.sort()
    return children


def walk(path: str | os.PathLike[str], recurse: bool = True) -> list[str]:
    """Return every non-directory entry under *path*.

    A non-directory *path* is returned on its own. With ``recurse=False``
    only the immediate children of a directory are considered. Any OS
    error aborts the walk with FilesystemError for the failing path.
    """
    raw = os.fspath(path)
    if not raw:
        raise FilesystemError(raw, FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), raw))

    # The path is opened as given; only emitted strings are cleaned.
    root = clean(raw)
    if not _is_dir(raw):
        return [root]

    if not recurse:
        return [_join(root, name) for name, is_dir in _read_dir(raw) if not is_dir]

    out: list[str] = []
    # Each frame is a directory and the iterator over its remaining children.
    stack: list[tuple[str, Iterator[tuple[str, bool]]]] = [(root, iter(_read_dir(raw)))]
    while stack:
        parent, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            continue
        name, is_dir = child
        full = _join(parent, name)
        if is_dir:
            stack.append((full, iter(_read_dir(full))))
        else:
            out.append(full)
    return out
