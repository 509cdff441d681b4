"""Error kinds raised by the lister.

Both errors propagate to the caller untouched; the library never retries
or recovers from them.
"""
from __future__ import annotations

import os


class LsdirError(Exception):
    """Base class for all lsdir errors."""


class FilesystemError(LsdirError):
    """A root path or one of its descendants could not be inspected or listed."""

    def __init__(self, path: str | os.PathLike[str], cause: OSError) -> None:
        self.path = os.fspath(path)
        self.cause = cause
        self.errno = cause.errno
        reason = cause.strerror or str(cause)
        super().__init__(f"{self.path}: {reason}")


class PatternError(LsdirError, ValueError):
    """The wildcard pattern is syntactically invalid."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
