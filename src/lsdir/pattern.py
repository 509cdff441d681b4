"""Shell-style wildcard matching against base names.

Supported syntax:
- "*" matches any run of characters (including none)
- "?" matches exactly one character
- "[...]" character class with ranges ("a-z"), negated by a leading "^" or "!"
- "\\" escapes the next character, inside or outside a class

Unlike ``fnmatch``, malformed patterns are rejected with ``PatternError``
instead of being matched literally.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .errors import PatternError

MATCH_ALL = "*"


def is_match_all(pattern: str | None) -> bool:
    return not pattern or pattern == MATCH_ALL


def basename(path: str) -> str:
    """Return the final segment of *path*, ignoring trailing separators."""
    stripped = path.rstrip("/" + os.sep)
    return os.path.basename(stripped) if stripped else path


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one (possibly escaped) character of a class body starting at *i*."""
    if i >= len(pattern):
        raise PatternError(pattern, "unterminated character class")
    c = pattern[i]
    if c in "-]":
        raise PatternError(pattern, f"unescaped {c!r} in character class")
    if c == "\\":
        i += 1
        if i >= len(pattern):
            raise PatternError(pattern, "trailing backslash")
        c = pattern[i]
    return c, i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the class body after "[" at *i*; return regex and next index."""
    negate = False
    if i < len(pattern) and pattern[i] in "^!":
        negate = True
        i += 1
    if i < len(pattern) and pattern[i] == "]":
        raise PatternError(pattern, "empty character class")

    items: list[str] = []
    while True:
        if i >= len(pattern):
            raise PatternError(pattern, "unterminated character class")
        if pattern[i] == "]":
            i += 1
            break
        lo, i = _class_char(pattern, i)
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if lo > hi:
                raise PatternError(pattern, f"reversed range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))

    return ("[^" if negate else "[") + "".join(items) + "]", i


def translate(pattern: str) -> str:
    """Translate a wildcard pattern into an unanchored regex body (use with fullmatch)."""
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            while i < n and pattern[i] == "*":
                i += 1
            out.append(".*")
        elif c == "?":
            out.append(".")
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            out.append(cls)
        elif c == "\\":
            if i >= n:
                raise PatternError(pattern, "trailing backslash")
            out.append(re.escape(pattern[i]))
            i += 1
        else:
            out.append(re.escape(c))
    return "".join(out)


@dataclass(frozen=True)
class WildcardPattern:
    """A validated wildcard pattern; ``regex`` is None when it matches everything."""

    pattern: str
    regex: re.Pattern[str] | None = None

    @property
    def matches_all(self) -> bool:
        return self.regex is None

    def match(self, name: str) -> bool:
        if self.regex is None:
            return True
        return self.regex.fullmatch(name) is not None


def compile_pattern(pattern: str | None) -> WildcardPattern:
    """Validate and compile *pattern*. Raises PatternError if it is malformed."""
    if is_match_all(pattern):
        return WildcardPattern(MATCH_ALL)
    if not isinstance(pattern, str):
        raise PatternError(repr(pattern), "pattern must be a string")
    return WildcardPattern(pattern, re.compile(translate(pattern), re.DOTALL))
