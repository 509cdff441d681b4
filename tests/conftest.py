"""Shared fixtures: the five-level x/y/z.txt tree."""
from __future__ import annotations

from pathlib import Path

import pytest

FILE_NAMES = ("x.txt", "y.txt", "z.txt")
LEVELS = ("", "a", "a/b", "a/b/c", "a/b/c/d")


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """root, root/a, ..., root/a/b/c/d each holding x.txt, y.txt and z.txt (15 files)."""
    root = tmp_path / "root"
    for level in LEVELS:
        d = root / level if level else root
        d.mkdir(parents=True, exist_ok=True)
        for name in FILE_NAMES:
            (d / name).write_text("this is a test", encoding="utf-8")
    return root


@pytest.fixture
def tree_files(tree: Path) -> set[str]:
    out: set[str] = set()
    for level in LEVELS:
        d = tree / level if level else tree
        for name in FILE_NAMES:
            out.add(str(d / name))
    return out
