from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, TYPE_CHECKING

from .errors import FilesystemError
from .models import ListResult, ListStats
from .pattern import MATCH_ALL, basename, compile_pattern
from .walker import walk

if TYPE_CHECKING:
    from .config import ListerConfig

logger = logging.getLogger(__name__)


def _as_roots(paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]]) -> list[str]:
    if isinstance(paths, (str, os.PathLike)):
        return [os.fspath(paths)]
    return [os.fspath(p) for p in paths]


@dataclass(frozen=True)
class Lister:
    """Lists files under one or more roots.

    Configuration is fixed for the lifetime of the instance; build a new
    one for different behavior. Each call is self-contained: nothing is
    cached between calls.
    """

    recurse: bool = True
    pattern: str | None = MATCH_ALL
    workers: int = 1

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"Invalid workers: {self.workers}. Must be at least 1.")

    @classmethod
    def from_config(cls, cfg: "ListerConfig") -> "Lister":
        return cls(recurse=cfg.recurse, pattern=cfg.pattern, workers=cfg.workers)

    def list(self, paths) -> list[str]:
        """Return the sorted, deduplicated files under *paths* matching the pattern.

        Raises FilesystemError if any root or descendant cannot be read and
        PatternError if the pattern is malformed. Nothing partial is returned.
        """
        return self.scan(paths).paths

    def scan(self, paths) -> ListResult:
        """Like ``list`` but also returns statistics about the call."""
        roots = _as_roots(paths)
        start = time.time()

        if self.workers > 1 and len(roots) > 1:
            found = self._collect_parallel(roots)
        else:
            found = self._collect(roots)

        # Validated only now: a filesystem failure takes precedence over a bad pattern.
        matcher = compile_pattern(self.pattern)
        # Byte order of the encoded path, as the filesystem stores it
        matched = sorted((p for p in found if matcher.match(basename(p))), key=os.fsencode)

        elapsed = time.time() - start
        logger.debug(
            f"Listed {len(roots)} root(s): {len(found)} files found, "
            f"{len(matched)} matched {matcher.pattern!r} in {elapsed:.3f}s"
        )
        return ListResult(
            paths=matched,
            stats=ListStats(
                roots=len(roots),
                files_found=len(found),
                files_matched=len(matched),
                elapsed_seconds=elapsed,
            ),
        )

    def _collect(self, roots: list[str]) -> set[str]:
        found: set[str] = set()
        for root in roots:
            files = walk(root, recurse=self.recurse)
            logger.debug(f"Walked {root}: {len(files)} files")
            found.update(files)
        return found

    def _collect_parallel(self, roots: list[str]) -> set[str]:
        """Walk roots concurrently; on failure raise the error of the earliest failing root."""
        found: set[str] = set()
        lock = threading.Lock()
        errors: dict[int, FilesystemError] = {}

        def _walk_into(root: str) -> None:
            files = walk(root, recurse=self.recurse)
            logger.debug(f"Walked {root}: {len(files)} files")
            with lock:
                found.update(files)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(_walk_into, root): i for i, root in enumerate(roots)}

            for future in as_completed(futures):
                if future.cancelled():
                    continue
                idx = futures[future]
                try:
                    future.result()
                except FilesystemError as e:
                    errors[idx] = e
                    # Earlier roots must still finish so the reported error is deterministic.
                    for other, other_idx in futures.items():
                        if other_idx > idx:
                            other.cancel()

        if errors:
            raise errors[min(errors)]
        return found


def new_lister(recurse: bool = True, pattern: str | None = MATCH_ALL) -> Lister:
    """Build a Lister. An empty or missing pattern matches everything."""
    return Lister(recurse=recurse, pattern=pattern or MATCH_ALL)
