from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ListStats:
    """Statistics from a single listing call."""

    roots: int = 0
    files_found: int = 0  # unique, before filtering
    files_matched: int = 0
    elapsed_seconds: float = 0.0


@dataclass
class ListResult:
    """Sorted, deduplicated paths plus the stats of the call that produced them."""

    paths: list[str] = field(default_factory=list)
    stats: ListStats = field(default_factory=ListStats)
