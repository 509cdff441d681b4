"""lsdir: deduplicated, sorted file listing across one or more roots.

Walks each root (recursively or one level deep), merges the results,
keeps only entries whose base name matches a shell-style wildcard and
returns them in lexicographic order.

Public API:
- Lister, new_lister
- ListerConfig, load_config
- compile_pattern, walk
- FilesystemError, PatternError
"""

from .config import ListerConfig, load_config
from .errors import LsdirError, FilesystemError, PatternError
from .lister import Lister, new_lister
from .models import ListResult, ListStats
from .pattern import WildcardPattern, compile_pattern
from .walker import walk

__all__ = [
    "Lister",
    "new_lister",
    "ListerConfig",
    "load_config",
    "ListResult",
    "ListStats",
    "WildcardPattern",
    "compile_pattern",
    "walk",
    "LsdirError",
    "FilesystemError",
    "PatternError",
]
