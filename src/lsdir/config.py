from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MAX_WORKERS = 64

STARTER_CONFIG = """[lister]
# Descend into subdirectories
recurse = true
# Shell wildcard matched against each file's base name
pattern = "*"
# Roots walked concurrently (1 = sequential)
workers = 1

[logging]
level = "WARNING"
# Optional rotating log file
# file = "lsdir.log"
"""


def _expand(p: str) -> str:
    return os.path.expandvars(os.path.expanduser(p))


@dataclass(frozen=True)
class ListerConfig:
    """Settings for a Lister plus the logging it runs under."""

    recurse: bool = True
    pattern: str = "*"
    workers: int = 1

    log_level: str = "WARNING"
    log_file: str | None = None

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ListerConfig":
        lister = data.get("lister", {})
        log = data.get("logging", {})

        pattern = lister.get("pattern", "*")
        if not isinstance(pattern, str):
            raise ValueError(f"Invalid pattern: {pattern!r}. Must be a string.")

        workers = int(lister.get("workers", 1))
        if workers <= 0 or workers > MAX_WORKERS:
            raise ValueError(f"Invalid workers: {workers}. Must be between 1 and {MAX_WORKERS}.")

        # Environment variable takes precedence if explicitly set
        log_level = os.environ.get("LSDIR_LOG_LEVEL") or log.get("level", "WARNING")
        log_level = str(log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {log_level}. Must be one of {LOG_LEVELS}.")

        log_file = log.get("file")
        if log_file:
            log_file = _expand(log_file)

        return ListerConfig(
            recurse=bool(lister.get("recurse", True)),
            pattern=pattern or "*",
            workers=workers,
            log_level=log_level,
            log_file=log_file,
        )

    @staticmethod
    def from_toml(path: str | Path) -> "ListerConfig":
        data = tomllib.loads(Path(_expand(str(path))).read_text(encoding="utf-8"))
        return ListerConfig.from_dict(data)


def load_config(path: str | Path | None = None) -> ListerConfig:
    """Load configuration from a TOML file, or defaults when *path* is None.

    Raises FileNotFoundError if *path* is given but missing, ValueError on
    invalid values.
    """
    if path is None:
        return ListerConfig.from_dict({})
    return ListerConfig.from_toml(path)
