from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

import typer

from .config import MAX_WORKERS, ListerConfig, STARTER_CONFIG, load_config
from .errors import FilesystemError, PatternError
from .lister import Lister

app = typer.Typer(add_completion=False, no_args_is_help=True)

EXIT_FILESYSTEM_ERROR = 1
EXIT_PATTERN_ERROR = 2


def _setup_logging(log_file: str | None, log_level: str, verbose: bool) -> None:
    """Configure the lsdir logger."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.WARNING)

    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        from logging.handlers import RotatingFileHandler
        handlers.append(RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5))

    logger = logging.getLogger("lsdir")
    logger.setLevel(level)
    # Records stop here so a configured root logger does not print them twice
    logger.propagate = False
    # Repeated invocations in one process must not stack handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    for h in handlers:
        h.setFormatter(logging.Formatter(fmt, datefmt))
        logger.addHandler(h)


def _cfg(config: str) -> ListerConfig:
    try:
        return load_config(config or None)
    except (OSError, ValueError) as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e


@app.command()
def init(out: str = typer.Option("lsdir.toml", help="Write example config to this path")):
    """Write a starter config file."""
    outp = Path(out)
    outp.write_text(STARTER_CONFIG, encoding="utf-8")
    typer.echo(f"Wrote {outp}")


@app.command()
def ls(
    paths: list[str] = typer.Argument(None, help="Files or directories to list (default: .)"),
    config: str = typer.Option("", help="TOML config file"),
    recursive: bool = typer.Option(None, "--recursive/--no-recursive", help="Override recurse config"),
    pattern: str = typer.Option(None, "--pattern", "-p", help="Wildcard matched against base names"),
    workers: int = typer.Option(None, help="Override workers config"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array instead of one path per line"),
    stats: bool = typer.Option(False, "--stats", help="Print a summary to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"),
):
    """List files under PATHS, deduplicated and sorted."""
    cfg = _cfg(config)

    # CLI flag > config setting
    if recursive is not None:
        cfg = dataclasses.replace(cfg, recurse=recursive)
    if pattern is not None:
        cfg = dataclasses.replace(cfg, pattern=pattern)
    if workers is not None:
        if workers < 1 or workers > MAX_WORKERS:
            raise typer.BadParameter(
                f"Invalid workers: {workers}. Must be between 1 and {MAX_WORKERS}.", param_hint="--workers"
            )
        cfg = dataclasses.replace(cfg, workers=workers)

    _setup_logging(cfg.log_file, cfg.log_level, verbose)

    lister = Lister.from_config(cfg)
    try:
        result = lister.scan(paths or ["."])
    except FilesystemError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_FILESYSTEM_ERROR)
    except PatternError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_PATTERN_ERROR)

    if as_json:
        typer.echo(json.dumps(result.paths, indent=2))
    else:
        for p in result.paths:
            typer.echo(p)

    if stats:
        s = result.stats
        typer.echo(
            f"{s.files_matched} of {s.files_found} files matched across {s.roots} root(s) "
            f"in {s.elapsed_seconds:.3f}s",
            err=True,
        )


if __name__ == "__main__":
    app()
