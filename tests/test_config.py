"""Tests for configuration parsing and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from lsdir import Lister
from lsdir.config import ListerConfig, STARTER_CONFIG, load_config


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "lsdir.toml"
    p.write_text(text, encoding="utf-8")
    return p


class TestListerConfig:
    """Test lister configuration parsing and validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("LSDIR_LOG_LEVEL", raising=False)
        cfg = load_config()
        assert cfg.recurse is True
        assert cfg.pattern == "*"
        assert cfg.workers == 1
        assert cfg.log_level == "WARNING"
        assert cfg.log_file is None

    def test_from_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("LSDIR_LOG_LEVEL", raising=False)
        p = _write(tmp_path, """
[lister]
recurse = false
pattern = "x*"
workers = 4

[logging]
level = "debug"
""")
        cfg = load_config(p)
        assert cfg.recurse is False
        assert cfg.pattern == "x*"
        assert cfg.workers == 4
        assert cfg.log_level == "DEBUG"

    def test_missing_sections_use_defaults(self, tmp_path: Path):
        cfg = ListerConfig.from_toml(_write(tmp_path, ""))
        assert cfg == ListerConfig(log_level=cfg.log_level)

    def test_empty_pattern_means_match_all(self, tmp_path: Path):
        cfg = ListerConfig.from_toml(_write(tmp_path, '[lister]\npattern = ""\n'))
        assert cfg.pattern == "*"

    def test_starter_config_parses(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("LSDIR_LOG_LEVEL", raising=False)
        cfg = ListerConfig.from_toml(_write(tmp_path, STARTER_CONFIG))
        assert cfg == ListerConfig()

    def test_env_overrides_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LSDIR_LOG_LEVEL", "info")
        cfg = ListerConfig.from_toml(_write(tmp_path, '[logging]\nlevel = "ERROR"\n'))
        assert cfg.log_level == "INFO"

    def test_log_file_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = ListerConfig.from_toml(_write(tmp_path, '[logging]\nfile = "~/lsdir.log"\n'))
        assert cfg.log_file == str(tmp_path / "lsdir.log")

    @pytest.mark.parametrize("workers", [0, -1, 65])
    def test_invalid_workers(self, tmp_path: Path, workers: int):
        with pytest.raises(ValueError, match="workers"):
            ListerConfig.from_toml(_write(tmp_path, f"[lister]\nworkers = {workers}\n"))

    def test_invalid_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("LSDIR_LOG_LEVEL", raising=False)
        with pytest.raises(ValueError, match="log level"):
            ListerConfig.from_toml(_write(tmp_path, '[logging]\nlevel = "LOUD"\n'))

    def test_invalid_pattern_type(self, tmp_path: Path):
        with pytest.raises(ValueError, match="pattern"):
            ListerConfig.from_toml(_write(tmp_path, "[lister]\npattern = 3\n"))

    def test_invalid_toml(self, tmp_path: Path):
        with pytest.raises(ValueError):
            ListerConfig.from_toml(_write(tmp_path, "[lister\n"))

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_config_is_frozen(self):
        cfg = ListerConfig()
        with pytest.raises(AttributeError):
            cfg.recurse = False  # type: ignore[misc]


class TestListerFromConfig:
    def test_builds_lister(self, tree: Path):
        lister = Lister.from_config(ListerConfig(recurse=False, pattern="x*", workers=2))
        assert (lister.recurse, lister.pattern, lister.workers) == (False, "x*", 2)
        assert lister.list([str(tree)]) == [str(tree / "x.txt")]
