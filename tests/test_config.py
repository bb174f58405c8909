"""Tests for httpie_oapi.config."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from httpie_oapi import config
from httpie_oapi.config import AppPaths, atomic_write, ensure_dir, resolve_paths
from httpie_oapi.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Directory resolution
# ---------------------------------------------------------------------------


class TestResolvePaths:
    def test_xdg_directories(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config, "_is_xdg_platform", lambda: True)
        paths = resolve_paths()
        assert paths.config_dir == isolated_config / "config" / "httpie-oapi"
        assert paths.cache_dir == isolated_config / "cache" / "httpie-oapi"
        assert paths.data_dir == isolated_config / "data" / "httpie-oapi"

    def test_xdg_defaults_under_home(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config, "_is_xdg_platform", lambda: True)
        for var in ("XDG_CONFIG_HOME", "XDG_CACHE_HOME", "XDG_DATA_HOME"):
            monkeypatch.delenv(var, raising=False)
        home = isolated_config / "home"
        monkeypatch.setattr(config, "_home", lambda: home)

        paths = resolve_paths()
        assert paths.config_dir == home / ".config" / "httpie-oapi"
        assert paths.cache_dir == home / ".cache" / "httpie-oapi"
        assert paths.data_dir == home / ".local" / "share" / "httpie-oapi"

    def test_non_xdg_layout(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config, "_is_xdg_platform", lambda: False)
        home = isolated_config / "home"
        monkeypatch.setattr(config, "_home", lambda: home)

        paths = resolve_paths()
        assert paths.config_dir == home / ".httpie-oapi"
        assert paths.cache_dir == home / ".httpie-oapi" / "cache"
        assert paths.data_dir == home / ".httpie-oapi" / "data"

    def test_env_overrides(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HTTPIE_OAPI_CONFIG_DIR", str(isolated_config / "cfg"))
        monkeypatch.setenv("HTTPIE_OAPI_CACHE_DIR", str(isolated_config / "cch"))
        paths = resolve_paths()
        assert paths.config_dir == isolated_config / "cfg"
        assert paths.cache_dir == isolated_config / "cch"

    def test_no_home_is_config_error(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail() -> Path:
            raise RuntimeError("no home")

        monkeypatch.setattr(config.Path, "home", staticmethod(_fail))
        with pytest.raises(ConfigError, match="home directory"):
            resolve_paths()

    def test_nothing_created(self, isolated_config: Path) -> None:
        paths = resolve_paths()
        assert not paths.config_dir.exists()
        assert not paths.cache_dir.exists()


class TestAppPaths:
    def test_derived_paths(self, tmp_path: Path) -> None:
        paths = AppPaths(
            config_dir=tmp_path / "c", cache_dir=tmp_path / "k", data_dir=tmp_path / "d"
        )
        assert paths.registry_file == tmp_path / "c" / "apis.json"
        assert paths.raw_spec_path("petstore") == tmp_path / "k" / "petstore.json"
        assert paths.endpoints_path("petstore") == tmp_path / "k" / "petstore.endpoints.json"
        assert paths.log_dir == tmp_path / "d" / "logs"
        assert paths.log_file == tmp_path / "d" / "logs" / "httpie-oapi.log"


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


class TestEnsureDir:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c"
        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(ConfigError):
            ensure_dir(blocker / "child")


class TestAtomicWrite:
    def test_writes_and_creates_parent(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        atomic_write(target, '{"ok": true}')
        assert target.read_text(encoding="utf-8") == '{"ok": true}'

    def test_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        atomic_write(target, "one")
        atomic_write(target, "two")
        assert target.read_text(encoding="utf-8") == "two"

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "file.txt", "data")
        assert os.listdir(tmp_path) == ["file.txt"]

    def test_failed_replace_cleans_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail(src: str, dst: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(config.os, "replace", _fail)
        with pytest.raises(ConfigError, match="disk full"):
            atomic_write(tmp_path / "file.txt", "data")
        assert os.listdir(tmp_path) == []
