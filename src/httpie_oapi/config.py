"""Directory layout and atomic writes.

Every file the tool owns lives under one of three directories, bundled in
an :class:`AppPaths` value that is built once at startup by
:func:`resolve_paths` and passed explicitly to the registry and the
endpoint store:

* **config** -- the API registry (``apis.json``).
* **cache** -- per-API raw spec and resolved endpoint files. Safe to delete;
  they are rebuilt on the next completion request.
* **data** -- log files and crash reports.

On Linux/BSD the XDG Base Directory variables are honoured; macOS and
Windows use ``~/.httpie-oapi/``. ``HTTPIE_OAPI_CONFIG_DIR`` and
``HTTPIE_OAPI_CACHE_DIR`` override the computed locations.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so a killed completion process never leaves a
truncated registry or cache file behind.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from httpie_oapi.exceptions import ConfigError

_APP_NAME = "httpie-oapi"
_REGISTRY_FILENAME = "apis.json"
_LOG_FILENAME = "httpie-oapi.log"

_ENV_CONFIG_DIR = "HTTPIE_OAPI_CONFIG_DIR"
_ENV_CACHE_DIR = "HTTPIE_OAPI_CACHE_DIR"


class AppPaths(BaseModel):
    """Resolved directories for one process.

    Directories are not created when the value is built; writers call
    :func:`ensure_dir` (or :func:`atomic_write`, which does it for them).
    """

    config_dir: Path
    cache_dir: Path
    data_dir: Path

    @property
    def registry_file(self) -> Path:
        return self.config_dir / _REGISTRY_FILENAME

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    @property
    def log_file(self) -> Path:
        return self.log_dir / _LOG_FILENAME

    def raw_spec_path(self, name: str) -> Path:
        """Cache file holding the spec document exactly as fetched."""
        return self.cache_dir / f"{name}.json"

    def endpoints_path(self, name: str) -> Path:
        """Cache file holding the resolved :class:`~httpie_oapi.models.EndpointCollection`."""
        return self.cache_dir / f"{name}.endpoints.json"


# --- Path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _home() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"Could not determine home directory: {exc}") from exc


def _xdg_base(env_var: str, home: Path, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = home
    for seg in default_segments:
        base = base / seg
    return base


def resolve_paths() -> AppPaths:
    """Build the :class:`AppPaths` for this process.

    Returns:
        The resolved directories. Nothing is created on disk.

    Raises:
        ConfigError: If the home directory cannot be determined.
    """
    home = _home()
    if _is_xdg_platform():
        config_dir = _xdg_base("XDG_CONFIG_HOME", home, (".config",)) / _APP_NAME
        cache_dir = _xdg_base("XDG_CACHE_HOME", home, (".cache",)) / _APP_NAME
        data_dir = _xdg_base("XDG_DATA_HOME", home, (".local", "share")) / _APP_NAME
    else:
        config_dir = home / f".{_APP_NAME}"
        cache_dir = config_dir / "cache"
        data_dir = config_dir / "data"

    if os.environ.get(_ENV_CONFIG_DIR):
        config_dir = Path(os.environ[_ENV_CONFIG_DIR])
    if os.environ.get(_ENV_CACHE_DIR):
        cache_dir = Path(os.environ[_ENV_CACHE_DIR])

    return AppPaths(config_dir=config_dir, cache_dir=cache_dir, data_dir=data_dir)


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if missing.

    Raises:
        ConfigError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Failed to create directory {path}: {exc}") from exc
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.

    Raises:
        ConfigError: If the directory or the file cannot be written.
    """
    ensure_dir(path.parent)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException as exc:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        if isinstance(exc, OSError):
            raise ConfigError(f"Failed to write {path}: {exc}") from exc
        raise
