"""Shared test fixtures for httpie-oapi.

Provides reusable fixtures for loading the spec fixture, creating isolated
config environments, pre-populating the registry, managing output state,
and running CLI commands. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from httpie_oapi.config import AppPaths, resolve_paths
from httpie_oapi.models import EndpointCollection
from httpie_oapi.output import OutputFormat, OutputManager, reset_output, set_output
from httpie_oapi.registry import ApiRegistry


FIXTURES_DIR = Path(__file__).parent / "fixtures"

PETSTORE_BASE_URL = "https://api.example.com"
PETSTORE_SPEC_URL = "https://api.example.com/openapi.json"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_text() -> str:
    """Raw text of the petstore fixture, as it would be downloaded."""
    return (FIXTURES_DIR / "petstore.json").read_text(encoding="utf-8")


@pytest.fixture
def petstore_raw(petstore_text: str) -> dict[str, Any]:
    """Parsed petstore fixture dict."""
    return json.loads(petstore_text)


@pytest.fixture
def petstore_endpoints(petstore_raw: dict[str, Any]) -> EndpointCollection:
    """Endpoint model extracted from the petstore fixture."""
    from httpie_oapi.parser import extract_endpoints

    return extract_endpoints(petstore_raw)


# ---------------------------------------------------------------------------
# Config isolation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets HOME, XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path so that tests never touch real user
    config. Clears the HTTPIE_OAPI_* overrides and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["HTTPIE_OAPI_CONFIG_DIR", "HTTPIE_OAPI_CACHE_DIR", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def app_paths(isolated_config: Path) -> AppPaths:
    """The directory layout the CLI resolves inside the isolated environment."""
    return resolve_paths()


@pytest.fixture
def petstore_registry(app_paths: AppPaths, petstore_text: str) -> ApiRegistry:
    """A saved registry holding one 'petstore' API with warm cache files.

    The cache is written directly, so commands run against it never touch
    the network.
    """
    from httpie_oapi.parser import extract_endpoints, parse_spec

    registry = ApiRegistry.load(app_paths)
    registry.add("petstore", PETSTORE_SPEC_URL, PETSTORE_BASE_URL)
    registry.save()
    registry.store.save(
        "petstore", petstore_text, extract_endpoints(parse_spec(petstore_text))
    )
    return ApiRegistry.load(app_paths)


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
