"""Load OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw OpenAPI documents and turning
them into Python dictionaries. Fetching and parsing are separate steps
because the endpoint store keeps the fetched text verbatim as the raw spec
cache file:

* :func:`fetch_spec` -- read the document text from any supported source.
* :func:`parse_spec` -- parse JSON or YAML text into a dict.
* :func:`validate_openapi_version` -- reject Swagger 2.x and documents that
  are not OpenAPI 3.x at all.

Failures here are fatal for the current command: network problems raise
:class:`~httpie_oapi.exceptions.ConnectionError_` and unparseable content
raises :class:`~httpie_oapi.exceptions.SpecParseError`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from httpie_oapi.exceptions import ConnectionError_, SpecParseError

FETCH_TIMEOUT = 30.0


def fetch_spec(source: str) -> tuple[str, str]:
    """Read the raw document text from *source*.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        A ``(content, hint)`` tuple where *hint* is ``"json"``, ``"yaml"``
        or ``""`` depending on the content type or file extension.
    """
    if source == "-":
        return _fetch_from_stdin(), ""
    elif source.startswith(("http://", "https://")):
        return _fetch_from_url(source)
    else:
        return _fetch_from_file(source)


def _fetch_from_stdin() -> str:
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return content


def _fetch_from_url(url: str) -> tuple[str, str]:
    """Fetch spec text from URL.

    Raises:
        ConnectionError_: On network failure or a non-success status code.
    """
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise ConnectionError_(
            f"Failed to fetch OpenAPI spec: HTTP {status} "
            f"{exc.response.reason_phrase} from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(
            f"Failed to fetch OpenAPI spec from {url}: {exc}. "
            "Please verify that the URL is correct and accessible"
        ) from exc
    except httpx.InvalidURL as exc:
        raise ConnectionError_(f"Invalid OpenAPI URL '{url}': {exc}") from exc

    # Use content-type as a hint for parsing
    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return response.text, hint


def _fetch_from_file(path: str) -> tuple[str, str]:
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"
    return content, hint


def parse_spec(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format,
            or does not hold a mapping at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            if not isinstance(result, dict):
                raise SpecParseError(
                    f"Spec must be a JSON/YAML object (got {type(result).__name__})"
                )
            return result

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        if not isinstance(result, dict):
            raise SpecParseError(
                "Spec must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate the document header and return the OpenAPI version string.

    Accepts any 3.x version. Swagger 2.x, a missing ``openapi`` field, and a
    ``paths`` member that is not a mapping are rejected.

    Raises:
        SpecParseError: If the document is not a usable OpenAPI 3.x document.
    """
    if "swagger" in spec:
        swagger_ver = str(spec["swagger"])
        raise SpecParseError(
            f"Swagger {swagger_ver} is not supported. "
            "Only OpenAPI 3.x documents are supported. "
            "Consider converting with https://converter.swagger.io"
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(openapi_version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.x documents are supported."
        )

    paths = spec.get("paths")
    if paths is not None and not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be an object (got {type(paths).__name__})"
        )

    return version_str
