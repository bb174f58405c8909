"""Read and write the per-API cache files.

Both files are derived from the API name and live directly in
:attr:`~httpie_oapi.config.AppPaths.cache_dir`:

* ``<name>.json`` -- the raw spec text, kept so the endpoint model can be
  rebuilt offline.
* ``<name>.endpoints.json`` -- the serialised
  :class:`~httpie_oapi.models.EndpointCollection`.

Reads are forgiving (a missing or corrupt file is a cache miss) while writes
are strict (an unwritable cache directory is a fatal
:class:`~httpie_oapi.exceptions.ConfigError`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from httpie_oapi.config import AppPaths, atomic_write
from httpie_oapi.models import EndpointCollection
from httpie_oapi.parser import extract_endpoints, fetch_spec, parse_spec, validate_openapi_version

logger = logging.getLogger(__name__)


class EndpointStore:
    """Cache file access for registered APIs.

    Args:
        paths: The process-wide directory layout.

    Example::

        store = EndpointStore(resolve_paths())
        endpoints = store.load_endpoints("petstore")
        if endpoints is None:
            raw, endpoints = store.fetch_and_resolve(spec_url)
            store.save("petstore", raw, endpoints)
    """

    def __init__(self, paths: AppPaths) -> None:
        self._paths = paths

    @property
    def paths(self) -> AppPaths:
        return self._paths

    def raw_spec_path(self, name: str) -> Path:
        return self._paths.raw_spec_path(name)

    def endpoints_path(self, name: str) -> Path:
        return self._paths.endpoints_path(name)

    def load_endpoints(self, name: str) -> Optional[EndpointCollection]:
        """Read the resolved endpoint cache of *name*.

        Returns:
            The cached collection, or ``None`` when the file is missing,
            unreadable or does not hold a valid endpoint array.
        """
        path = self.endpoints_path(name)
        if not path.is_file():
            return None
        try:
            return EndpointCollection.from_file(path)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable endpoints cache %s: %s", path, exc)
            return None

    def fetch_and_resolve(self, spec_url: str) -> tuple[str, EndpointCollection]:
        """Download (or read) a spec and resolve its endpoint model.

        Returns:
            A ``(raw_text, endpoints)`` tuple.

        Raises:
            ConnectionError_: If the document cannot be fetched.
            SpecParseError: If the document is not OpenAPI 3.x.
        """
        logger.info("Fetching OpenAPI spec from %s", spec_url)
        raw, hint = fetch_spec(spec_url)
        document = parse_spec(raw, hint=hint)
        validate_openapi_version(document)
        return raw, extract_endpoints(document)

    def save(self, name: str, raw: str, endpoints: EndpointCollection) -> None:
        """Overwrite both cache files of *name*.

        Raises:
            ConfigError: If the cache directory is not writable.
        """
        atomic_write(self.raw_spec_path(name), raw)
        atomic_write(self.endpoints_path(name), endpoints.to_json() + "\n")
        logger.debug("Wrote cache files for %s", name)

    def remove(self, name: str) -> None:
        """Delete both cache files of *name*, ignoring files that do not exist."""
        for path in (self.raw_spec_path(name), self.endpoints_path(name)):
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Failed to remove cache file %s: %s", path, exc)
