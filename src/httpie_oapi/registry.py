"""The named API table and its lazily resolved endpoints.

:class:`ApiRegistry` is the in-memory form of ``apis.json``: a table of
:class:`ApiSpec` entries keyed by name. It is loaded once per process with
:meth:`ApiRegistry.load` and written back whole with :meth:`ApiRegistry.save`.

Each :class:`ApiSpec` owns one endpoint cell that starts *unresolved* and is
filled on the first :meth:`ApiSpec.get_endpoints` call -- from the endpoint
cache file when it is readable, otherwise by fetching and resolving the spec
and rewriting both cache files. Later calls in the same process return the
stored collection. Each invocation of the tool is a single-threaded process,
so the cell needs no locking.

Iteration order is lexicographic by name. The completion engine takes the
first API whose base URL matches, so a stable order keeps results
reproducible regardless of how the registry file was written.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import BaseModel, PrivateAttr, ValidationError

from httpie_oapi.cache import EndpointStore
from httpie_oapi.config import AppPaths, atomic_write
from httpie_oapi.exceptions import ConfigError, InvalidUsageError, NotFoundError
from httpie_oapi.models import ApiEntry, EndpointCollection, RegistryFile

logger = logging.getLogger(__name__)


class ApiSpec(BaseModel):
    """A registered API and its memoized endpoint model."""

    name: str
    spec_url: str
    base_url: str

    _endpoints: Optional[EndpointCollection] = PrivateAttr(default=None)

    @property
    def is_resolved(self) -> bool:
        """Whether the endpoint cell has been populated in this process."""
        return self._endpoints is not None

    def get_endpoints(self, store: EndpointStore) -> EndpointCollection:
        """Return the endpoints, loading or fetching them on first access.

        Raises:
            ConnectionError_: If the cache is missing and the spec cannot be
                fetched.
            SpecParseError: If the fetched document is not OpenAPI 3.x.
            ConfigError: If fresh cache files cannot be written.
        """
        if self._endpoints is None:
            endpoints = store.load_endpoints(self.name)
            if endpoints is None:
                logger.info("No usable endpoints cache for %s, refreshing", self.name)
                endpoints = self.refresh_endpoints(store)
            self._endpoints = endpoints
        return self._endpoints

    def refresh_endpoints(self, store: EndpointStore) -> EndpointCollection:
        """Re-fetch the spec, overwrite both cache files and store the result."""
        raw, endpoints = store.fetch_and_resolve(self.spec_url)
        store.save(self.name, raw, endpoints)
        self._endpoints = endpoints
        return endpoints

    def to_entry(self) -> ApiEntry:
        return ApiEntry(spec_url=self.spec_url, base_url=self.base_url)


class ApiRegistry:
    """Named table of registered APIs backed by ``apis.json``.

    Args:
        paths: The process-wide directory layout.
        apis: Initial entries; normally obtained through :meth:`load`.
    """

    def __init__(self, paths: AppPaths, apis: Optional[dict[str, ApiSpec]] = None) -> None:
        self._paths = paths
        self._apis: dict[str, ApiSpec] = dict(apis or {})
        self.store = EndpointStore(paths)

    @classmethod
    def load(cls, paths: AppPaths) -> "ApiRegistry":
        """Load the registry file, or return an empty registry if it does not exist.

        Raises:
            ConfigError: If the file exists but is unreadable, not valid JSON,
                or not shaped like a registry.
        """
        path = paths.registry_file
        if not path.is_file():
            return cls(paths)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            registry_file = RegistryFile.model_validate(data)
        except OSError as exc:
            raise ConfigError(f"Failed to read registry {path}: {exc}") from exc
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ConfigError(f"Invalid registry at {path}: {exc}") from exc

        apis = {
            name: ApiSpec(name=name, spec_url=entry.spec_url, base_url=entry.base_url)
            for name, entry in registry_file.apis.items()
        }
        return cls(paths, apis)

    def save(self) -> None:
        """Persist the whole table atomically."""
        registry_file = RegistryFile(
            apis={api.name: api.to_entry() for api in self.list_apis()}
        )
        data = registry_file.model_dump(mode="json")
        atomic_write(self._paths.registry_file, json.dumps(data, indent=2) + "\n")

    def add(self, name: str, spec_url: str, base_url: str, force: bool = False) -> ApiSpec:
        """Register (or with *force*, replace) an API.

        The new entry's endpoints are not fetched here; callers decide when to
        call :meth:`ApiSpec.refresh_endpoints`.

        Raises:
            InvalidUsageError: If *name* is taken and *force* is not set.
        """
        if name in self._apis and not force:
            raise InvalidUsageError(
                f"API '{name}' already exists. Use --force to overwrite."
            )
        api = ApiSpec(name=name, spec_url=spec_url, base_url=base_url)
        self._apis[name] = api
        return api

    def remove(self, name: str) -> ApiSpec:
        """Unregister *name* and delete its cache files.

        Raises:
            NotFoundError: If no API is registered under *name*.
        """
        api = self._apis.pop(name, None)
        if api is None:
            raise NotFoundError(f"API '{name}' not found")
        self.store.remove(name)
        return api

    def get(self, name: str) -> Optional[ApiSpec]:
        return self._apis.get(name)

    def require(self, name: str) -> ApiSpec:
        """Like :meth:`get`, but raise :class:`NotFoundError` for unknown names."""
        api = self.get(name)
        if api is None:
            raise NotFoundError(f"API '{name}' not found")
        return api

    def list_apis(self) -> list[ApiSpec]:
        """Return all entries sorted by name."""
        return [self._apis[name] for name in sorted(self._apis)]

    def __contains__(self, name: object) -> bool:
        return name in self._apis

    def __len__(self) -> int:
        return len(self._apis)
