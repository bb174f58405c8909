"""Per-API cache files for httpie-oapi.

This package provides :class:`EndpointStore`, which keeps two files per
registered API in the cache directory: the spec document exactly as fetched
(``<name>.json``) and the resolved endpoint model (``<name>.endpoints.json``).
Completion requests read the resolved file so the spec is only downloaded
and resolved again when the cache is missing, corrupt, or explicitly
refreshed.
"""

from httpie_oapi.cache.store import EndpointStore

__all__ = ["EndpointStore"]
