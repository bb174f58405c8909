"""OpenAPI spec parser -- load documents and extract the endpoint model.

This sub-package turns a raw OpenAPI 3.x document (JSON or YAML, local file
or remote URL) into an :class:`~httpie_oapi.models.EndpointCollection` that
the completion engine can consume.

Typical usage::

    from httpie_oapi.parser import extract_endpoints, fetch_spec, parse_spec, validate_openapi_version

    text, hint = fetch_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    raw = parse_spec(text, hint=hint)
    validate_openapi_version(raw)
    endpoints = extract_endpoints(raw)

Sub-modules:

* :mod:`~httpie_oapi.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~httpie_oapi.parser.reference` -- Single-level
  ``#/components/schemas/...`` pointer resolution.
* :mod:`~httpie_oapi.parser.extractor` -- Walks ``paths`` and produces the
  flat endpoint model.
"""

from httpie_oapi.parser.extractor import extract_endpoints
from httpie_oapi.parser.loader import fetch_spec, parse_spec, validate_openapi_version
from httpie_oapi.parser.reference import resolve_schema_ref

__all__ = [
    "extract_endpoints",
    "fetch_spec",
    "parse_spec",
    "resolve_schema_ref",
    "validate_openapi_version",
]
