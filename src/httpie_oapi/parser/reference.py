"""Resolve ``$ref`` pointers to component schemas.

Only one pointer shape is understood: ``#/components/schemas/<name>``.
Anything else -- ``#/components/parameters/...``,
``#/components/requestBodies/...``, external files, malformed strings -- is
"not a schema reference" and resolves to ``None``. Resolution is
single-level: a named schema that is itself a ``$ref`` is rejected rather
than followed.

Callers treat ``None`` as "this element contributes no parameters", so a
broken or unsupported reference never aborts ingestion of the document.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"


def is_reference(obj: Any) -> bool:
    """Return True if *obj* is a JSON Reference object (a mapping with ``$ref``)."""
    return isinstance(obj, dict) and "$ref" in obj


def resolve_schema_ref(reference: Any, document: Any) -> Optional[dict[str, Any]]:
    """Look up the schema a ``#/components/schemas/<name>`` pointer names.

    Args:
        reference: The ``$ref`` value. Non-string values are rejected.
        document: The raw OpenAPI document.

    Returns:
        The schema mapping, or ``None`` when the pointer has another shape,
        names a missing schema, or names a schema that is itself a reference.

    Example::

        doc = {"components": {"schemas": {"User": {"type": "object"}}}}
        resolve_schema_ref("#/components/schemas/User", doc)   # {"type": "object"}
        resolve_schema_ref("#/components/parameters/Id", doc)  # None
    """
    if not isinstance(reference, str) or not reference.startswith(SCHEMA_REF_PREFIX):
        logger.warning("Not a schema reference: %r", reference)
        return None

    schema_name = reference[len(SCHEMA_REF_PREFIX):]
    if not schema_name or "/" in schema_name:
        logger.warning("Not a schema reference: %r", reference)
        return None

    components = document.get("components") if isinstance(document, dict) else None
    schemas = components.get("schemas") if isinstance(components, dict) else None
    schema = schemas.get(schema_name) if isinstance(schemas, dict) else None

    if not isinstance(schema, dict):
        logger.warning("Schema not found: %s", schema_name)
        return None
    if is_reference(schema):
        logger.warning(
            "Schema %s is a reference to another reference, which is not supported",
            schema_name,
        )
        return None

    logger.debug("Found schema: %s", schema_name)
    return schema
