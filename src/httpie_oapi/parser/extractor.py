"""Extract a flat endpoint model from a raw OpenAPI document.

This module walks the ``paths`` object of an OpenAPI 3.x document and builds
an :class:`~httpie_oapi.models.EndpointCollection`: one
:class:`~httpie_oapi.models.Endpoint` per path + HTTP method, each carrying
every parameter HTTPie could be given for it.

The single public entry point is :func:`extract_endpoints`. Unlike a full
``$ref`` inliner, it only dereferences what it needs, and only through
:func:`~httpie_oapi.parser.reference.resolve_schema_ref`:

* path-level ("common") parameters come first, then operation parameters,
  then one body parameter per property of an ``application/json`` object
  request body;
* parameters are not de-duplicated across the path and operation levels;
* anything that cannot be resolved (a dangling ``$ref``, a cookie
  parameter, a non-object body schema, a referenced path item or request
  body) is logged and dropped. Extraction itself never fails on document
  content.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from httpie_oapi.models import Endpoint, EndpointCollection, HTTPMethod, Param, ParamSource
from httpie_oapi.parser.reference import is_reference, resolve_schema_ref

logger = logging.getLogger(__name__)

_JSON_MEDIA_TYPE = "application/json"

# Parameter locations of an OpenAPI Parameter Object that HTTPie can send.
_PARAMETER_SOURCES = {
    "query": ParamSource.QUERY,
    "header": ParamSource.HEADER,
    "path": ParamSource.PATH,
}


def extract_endpoints(document: dict[str, Any]) -> EndpointCollection:
    """Build the endpoint model of a raw OpenAPI document.

    Args:
        document: The parsed (not ``$ref``-inlined) OpenAPI document, as
            returned by :func:`~httpie_oapi.parser.loader.parse_spec`.

    Returns:
        Endpoints in document path order; within a path, in the order GET,
        POST, PUT, DELETE, PATCH, HEAD, OPTIONS.

    Example::

        raw = parse_spec(*fetch_spec("petstore.yaml"))
        validate_openapi_version(raw)
        for endpoint in extract_endpoints(raw):
            print(endpoint.list_format("https://petstore.example.com"))
    """
    logger.info("Starting to parse OpenAPI endpoints")
    paths = document.get("paths") or {}
    if not isinstance(paths, dict):
        logger.warning("'paths' is not an object, no endpoints extracted")
        return EndpointCollection([])

    endpoints: list[Endpoint] = []
    for path, path_item in paths.items():
        logger.debug("Processing path: %s", path)
        if not isinstance(path_item, dict) or is_reference(path_item):
            logger.debug("Skipping referenced path: %s", path)
            continue
        endpoints.extend(_extract_path_item(str(path), path_item, document))

    logger.info("Successfully parsed %d endpoints", len(endpoints))
    return EndpointCollection(endpoints)


def _extract_path_item(
    path: str, path_item: dict[str, Any], document: dict[str, Any]
) -> list[Endpoint]:
    """Build the endpoints of one path item, one per declared method."""
    common_params = _extract_parameters(path_item.get("parameters"), document)
    logger.debug("Found %d common parameters for path: %s", len(common_params), path)

    endpoints: list[Endpoint] = []
    for method in HTTPMethod:
        operation = path_item.get(method.value.lower())
        if not isinstance(operation, dict):
            continue
        logger.debug("Processing %s %s operation", method.value, path)

        params = list(common_params)
        op_params = _extract_parameters(operation.get("parameters"), document)
        logger.debug("Found %d operation parameters", len(op_params))
        params.extend(op_params)

        request_body = operation.get("requestBody")
        if request_body is not None:
            body_params = _extract_request_body_parameters(request_body, document)
            logger.debug("Found %d request body parameters", len(body_params))
            params.extend(body_params)

        summary = operation.get("summary")
        endpoints.append(
            Endpoint(
                method=method,
                path=path,
                summary=summary if isinstance(summary, str) else None,
                params=params,
            )
        )
    return endpoints


def _extract_parameters(parameters: Any, document: dict[str, Any]) -> list[Param]:
    if not isinstance(parameters, list):
        return []
    result: list[Param] = []
    for parameter in parameters:
        param = _extract_parameter(parameter, document)
        if param is not None:
            result.append(param)
    return result


def _extract_parameter(parameter: Any, document: dict[str, Any]) -> Optional[Param]:
    """Convert one entry of a ``parameters`` list.

    A ``$ref`` entry is looked up as a component schema and its first
    property becomes the parameter; other pointer shapes resolve to nothing.
    """
    if is_reference(parameter):
        reference = parameter["$ref"]
        logger.debug("Extracting referenced parameter: %s", reference)
        schema = resolve_schema_ref(reference, document)
        if schema is None:
            return None
        params = params_from_schema(schema)
        return params[0] if params else None
    return param_from_parameter(parameter)


def param_from_parameter(parameter: Any) -> Optional[Param]:
    """Convert a direct OpenAPI *Parameter Object*.

    Returns:
        The parameter, or ``None`` for cookie parameters, unknown ``in``
        locations and entries without a usable name.
    """
    if not isinstance(parameter, dict):
        return None
    location = parameter.get("in")
    name = parameter.get("name")
    if location == "cookie":
        logger.debug("Skipping parameter %r: unsupported Cookie param", name)
        return None
    source = _PARAMETER_SOURCES.get(location) if isinstance(location, str) else None
    if source is None:
        logger.debug("Skipping parameter %r: unsupported location %r", name, location)
        return None
    if not isinstance(name, str) or not name:
        logger.debug("Skipping %s parameter without a name", location)
        return None

    description = parameter.get("description")
    return Param(
        name=name,
        required=bool(parameter.get("required", False)),
        source=source,
        description=description if isinstance(description, str) else None,
    )


def params_from_schema(schema: dict[str, Any]) -> list[Param]:
    """Expand an object schema into one body parameter per direct property.

    A property is required when it is listed in the schema's ``required``
    array. Its description is read from the property schema when the
    property is defined inline; referenced properties carry none.

    Args:
        schema: A schema mapping that is not itself a reference.

    Returns:
        The body parameters, empty for any schema that is not
        ``type: object`` with a ``properties`` mapping.
    """
    if schema.get("type") != "object":
        logger.debug("Schema is not an object type, no parameters extracted")
        return []
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return []
    required_raw = schema.get("required")
    required = (
        {item for item in required_raw if isinstance(item, str)}
        if isinstance(required_raw, list)
        else set()
    )

    params: list[Param] = []
    for name, prop in properties.items():
        description = None
        if isinstance(prop, dict) and not is_reference(prop):
            raw_description = prop.get("description")
            if isinstance(raw_description, str):
                description = raw_description
        try:
            params.append(
                Param(
                    name=str(name),
                    required=name in required,
                    source=ParamSource.BODY,
                    description=description,
                )
            )
        except ValidationError:
            logger.debug("Skipping schema property with an empty name")
    return params


def _extract_schema_parameters(schema: Any, document: dict[str, Any]) -> list[Param]:
    if is_reference(schema):
        reference = schema["$ref"]
        logger.debug("Resolving schema reference: %s", reference)
        resolved = resolve_schema_ref(reference, document)
        if resolved is None:
            logger.warning("Failed to resolve schema reference: %s", reference)
            return []
        return params_from_schema(resolved)
    if isinstance(schema, dict):
        return params_from_schema(schema)
    return []


def _extract_request_body_parameters(request_body: Any, document: dict[str, Any]) -> list[Param]:
    if is_reference(request_body):
        logger.warning("Request body is a reference, which is not supported")
        return []
    if not isinstance(request_body, dict):
        return []
    content = request_body.get("content")
    media_type = content.get(_JSON_MEDIA_TYPE) if isinstance(content, dict) else None
    if isinstance(media_type, dict) and "schema" in media_type:
        logger.debug("Found request body schema")
        return _extract_schema_parameters(media_type["schema"], document)
    logger.debug("No request body schema found")
    return []
