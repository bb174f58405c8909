"""Canonical Pydantic models shared across all httpie-oapi modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Endpoint models** -- produced by the spec resolver, cached on disk as JSON
and consumed by the completion engine:
    :class:`ParamSource`, :class:`Param`, :class:`HTTPMethod`,
    :class:`Endpoint` and :class:`EndpointCollection`.

**Registry models** -- the on-disk shape of the named API table:
    :class:`ApiEntry` and :class:`RegistryFile`.

Endpoint models are frozen: they are built once per ingestion pass and never
mutated afterwards. Their rendering methods produce the exact strings HTTPie
expects on its command line (``name==value`` for query items, ``name:value``
for headers, and so on).
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


# --- Parameters ---


class ParamSource(str, enum.Enum):
    """Where a request parameter travels, which decides its HTTPie syntax.

    Query items use ``==``, headers use ``:``, and body, form and path items
    use ``=``. Path parameters additionally carry a ``:`` name prefix so they
    line up with the ``path-var`` placeholders (``:id=123``).
    """

    QUERY = "query"
    BODY = "body"
    PATH = "path"
    HEADER = "header"
    FORM = "form"

    @property
    def operator(self) -> str:
        """The HTTPie request-item separator for this source."""
        if self is ParamSource.QUERY:
            return "=="
        if self is ParamSource.HEADER:
            return ":"
        return "="

    @property
    def prefix(self) -> str:
        """The name prefix used when rendering (``:`` for path parameters)."""
        return ":" if self is ParamSource.PATH else ""


class Param(BaseModel):
    """A single normalized request parameter of an :class:`Endpoint`.

    Built from an OpenAPI *Parameter Object* or from one property of an
    object-typed request body schema.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    required: bool = False
    source: ParamSource
    description: Optional[str] = None

    def completion_text(self) -> str:
        """Return the text inserted on the command line, e.g. ``limit==``."""
        return f"{self.source.prefix}{self.name}{self.source.operator}"

    def completion_description(self) -> str:
        """Return the description shown next to the candidate.

        Falls back to the parameter name; optional parameters are wrapped in
        square brackets.
        """
        desc = self.description or self.name
        return desc if self.required else f"[{desc}]"

    def list_format(self) -> str:
        """Informational listing line, e.g. ``limit== [How many items to return]``."""
        return f"{self.completion_text()} {self.completion_description()}"

    def fish_complete_format(self) -> str:
        return f"{self.completion_text()}\t{self.completion_description()}"

    def __str__(self) -> str:
        return self.fish_complete_format()


# --- Endpoints ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods the resolver reads from OpenAPI path items.

    Declaration order is the order in which operations of one path item are
    emitted.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def _missing_(cls, value: object) -> Optional["HTTPMethod"]:
        if isinstance(value, str):
            upper = value.upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class Endpoint(BaseModel):
    """One (method, path) pair with its summary and resolved parameters."""

    model_config = ConfigDict(frozen=True)

    method: HTTPMethod
    path: str
    summary: Optional[str] = None
    params: list[Param] = Field(default_factory=list)

    def get_params_sort(self) -> list[Param]:
        """Return the parameters with required ones first.

        The sort is stable, so parameters with the same ``required`` flag
        keep their declaration order.
        """
        return sorted(self.params, key=lambda param: not param.required)

    def list_format(self, base_url: str) -> str:
        """Informational listing line, e.g. ``GET https://api.example.com/pets``."""
        return f"{self.method.value} {base_url}{self.path}"

    def completion_text(self, base_url: str) -> str:
        return f"{base_url}{self.path}"

    def completion_description(self) -> str:
        return self.summary or self.path

    def fish_complete_format(self, base_url: str) -> str:
        return f"{self.completion_text(base_url)}\t{self.completion_description()}"


class EndpointCollection(RootModel[list[Endpoint]]):
    """Ordered endpoints of one API, in document order.

    Serialises to a plain JSON array, which is the format of the
    ``<name>.endpoints.json`` cache file.

    Example::

        endpoints = EndpointCollection([Endpoint(method=HTTPMethod.GET, path="/pets")])
        endpoints.filter("/pets")   # substring match
        endpoints.find("/pets")     # exact match, any method
    """

    root: list[Endpoint] = Field(default_factory=list)

    def all(self) -> list[Endpoint]:
        return list(self.root)

    def filter(self, fragment: str) -> list[Endpoint]:
        """Return endpoints whose path contains *fragment*, in order."""
        return [endpoint for endpoint in self.root if fragment in endpoint.path]

    def find(self, path: str) -> Optional[Endpoint]:
        """Return the first endpoint whose path equals *path*, whatever its method."""
        for endpoint in self.root:
            if endpoint.path == path:
                return endpoint
        return None

    def __iter__(self) -> Iterator[Endpoint]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> "EndpointCollection":
        """Deserialise a collection written by :meth:`to_json`.

        Raises:
            pydantic.ValidationError: If *text* is not a valid endpoint array.
        """
        return cls.model_validate_json(text)

    @classmethod
    def from_file(cls, path: Path) -> "EndpointCollection":
        return cls.from_json(path.read_text(encoding="utf-8"))


# --- Registry file ---


class ApiEntry(BaseModel):
    """On-disk record of one registered API."""

    spec_url: str = Field(description="URL or file path of the OpenAPI document")
    base_url: str = Field(description="Root URL the API is called at")


class RegistryFile(BaseModel):
    """Shape of ``apis.json`` in the config directory."""

    apis: dict[str, ApiEntry] = Field(default_factory=dict)
