"""httpie-oapi -- OpenAPI-aware shell completion for HTTPie.

This package lets HTTPie complete URLs and request items for any REST API
described by an OpenAPI 3.x document. Users register an API under a name
with its spec URL and base URL; the shell then calls ``httpie-oapi complete``
with the live command line and cursor position and gets back candidates.

Typical workflow::

    httpie-oapi spec add petstore https://petstore3.swagger.io/api/v3/openapi.json \\
        --base-url https://petstore3.swagger.io/api/v3
    httpie-oapi completions fish > ~/.config/fish/conf.d/httpie-oapi.fish

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for parameters, endpoints and registry entries.
    config: XDG-aware directory layout and atomic writes.
    registry: The named API table and its memoized endpoint cells.
    cache: Per-API cache files (raw spec and resolved endpoints).
    tokens: Shell-word tokenizer with offset tracking.
    completion: The completion engine, formatters and shell scripts.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.3.0"
