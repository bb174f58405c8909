"""Param command -- list the parameters of one endpoint."""

from __future__ import annotations

from typing import Optional

import typer

from httpie_oapi.output import print_lines


def param_command(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="API name."),
    path: str = typer.Option(
        ..., "--path", help="Endpoint path exactly as declared, e.g. /pets/{petId}."
    ),
    pattern: Optional[str] = typer.Option(
        None, "--pattern", help="Only parameters whose name contains PATTERN."
    ),
    fish: bool = typer.Option(
        False, "--fish", help="Fish completion lines (text<TAB>description)."
    ),
    fzf: bool = typer.Option(
        False, "--fzf", help="One 'text description' line per parameter (default)."
    ),
) -> None:
    """List parameters of the endpoint at PATH, required ones first.

    The lookup ignores the HTTP method: the first endpoint declared for the
    path is used.

    Raises:
        InvalidUsageError: If both ``--fish`` and ``--fzf`` are given.
        NotFoundError: If the API or the path is unknown.

    Example::

        httpie-oapi param -n petstore --path /pets --pattern lim
    """
    from httpie_oapi.commands import load_registry
    from httpie_oapi.exceptions import InvalidUsageError, NotFoundError

    if fish and fzf:
        raise InvalidUsageError("--fish and --fzf cannot be used together")

    registry = load_registry(ctx)
    api = registry.require(name)
    endpoint = api.get_endpoints(registry.store).find(path)
    if endpoint is None:
        raise NotFoundError(f"No endpoint matched path '{path}'")

    params = endpoint.get_params_sort()
    if pattern:
        params = [param for param in params if pattern in param.name]
    if fish:
        print_lines(param.fish_complete_format() for param in params)
    else:
        print_lines(param.list_format() for param in params)
