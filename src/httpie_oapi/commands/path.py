"""Path command -- list the endpoints of registered APIs."""

from __future__ import annotations

from typing import Optional

import typer

from httpie_oapi.output import print_lines


def path_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="API name. Lists every API when omitted."
    ),
    pattern: Optional[str] = typer.Option(
        None, "--pattern", help="Only paths containing PATTERN."
    ),
    fish: bool = typer.Option(
        False, "--fish", help="Fish completion format instead of the list format."
    ),
) -> None:
    """List endpoints as ``METHOD URL`` lines.

    Without ``--name`` the endpoints of every registered API are listed, in
    registry order; this is what the ``h`` picker of the fish integration
    feeds to fzf.

    Raises:
        NotFoundError: If ``--name`` is given and not registered.

    Example::

        httpie-oapi path -n petstore --pattern /pets
        httpie-oapi path -n petstore --fish
    """
    from httpie_oapi.commands import load_registry

    registry = load_registry(ctx)
    apis = [registry.require(name)] if name is not None else registry.list_apis()

    lines: list[str] = []
    for api in apis:
        endpoints = api.get_endpoints(registry.store)
        selected = endpoints.filter(pattern) if pattern else endpoints.all()
        for endpoint in selected:
            if fish:
                lines.append(endpoint.fish_complete_format(api.base_url))
            else:
                lines.append(endpoint.list_format(api.base_url))
    print_lines(lines)
