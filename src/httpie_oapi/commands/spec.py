"""Spec commands -- manage the registered APIs.

Provides the ``httpie-oapi spec`` sub-command group. Every command loads the
registry from ``apis.json``, changes it, and writes it back whole. Adding or
refreshing an API downloads its OpenAPI document and rewrites both cache
files, so the first completion afterwards needs no network access.
"""

from __future__ import annotations

from typing import Optional

import typer

from httpie_oapi.output import debug, info, print_table, success, warning


spec_app = typer.Typer(no_args_is_help=True)


@spec_app.command("add")
def spec_add(
    ctx: typer.Context,
    name: str = typer.Argument(help="Name used to refer to the API in other commands."),
    spec_url: str = typer.Argument(
        help="URL or file path of the OpenAPI 3.x document (JSON or YAML)."
    ),
    base_url: str = typer.Option(
        ..., "--base-url", "-b", help="Root URL requests are sent to, e.g. https://api.example.com/v1."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing API with the same name."
    ),
) -> None:
    """Add or update an API.

    The document is fetched and cached before the registry is written, so a
    spec that cannot be downloaded or parsed is never registered.

    Raises:
        InvalidUsageError: If NAME is taken and ``--force`` is not given.
        ConnectionError_: If the document cannot be fetched.
        SpecParseError: If the document is not OpenAPI 3.x.

    Example::

        httpie-oapi spec add petstore https://petstore3.swagger.io/api/v3/openapi.json \\
            -b https://petstore3.swagger.io/api/v3
    """
    from httpie_oapi.commands import load_registry

    registry = load_registry(ctx)
    existed = name in registry
    api = registry.add(name, spec_url, base_url, force=force)
    endpoints = api.refresh_endpoints(registry.store)
    registry.save()

    verb = "Updated" if existed else "Added"
    success(f"{verb} API '{name}' successfully")
    info(f"{len(endpoints)} endpoints cached")


def spec_remove(
    ctx: typer.Context,
    name: str = typer.Argument(help="Name of the API to remove."),
) -> None:
    """Remove an API and its cache files.

    Raises:
        NotFoundError: If NAME is not registered.
    """
    from httpie_oapi.commands import load_registry

    registry = load_registry(ctx)
    registry.remove(name)
    registry.save()
    success(f"Removed API '{name}' successfully")


def spec_list(
    ctx: typer.Context,
    detailed: bool = typer.Option(
        False, "--detailed", "-d", help="Also show base URL and cache files."
    ),
) -> None:
    """List registered APIs.

    Piped output is one tab-separated line per API (``name<TAB>spec_url``);
    ``--json`` gives an array of objects.
    """
    from httpie_oapi.commands import load_registry

    registry = load_registry(ctx)
    apis = registry.list_apis()
    if not apis:
        info("No APIs registered")
        return

    if detailed:
        headers = ["Name", "Spec URL", "Base URL", "Spec Cache", "Endpoints Cache"]
        rows = [
            [
                api.name,
                api.spec_url,
                api.base_url,
                str(registry.store.raw_spec_path(api.name)),
                str(registry.store.endpoints_path(api.name)),
            ]
            for api in apis
        ]
    else:
        headers = ["Name", "Spec URL"]
        rows = [[api.name, api.spec_url] for api in apis]
    print_table(headers, rows, title="Registered APIs")


def spec_refresh(
    ctx: typer.Context,
    names: Optional[list[str]] = typer.Argument(
        None, help="APIs to refresh. Refreshes every API when omitted."
    ),
) -> None:
    """Re-download specs and rebuild their endpoint caches.

    Unknown names are reported and skipped; the others are still refreshed.
    """
    from httpie_oapi.commands import load_registry

    registry = load_registry(ctx)
    targets = list(names) if names else [api.name for api in registry.list_apis()]
    if not targets:
        info("No APIs registered")
        return

    for name in targets:
        api = registry.get(name)
        if api is None:
            warning(f"API '{name}' not found, skipping")
            continue
        debug(f"Refreshing {name} from {api.spec_url}")
        api.refresh_endpoints(registry.store)
        success(f"Refreshed cache for API '{name}' successfully")


spec_app.command("remove")(spec_remove)
spec_app.command("rm", hidden=True)(spec_remove)
spec_app.command("list")(spec_list)
spec_app.command("ls", hidden=True)(spec_list)
spec_app.command("refresh")(spec_refresh)
spec_app.command("sync", hidden=True)(spec_refresh)
