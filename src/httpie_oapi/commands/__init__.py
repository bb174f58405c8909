"""Built-in CLI sub-commands for httpie-oapi.

This package groups the Typer command modules registered on the root app:

* :mod:`~httpie_oapi.commands.complete` -- completion candidates for a
  command line (called by the shell integration).
* :mod:`~httpie_oapi.commands.path` -- list endpoints of registered APIs.
* :mod:`~httpie_oapi.commands.param` -- list parameters of one endpoint.
* :mod:`~httpie_oapi.commands.spec` -- register, remove, list and refresh
  APIs.
* :mod:`~httpie_oapi.commands.completions` -- generate the shell script.
* :mod:`~httpie_oapi.commands.path_var` -- substitute ``:var`` segments in
  an HTTPie command line.

Each module exports either a :class:`typer.Typer` sub-application (``spec``)
or a plain callback function registered directly on the root app.
"""

from __future__ import annotations

from typing import Optional

import typer

from httpie_oapi.config import AppPaths, resolve_paths
from httpie_oapi.registry import ApiRegistry


def get_paths(ctx: Optional[typer.Context]) -> AppPaths:
    """Return the :class:`AppPaths` stored by the root callback.

    Falls back to :func:`~httpie_oapi.config.resolve_paths` when the
    command runs without the root callback (e.g. mounted on a test app).
    """
    if ctx is not None:
        root = ctx.find_root()
        if isinstance(root.obj, dict) and root.obj.get("paths") is not None:
            return root.obj["paths"]
    return resolve_paths()


def load_registry(ctx: Optional[typer.Context]) -> ApiRegistry:
    """Load the API registry for the directories of this invocation."""
    return ApiRegistry.load(get_paths(ctx))
