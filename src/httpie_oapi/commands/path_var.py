"""Path-var command -- fill ``:var`` URL segments in an HTTPie command line."""

from __future__ import annotations

from typing import Optional

import typer

from httpie_oapi.output import print_data


def path_var_command(
    args: Optional[list[str]] = typer.Argument(
        None, help="HTTPie command line, after '--'."
    ),
) -> None:
    """Print the command line with ``:var=value`` items substituted into the URL.

    The result is a single space-joined line, ready for the fish wrapper's
    ``eval``.

    Example::

        httpie-oapi path-var -- http :8080/users/:id/posts :id=123 -v
        # http :8080/users/123/posts -v
    """
    from httpie_oapi.pathvars import rewrite_command_line

    print_data(" ".join(rewrite_command_line(list(args or []))))
