"""Completions command -- generate the shell integration script."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from httpie_oapi.output import print_data, success, suggest


def completions_command(
    shell: str = typer.Argument(help="Target shell. Only 'fish' is supported."),
    output: Optional[Path] = typer.Argument(
        None, help="File to write instead of stdout."
    ),
) -> None:
    """Generate the shell integration script.

    Raises:
        InvalidUsageError: If the shell is not supported.

    Example::

        httpie-oapi completions fish > ~/.config/fish/completions/http.fish
        httpie-oapi completions fish ~/.config/fish/conf.d/httpie-oapi.fish
    """
    from httpie_oapi.completion import get_script
    from httpie_oapi.config import atomic_write

    script = get_script(shell)
    if output is None:
        print_data(script.rstrip("\n"))
        return

    atomic_write(output, script)
    success(f"Wrote {shell} completions to {output}")
    suggest(f"Reload with: source {output}")
