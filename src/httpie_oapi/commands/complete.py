"""Complete command -- completion candidates for a partial command line.

Called by the shell integration on every ``<TAB>`` with the command line up
to the cursor and the cursor offset. Candidates go to stdout, one per line;
nothing else may be written there.
"""

from __future__ import annotations

import typer

from httpie_oapi.output import debug, print_lines


def complete_command(
    ctx: typer.Context,
    line: str = typer.Option(
        ..., "--line", "-l", help="Command line up to the cursor."
    ),
    cursor_pos: int = typer.Option(
        ..., "--cursor-pos", "-c", min=0, help="Cursor offset within LINE."
    ),
    shell: str = typer.Option(
        "fish", "--shell", help="Candidate format: fish or bash."
    ),
) -> None:
    """Print completion candidates for LINE.

    Loads the registry, tokenizes the line and runs the
    :class:`~httpie_oapi.completion.CompletionEngine`. The whole candidate
    list is computed before anything is printed, so a fetch failure leaves
    stdout empty.

    Example::

        httpie-oapi complete --line "http https://api.example.com/pets " --cursor-pos 34
    """
    from httpie_oapi.commands import load_registry
    from httpie_oapi.completion import CompletionEngine, get_formatter
    from httpie_oapi.tokens import tokenize

    formatter = get_formatter(shell)
    registry = load_registry(ctx)
    tokens = tokenize(line, cursor_pos)
    debug(f"Tokens: {tokens.texts()}")

    engine = CompletionEngine(registry.store, formatter)
    print_lines(engine.complete(tokens, registry.list_apis()))
