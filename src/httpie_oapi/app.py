"""Typer application and CLI entry point for httpie-oapi.

This module wires together the top-level Typer application and registers
the built-in commands (``complete``, ``path``, ``param``, ``spec``,
``completions``, ``path-var``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app,
turning :class:`~httpie_oapi.exceptions.HttpieOapiError` into an error
message and exit code. Unhandled exceptions are written to a crash log
under the data directory.

See Also:
    :mod:`httpie_oapi.config`: Directory resolution used by every command.
    :mod:`httpie_oapi.output`: Output formatting initialised in
    :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

import typer

from httpie_oapi import __version__
from httpie_oapi.config import AppPaths
from httpie_oapi.exit_codes import EXIT_GENERIC_FAILURE

if TYPE_CHECKING:
    from httpie_oapi.output import OutputManager


app = typer.Typer(
    name="httpie-oapi",
    help="OpenAPI-aware completion for HTTPie.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"httpie-oapi {__version__}")
        raise typer.Exit()


def configure_logging(paths: AppPaths, output: OutputManager) -> None:
    """Route library logging for this process.

    When *output* is verbose, DEBUG and above go to stderr. Otherwise
    WARNING and above are appended to the log file under the data
    directory, so the streams the shell reads stay clean. If that
    directory cannot be created the warnings go to stderr instead.
    """
    from httpie_oapi.config import ensure_dir
    from httpie_oapi.exceptions import ConfigError

    if output.is_verbose:
        logging.basicConfig(
            level=logging.DEBUG, format=_LOG_FORMAT, stream=sys.stderr, force=True
        )
        return

    try:
        ensure_dir(paths.log_dir)
    except ConfigError:
        logging.basicConfig(
            level=logging.WARNING, format=_LOG_FORMAT, stream=sys.stderr, force=True
        )
        return
    logging.basicConfig(
        level=logging.WARNING,
        format=_LOG_FORMAT,
        filename=str(paths.log_file),
        encoding="utf-8",
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format for tables."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output and logging to stderr."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~httpie_oapi.output.OutputManager` from
    CLI flags, resolves the directory layout, configures logging, and
    stores the shared state in ``ctx.obj`` for the sub-commands.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
    """
    from httpie_oapi.config import resolve_paths
    from httpie_oapi.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.JSON if json_output else OutputFormat.AUTO
    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)

    paths = resolve_paths()
    configure_logging(paths, output)

    ctx.ensure_object(dict)
    ctx.obj["paths"] = paths


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from httpie_oapi.commands.complete import complete_command  # noqa: E402
from httpie_oapi.commands.completions import completions_command  # noqa: E402
from httpie_oapi.commands.param import param_command  # noqa: E402
from httpie_oapi.commands.path import path_command  # noqa: E402
from httpie_oapi.commands.path_var import path_var_command  # noqa: E402
from httpie_oapi.commands.spec import spec_app  # noqa: E402

app.command("path", help="List endpoints of registered APIs.")(path_command)
app.command("param", help="List parameters of one endpoint.")(param_command)
app.command("complete", help="Internal command for shell completion.")(complete_command)
app.command("completions", help="Generate shell completion scripts.")(completions_command)
app.add_typer(spec_app, name="spec", help="Manage OpenAPI specifications.")
app.command(
    "path-var",
    help="Substitute :var path segments in an HTTPie command line.",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(path_var_command)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> Optional[str]:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Path of the written crash log, or ``None`` if it could not be written.
    """
    from httpie_oapi.config import resolve_paths
    from httpie_oapi.exceptions import ConfigError

    try:
        logs_dir = resolve_paths().log_dir
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        log_path = logs_dir / f"crash-{timestamp}.log"
        log_path.write_text(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        )
    except (ConfigError, OSError):
        return None
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``httpie-oapi`` console script.

    Unhandled :class:`~httpie_oapi.exceptions.HttpieOapiError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from httpie_oapi.exceptions import HttpieOapiError
        from httpie_oapi.output import error

        if isinstance(exc, HttpieOapiError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        if log_path is not None:
            error(f"Unexpected error. Debug log: {log_path}")
        else:
            error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
