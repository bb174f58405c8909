"""Substitute ``:var`` path segments in an HTTPie command line.

HTTPie has no notion of path variables, so the fish wrapper rewrites the
arguments before running it::

    http :8080/users/:id/posts :id=123 -v
    # becomes
    http :8080/users/123/posts -v

The first URL-like argument is scanned for segments that start with ``:``.
Later ``:name=value`` arguments naming one of those segments are consumed
and substituted; every other argument is passed through in order. A
variable without a value is left in the URL.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_HOST_CHARS = frozenset(".-:")


def is_url_like(arg: str) -> bool:
    """Return True for full URLs and HTTPie shorthands like ``:8080/users``.

    Shorthands need a ``/``; the part before it may only contain
    alphanumerics, ``.``, ``-`` and ``:``.
    """
    if arg.startswith(("http://", "https://")):
        return True
    host, sep, _ = arg.partition("/")
    if not sep:
        return False
    return all(ch.isalnum() or ch in _HOST_CHARS for ch in host)


def extract_path_vars(url: str) -> list[str]:
    """Return the ``:name`` path segments of *url*, in order and without duplicates.

    The first segment is the host part (``:8080`` in ``:8080/users/:id``) and
    is never a variable.
    """
    found: list[str] = []
    for segment in url.split("/")[1:]:
        if segment.startswith(":") and len(segment) > 1 and segment not in found:
            found.append(segment)
    return found


def split_assignments(
    args: list[str], path_vars: list[str]
) -> tuple[dict[str, str], list[str]]:
    """Separate ``:name=value`` assignments for known variables from other args.

    Returns:
        A ``(values, remaining)`` tuple; *values* is keyed by ``:name``.
    """
    values: dict[str, str] = {}
    remaining: list[str] = []
    for arg in args:
        var_name, sep, value = arg.partition("=")
        if sep and var_name.startswith(":") and var_name in path_vars:
            values[var_name] = value
            continue
        remaining.append(arg)
    return values, remaining


def replace_path_vars(url: str, values: dict[str, str]) -> str:
    """Replace whole ``:name`` segments of *url* with their values."""
    segments = url.split("/")
    for index, segment in enumerate(segments[1:], start=1):
        if segment in values:
            segments[index] = values[segment]
        elif segment.startswith(":") and len(segment) > 1:
            logger.warning("No value found for variable: %s", segment)
    return "/".join(segments)


def rewrite_command_line(args: list[str]) -> list[str]:
    """Apply path-variable substitution to a full argument list.

    Example::

        rewrite_command_line(["http", ":8080/users/:id", ":id=7", "-v"])
        # ['http', ':8080/users/7', '-v']
    """
    url_index = next((i for i, arg in enumerate(args) if is_url_like(arg)), None)
    if url_index is None:
        logger.debug("No URL found in command line, returning as is")
        return list(args)

    url = args[url_index]
    path_vars = extract_path_vars(url)
    if not path_vars:
        logger.debug("No path variables found in URL, returning as is")
        return list(args)

    values, remaining = split_assignments(args[url_index + 1:], path_vars)
    logger.debug("Path variable values: %s", values)
    return [*args[:url_index], replace_path_vars(url, values), *remaining]
