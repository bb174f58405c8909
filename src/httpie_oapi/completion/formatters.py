"""Render completion candidates for a particular shell.

The engine decides *what* to offer; a :class:`CompletionFormatter` decides
how each candidate is spelled for the shell consuming it. Fish reads one
candidate per line with an optional tab-separated description. Bash's
``compgen``-style consumers want the bare candidate only.

Additional dialects subclass :class:`CompletionFormatter` and register in
:data:`FORMATTERS`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from httpie_oapi.exceptions import InvalidUsageError
from httpie_oapi.models import Endpoint, Param


class CompletionFormatter(ABC):
    """Turns one candidate (text plus description) into an output line."""

    name: str = ""

    @abstractmethod
    def candidate(self, text: str, description: str) -> str:
        """Return the line for one candidate."""

    def api(self, base_url: str, name: str) -> str:
        """Candidate offered when no registered API appears on the line yet."""
        return self.candidate(f"{base_url}/", name)

    def endpoint(self, endpoint: Endpoint, base_url: str) -> str:
        return self.candidate(
            endpoint.completion_text(base_url), endpoint.completion_description()
        )

    def param(self, param: Param) -> str:
        return self.candidate(param.completion_text(), param.completion_description())


class FishFormatter(CompletionFormatter):
    """``text<TAB>description``, as fish's ``complete -a`` expects."""

    name = "fish"

    def candidate(self, text: str, description: str) -> str:
        return f"{text}\t{description}"


class BashFormatter(CompletionFormatter):
    """Bare candidate text; bash completion has no description column."""

    name = "bash"

    def candidate(self, text: str, description: str) -> str:
        return text


FORMATTERS: dict[str, type[CompletionFormatter]] = {
    FishFormatter.name: FishFormatter,
    BashFormatter.name: BashFormatter,
}


def get_formatter(shell: str) -> CompletionFormatter:
    """Return a formatter instance for *shell*.

    Raises:
        InvalidUsageError: If the shell has no formatter.
    """
    formatter_cls = FORMATTERS.get(shell.lower())
    if formatter_cls is None:
        supported = ", ".join(sorted(FORMATTERS))
        raise InvalidUsageError(f"Unsupported shell: {shell}. Supported: {supported}")
    return formatter_cls()
