"""Completion engine, candidate formatters and shell scripts.

* :mod:`~httpie_oapi.completion.engine` -- the decision procedure from a
  tokenized command line to candidate lines.
* :mod:`~httpie_oapi.completion.formatters` -- per-shell candidate rendering.
* :mod:`~httpie_oapi.completion.scripts` -- the fish integration script.
"""

from httpie_oapi.completion.engine import CompletionEngine, complete
from httpie_oapi.completion.formatters import (
    BashFormatter,
    CompletionFormatter,
    FishFormatter,
    get_formatter,
)
from httpie_oapi.completion.scripts import get_script

__all__ = [
    "BashFormatter",
    "CompletionEngine",
    "CompletionFormatter",
    "FishFormatter",
    "complete",
    "get_formatter",
    "get_script",
]
