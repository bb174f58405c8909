"""Decide which completion candidates to offer for a command line.

The engine sees only the tokenized command line and the registered APIs,
and applies the first matching rule:

1. **No API on the line.** No token starts with any registered base URL:
   offer every API's base URL (``https://api.example.com/<TAB>petstore``).
2. **Base URL under the cursor.** The token being typed starts with the
   first matching API's base URL: offer every endpoint path of that API,
   unfiltered, in document order.
3. **Past the URL.** Strip the base URL from the matched token, keep the
   endpoints whose path contains the remainder, and offer their parameters
   (required first), skipping any whose name already starts a token.

APIs are tried in registry order (sorted by name). Missing matches never
raise; they narrow the result down to an empty list at worst.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from httpie_oapi.cache import EndpointStore
from httpie_oapi.completion.formatters import CompletionFormatter, FishFormatter
from httpie_oapi.models import Param
from httpie_oapi.registry import ApiSpec
from httpie_oapi.tokens import Token, TokenizedLine

logger = logging.getLogger(__name__)


class CompletionEngine:
    """Produce completion candidates for a :class:`~httpie_oapi.tokens.TokenizedLine`.

    Args:
        store: Cache access used to populate each API's endpoint cell.
        formatter: Shell dialect of the produced lines; fish by default.
    """

    def __init__(
        self, store: EndpointStore, formatter: Optional[CompletionFormatter] = None
    ) -> None:
        self._store = store
        self._formatter = formatter or FishFormatter()

    def complete(self, tokens: TokenizedLine, apis: Sequence[ApiSpec]) -> list[str]:
        """Return the candidate lines, in output order.

        Args:
            tokens: The tokenized command line with its cursor position.
            apis: Registered APIs in registry order.
        """
        logger.info("Processing completion request: tokens=%s, cursor_pos=%d",
                    tokens.texts(), tokens.cursor_pos)

        matched = _match_api(tokens, apis)
        if matched is None:
            logger.info("No base_url found in tokens, showing all API specs")
            return [self._formatter.api(api.base_url, api.name) for api in apis]

        api, matched_token = matched
        endpoints = api.get_endpoints(self._store)

        current = tokens.current_token()
        if current is not None and current.text.startswith(api.base_url):
            logger.info("Cursor is on base_url token, showing all paths")
            return [self._formatter.endpoint(ep, api.base_url) for ep in endpoints.all()]

        fragment = matched_token.text[len(api.base_url):]
        logger.info("Looking for parameters for path: %s", fragment)
        candidates: list[str] = []
        for endpoint in endpoints.filter(fragment):
            logger.debug("Found matching endpoint: %s %s", endpoint.method, endpoint.path)
            for param in endpoint.get_params_sort():
                if not _already_typed(param, tokens):
                    candidates.append(self._formatter.param(param))
        return candidates


def _match_api(
    tokens: TokenizedLine, apis: Iterable[ApiSpec]
) -> Optional[tuple[ApiSpec, Token]]:
    for api in apis:
        token = tokens.find_token_starting_with(api.base_url)
        if token is not None:
            return api, token
    return None


def _already_typed(param: Param, tokens: TokenizedLine) -> bool:
    return tokens.has_token_starting_with(param.name)


def complete(
    tokens: TokenizedLine,
    apis: Sequence[ApiSpec],
    store: EndpointStore,
    formatter: Optional[CompletionFormatter] = None,
) -> list[str]:
    """Module-level shortcut for ``CompletionEngine(store, formatter).complete(...)``."""
    return CompletionEngine(store, formatter).complete(tokens, apis)
