"""Shell-word tokenizer with position tracking.

The completion engine needs two things from the command line it is handed:
the words as the shell would split them, and where each word sits so the
cursor can be matched against it. :func:`tokenize` provides both as a
:class:`TokenizedLine`.

Offsets are character offsets into the original line, matching what
``commandline -C`` reports in fish. They are recovered after splitting by
searching for each word from the end of the previous one. When quoting or
escaping makes a word differ from its source text the search can fail; the
token then gets a zero-length span at the previous token's end.

Example::

    line = tokenize("http https://api.example.com/pets limit==", 20)
    line.current_token().text        # 'https://api.example.com/pets'
    line.has_token_starting_with("limit")   # True
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class Token:
    """One word of the line and its ``[start, end)`` span in the original text."""

    text: str
    start: int
    end: int


def split_words(line: str) -> list[str]:
    """Split *line* with POSIX shell rules.

    An unterminated quote or a trailing backslash does not raise: the words
    read so far are returned, followed by the partial last word.
    """
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""

    words: list[str] = []
    try:
        while True:
            word = lexer.get_token()
            if word is None:
                break
            words.append(word)
    except ValueError:
        # No closing quotation / no escaped character; keep what was read.
        if lexer.token:
            words.append(lexer.token)
    return words


@dataclass
class TokenizedLine:
    """The tokens of one command line plus the cursor offset."""

    tokens: list[Token] = field(default_factory=list)
    cursor_pos: int = 0

    @classmethod
    def from_line(cls, line: str, cursor_pos: int) -> "TokenizedLine":
        tokens: list[Token] = []
        current_pos = 0
        for word in split_words(line):
            start = line.find(word, current_pos)
            if start < 0:
                start = end = current_pos
            else:
                end = start + len(word)
            tokens.append(Token(text=word, start=start, end=end))
            current_pos = end
        return cls(tokens=tokens, cursor_pos=cursor_pos)

    def current_token(self) -> Optional[Token]:
        """Return the token whose inclusive ``[start, end]`` span holds the cursor.

        The cursor right after the last character of a word still counts as
        being on that word, so ``"http example.com|"`` yields ``example.com``.
        """
        for token in self.tokens:
            if token.start <= self.cursor_pos <= token.end:
                return token
        return None

    def find_token_starting_with(self, prefix: str) -> Optional[Token]:
        for token in self.tokens:
            if token.text.startswith(prefix):
                return token
        return None

    def has_token_starting_with(self, prefix: str) -> bool:
        return self.find_token_starting_with(prefix) is not None

    def texts(self) -> list[str]:
        return [token.text for token in self.tokens]

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]


def tokenize(line: str, cursor_pos: int) -> TokenizedLine:
    """Split *line* into positioned tokens; see :class:`TokenizedLine`."""
    return TokenizedLine.from_line(line, cursor_pos)
