"""Lazy tokenizer over comment text.

A ``Tokenizer`` is an immutable cursor: ``next_token`` returns the token
together with a new tokenizer positioned after it. Grammars get independent,
rewindable views of the same input simply by holding on to a tokenizer value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import GrammarError, LexError

QUOTE = '"'
ESCAPE = "\\"


class TokenKind(str, Enum):
    WORD = "word"
    QUOTE = "quote"
    DOT = "."
    COMMA = ","
    SEMI = ";"
    COLON = ":"
    EXCLAMATION = "!"
    QUESTION = "?"


PUNCTUATION = {
    ".": TokenKind.DOT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMI,
    ":": TokenKind.COLON,
    "!": TokenKind.EXCLAMATION,
    "?": TokenKind.QUESTION,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    start: int
    end: int

    def is_word(self, *words: str) -> bool:
        return self.kind is TokenKind.WORD and (not words or self.value in words)

    def is_punct(self, *kinds: TokenKind) -> bool:
        return self.kind in kinds


@dataclass(frozen=True)
class Tokenizer:
    """Immutable lexer state: the shared text plus the current offset."""

    text: str
    pos: int = 0

    def position(self) -> int:
        return self.pos

    def at_end(self) -> bool:
        return self._skip_whitespace() >= len(self.text)

    def next_token(self) -> Tuple[Optional[Token], "Tokenizer"]:
        """Return the next token and the tokenizer positioned after it.

        Returns ``None`` and a tokenizer at the end of input when nothing is
        left. Raises ``LexError`` for an unterminated quoted string.
        """
        start = self._skip_whitespace()
        text = self.text
        if start >= len(text):
            return None, Tokenizer(text, start)

        ch = text[start]
        if ch in PUNCTUATION:
            token = Token(PUNCTUATION[ch], ch, start, start + 1)
            return token, Tokenizer(text, start + 1)
        if ch == QUOTE:
            return self._consume_quote(start)

        end = start
        while end < len(text):
            ch = text[end]
            if ch.isspace() or ch == QUOTE:
                break
            if ch in PUNCTUATION and (end + 1 == len(text) or text[end + 1].isspace()):
                break
            end += 1
        return Token(TokenKind.WORD, text[start:end], start, end), Tokenizer(text, end)

    def eat_punct(self, kind: TokenKind) -> Optional["Tokenizer"]:
        """Consume one punctuation token of ``kind`` if it comes next.

        Only the next character is inspected, so malformed text further on
        cannot fail the caller.
        """
        pos = self._skip_whitespace()
        if pos < len(self.text) and PUNCTUATION.get(self.text[pos]) is kind:
            return Tokenizer(self.text, pos + 1)
        return None

    def peek_token(self) -> Optional[Token]:
        token, _ = self.next_token()
        return token

    def error(self, reason: str) -> GrammarError:
        """Build a grammar error anchored at the next unread token."""
        return GrammarError(self.text, self._skip_whitespace(), reason)

    def _skip_whitespace(self) -> int:
        pos = self.pos
        text = self.text
        while pos < len(text) and text[pos].isspace():
            pos += 1
        return pos

    def _consume_quote(self, start: int) -> Tuple[Token, "Tokenizer"]:
        text = self.text
        chars = []
        pos = start + 1
        while pos < len(text):
            ch = text[pos]
            if ch == ESCAPE and pos + 1 < len(text) and text[pos + 1] in (QUOTE, ESCAPE):
                chars.append(text[pos + 1])
                pos += 2
                continue
            if ch == QUOTE:
                token = Token(TokenKind.QUOTE, "".join(chars), start, pos + 1)
                return token, Tokenizer(text, pos + 1)
            chars.append(ch)
            pos += 1
        raise LexError(text, start, "unterminated quote")
