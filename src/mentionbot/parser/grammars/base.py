"""Outcome types shared by every command grammar.

A grammar receives a tokenizer positioned right after the trigger and
returns one of:

- ``DECLINE``: the leading keyword is not one of its own;
- ``Match``: the command parsed, ``tokens`` sits after the command text;
- ``Failure``: the keyword was recognized but the rest is malformed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

from ..errors import LexError, ParseError
from ..token import TokenKind, Tokenizer


class CommandKind(str, Enum):
    RELABEL = "relabel"
    ASSIGN = "assign"
    TRIAGE = "triage"

    def __str__(self) -> str:
        return self.value


class _Decline:
    _instance: Optional["_Decline"] = None

    def __new__(cls) -> "_Decline":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DECLINE"

    def __bool__(self) -> bool:
        return False


DECLINE = _Decline()


@dataclass(frozen=True)
class Match:
    value: Any
    tokens: Tokenizer


@dataclass(frozen=True)
class Failure:
    error: ParseError
    tokens: Tokenizer


Outcome = Union[_Decline, Match, Failure]
GrammarFn = Callable[[Tokenizer], Outcome]


@dataclass(frozen=True)
class GrammarSpec:
    """A registered grammar: its command kind, leading keywords and parser."""

    kind: CommandKind
    keywords: Tuple[str, ...]
    parse: GrammarFn

    def attempt(self, tokens: Tokenizer) -> Outcome:
        """Run the grammar, turning parse errors into ``Failure``.

        Errors raised before the leading keyword is recognized mean the
        grammar does not own the text, so they decline instead.
        """
        try:
            leading = tokens.peek_token()
        except LexError:
            return DECLINE
        if leading is None or not leading.is_word(*self.keywords):
            return DECLINE
        try:
            return self.parse(tokens)
        except ParseError as exc:
            return Failure(exc, tokens)


def expect_end(tokens: Tokenizer) -> Optional[Tokenizer]:
    """Accept end of input or a terminating ``.``.

    Returns the tokenizer after the dot (or at end of input), or ``None`` when
    something else follows.
    """
    if tokens.at_end():
        return tokens
    return tokens.eat_punct(TokenKind.DOT)
