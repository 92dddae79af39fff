"""Assignment grammar.

    @bot claim          assign the commenter
    @bot assign @user   assign someone else
    @bot release        drop the current assignment (alias: unassign)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..token import TokenKind, Tokenizer
from .base import DECLINE, Match, Outcome, expect_end

KEYWORDS = ("claim", "assign", "release", "unassign")

EXPECTED_END = "expected end of command"
MENTION_USER = "user should start with @"
NO_USER = "expected user to assign"


@dataclass(frozen=True)
class Own:
    pass


@dataclass(frozen=True)
class User:
    username: str


@dataclass(frozen=True)
class Release:
    pass


AssignCommand = Union[Own, User, Release]


def parse(tokens: Tokenizer) -> Outcome:
    keyword, toks = tokens.next_token()
    if keyword is None or not keyword.is_word(*KEYWORDS):
        return DECLINE

    if keyword.value == "assign":
        user, after = toks.next_token()
        if user is None or not user.is_word():
            raise toks.error(NO_USER)
        if not user.value.startswith("@") or len(user.value) == 1:
            raise toks.error(MENTION_USER)
        # a trailing dot belongs to the command
        return Match(User(username=user.value[1:]), after.eat_punct(TokenKind.DOT) or after)

    end = expect_end(toks)
    if end is None:
        raise toks.error(EXPECTED_END)
    command = Own() if keyword.value == "claim" else Release()
    return Match(command, end)
