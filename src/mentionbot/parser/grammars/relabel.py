"""Label modification grammar.

    @bot modify labels: +T-compiler -T-lang.
    @bot modify labels to +needs-review, and -S-blocked
    @bot relabel +C-bug "A-error messages"

A bare label is an addition. The list ends at ``.``, ``;``, ``!``, ``?`` or
end of input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from ..token import Token, TokenKind, Tokenizer
from .base import DECLINE, Match, Outcome

KEYWORDS = ("modify", "relabel")

EMPTY_LABEL = "empty label"
EXPECTED_LABEL_DELTA = "a label delta"
MISLEADING_TO = "misleading `to:`, use `to` or `:` on its own"
NO_SEPARATOR = "must have `:` or `to` as label starter"

TERMINATORS = (TokenKind.DOT, TokenKind.SEMI, TokenKind.EXCLAMATION, TokenKind.QUESTION)


class DeltaAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class LabelDelta:
    action: DeltaAction
    label: str

    @property
    def is_add(self) -> bool:
        return self.action is DeltaAction.ADD

    def __str__(self) -> str:
        sign = "+" if self.is_add else "-"
        return f"{sign}{self.label}"


@dataclass(frozen=True)
class RelabelCommand:
    deltas: Tuple[LabelDelta, ...]

    @property
    def added(self) -> List[str]:
        return [delta.label for delta in self.deltas if delta.is_add]

    @property
    def removed(self) -> List[str]:
        return [delta.label for delta in self.deltas if not delta.is_add]


def parse(tokens: Tokenizer) -> Outcome:
    keyword, toks = tokens.next_token()
    if keyword is None or not keyword.is_word(*KEYWORDS):
        return DECLINE

    if keyword.value == "modify":
        target, after = toks.next_token()
        if target is None or not target.is_word("labels", "label"):
            return DECLINE
        toks = _separator(after)
    else:
        toks = toks.eat_punct(TokenKind.COLON) or toks

    deltas: List[LabelDelta] = []
    while True:
        token, after = toks.next_token()
        if token is None:
            break
        if token.is_punct(*TERMINATORS):
            toks = after
            break
        if token.is_punct(TokenKind.COMMA) or token.is_word("and"):
            toks = after
            continue
        deltas.append(_delta(toks, token))
        toks = after

    if not deltas:
        raise toks.error(EXPECTED_LABEL_DELTA)
    return Match(RelabelCommand(tuple(deltas)), toks)


def _separator(toks: Tokenizer) -> Tokenizer:
    colon = toks.eat_punct(TokenKind.COLON)
    if colon is not None:
        return colon
    token, after = toks.next_token()
    if token is None or not token.is_word("to"):
        raise toks.error(NO_SEPARATOR)
    if after.eat_punct(TokenKind.COLON) is not None:
        raise after.error(MISLEADING_TO)
    return after


def _delta(toks: Tokenizer, token: Token) -> LabelDelta:
    if token.kind is TokenKind.QUOTE:
        action, label = DeltaAction.ADD, token.value
    elif token.is_word():
        if token.value[0] in "+-":
            action = DeltaAction.ADD if token.value[0] == "+" else DeltaAction.REMOVE
            label = token.value[1:]
        else:
            action, label = DeltaAction.ADD, token.value
    else:
        raise toks.error(EXPECTED_LABEL_DELTA)
    if not label.strip():
        raise toks.error(EMPTY_LABEL)
    return LabelDelta(action, label)
