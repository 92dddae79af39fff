"""Triage grammar: ``@bot triage high`` or ``@bot triage -`` to clear it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..token import Tokenizer
from .base import DECLINE, Match, Outcome, expect_end

KEYWORDS = ("triage",)

EXPECTED_PRIORITY = "expected priority (critical, high, medium, low)"
EXPECTED_END = "expected end of command"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_word(cls, word: str) -> Optional["Priority"]:
        lowered = word.lower()
        if lowered.startswith("p-"):
            lowered = lowered[2:]
        try:
            return cls(lowered)
        except ValueError:
            return None


@dataclass(frozen=True)
class Prioritize:
    priority: Priority


@dataclass(frozen=True)
class RemoveTriage:
    pass


TriageCommand = Union[Prioritize, RemoveTriage]


def parse(tokens: Tokenizer) -> Outcome:
    keyword, toks = tokens.next_token()
    if keyword is None or not keyword.is_word(*KEYWORDS):
        return DECLINE

    word, after = toks.next_token()
    if word is None or not word.is_word():
        raise toks.error(EXPECTED_PRIORITY)
    if word.value == "-":
        command: TriageCommand = RemoveTriage()
    else:
        priority = Priority.from_word(word.value)
        if priority is None:
            raise toks.error(EXPECTED_PRIORITY)
        command = Prioritize(priority)

    end = expect_end(after)
    if end is None:
        raise after.error(EXPECTED_END)
    return Match(command, end)
