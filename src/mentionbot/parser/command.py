"""Dispatch engine: finds bot mentions and runs every grammar against them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .code_spans import CodeSpanIndex
from .errors import AmbiguousCommandError, ParseError, ParserContractError
from .grammars import DECLINE, CommandKind, Failure, GrammarSpec, Match, iter_grammars
from .token import TokenKind, Tokenizer

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """Result of one ``parse_command`` call.

    ``kind`` is ``None`` for "no command". Otherwise exactly one of ``value``
    (parsed command) or ``error`` (the grammar's parse error) is set.
    """

    kind: Optional[CommandKind] = None
    value: Any = None
    error: Optional[ParseError] = None

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return not self.is_ok()

    def is_none(self) -> bool:
        return self.kind is None


NO_COMMAND = Command()


def find_command_start(text: str, bot: str, start: int = 0) -> Optional[int]:
    """Return the offset of the next ``@bot`` mention at or after ``start``.

    Only exact mentions count: ``@bot2`` or ``@bot-ci`` do not trigger ``@bot``.
    """
    trigger = f"@{bot}"
    offset = text.find(trigger, start)
    while offset != -1:
        token, _ = _lex_trigger(text, offset)
        if token is not None and token.value == trigger:
            return offset
        offset = text.find(trigger, offset + 1)
    return None


def _lex_trigger(text: str, offset: int):
    # the trigger word cannot contain a quote, so lexing it never fails
    return Tokenizer(text, offset).next_token()


class Input:
    """A parse session over one comment body.

    ``parsed`` is the scan cursor. It only moves forward, and only past a
    command that parsed successfully. A trigger that is declined by every
    grammar, fails to parse or sits inside a code span leaves the cursor at
    the trigger, so looping callers must skip past it themselves (see
    ``iter_commands``).
    """

    def __init__(
        self,
        text: str,
        bot: str,
        grammars: Optional[Sequence[GrammarSpec]] = None,
        start: int = 0,
        code: Optional[CodeSpanIndex] = None,
    ) -> None:
        self.text = text
        self.bot = bot
        self.parsed = start
        self.code = code if code is not None else CodeSpanIndex(text)
        self._grammars: Tuple[GrammarSpec, ...] = tuple(
            grammars if grammars is not None else iter_grammars()
        )
        self._broken: Optional[ParserContractError] = None

    @property
    def trigger(self) -> str:
        return f"@{self.bot}"

    @property
    def remaining(self) -> str:
        return self.text[self.parsed :]

    def resumed_at(self, offset: int) -> "Input":
        """Start a new session over the same text at a later offset."""
        if offset < self.parsed:
            raise ValueError(f"cannot resume at {offset}, cursor is at {self.parsed}")
        return Input(self.text, self.bot, grammars=self._grammars, start=offset, code=self.code)

    def parse_command(self) -> Command:
        if self._broken is not None:
            raise self._broken

        start = find_command_start(self.text, self.bot, self.parsed)
        if start is None:
            return NO_COMMAND
        self.parsed = start

        trigger, tokens = _lex_trigger(self.text, start)
        if trigger is None or trigger.kind is not TokenKind.WORD or trigger.value != self.trigger:
            raise ParserContractError(f"expected {self.trigger!r} at offset {start}")
        LOGGER.debug("Found %s at offset %s", self.trigger, start)

        claims: List[Tuple[GrammarSpec, Any]] = []
        for grammar in self._grammars:
            outcome = grammar.attempt(tokens)
            if outcome is not DECLINE:
                claims.append((grammar, outcome))

        if len(claims) > 1:
            self._broken = AmbiguousCommandError(
                self.text[start:], [grammar.kind for grammar, _ in claims]
            )
            LOGGER.error("%s", self._broken)
            raise self._broken

        span = self.code.overlaps(trigger.start, trigger.end)
        if span is not None:
            LOGGER.debug("Ignoring %s inside %s code at offset %s", self.trigger, span.kind.value, start)
            return NO_COMMAND

        if not claims:
            return NO_COMMAND

        grammar, outcome = claims[0]
        if isinstance(outcome, Match):
            self.parsed = outcome.tokens.position()
            LOGGER.debug("Parsed %s command: %r", grammar.kind, outcome.value)
            return Command(kind=grammar.kind, value=outcome.value)
        if isinstance(outcome, Failure):
            # leave the cursor at the trigger so the text is not treated as consumed
            LOGGER.debug("Failed to parse %s command: %s", grammar.kind, outcome.error)
            return Command(kind=grammar.kind, error=outcome.error)
        raise ParserContractError(f"grammar {grammar.kind} returned {outcome!r}")


def iter_commands(
    text: str,
    bot: str,
    grammars: Optional[Sequence[GrammarSpec]] = None,
) -> Iterator[Command]:
    """Yield every command in ``text``, including parse failures.

    Unlike a bare ``parse_command`` loop this always makes progress: when a
    trigger leaves the cursor in place, scanning resumes one position past it.
    """
    session = Input(text, bot, grammars=grammars)
    while True:
        command = session.parse_command()
        if command.is_none() and find_command_start(text, bot, session.parsed) is None:
            return
        if not command.is_none():
            yield command
        if command.is_none() or command.is_err():
            session = session.resumed_at(session.parsed + 1)
