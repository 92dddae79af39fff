"""Error types raised or returned by the comment command parser."""

from __future__ import annotations

from ..core.errors import MentionBotError

CONTEXT_WIDTH = 10


class ParseError(MentionBotError):
    """A command could not be parsed.

    Parse errors are ordinary results: the dispatch engine returns them inside
    a ``Command`` instead of raising them to the caller.
    """

    def __init__(self, text: str, position: int, reason: str) -> None:
        self.text = text
        self.position = position
        self.reason = reason
        super().__init__(self.render())

    def render(self) -> str:
        """Render the failure with a little surrounding text for humans."""
        before = self.text[max(self.position - CONTEXT_WIDTH, 0) : self.position]
        after = self.text[self.position : self.position + CONTEXT_WIDTH]
        return f"...'{before}' | error: {self.reason} at >| '{after}'..."

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.text == other.text
            and self.position == other.position
            and self.reason == other.reason
        )

    def __hash__(self) -> int:
        return hash((type(self), self.text, self.position, self.reason))


class LexError(ParseError):
    """Malformed token, e.g. an unterminated quoted string."""


class GrammarError(ParseError):
    """A command keyword was recognized but its arguments are invalid."""


class ParserContractError(MentionBotError):
    """The grammar set or the engine broke an internal invariant.

    This is a programming error, not bad user input.
    """


class AmbiguousCommandError(ParserContractError):
    """More than one grammar claimed the same trigger occurrence."""

    def __init__(self, text: str, kinds) -> None:
        self.text = text
        self.kinds = tuple(kinds)
        names = ", ".join(str(kind) for kind in self.kinds)
        super().__init__(f"succeeded parsing {text!r} to multiple commands: {names}")
