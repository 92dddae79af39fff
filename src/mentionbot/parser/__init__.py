"""Parser for bot commands embedded in comment text."""

from .code_spans import CodeSpan, CodeSpanIndex, CodeSpanKind
from .command import NO_COMMAND, Command, Input, find_command_start, iter_commands
from .errors import (
    AmbiguousCommandError,
    GrammarError,
    LexError,
    ParseError,
    ParserContractError,
)
from .grammars import GRAMMARS, CommandKind, GrammarSpec
from .token import Token, TokenKind, Tokenizer

__all__ = [
    "AmbiguousCommandError",
    "CodeSpan",
    "CodeSpanIndex",
    "CodeSpanKind",
    "Command",
    "CommandKind",
    "GRAMMARS",
    "GrammarError",
    "GrammarSpec",
    "Input",
    "LexError",
    "NO_COMMAND",
    "ParseError",
    "ParserContractError",
    "Token",
    "TokenKind",
    "Tokenizer",
    "find_command_start",
    "iter_commands",
]
