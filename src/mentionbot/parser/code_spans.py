"""Index of markdown code regions in a comment body.

Mentions inside inline code (`` `@bot claim` ``) or fenced blocks are quoted
examples, never live commands. The index is built once per comment and is
read-only afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

FENCE_RE = re.compile(r"^[ \t]*(`{3,}|~{3,})")
# a closing fence carries no info string
FENCE_CLOSE_RE = re.compile(r"^[ \t]*(`{3,}|~{3,})[ \t]*\r?\n?$")
BACKTICKS_RE = re.compile(r"`+")


class CodeSpanKind(str, Enum):
    INLINE = "inline"
    FENCE = "fence"


@dataclass(frozen=True)
class CodeSpan:
    """Half-open range ``[start, end)`` of code in the source text."""

    start: int
    end: int
    kind: CodeSpanKind

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


class CodeSpanIndex:
    def __init__(self, text: str) -> None:
        self._spans: Tuple[CodeSpan, ...] = tuple(_scan(text))

    @property
    def spans(self) -> Tuple[CodeSpan, ...]:
        return self._spans

    def overlaps(self, start: int, end: int) -> Optional[CodeSpan]:
        """Return the first code span intersecting ``[start, end)``, if any."""
        for span in self._spans:
            if span.overlaps(start, end):
                return span
            if span.start >= end:
                break
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeSpanIndex):
            return NotImplemented
        return self._spans == other._spans

    def __repr__(self) -> str:
        return f"CodeSpanIndex({list(self._spans)!r})"


def _scan(text: str) -> List[CodeSpan]:
    spans: List[CodeSpan] = []
    prose_start = 0
    fence: Optional[Tuple[int, str]] = None  # (start offset, marker run)

    offset = 0
    for line in text.splitlines(keepends=True):
        line_end = offset + len(line)
        match = FENCE_RE.match(line)
        if fence is None:
            if match:
                spans.extend(_inline_spans(text, prose_start, offset))
                fence = (offset, match.group(1))
        elif _closes(fence[1], FENCE_CLOSE_RE.match(line)):
            spans.append(CodeSpan(fence[0], line_end, CodeSpanKind.FENCE))
            fence = None
            prose_start = line_end
        offset = line_end

    if fence is not None:
        # unterminated fence runs to end of input
        spans.append(CodeSpan(fence[0], len(text), CodeSpanKind.FENCE))
    else:
        spans.extend(_inline_spans(text, prose_start, len(text)))
    spans.sort(key=lambda span: span.start)
    return spans


def _closes(opener: str, closer: Optional[re.Match]) -> bool:
    if closer is None:
        return False
    candidate = closer.group(1)
    return candidate[0] == opener[0] and len(candidate) >= len(opener)


def _inline_spans(text: str, start: int, end: int) -> List[CodeSpan]:
    """Find backtick code spans in ``text[start:end]``.

    An opening run of N backticks is closed by the next run of exactly N
    backticks; an opener with no closer is literal text.
    """
    spans: List[CodeSpan] = []
    runs = list(BACKTICKS_RE.finditer(text, start, end))
    i = 0
    while i < len(runs):
        opener = runs[i]
        width = len(opener.group(0))
        closer_at = next(
            (j for j in range(i + 1, len(runs)) if len(runs[j].group(0)) == width),
            None,
        )
        if closer_at is None:
            i += 1
            continue
        spans.append(CodeSpan(opener.start(), runs[closer_at].end(), CodeSpanKind.INLINE))
        i = closer_at + 1
    return spans
