"""Central registry of the supported command grammars."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from ..errors import ParserContractError
from . import assign, relabel, triage
from .base import CommandKind, GrammarSpec


def _build_grammars() -> Tuple[GrammarSpec, ...]:
    return (
        GrammarSpec(kind=CommandKind.RELABEL, keywords=relabel.KEYWORDS, parse=relabel.parse),
        GrammarSpec(kind=CommandKind.ASSIGN, keywords=assign.KEYWORDS, parse=assign.parse),
        GrammarSpec(kind=CommandKind.TRIAGE, keywords=triage.KEYWORDS, parse=triage.parse),
    )


def keyword_conflicts(grammars: Iterable[GrammarSpec]) -> Dict[str, List[CommandKind]]:
    """Return every leading keyword claimed by more than one grammar."""
    owners: Dict[str, List[CommandKind]] = {}
    for grammar in grammars:
        for keyword in grammar.keywords:
            owners.setdefault(keyword, []).append(grammar.kind)
    return {keyword: kinds for keyword, kinds in owners.items() if len(kinds) > 1}


def check_disjoint(grammars: Sequence[GrammarSpec]) -> Sequence[GrammarSpec]:
    conflicts = keyword_conflicts(grammars)
    if conflicts:
        rendered = ", ".join(
            f"{keyword!r} ({', '.join(str(kind) for kind in kinds)})"
            for keyword, kinds in sorted(conflicts.items())
        )
        raise ParserContractError(f"grammars share leading keywords: {rendered}")
    return grammars


GRAMMARS: Tuple[GrammarSpec, ...] = tuple(check_disjoint(_build_grammars()))


def iter_grammars() -> Sequence[GrammarSpec]:
    """Return the immutable list of grammars in attempt order."""
    return GRAMMARS
