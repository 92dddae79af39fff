"""Command grammars recognized after the bot mention."""

from .assign import AssignCommand
from .base import DECLINE, CommandKind, Failure, GrammarSpec, Match, Outcome
from .registry import GRAMMARS, check_disjoint, iter_grammars, keyword_conflicts
from .relabel import DeltaAction, LabelDelta, RelabelCommand
from .triage import Priority, TriageCommand

__all__ = [
    "AssignCommand",
    "CommandKind",
    "DECLINE",
    "DeltaAction",
    "Failure",
    "GRAMMARS",
    "GrammarSpec",
    "LabelDelta",
    "Match",
    "Outcome",
    "Priority",
    "RelabelCommand",
    "TriageCommand",
    "check_disjoint",
    "iter_grammars",
    "keyword_conflicts",
]
