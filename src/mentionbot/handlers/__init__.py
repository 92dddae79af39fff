"""Handlers that act on parsed commands."""

from .assign import AssignmentHandler
from .context import CommandContext
from .relabel import RelabelHandler
from .triage import TriageHandler

__all__ = ["AssignmentHandler", "CommandContext", "RelabelHandler", "TriageHandler"]
