"""Handler for ``@bot triage <priority>``; team members only."""

from __future__ import annotations

import logging

from ..core.errors import HandlerError
from ..parser.grammars.triage import Prioritize, RemoveTriage, TriageCommand
from .base import BaseCommandHandler
from .context import CommandContext

LOGGER = logging.getLogger(__name__)


class TriageHandler(BaseCommandHandler):
    async def handle(self, command: TriageCommand, context: CommandContext) -> None:
        config = context.repo.triage
        if config is None:
            LOGGER.info("Triage is not enabled for %s", context.repo.name)
            return
        if not await self._is_team_member(context):
            raise HandlerError("Only team members can triage issues")

        issue = context.event.issue
        priority_labels = set(config.priorities.values())

        if isinstance(command, RemoveTriage):
            LOGGER.info("Removing triage from %s#%s", issue.repo, issue.number)
            for label in [label for label in issue.labels if label in priority_labels]:
                await self._github.remove_label(issue, label)
            if config.triaged and config.triaged in issue.labels:
                await self._github.remove_label(issue, config.triaged)
            if config.untriaged:
                await self._github.add_labels(issue, [config.untriaged])
            return

        if not isinstance(command, Prioritize):
            raise TypeError(f"Unsupported triage command: {command!r}")

        wanted = config.priorities[command.priority.value]
        LOGGER.info("Prioritizing %s#%s as %s", issue.repo, issue.number, wanted)
        for label in [label for label in issue.labels if label in priority_labels and label != wanted]:
            await self._github.remove_label(issue, label)
        if config.untriaged and config.untriaged in issue.labels:
            await self._github.remove_label(issue, config.untriaged)
        to_add = [wanted] if wanted not in issue.labels else []
        if config.triaged and config.triaged not in issue.labels:
            to_add.append(config.triaged)
        await self._github.add_labels(issue, to_add)
