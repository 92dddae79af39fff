"""Handler for ``@bot modify labels: ...``.

Anyone may add or remove labels matching the repository's
``allow-unauthenticated`` patterns; everything else needs team membership.
"""

from __future__ import annotations

import fnmatch
import logging
from typing import List

from ..core.errors import HandlerError
from ..parser.grammars.relabel import RelabelCommand
from .base import BaseCommandHandler
from .context import CommandContext

LOGGER = logging.getLogger(__name__)


class RelabelHandler(BaseCommandHandler):
    async def handle(self, command: RelabelCommand, context: CommandContext) -> None:
        config = context.repo.relabel
        if config is None:
            LOGGER.info("Relabeling is not enabled for %s", context.repo.name)
            return

        restricted = [
            delta
            for delta in command.deltas
            if not any(fnmatch.fnmatchcase(delta.label, pattern) for pattern in config.allow_unauthenticated)
        ]
        if restricted and not await self._is_team_member(context):
            raise HandlerError(
                "Label " + ", ".join(f"`{delta.label}`" for delta in restricted)
                + " can only be set by team members"
            )

        issue = context.event.issue
        to_add = _unique(delta.label for delta in command.deltas if delta.is_add and delta.label not in issue.labels)
        to_remove = _unique(delta.label for delta in command.deltas if not delta.is_add)

        LOGGER.info(
            "Relabeling %s#%s: %s",
            issue.repo,
            issue.number,
            " ".join(str(delta) for delta in command.deltas),
        )
        await self._github.add_labels(issue, to_add)
        for label in to_remove:
            await self._github.remove_label(issue, label)


def _unique(labels) -> List[str]:
    seen: List[str] = []
    for label in labels:
        if label not in seen:
            seen.append(label)
    return seen
