"""Common utilities for command handlers."""

from __future__ import annotations

import logging

from ..github import GitHubManager
from .context import CommandContext

LOGGER = logging.getLogger(__name__)


class BaseCommandHandler:
    """Provides GitHub access and the team-membership check."""

    def __init__(self, github_manager: GitHubManager) -> None:
        self._github = github_manager

    async def _is_team_member(self, context: CommandContext) -> bool:
        team = context.repo.team
        if not team:
            return False
        owner = context.repo.name.split("/", 1)[0]
        is_member = await self._github.is_team_member(team, context.author, owner)
        LOGGER.debug("%s is %sa member of %s", context.author, "" if is_member else "not ", team)
        return is_member

    async def _reply(self, context: CommandContext, text: str) -> None:
        await self._github.post_comment(context.event.issue, text)
