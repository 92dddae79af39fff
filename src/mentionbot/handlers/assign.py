"""Permit assignment of any user to issues, without requiring write access.

Assign with ``@bot assign @user`` or ``@bot claim`` (self-claim), and drop
the assignment with ``@bot release``. Only team members may assign someone
other than themselves or release another user's assignment. When GitHub
refuses the assignee (they are not a collaborator) the bot assigns itself.

The actual claimer is always recorded in an ``ASSIGN`` section of the issue
body, so that a user stood in for by the bot can still release the issue.
"""

from __future__ import annotations

import logging

from ..core.errors import HandlerError, InvalidAssignee
from ..parser.grammars.assign import AssignCommand, Own, Release, User
from .base import BaseCommandHandler
from .context import CommandContext
from .issue_data import IssueBodySection

LOGGER = logging.getLogger(__name__)


class AssignmentHandler(BaseCommandHandler):
    async def handle(self, command: AssignCommand, context: CommandContext) -> None:
        if context.repo.assign is None:
            LOGGER.info("Assignment is not enabled for %s", context.repo.name)
            return

        issue = context.event.issue
        author = context.author
        record = IssueBodySection(issue, "ASSIGN")

        if isinstance(command, Release):
            claimed = (record.current_data() or {}).get("user")
            holders = set(issue.assignees)
            if claimed:
                holders.add(claimed)
            if not holders:
                raise HandlerError("Cannot release unassigned issue")
            if author not in holders and not await self._is_team_member(context):
                raise HandlerError("Cannot release another user's assignment")
            LOGGER.info("%s released %s#%s", author, issue.repo, issue.number)
            await self._github.remove_assignees(issue)
            if claimed:
                await record.apply(self._github, "", {"user": None})
            return

        if isinstance(command, Own):
            to_assign = author
        elif isinstance(command, User):
            to_assign = command.username
            if to_assign != author and not await self._is_team_member(context):
                raise HandlerError("Only team members can assign other users")
        else:
            raise TypeError(f"Unsupported assign command: {command!r}")

        data = {"user": to_assign}
        LOGGER.info("Assigning %s to %s#%s", to_assign, issue.repo, issue.number)
        try:
            await self._github.set_assignee(issue, to_assign)
        except InvalidAssignee:
            if not context.repo.assign.fallback_to_bot:
                raise HandlerError(f"@{to_assign} cannot be assigned to this issue") from None
            LOGGER.info("GitHub rejected %s; assigning %s instead", to_assign, context.bot_name)
            await self._github.set_assignee(issue, context.bot_name)
            await record.apply(
                self._github,
                f"This issue has been assigned to @{to_assign} via "
                f"[this comment]({context.event.html_url}).",
                data,
            )
            return
        await record.apply(self._github, "", data)
