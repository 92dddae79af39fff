"""Routes comment events through the parser to command handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .core.config import Config
from .core.errors import GitHubError, HandlerError, RepoNotConfigured
from .core.models import CommentEvent
from .github import GitHubManager
from .handlers import AssignmentHandler, CommandContext, RelabelHandler, TriageHandler
from .parser import AmbiguousCommandError, Command, CommandKind, iter_commands

LOGGER = logging.getLogger(__name__)

CommandHandler = Callable[[Any, CommandContext], Awaitable[None]]


class HandledStatus(str, Enum):
    APPLIED = "applied"
    INVALID = "invalid"
    REFUSED = "refused"
    FAILED = "failed"
    AMBIGUOUS = "ambiguous"


@dataclass
class HandledCommand:
    kind: Optional[CommandKind]
    status: HandledStatus
    message: str = ""


class Router:
    """Extracts every command from a comment and runs its handler."""

    def __init__(self, config: Config, github_manager: GitHubManager) -> None:
        self._config = config
        self._github_manager = github_manager
        self._command_handlers: Dict[CommandKind, CommandHandler] = {
            CommandKind.ASSIGN: AssignmentHandler(github_manager).handle,
            CommandKind.RELABEL: RelabelHandler(github_manager).handle,
            CommandKind.TRIAGE: TriageHandler(github_manager).handle,
        }

    async def handle_comment(self, event: CommentEvent) -> List[HandledCommand]:
        issue = event.issue
        if event.author.login == self._config.bot_name:
            LOGGER.debug("Ignoring comment by %s on %s#%s", event.author.login, issue.repo, issue.number)
            return []
        try:
            repo = self._config.get_repo(issue.repo)
        except RepoNotConfigured:
            LOGGER.info("Ignoring comment on unconfigured repository %s", issue.repo)
            return []

        LOGGER.info("Received comment on %s#%s from %s", issue.repo, issue.number, event.author.login)
        context = CommandContext(event=event, repo=repo, bot_name=self._config.bot_name)
        results: List[HandledCommand] = []
        try:
            for command in iter_commands(event.body, self._config.bot_name):
                results.append(await self._dispatch(command, context))
        except AmbiguousCommandError as exc:
            LOGGER.error("Command grammars are ambiguous for %s: %s", event.html_url, exc)
            results.append(HandledCommand(kind=None, status=HandledStatus.AMBIGUOUS, message=str(exc)))
        return results

    async def _dispatch(self, command: Command, context: CommandContext) -> HandledCommand:
        if command.is_err():
            message = f"Parsing {command.kind} command in [comment]({context.event.html_url}) failed: {command.error}"
            LOGGER.info("%s", message)
            await self._reply(context, message)
            return HandledCommand(kind=command.kind, status=HandledStatus.INVALID, message=message)

        handler = self._command_handlers.get(command.kind)
        if handler is None:
            LOGGER.warning("No handler registered for %s commands", command.kind)
            return HandledCommand(kind=command.kind, status=HandledStatus.FAILED, message="no handler")

        try:
            await handler(command.value, context)
        except HandlerError as exc:
            LOGGER.info("Refused %s command from %s: %s", command.kind, context.author, exc)
            await self._reply(context, str(exc))
            return HandledCommand(kind=command.kind, status=HandledStatus.REFUSED, message=str(exc))
        except GitHubError as exc:
            LOGGER.exception("GitHub call failed while handling %s command", command.kind)
            return HandledCommand(kind=command.kind, status=HandledStatus.FAILED, message=str(exc))
        return HandledCommand(kind=command.kind, status=HandledStatus.APPLIED)

    async def _reply(self, context: CommandContext, text: str) -> None:
        try:
            await self._github_manager.post_comment(context.event.issue, text)
        except GitHubError as exc:
            LOGGER.warning("Failed to reply on %s: %s", context.event.html_url, exc)
