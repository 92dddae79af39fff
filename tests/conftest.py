"""Shared fixtures for handler and router tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from mentionbot.core.config import Config
from mentionbot.core.models import (
    AssignConfig,
    CommentEvent,
    Issue,
    RelabelConfig,
    RepoConfig,
    TriageConfig,
    User,
)
from mentionbot.handlers import CommandContext


@pytest.fixture
def github_manager():
    """GitHubManager double that records calls and mirrors issue state."""
    manager = MagicMock()
    manager.is_configured.return_value = True
    manager.is_team_member = AsyncMock(return_value=False)

    async def _set_assignee(issue, login):
        issue.assignees = [login]

    async def _remove_assignees(issue):
        issue.assignees = []

    async def _edit_issue_body(issue, body):
        issue.body = body

    async def _add_labels(issue, labels):
        issue.labels.extend(label for label in labels if label not in issue.labels)

    async def _remove_label(issue, label):
        if label in issue.labels:
            issue.labels.remove(label)

    manager.set_assignee = AsyncMock(side_effect=_set_assignee)
    manager.remove_assignees = AsyncMock(side_effect=_remove_assignees)
    manager.edit_issue_body = AsyncMock(side_effect=_edit_issue_body)
    manager.add_labels = AsyncMock(side_effect=_add_labels)
    manager.remove_label = AsyncMock(side_effect=_remove_label)
    manager.post_comment = AsyncMock()
    return manager


@pytest.fixture
def repo_config():
    return RepoConfig(
        name="acme/widgets",
        team="acme/maintainers",
        assign=AssignConfig(),
        relabel=RelabelConfig(allow_unauthenticated=("C-*", "needs-*")),
        triage=TriageConfig(triaged="triaged"),
    )


@pytest.fixture
def config(repo_config, tmp_path):
    return Config(
        bot_name="bot",
        repos={repo_config.name: repo_config},
        config_dir=tmp_path,
        github_token="token",
    )


@pytest.fixture
def make_event():
    def _make(
        body: str = "", author: str = "alice", assignees=None, labels=None, issue_body: str = ""
    ) -> CommentEvent:
        return CommentEvent(
            issue=Issue(
                repo="acme/widgets",
                number=7,
                html_url="https://github.com/acme/widgets/issues/7",
                assignees=list(assignees or []),
                labels=list(labels or []),
                body=issue_body,
            ),
            author=User(login=author),
            body=body,
            html_url="https://github.com/acme/widgets/issues/7#issuecomment-1",
        )

    return _make


@pytest.fixture
def make_context(repo_config, make_event):
    def _make(**kwargs) -> CommandContext:
        return CommandContext(event=make_event(**kwargs), repo=repo_config, bot_name="bot")

    return _make
