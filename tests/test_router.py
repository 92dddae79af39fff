"""Tests for Router."""

from __future__ import annotations

import pytest

from mentionbot.core.errors import GitHubError
from mentionbot.parser import CommandKind
from mentionbot.router import HandledStatus, Router


class TestRouter:
    """Comment events flow through the parser to handlers."""

    @pytest.fixture
    def router(self, config, github_manager):
        return Router(config, github_manager)

    @pytest.mark.asyncio
    async def test_comment_without_commands(self, router, make_event, github_manager):
        results = await router.handle_comment(make_event("Looks good to me"))
        assert results == []
        github_manager.post_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_runs_every_command(self, router, make_event):
        event = make_event("@bot claim. Also @bot modify labels: +C-bug.")
        results = await router.handle_comment(event)
        print(f"\n OUTPUT: {results}")
        assert [(r.kind, r.status) for r in results] == [
            (CommandKind.ASSIGN, HandledStatus.APPLIED),
            (CommandKind.RELABEL, HandledStatus.APPLIED),
        ]
        assert event.issue.assignees == ["alice"]
        assert event.issue.labels == ["C-bug"]

    @pytest.mark.asyncio
    async def test_code_examples_are_ignored(self, router, make_event, github_manager):
        event = make_event("Use `@bot claim` to take this.\n```\n@bot release\n```")
        assert await router.handle_comment(event) == []
        github_manager.set_assignee.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parse_error_is_reported(self, router, make_event, github_manager):
        event = make_event("@bot assign bob")
        results = await router.handle_comment(event)
        assert results[0].status is HandledStatus.INVALID
        body = github_manager.post_comment.await_args.args[1]
        assert "Parsing assign command" in body
        assert "user should start with @" in body

    @pytest.mark.asyncio
    async def test_refusal_is_reported(self, router, make_event, github_manager):
        results = await router.handle_comment(make_event("@bot assign @bob"))
        assert results[0].status is HandledStatus.REFUSED
        github_manager.post_comment.assert_awaited_once()
        assert "Only team members" in github_manager.post_comment.await_args.args[1]

    @pytest.mark.asyncio
    async def test_github_failure_is_logged(self, router, make_event, github_manager):
        github_manager.set_assignee.side_effect = GitHubError("boom")
        results = await router.handle_comment(make_event("@bot claim"))
        assert results[0].status is HandledStatus.FAILED
        assert results[0].message == "boom"

    @pytest.mark.asyncio
    async def test_ignores_own_comments(self, router, make_event, github_manager):
        assert await router.handle_comment(make_event("@bot claim", author="bot")) == []
        github_manager.set_assignee.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ignores_unconfigured_repo(self, router, make_event):
        event = make_event("@bot claim")
        event.issue.repo = "other/repo"
        assert await router.handle_comment(event) == []

    @pytest.mark.asyncio
    async def test_ambiguity_is_reported_not_raised(self, router, make_event, monkeypatch):
        from mentionbot.parser import AmbiguousCommandError

        def _broken(text, bot):
            raise AmbiguousCommandError(text, [CommandKind.ASSIGN, CommandKind.TRIAGE])
            yield  # pragma: no cover

        monkeypatch.setattr("mentionbot.router.iter_commands", _broken)
        results = await router.handle_comment(make_event("@bot claim"))
        assert results[0].status is HandledStatus.AMBIGUOUS
