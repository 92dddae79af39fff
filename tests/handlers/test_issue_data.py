"""Tests for IssueBodySection."""

from __future__ import annotations

import pytest

from mentionbot.core.models import Issue
from mentionbot.handlers.issue_data import IssueBodySection


def make_issue(body: str = "") -> Issue:
    return Issue(repo="acme/widgets", number=7, html_url="", body=body)


class TestIssueBodySection:
    """State stored in the issue description."""

    def test_no_section(self):
        assert IssueBodySection(make_issue("Steps to reproduce"), "ASSIGN").current_data() is None

    def test_render_prepends_to_description(self):
        issue = make_issue("Steps to reproduce")
        body = IssueBodySection(issue, "ASSIGN").render("claimed", {"user": "carol"})
        print(f"\n OUTPUT: {body}")
        assert body.startswith("<!-- MENTIONBOT_ASSIGN_START -->\nclaimed\n")
        assert body.endswith("<!-- MENTIONBOT_ASSIGN_END -->\n\nSteps to reproduce")

    def test_render_replaces_existing_section(self):
        issue = make_issue("Steps to reproduce")
        section = IssueBodySection(issue, "ASSIGN")
        issue.body = section.render("first", {"user": "carol"})
        issue.body = section.render("", {"user": None})

        assert issue.body.count("MENTIONBOT_ASSIGN_START") == 1
        assert "first" not in issue.body
        assert issue.body.endswith("Steps to reproduce")
        assert section.current_data() == {"user": None}

    def test_sections_are_keyed(self):
        issue = make_issue()
        issue.body = IssueBodySection(issue, "ASSIGN").render("", {"user": "carol"})
        assert IssueBodySection(issue, "TRIAGE").current_data() is None

    def test_malformed_data_is_ignored(self):
        body = (
            "<!-- MENTIONBOT_ASSIGN_START -->\n\n"
            "<!-- MENTIONBOT_ASSIGN_DATA_START$${not json$$MENTIONBOT_ASSIGN_DATA_END -->\n"
            "<!-- MENTIONBOT_ASSIGN_END -->"
        )
        assert IssueBodySection(make_issue(body), "ASSIGN").current_data() is None

    @pytest.mark.asyncio
    async def test_apply_edits_issue(self, github_manager):
        issue = make_issue("desc")
        await IssueBodySection(issue, "ASSIGN").apply(github_manager, "", {"user": "carol"})
        github_manager.edit_issue_body.assert_awaited_once()
        assert IssueBodySection(issue, "ASSIGN").current_data() == {"user": "carol"}
