"""Tests for the domain models."""

from __future__ import annotations

from mentionbot.core.models import CommentEvent


class TestCommentEvent:
    def test_from_payload(self):
        payload = {
            "repository": {"full_name": "acme/widgets"},
            "issue": {
                "number": 7,
                "html_url": "https://github.com/acme/widgets/issues/7",
                "body": "Steps to reproduce",
                "assignees": [{"login": "bot"}],
                "labels": [{"name": "C-bug"}],
            },
            "comment": {
                "user": {"login": "carol"},
                "body": "@bot release",
                "html_url": "https://github.com/acme/widgets/issues/7#issuecomment-1",
            },
        }
        event = CommentEvent.from_payload(payload)
        assert event.issue.body == "Steps to reproduce"
        assert event.issue.assignees == ["bot"]
        assert event.issue.labels == ["C-bug"]
        assert event.author.login == "carol"

    def test_missing_issue_body(self):
        payload = {
            "repository": {"full_name": "acme/widgets"},
            "issue": {"number": 7, "body": None},
            "comment": {"user": {"login": "carol"}},
        }
        assert CommentEvent.from_payload(payload).issue.body == ""
