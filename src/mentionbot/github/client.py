"""Lightweight GitHub client helpers."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from github import Github, GithubException
from github.Issue import Issue as GitHubIssue

from ..core.errors import GitHubError, InvalidAssignee
from ..core.models import Issue

LOGGER = logging.getLogger(__name__)


class GitHubManager:
    """Wrapper around PyGithub that exposes async helpers."""

    def __init__(self, token: Optional[str]) -> None:
        self._client = Github(token) if token else None

    def is_configured(self) -> bool:
        return self._client is not None

    async def is_team_member(self, team: str, login: str, default_org: str) -> bool:
        return await asyncio.to_thread(self._is_team_member_sync, team, login, default_org)

    async def set_assignee(self, issue: Issue, login: str) -> None:
        await asyncio.to_thread(self._set_assignee_sync, issue, login)

    async def remove_assignees(self, issue: Issue) -> None:
        await asyncio.to_thread(self._edit_sync, issue, assignees=[])

    async def edit_issue_body(self, issue: Issue, body: str) -> None:
        await asyncio.to_thread(self._edit_sync, issue, body=body)

    async def add_labels(self, issue: Issue, labels: Iterable[str]) -> None:
        await asyncio.to_thread(self._add_labels_sync, issue, list(labels))

    async def remove_label(self, issue: Issue, label: str) -> None:
        await asyncio.to_thread(self._remove_label_sync, issue, label)

    async def post_comment(self, issue: Issue, body: str) -> None:
        await asyncio.to_thread(self._post_comment_sync, issue, body)

    def _is_team_member_sync(self, team: str, login: str, default_org: str) -> bool:
        client = self._require_client()
        org_name, _, slug = team.rpartition("/")
        try:
            org = client.get_organization(org_name or default_org)
            return org.get_team_by_slug(slug).has_in_members(client.get_user(login))
        except GithubException as exc:
            LOGGER.warning("Failed to check membership of %s in %s: %s", login, team, exc)
            return False

    def _set_assignee_sync(self, issue: Issue, login: str) -> None:
        try:
            self._edit_sync(issue, assignees=[login])
        except GitHubError as exc:
            cause = exc.__cause__
            if isinstance(cause, GithubException) and cause.status == 422:
                raise InvalidAssignee(login) from cause
            raise

    def _edit_sync(self, issue: Issue, **changes) -> None:
        gh_issue = self._get_issue(issue)
        try:
            gh_issue.edit(**changes)
        except GithubException as exc:
            raise GitHubError(f"Failed to edit {issue.repo}#{issue.number}: {exc}") from exc
        if "assignees" in changes:
            issue.assignees = list(changes["assignees"])
        if "body" in changes:
            issue.body = changes["body"]

    def _add_labels_sync(self, issue: Issue, labels: list[str]) -> None:
        if not labels:
            return
        gh_issue = self._get_issue(issue)
        try:
            gh_issue.add_to_labels(*labels)
        except GithubException as exc:
            raise GitHubError(f"Failed to add labels to {issue.repo}#{issue.number}: {exc}") from exc
        issue.labels.extend(label for label in labels if label not in issue.labels)

    def _remove_label_sync(self, issue: Issue, label: str) -> None:
        gh_issue = self._get_issue(issue)
        try:
            gh_issue.remove_from_labels(label)
        except GithubException as exc:
            if exc.status == 404:
                LOGGER.info("Label %s already absent from %s#%s", label, issue.repo, issue.number)
            else:
                raise GitHubError(
                    f"Failed to remove label {label} from {issue.repo}#{issue.number}: {exc}"
                ) from exc
        if label in issue.labels:
            issue.labels.remove(label)

    def _post_comment_sync(self, issue: Issue, body: str) -> None:
        gh_issue = self._get_issue(issue)
        try:
            gh_issue.create_comment(body)
        except GithubException as exc:
            raise GitHubError(f"Failed to comment on {issue.repo}#{issue.number}: {exc}") from exc

    def _get_issue(self, issue: Issue) -> GitHubIssue:
        client = self._require_client()
        try:
            return client.get_repo(issue.repo).get_issue(issue.number)
        except GithubException as exc:
            raise GitHubError(f"Failed to load issue {issue.repo}#{issue.number}: {exc}") from exc

    def _require_client(self) -> Github:
        if not self._client:
            raise GitHubError("GitHub token is not configured.")
        return self._client
