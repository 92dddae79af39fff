"""Domain models for mentionbot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

PRIORITY_NAMES = ("critical", "high", "medium", "low")


@dataclass(frozen=True)
class User:
    login: str


@dataclass
class Issue:
    repo: str
    number: int
    html_url: str
    assignees: List[str] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    body: str = ""


@dataclass
class CommentEvent:
    """An issue comment handed to the router by the event layer."""

    issue: Issue
    author: User
    body: str
    html_url: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CommentEvent":
        """Build an event from a GitHub ``issue_comment`` webhook payload."""
        issue = payload["issue"]
        comment = payload["comment"]
        return cls(
            issue=Issue(
                repo=payload["repository"]["full_name"],
                number=int(issue["number"]),
                html_url=issue.get("html_url", ""),
                assignees=[user["login"] for user in issue.get("assignees") or []],
                labels=[label["name"] for label in issue.get("labels") or []],
                body=issue.get("body") or "",
            ),
            author=User(login=comment["user"]["login"]),
            body=comment.get("body") or "",
            html_url=comment.get("html_url", ""),
        )


@dataclass
class AssignConfig:
    # assign the bot and leave a comment when GitHub rejects the user
    fallback_to_bot: bool = True


@dataclass
class RelabelConfig:
    allow_unauthenticated: Tuple[str, ...] = ()


@dataclass
class TriageConfig:
    # priority name ("critical", "high", ...) -> label
    priorities: Dict[str, str] = field(
        default_factory=lambda: {name: f"P-{name}" for name in PRIORITY_NAMES}
    )
    triaged: Optional[str] = None
    untriaged: Optional[str] = "I-prioritize"


@dataclass
class RepoConfig:
    name: str
    # "org/team-slug" or "team-slug"; members may act on behalf of others
    team: Optional[str] = None
    assign: Optional[AssignConfig] = None
    relabel: Optional[RelabelConfig] = None
    triage: Optional[TriageConfig] = None
