"""Core configuration, models and errors for mentionbot."""

from .config import Config, load_config
from .errors import (
    ConfigError,
    GitHubError,
    HandlerError,
    InvalidAssignee,
    MentionBotError,
    RepoNotConfigured,
)
from .models import (
    AssignConfig,
    CommentEvent,
    Issue,
    RelabelConfig,
    RepoConfig,
    TriageConfig,
    User,
)

__all__ = [
    "Config",
    "load_config",
    "AssignConfig",
    "CommentEvent",
    "Issue",
    "RelabelConfig",
    "RepoConfig",
    "TriageConfig",
    "User",
    "MentionBotError",
    "ConfigError",
    "GitHubError",
    "HandlerError",
    "InvalidAssignee",
    "RepoNotConfigured",
]
