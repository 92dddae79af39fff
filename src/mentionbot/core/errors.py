"""Custom exception hierarchy for mentionbot."""


class MentionBotError(Exception):
    """Base error type."""


class ConfigError(MentionBotError):
    pass


class RepoNotConfigured(MentionBotError):
    pass


class GitHubError(MentionBotError):
    pass


class HandlerError(MentionBotError):
    """Raised when a parsed command is refused; the message is shown to the user."""
    pass


class InvalidAssignee(GitHubError):
    """Raised when GitHub refuses to assign a user to an issue."""
    pass
