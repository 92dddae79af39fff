"""GitHub integration."""

from .client import GitHubManager

__all__ = ["GitHubManager"]
