"""Shared data passed to command handlers."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.models import CommentEvent, RepoConfig


@dataclass(frozen=True)
class CommandContext:
    event: CommentEvent
    repo: RepoConfig
    bot_name: str

    @property
    def author(self) -> str:
        return self.event.author.login
