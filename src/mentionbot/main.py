"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import dataclasses
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Sequence, TextIO

from .core import CommentEvent, Config, ConfigError, load_config
from .github import GitHubManager
from .parser import AmbiguousCommandError, Command, iter_commands
from .router import Router

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="mentionbot",
        description="mentionbot - run @bot commands found in issue comments",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding .env and mentionbot.yaml (default: ~/.mentionbot)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Print the commands found in a comment body as JSON lines",
    )
    parse_parser.add_argument("file", nargs="?", default="-", help="Comment text file (default: stdin)")
    parse_parser.add_argument("--bot", help="Bot name to look for (default: from config)")

    handle_parser = subparsers.add_parser(
        "handle",
        help="Run the commands in a GitHub issue_comment webhook payload",
    )
    handle_parser.add_argument("event", help="Path to the JSON payload")

    args = parser.parse_args(argv)
    _configure_logging()

    try:
        if args.command == "parse":
            bot = args.bot or load_config(args.config_dir).bot_name
            with _open_input(args.file) as stream:
                return run_parse(stream.read(), bot, sys.stdout)
        if args.command == "handle":
            config = load_config(args.config_dir)
            payload = json.loads(Path(args.event).read_text(encoding="utf-8"))
            return asyncio.run(run_handle(payload, config, sys.stdout))
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user")
        return 130

    parser.print_help()
    return 1


def run_parse(text: str, bot: str, out: TextIO) -> int:
    """Write one JSON object per command found in ``text``."""
    try:
        for command in iter_commands(text, bot):
            out.write(json.dumps(command_to_dict(command)) + "\n")
    except AmbiguousCommandError as exc:
        LOGGER.error("%s", exc)
        return 2
    return 0


async def run_handle(payload: Dict[str, Any], config: Config, out: TextIO) -> int:
    try:
        event = CommentEvent.from_payload(payload)
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.error("Not an issue_comment payload: missing %s", exc)
        return 1

    github_manager = GitHubManager(config.github_token)
    if not github_manager.is_configured():
        LOGGER.error("GITHUB_TOKEN is not set; cannot handle %s#%s", event.issue.repo, event.issue.number)
        return 1

    router = Router(config, github_manager)
    results = await router.handle_comment(event)
    for result in results:
        out.write(
            json.dumps(
                {
                    "kind": result.kind.value if result.kind else None,
                    "status": result.status.value,
                    "message": result.message,
                }
            )
            + "\n"
        )
    return 0


def command_to_dict(command: Command) -> Dict[str, Any]:
    if command.is_err():
        return {
            "kind": command.kind.value,
            "ok": False,
            "error": command.error.reason,
            "position": command.error.position,
            "detail": str(command.error),
        }
    value = command.value
    return {
        "kind": command.kind.value,
        "ok": True,
        "type": type(value).__name__,
        "value": dataclasses.asdict(value),
    }


def _configure_logging() -> None:
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _open_input(path: str):
    if path == "-":
        return contextlib.nullcontext(sys.stdin)
    return open(path, encoding="utf-8")


if __name__ == "__main__":
    raise SystemExit(cli())
