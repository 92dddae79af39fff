"""Configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError, RepoNotConfigured
from .models import PRIORITY_NAMES, AssignConfig, RelabelConfig, RepoConfig, TriageConfig

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.mentionbot").expanduser()
ENV_FILE_NAME = ".env"
CONFIG_FILE = "mentionbot.yaml"


@dataclass
class Config:
    bot_name: str
    repos: Dict[str, RepoConfig]
    config_dir: Path
    github_token: Optional[str] = None

    def get_repo(self, name: str) -> RepoConfig:
        try:
            return self.repos[name]
        except KeyError as exc:
            raise RepoNotConfigured(name) from exc


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Resolve and validate the directory containing .env + mentionbot.yaml."""
    target = (
        Path(config_dir).expanduser() if config_dir else DEFAULT_CONFIG_DIR
    ).resolve()
    if not target.exists():
        raise ConfigError(
            f"Config directory {target} does not exist. "
            f"Create it and add .env and {CONFIG_FILE}."
        )
    if not target.is_dir():
        raise ConfigError(f"Config directory {target} is not a directory")
    return target


def load_config(config_dir: Path | str | None = None) -> Config:
    """Load mentionbot configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    _load_env_file(root / ENV_FILE_NAME)

    data = _read_yaml(root / CONFIG_FILE)
    bot_name = os.getenv("MENTIONBOT_NAME") or data.get("bot_name")
    if not bot_name:
        raise ConfigError(f"bot_name must be set in {CONFIG_FILE} or MENTIONBOT_NAME")
    bot_name = str(bot_name).lstrip("@")

    repos = _load_repos(data.get("repos") or {})
    if not repos:
        LOGGER.warning("No repositories configured in %s", root / CONFIG_FILE)

    return Config(
        bot_name=bot_name,
        repos=repos,
        config_dir=root,
        github_token=os.getenv("GITHUB_TOKEN"),
    )


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.warning("No .env file found at %s; relying on shell environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"{CONFIG_FILE} not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {CONFIG_FILE} structure at {path}")
    return data


def _load_repos(raw: Any) -> Dict[str, RepoConfig]:
    if not isinstance(raw, dict):
        raise ConfigError("repos must be a mapping of owner/repo to settings")

    repos = {}
    for name, cfg in raw.items():
        if "/" not in str(name):
            raise ConfigError(f"Repository {name} must be written as owner/repo")
        cfg = cfg or {}
        if not isinstance(cfg, dict):
            raise ConfigError(f"Repository {name} must be a mapping")
        repos[name] = RepoConfig(
            name=name,
            team=cfg.get("team"),
            assign=_load_assign(name, cfg),
            relabel=_load_relabel(name, cfg),
            triage=_load_triage(name, cfg),
        )
    return repos


def _section(repo: str, key: str, cfg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if key not in cfg:
        return None
    value = cfg[key]
    if value is False:
        return None
    # `assign:` with no body enables the handler with defaults
    if value is None or value is True:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} for {repo} must be a mapping")
    return value


def _load_assign(repo: str, repo_cfg: Dict[str, Any]) -> Optional[AssignConfig]:
    cfg = _section(repo, "assign", repo_cfg)
    if cfg is None:
        return None
    return AssignConfig(fallback_to_bot=bool(cfg.get("fallback-to-bot", True)))


def _load_relabel(repo: str, repo_cfg: Dict[str, Any]) -> Optional[RelabelConfig]:
    cfg = _section(repo, "relabel", repo_cfg)
    if cfg is None:
        return None
    patterns = cfg.get("allow-unauthenticated") or []
    if not isinstance(patterns, list):
        raise ConfigError(f"relabel.allow-unauthenticated for {repo} must be a list")
    return RelabelConfig(allow_unauthenticated=tuple(str(p) for p in patterns))


def _load_triage(repo: str, repo_cfg: Dict[str, Any]) -> Optional[TriageConfig]:
    cfg = _section(repo, "triage", repo_cfg)
    if cfg is None:
        return None
    triage = TriageConfig()
    priorities = cfg.get("priorities") or {}
    if not isinstance(priorities, dict):
        raise ConfigError(f"triage.priorities for {repo} must be a mapping")
    unknown = [name for name in priorities if name not in PRIORITY_NAMES]
    if unknown:
        raise ConfigError(f"Unknown triage priorities for {repo}: {', '.join(map(str, unknown))}")
    triage.priorities.update({str(k): str(v) for k, v in priorities.items()})
    if "triaged" in cfg:
        triage.triaged = cfg["triaged"]
    if "untriaged" in cfg:
        triage.untriaged = cfg["untriaged"]
    return triage
