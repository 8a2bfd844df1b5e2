"""
config.py

Responsibility: Load the optional `.releasetag.yaml` file into a typed, immutable `Config`.

Every key is optional; an absent default file simply means "use the defaults".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_FILE = ".releasetag.yaml"
DEFAULT_TAG_MESSAGE = "Release {{ tag }}"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub API settings used when publishing a release."""

    api_base: str = "https://api.github.com"


@dataclass(frozen=True)
class Config:
    """Release settings; every field has a default matching the usual `main`/`origin` setup."""

    branch: str = "main"
    remote: str = "origin"
    sign: bool = True
    tag_message: str = DEFAULT_TAG_MESSAGE
    github: GitHubConfig = field(default_factory=GitHubConfig)


def _require_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"`{key}` must be a non-empty string.")
    return value.strip() if key != "tag_message" else value


def parse_config(data: dict[str, Any]) -> Config:
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping/object at the top level.")

    sign = data.get("sign", True)
    if not isinstance(sign, bool):
        raise ConfigError("`sign` must be true or false.")

    gh_raw = data.get("github") or {}
    if not isinstance(gh_raw, dict):
        raise ConfigError("`github` must be an object/mapping when provided.")
    api_base = _require_str(gh_raw, "api_base", GitHubConfig.api_base)

    return Config(
        branch=_require_str(data, "branch", "main"),
        remote=_require_str(data, "remote", "origin"),
        sign=sign,
        tag_message=_require_str(data, "tag_message", DEFAULT_TAG_MESSAGE),
        github=GitHubConfig(api_base=api_base),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """
    Load configuration from `config_path`, or from `.releasetag.yaml` if it exists.

    An explicitly requested file must exist.
    """
    if config_path is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.exists():
            return Config()
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file does not exist: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return parse_config(data)
