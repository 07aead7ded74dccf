"""Configuration and path management for mingle.

The config file is a YAML sequence of session entries:

    - path: ~/src/dotfiles
    - path: ~/src/webapp
      tmuxinator: webapp
    - path: ~/src/monorepo
      type: worktreeroot

It lives at ~/.config/mingle/mingle.yaml unless MINGLE_CONFIG points elsewhere.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from mingle.exceptions import ConfigError
from mingle.models import ConfigSession

logger = logging.getLogger("mingle.config")

CONFIG_FOLDER_NAME = "mingle"
CONFIG_FILE_NAME = "mingle.yaml"

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "MINGLE_CONFIG"


def get_config_dir() -> Path:
    """Get the per-user config directory (~/.config/mingle)."""
    return Path.home() / ".config" / CONFIG_FOLDER_NAME


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_config_dir() / CONFIG_FILE_NAME


def resolve_config_path(config_path: str | Path | None = None) -> Path:
    """Resolve the config path from argument, env var, or the default.

    Priority: explicit arg > MINGLE_CONFIG env var > ~/.config/mingle/mingle.yaml.
    """
    if config_path is not None:
        return Path(config_path)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return get_config_path()


def expand_home_path(path: str) -> str:
    """Resolve a leading ``~`` against the current user's home directory.

    Raises:
        ConfigError: If the home directory cannot be determined.
    """
    if not path.startswith("~"):
        return path
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigError(f"Cannot expand {path}: {e}") from e
    return str(home / path[1:].lstrip("/"))


def parse_config(text: str, source: str = "<string>") -> list[ConfigSession]:
    """
    Parse config YAML into session entries.

    Args:
        text: YAML document
        source: Name used in error messages

    Returns:
        Entries with home-relative paths expanded.

    Raises:
        ConfigError: If the document is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {source}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"Failed to parse {source}: expected a list of sessions, got {type(data).__name__}")

    entries: list[ConfigSession] = []
    for index, item in enumerate(data):
        try:
            entry = ConfigSession.model_validate(item)
        except ValidationError as e:
            raise ConfigError(f"Invalid entry #{index + 1} in {source}: {e}") from e
        entry.path = expand_home_path(entry.path)
        entries.append(entry)
    return entries


def load_config(config_path: str | Path | None = None) -> list[ConfigSession]:
    """
    Load session entries from the config file.

    A missing file is not an error: an empty list is returned.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    path = resolve_config_path(config_path)
    if not path.exists():
        logger.info("No config file was found")
        return []

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    return parse_config(text, source=str(path))


class ConfigLoader:
    """Loads config entries from one fixed path; injected into the aggregator."""

    def __init__(self, config_path: str | Path | None = None):
        self.config_path = resolve_config_path(config_path)

    def __call__(self) -> list[ConfigSession]:
        return load_config(self.config_path)
