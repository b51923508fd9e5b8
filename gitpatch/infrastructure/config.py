"""Configuration loading.

Settings come from an optional YAML file, then environment overrides:

    $GIT_PATCH_CONFIG, else <repo root>/.git-patch.yml

    context_lines: 5      # -U value passed to git diff
    json_indent: 2        # indentation for --json output
    git_binary: git       # git executable

Environment overrides: GIT_PATCH_CONTEXT_LINES, GIT_PATCH_GIT.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

CONFIG_FILENAME = ".git-patch.yml"
CONFIG_PATH_ENV = "GIT_PATCH_CONFIG"
CONTEXT_LINES_ENV = "GIT_PATCH_CONTEXT_LINES"
GIT_BINARY_ENV = "GIT_PATCH_GIT"


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""

    pass


@dataclass(frozen=True)
class Config:
    """Resolved settings for one invocation."""

    context_lines: int | None = None
    json_indent: int = 2
    git_binary: str = "git"

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> Config:
        """Build a Config from parsed YAML data.

        Raises:
            ConfigError: If a key has the wrong type or an unknown key is present
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        unknown = set(data) - {"context_lines", "json_indent", "git_binary"}
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        context_lines = data.get("context_lines")
        if context_lines is not None:
            context_lines = _require_non_negative_int("context_lines", context_lines)

        json_indent = _require_non_negative_int("json_indent", data.get("json_indent", 2))

        git_binary = data.get("git_binary", "git")
        if not isinstance(git_binary, str) or not git_binary:
            raise ConfigError("git_binary must be a non-empty string")

        return cls(context_lines=context_lines, json_indent=json_indent, git_binary=git_binary)

    def with_env_overrides(self, environ: dict[str, str] | None = None) -> Config:
        """Return a copy with environment variable overrides applied."""
        env = os.environ if environ is None else environ
        context_lines = self.context_lines
        git_binary = self.git_binary

        raw_context = env.get(CONTEXT_LINES_ENV)
        if raw_context:
            if not raw_context.isdigit():
                raise ConfigError(f"{CONTEXT_LINES_ENV} must be a non-negative integer: {raw_context}")
            context_lines = int(raw_context)

        if env.get(GIT_BINARY_ENV):
            git_binary = env[GIT_BINARY_ENV]

        return Config(context_lines=context_lines, json_indent=self.json_indent, git_binary=git_binary)


def load_config(start_dir: str | Path = ".", environ: dict[str, str] | None = None) -> Config:
    """Load configuration for a command invocation.

    Args:
        start_dir: Directory to search upwards from for the repository root
        environ: Environment mapping (default: os.environ)

    Returns:
        Resolved Config; defaults when no file exists

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    env = os.environ if environ is None else environ
    config_path = find_config_file(start_dir, env)
    if config_path is None:
        return Config().with_env_overrides(env)

    try:
        data = yaml.safe_load(config_path.read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")

    return Config.from_dict(data).with_env_overrides(env)


def find_config_file(start_dir: str | Path, environ: dict[str, str]) -> Path | None:
    """Locate the configuration file.

    An explicit $GIT_PATCH_CONFIG must exist. Otherwise the nearest directory
    containing `.git` at or above start_dir is checked for `.git-patch.yml`.
    """
    explicit = environ.get(CONFIG_PATH_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise ConfigError(f"{CONFIG_PATH_ENV} points to a missing file: {explicit}")
        return path

    directory = Path(start_dir).resolve()
    for candidate in [directory, *directory.parents]:
        if (candidate / ".git").exists():
            path = candidate / CONFIG_FILENAME
            return path if path.is_file() else None
    return None


def _require_non_negative_int(key: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{key} must be a non-negative integer, got {value!r}")
    return value
