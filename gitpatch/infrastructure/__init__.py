"""Infrastructure components for git-patch.

This layer handles the environment around the core:
- Configuration file and environment variables
"""

from .config import Config, ConfigError, load_config

__all__ = ["Config", "ConfigError", "load_config"]
