"""Configuration manager with hierarchy: .env → environment → defaults.

Values set in a .env file at the git root are loaded into the process
environment once, then every lookup resolves the environment first and
falls back to the hardcoded defaults in jollyquotes.lib.defaults.

Usage:
    from jollyquotes.lib.config_manager import config

    timeout = config.get("JOLLYQUOTES_HTTP_TIMEOUT")
    all_config = config.get_all()
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from jollyquotes.lib.defaults import DEFAULTS, get_default

logger = logging.getLogger(__name__)


def _find_git_root(start_path: Optional[Path] = None) -> Path:
    """Walk up directory tree to find .git/ folder."""
    current = start_path or Path.cwd()
    current = current.resolve()

    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent

    raise FileNotFoundError("No .git directory found in any parent directory")


def _coerce_type(value: str, default: Any) -> Any:
    """Coerce string value to match the type of the default.

    Args:
        value: String value from the environment
        default: Default value (determines target type)

    Returns:
        Value coerced to appropriate type
    """
    if default is None:
        return value

    if isinstance(default, bool):
        return value.lower() in ("true", "1", "yes", "on")
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer '{value}', using default {default}")
            return default
    if isinstance(default, float):
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid number '{value}', using default {default}")
            return default
    return value


class ConfigManager:
    """Resolves configuration values from the environment and defaults.

    The manager loads .env on initialization. Values already present in
    the environment are not overridden by the .env file.
    """

    def __init__(self, env_path: Optional[Path] = None):
        """Initialize the config manager and load .env.

        Args:
            env_path: Explicit .env location (defaults to <git root>/.env)
        """
        self._env_loaded = False
        self._env_path = env_path
        self._load_env()

    def _load_env(self) -> None:
        """Load .env file from git root."""
        if self._env_loaded:
            return

        env_path = self._env_path
        if env_path is None:
            try:
                env_path = _find_git_root() / ".env"
            except FileNotFoundError:
                logger.debug("Could not find git root, .env not loaded")

        if env_path is not None:
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, override=False)
                logger.debug(f"Loaded .env from {env_path}")
            else:
                logger.debug(f"No .env file found at {env_path}")

        self._env_loaded = True

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value (.env / environment → defaults).

        Args:
            key: Configuration key
            default: Override default (uses DEFAULTS if not provided)

        Returns:
            Configuration value
        """
        env_value = os.getenv(key)
        if env_value is not None:
            default_val = default if default is not None else get_default(key)
            return _coerce_type(env_value, default_val)

        if default is not None:
            return default
        return get_default(key)

    def get_all(self) -> dict[str, Any]:
        """Get all configuration values.

        Returns:
            Dictionary of all config keys and their resolved values
        """
        return {key: self.get(key) for key in DEFAULTS}


# Singleton instance
config = ConfigManager()


def get_config(key: str, default: Any = None) -> Any:
    """Get config value from the shared manager."""
    return config.get(key, default)
