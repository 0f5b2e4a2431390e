"""Configuration for the HTTP resolver."""

from dataclasses import dataclass

from jollyquotes.lib.config_manager import config


@dataclass
class ResolverConfig:
    """Settings for HttpResolver.

    Example:
        >>> config = ResolverConfig(base_url="https://api.quotable.io", max_retries=1)
        >>> resolver = HttpResolver(config=config)
    """

    base_url: str = ""
    timeout: float = 10.0  # seconds, per request
    user_agent: str = "jollyquotes/0.1"
    max_retries: int = 3  # retries after the first attempt, transport errors only
    retry_base_delay: float = 0.5

    @classmethod
    def from_config(cls, base_url: str = "") -> "ResolverConfig":
        """Build a config from JOLLYQUOTES_* settings."""
        return cls(
            base_url=base_url,
            timeout=config.get("JOLLYQUOTES_HTTP_TIMEOUT"),
            user_agent=config.get("JOLLYQUOTES_USER_AGENT"),
            max_retries=config.get("JOLLYQUOTES_MAX_RETRIES"),
            retry_base_delay=config.get("JOLLYQUOTES_RETRY_BASE_DELAY"),
        )
