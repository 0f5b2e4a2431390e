"""Default configuration values for jollyquotes.

All hardcoded defaults live here. The library is fully functional
with these defaults; every key can be overridden from the environment
or a .env file at the git root.

Config hierarchy: .env / environment → these defaults
"""

from typing import Any

# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULTS: dict[str, Any] = {
    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------
    "JOLLYQUOTES_HTTP_TIMEOUT": 10.0,
    "JOLLYQUOTES_USER_AGENT": "jollyquotes/0.1",
    "JOLLYQUOTES_MAX_RETRIES": 3,
    "JOLLYQUOTES_RETRY_BASE_DELAY": 0.5,

    # -------------------------------------------------------------------------
    # Generators
    # -------------------------------------------------------------------------
    "JOLLYQUOTES_POSSIBILITY_UPPER_LIMIT": 100,
    "JOLLYQUOTES_POSSIBILITY_STEP": 50,

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    "JOLLYQUOTES_LOG_LEVEL": "INFO",

    # -------------------------------------------------------------------------
    # Provider endpoints
    # -------------------------------------------------------------------------
    "KANYE_REST_API_URL": "https://api.kanye.rest",
    "KANYE_REST_DATABASE_URL": "https://raw.githubusercontent.com/ajzbc/kanye.rest/master/quotes.json",
    "QUOTABLE_API_URL": "https://api.quotable.io",
    "TRONALD_DUMP_API_URL": "https://www.tronalddump.io/",
}


# =============================================================================
# Config Categories (for display)
# =============================================================================

CONFIG_CATEGORIES = {
    "http": [
        "JOLLYQUOTES_HTTP_TIMEOUT",
        "JOLLYQUOTES_USER_AGENT",
        "JOLLYQUOTES_MAX_RETRIES",
        "JOLLYQUOTES_RETRY_BASE_DELAY",
    ],
    "generators": [
        "JOLLYQUOTES_POSSIBILITY_UPPER_LIMIT",
        "JOLLYQUOTES_POSSIBILITY_STEP",
    ],
    "logging": [
        "JOLLYQUOTES_LOG_LEVEL",
    ],
    "providers": [
        "KANYE_REST_API_URL",
        "KANYE_REST_DATABASE_URL",
        "QUOTABLE_API_URL",
        "TRONALD_DUMP_API_URL",
    ],
}


def get_default(key: str) -> Any:
    """Get the default value for a config key.

    Args:
        key: Configuration key

    Returns:
        Default value or None if key not found
    """
    return DEFAULTS.get(key)
