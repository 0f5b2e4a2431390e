"""Addresses and limits of the Tronald Dump API."""

from jollyquotes.lib.config_manager import config

API_NAME = "tronalddump"
API_PAGE = "https://www.tronalddump.io/"
DOCS_PAGE = "https://docs.tronalddump.io/"
GITHUB_PAGE = "https://github.com/tronalddump-io/tronald-app"

AUTHOR = "Donald Trump"

# Page size of every paginated endpoint
MAX_ITEMS_PER_PAGE = 10


def base_address() -> str:
    return config.get("TRONALD_DUMP_API_URL")
