"""Addresses and limits of the quotable API."""

from jollyquotes.lib.config_manager import config

API_NAME = "quotable"
API_PAGE = "https://api.quotable.io"
DOCS_PAGE = "https://github.com/lukePeavey/quotable/blob/master/README.md"
GITHUB_PAGE = "https://github.com/lukePeavey/quotable"

RESULTS_PER_PAGE_DEFAULT = 20
RESULTS_PER_PAGE_MAX = 150
FUZZY_EXPANSIONS_DEFAULT = 50
FUZZY_EXPANSIONS_MAX = 150


def base_address() -> str:
    return config.get("QUOTABLE_API_URL")
