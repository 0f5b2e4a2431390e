"""Addresses and constants of the kanye.rest API."""

from jollyquotes.lib.config_manager import config

API_NAME = "kanye.rest"
API_PAGE = "https://api.kanye.rest"
MAIN_PAGE = "https://kanye.rest"
GITHUB_PAGE = "https://github.com/ajzbc/kanye.rest"
DATABASE = "https://raw.githubusercontent.com/ajzbc/kanye.rest/master/quotes.json"

AUTHOR = "Kanye West"


def base_address() -> str:
    return config.get("KANYE_REST_API_URL")


def database_address() -> str:
    return config.get("KANYE_REST_DATABASE_URL")
