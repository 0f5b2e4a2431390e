"""Client for the kanye.rest API."""

import logging
from typing import Optional

from jollyquotes.services.http import create_http_resolver
from jollyquotes.services.quotes import ResourceResolver

from . import resources
from .models import QuoteModel

logger = logging.getLogger(__name__)


class KanyeRestService:
    """Fetches quotes from kanye.rest.

    Args:
        resolver: Resolver rooted at the API (defaults to an HttpResolver
            for KANYE_REST_API_URL, closed by aclose)

    Example:
        >>> async with KanyeRestService() as service:
        ...     text = await service.get_random_quote()
    """

    api_name = resources.API_NAME

    def __init__(self, resolver: Optional[ResourceResolver] = None):
        self._owns_resolver = resolver is None
        self.resolver = resolver or create_http_resolver(resources.base_address())

    async def get_random_quote(self) -> str:
        """Return the text of a random quote."""
        model = await self.resolver.resolve("/", QuoteModel)
        return model.quote

    async def get_all_quotes(self) -> list[str]:
        """Return every quote in the kanye.rest database."""
        quotes = await self.resolver.resolve(resources.database_address(), list[str])
        logger.debug(f"Loaded {len(quotes)} quotes from the kanye.rest database")
        return quotes

    async def aclose(self) -> None:
        if self._owns_resolver:
            await self.resolver.aclose()

    async def __aenter__(self) -> "KanyeRestService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
