"""Client for the quotable API."""

import logging
from typing import Optional

from jollyquotes.lib.errors import QuoteError
from jollyquotes.services.http import create_http_resolver
from jollyquotes.services.quotes import ResourceResolver

from . import resources
from .converter import QuotableModelConverter
from .models import (
    AuthorModel,
    AuthorSearchModel,
    QuoteContentSearchModel,
    QuoteListSearchModel,
    QuoteModel,
    QuoteSearchModel,
    SearchResultModel,
    TagModel,
)

logger = logging.getLogger(__name__)


def _check_not_blank(value: Optional[str], name: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} must not be None or blank")


class QuotableService:
    """Issues quotable API calls and returns its response models.

    Args:
        resolver: Resolver rooted at the API (defaults to an HttpResolver for
            QUOTABLE_API_URL, closed by aclose)
        converter: Builds query parameters from search models

    Example:
        >>> async with QuotableService() as service:
        ...     model = await service.get_random_quote(QuoteSearchModel(tags="wisdom"))
    """

    api_name = resources.API_NAME

    def __init__(
        self,
        resolver: Optional[ResourceResolver] = None,
        converter: Optional[QuotableModelConverter] = None,
    ):
        self._owns_resolver = resolver is None
        self.resolver = resolver or create_http_resolver(resources.base_address())
        self.converter = converter or QuotableModelConverter()

    async def get_quote(self, quote_id: str) -> QuoteModel:
        """Get a quote by its id.

        Raises:
            ValueError: If quote_id is blank
            QuoteError: If no quote has this id
        """
        _check_not_blank(quote_id, "quote_id")
        model = await self.resolver.try_resolve(f"quotes/{quote_id}", QuoteModel)
        if model is None:
            raise QuoteError(f"Quote with id '{quote_id}' does not exist")
        return model

    async def get_random_quote(self, search: Optional[QuoteSearchModel] = None) -> QuoteModel:
        """Get a random quote, optionally matching search.

        Raises:
            QuoteError: If no quote matches search
        """
        if search is None:
            return await self.resolver.resolve("random", QuoteModel)

        params = self.converter.get_search_query(search)
        model = await self.resolver.try_resolve("random", QuoteModel, params=params)
        if model is None:
            raise QuoteError("Could not find any matching quote")
        return model

    async def get_quotes(self, search: Optional[QuoteListSearchModel] = None) -> SearchResultModel[QuoteModel]:
        """Get one page of quotes."""
        search = search or QuoteListSearchModel()
        params = self.converter.get_list_search_query(search)
        return await self.resolver.resolve("quotes", SearchResultModel[QuoteModel], params=params)

    async def search_quotes(self, search: QuoteContentSearchModel) -> SearchResultModel[QuoteModel]:
        """Full-text search over quote content, authors and tags."""
        if search is None:
            raise ValueError("search must not be None")
        params = self.converter.get_content_search_query(search)
        return await self.resolver.resolve("search/quotes", SearchResultModel[QuoteModel], params=params)

    async def get_tags(self) -> list[TagModel]:
        return await self.resolver.resolve("tags", list[TagModel])

    async def get_author(self, slug: str) -> AuthorModel:
        """Get an author by slug.

        Raises:
            QuoteError: If no author has this slug
        """
        _check_not_blank(slug, "slug")
        model = await self.resolver.try_resolve(f"authors/slug/{slug}", AuthorModel)
        if model is None:
            raise QuoteError(f"Author with slug '{slug}' does not exist")
        return model

    async def get_authors(self, search: Optional[AuthorSearchModel] = None) -> SearchResultModel[AuthorModel]:
        search = search or AuthorSearchModel()
        params = self.converter.get_author_search_query(search)
        return await self.resolver.resolve("authors", SearchResultModel[AuthorModel], params=params)

    async def aclose(self) -> None:
        if self._owns_resolver:
            await self.resolver.aclose()

    async def __aenter__(self) -> "QuotableService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
