"""Client for the Tronald Dump API."""

import logging
from typing import Optional, TypeVar

from jollyquotes.lib.errors import QuoteError
from jollyquotes.services.http import create_http_resolver
from jollyquotes.services.quotes import StreamResolver

from . import resources
from .converter import TronaldDumpModelConverter
from .models import (
    AuthorModel,
    QuoteListModel,
    QuoteModel,
    QuoteSearchModel,
    QuoteSourceModel,
    SearchResultModel,
    TagListModel,
    TagModel,
)

logger = logging.getLogger(__name__)

M = TypeVar("M")


class TronaldDumpService:
    """Issues Tronald Dump API calls and returns its response models.

    Args:
        resolver: Stream-capable resolver rooted at the API (defaults to an
            HttpResolver for TRONALD_DUMP_API_URL, closed by aclose)
        converter: Builds query parameters from search models

    Example:
        >>> async with TronaldDumpService() as service:
        ...     image = await service.get_random_meme()
    """

    api_name = resources.API_NAME

    def __init__(
        self,
        resolver: Optional[StreamResolver] = None,
        converter: Optional[TronaldDumpModelConverter] = None,
    ):
        self._owns_resolver = resolver is None
        self.resolver = resolver or create_http_resolver(resources.base_address())
        self.converter = converter or TronaldDumpModelConverter()

    async def _get_existing(self, path: str, response_type: type[M], what: str, key: str) -> M:
        if not key or not key.strip():
            raise ValueError(f"{what} id must not be None or blank")
        model = await self.resolver.try_resolve(path, response_type)
        if model is None:
            raise QuoteError(f"{what} with id '{key}' does not exist")
        return model

    async def get_random_quote(self) -> QuoteModel:
        return await self.resolver.resolve("random/quote", QuoteModel)

    async def get_quote(self, quote_id: str) -> QuoteModel:
        """Get a quote by id. Raises QuoteError if it does not exist."""
        return await self._get_existing(f"quote/{quote_id}", QuoteModel, "Quote", quote_id)

    async def get_author(self, author_id: str) -> AuthorModel:
        return await self._get_existing(f"author/{author_id}", AuthorModel, "Author", author_id)

    async def get_source(self, source_id: str) -> QuoteSourceModel:
        return await self._get_existing(f"quote-source/{source_id}", QuoteSourceModel, "Quote source", source_id)

    async def get_tag(self, tag: str) -> TagModel:
        return await self._get_existing(f"tag/{tag}", TagModel, "Tag", tag)

    async def get_available_tags(self) -> SearchResultModel[TagListModel]:
        return await self.resolver.resolve("tag", SearchResultModel[TagListModel])

    async def search_quotes(self, search: QuoteSearchModel) -> SearchResultModel[QuoteListModel]:
        """Get one page of quotes matching search."""
        params = self.converter.get_search_query(search)
        return await self.resolver.resolve("search/quote", SearchResultModel[QuoteListModel], params=params)

    async def get_random_meme(self) -> bytes:
        """Get a random meme image (JPEG bytes)."""
        return await self.resolver.resolve_stream("random/meme")

    async def aclose(self) -> None:
        if self._owns_resolver:
            await self.resolver.aclose()

    async def __aenter__(self) -> "TronaldDumpService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
