"""quotable download strategy and generator factory."""

import logging
from typing import Optional, Sequence

from jollyquotes.lib.errors import QuoteError
from jollyquotes.lib.logging_config import log_with_context
from jollyquotes.services.cache import QuoteCacheManager
from jollyquotes.services.generators import CachedQuoteGenerator
from jollyquotes.services.quotes import Possibility, RandomNumberGenerator

from . import resources
from .converter import QuotableModelConverter
from .models import QuotableQuote, QuoteListSearchModel, QuoteSearchModel, TagExpression
from .service import QuotableService

logger = logging.getLogger(__name__)


class QuotableDownloader:
    """Downloads quotable quotes, following pagination for bulk downloads."""

    def __init__(
        self,
        service: Optional[QuotableService] = None,
        converter: Optional[QuotableModelConverter] = None,
    ):
        self.service = service or QuotableService()
        self.converter = converter or self.service.converter

    @property
    def api_name(self) -> str:
        return resources.API_NAME

    @property
    def source(self) -> str:
        return resources.API_PAGE

    async def download_random_quote(self) -> QuotableQuote:
        return self.converter.convert_quote_model(await self.service.get_random_quote())

    async def _random_matching(self, tags: TagExpression) -> Optional[QuotableQuote]:
        try:
            model = await self.service.get_random_quote(QuoteSearchModel(tags=tags))
        except QuoteError:
            log_with_context(
                logger, logging.DEBUG, f"No quotable quote matches tags '{tags}'", api_name=self.api_name, tags=str(tags)
            )
            return None
        return self.converter.convert_quote_model(model)

    async def download_random_quote_with_tag(self, tag: str) -> Optional[QuotableQuote]:
        return await self._random_matching(TagExpression.tag(tag))

    async def download_random_quote_with_any_tag(self, tags: Sequence[str]) -> Optional[QuotableQuote]:
        if not tags:
            return None
        return await self._random_matching(TagExpression.any_of(list(tags)))

    async def _download_pages(self, search: QuoteListSearchModel) -> list[QuotableQuote]:
        quotes: list[QuotableQuote] = []
        while True:
            result = await self.service.get_quotes(search)
            quotes.extend(self.converter.convert_quote_model(model) for model in result.results)
            if result.count == 0 or len(quotes) >= result.total_count:
                break
            search = search.model_copy(update={"page": search.page + 1})

        log_with_context(
            logger,
            logging.DEBUG,
            f"Downloaded {len(quotes)} quotable quote(s) in {search.page} page(s)",
            api_name=self.api_name,
            count=len(quotes),
            pages=search.page,
        )
        return quotes

    async def download_all_quotes(self) -> list[QuotableQuote]:
        return await self._download_pages(QuoteListSearchModel(limit=resources.RESULTS_PER_PAGE_MAX))

    async def download_all_quotes_with_tag(self, tag: str) -> list[QuotableQuote]:
        return await self._download_pages(
            QuoteListSearchModel(tags=TagExpression.tag(tag), limit=resources.RESULTS_PER_PAGE_MAX)
        )

    async def download_all_quotes_with_any_tag(self, tags: Sequence[str]) -> list[QuotableQuote]:
        if not tags:
            return []
        return await self._download_pages(
            QuoteListSearchModel(tags=TagExpression.any_of(list(tags)), limit=resources.RESULTS_PER_PAGE_MAX)
        )

    async def aclose(self) -> None:
        await self.service.aclose()


def create_quotable_generator(
    service: Optional[QuotableService] = None,
    cache: Optional[QuoteCacheManager[QuotableQuote]] = None,
    possibility: Optional[Possibility] = None,
    random: Optional[RandomNumberGenerator] = None,
) -> CachedQuoteGenerator[QuotableQuote]:
    """Create a cached generator for quotable."""
    return CachedQuoteGenerator(
        QuotableDownloader(service),
        cache=cache,
        possibility=possibility,
        random=random,
    )
