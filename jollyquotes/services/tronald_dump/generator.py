"""Tronald Dump download strategy and generator factory."""

import logging
from typing import Optional, Sequence

from jollyquotes.lib.logging_config import log_with_context
from jollyquotes.services.cache import QuoteCacheManager
from jollyquotes.services.generators import CachedQuoteGenerator
from jollyquotes.services.quotes import Possibility, QuoteId, RandomNumberGenerator, ThreadRandom

from . import resources
from .converter import TronaldDumpModelConverter
from .models import QuoteSearchModel, TronaldDumpQuote
from .service import TronaldDumpService

logger = logging.getLogger(__name__)


class TronaldDumpDownloader:
    """Downloads Tronald Dump quotes through tag searches.

    The API cannot list every quote, so download_all_quotes raises
    NotImplementedError.
    """

    def __init__(
        self,
        service: Optional[TronaldDumpService] = None,
        converter: Optional[TronaldDumpModelConverter] = None,
        random: Optional[RandomNumberGenerator] = None,
    ):
        self.service = service or TronaldDumpService()
        self.converter = converter or self.service.converter
        self.random = random or ThreadRandom()

    @property
    def api_name(self) -> str:
        return resources.API_NAME

    @property
    def source(self) -> str:
        return resources.API_PAGE

    async def download_random_quote(self) -> TronaldDumpQuote:
        return self.converter.convert_quote_model(await self.service.get_random_quote())

    async def download_random_quote_with_tag(self, tag: str) -> Optional[TronaldDumpQuote]:
        first = await self.service.search_quotes(QuoteSearchModel(tag=tag))
        pages = self.converter.count_pages(first)
        if pages == 0:
            log_with_context(
                logger, logging.DEBUG, f"No Tronald Dump quote is tagged '{tag}'", api_name=self.api_name, tag=tag
            )
            return None

        page = self.random.next_int(0, pages) if pages > 1 else 0
        result = first if page == 0 else await self.service.search_quotes(QuoteSearchModel(tag=tag, page=page))
        quotes = result.embedded.quotes
        if not quotes:
            return None
        return self.converter.convert_quote_model(quotes[self.random.next_int(0, len(quotes))])

    async def download_random_quote_with_any_tag(self, tags: Sequence[str]) -> Optional[TronaldDumpQuote]:
        if not tags:
            return None
        tag = tags[self.random.next_int(0, len(tags))] if len(tags) > 1 else tags[0]
        return await self.download_random_quote_with_tag(tag)

    async def download_all_quotes(self) -> list[TronaldDumpQuote]:
        raise NotImplementedError("Tronald Dump does not support quote enumeration")

    async def download_all_quotes_with_tag(self, tag: str) -> list[TronaldDumpQuote]:
        first = await self.service.search_quotes(QuoteSearchModel(tag=tag))
        pages = self.converter.count_pages(first)

        quotes = self.converter.enumerate_quotes(first.embedded)
        for page in range(1, pages):
            result = await self.service.search_quotes(QuoteSearchModel(tag=tag, page=page))
            quotes.extend(self.converter.enumerate_quotes(result.embedded))

        log_with_context(
            logger,
            logging.DEBUG,
            f"Downloaded {len(quotes)} Tronald Dump quote(s) tagged '{tag}' in {max(pages, 1)} page(s)",
            api_name=self.api_name,
            tag=tag,
            count=len(quotes),
            pages=max(pages, 1),
        )
        return quotes

    async def download_all_quotes_with_any_tag(self, tags: Sequence[str]) -> list[TronaldDumpQuote]:
        found: dict[QuoteId, TronaldDumpQuote] = {}
        for tag in tags:
            for quote in await self.download_all_quotes_with_tag(tag):
                found.setdefault(QuoteId.of(quote.id), quote)
        return list(found.values())

    async def aclose(self) -> None:
        await self.service.aclose()


def create_tronald_dump_generator(
    service: Optional[TronaldDumpService] = None,
    cache: Optional[QuoteCacheManager[TronaldDumpQuote]] = None,
    possibility: Optional[Possibility] = None,
    random: Optional[RandomNumberGenerator] = None,
) -> CachedQuoteGenerator[TronaldDumpQuote]:
    """Create a cached generator for Tronald Dump."""
    return CachedQuoteGenerator(
        TronaldDumpDownloader(service, random=random),
        cache=cache,
        possibility=possibility,
        random=random,
    )
