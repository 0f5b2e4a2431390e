"""kanye.rest download strategy and generator factory."""

from typing import Optional, Sequence

from jollyquotes.services.cache import QuoteCacheManager
from jollyquotes.services.generators import CachedQuoteGenerator
from jollyquotes.services.quotes import Possibility, RandomNumberGenerator

from . import resources
from .models import KanyeRestQuote
from .service import KanyeRestService


class KanyeRestDownloader:
    """Downloads kanye.rest quotes. The API has no tags."""

    def __init__(self, service: Optional[KanyeRestService] = None):
        self.service = service or KanyeRestService()

    @property
    def api_name(self) -> str:
        return resources.API_NAME

    @property
    def source(self) -> str:
        return resources.API_PAGE

    async def download_random_quote(self) -> KanyeRestQuote:
        return KanyeRestQuote(value=await self.service.get_random_quote())

    async def download_random_quote_with_tag(self, tag: str) -> Optional[KanyeRestQuote]:
        return None

    async def download_random_quote_with_any_tag(self, tags: Sequence[str]) -> Optional[KanyeRestQuote]:
        return None

    async def download_all_quotes(self) -> list[KanyeRestQuote]:
        return [KanyeRestQuote(value=text) for text in await self.service.get_all_quotes()]

    async def download_all_quotes_with_tag(self, tag: str) -> list[KanyeRestQuote]:
        return []

    async def download_all_quotes_with_any_tag(self, tags: Sequence[str]) -> list[KanyeRestQuote]:
        return []

    async def aclose(self) -> None:
        await self.service.aclose()


def create_kanye_rest_generator(
    service: Optional[KanyeRestService] = None,
    cache: Optional[QuoteCacheManager[KanyeRestQuote]] = None,
    possibility: Optional[Possibility] = None,
    random: Optional[RandomNumberGenerator] = None,
) -> CachedQuoteGenerator[KanyeRestQuote]:
    """Create a cached generator for kanye.rest.

    Example:
        >>> async with create_kanye_rest_generator() as generator:
        ...     quote = await generator.get_random_quote()
    """
    return CachedQuoteGenerator(
        KanyeRestDownloader(service),
        cache=cache,
        possibility=possibility,
        random=random,
    )
