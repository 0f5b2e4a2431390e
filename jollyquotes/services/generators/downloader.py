"""Protocol for the provider-specific part of a quote generator."""

from typing import Optional, Protocol, Sequence, TypeVar

from jollyquotes.services.quotes import QuoteService

T = TypeVar("T", covariant=True)


class QuoteDownloader(Protocol[T]):
    """Fetches quotes from one API.

    A CachedQuoteGenerator adds caching and random selection on top of a
    downloader; the downloader only knows how to talk to its service.

    Tag methods return None or an empty list when the API has no quote for
    the tag or does not support tags at all. download_all_quotes raises
    NotImplementedError for APIs that cannot list their whole database.
    """

    service: QuoteService

    @property
    def api_name(self) -> str: ...

    @property
    def source(self) -> str:
        """Address reported as the origin of downloaded quotes."""
        ...

    async def download_random_quote(self) -> T: ...

    async def download_random_quote_with_tag(self, tag: str) -> Optional[T]: ...

    async def download_random_quote_with_any_tag(self, tags: Sequence[str]) -> Optional[T]: ...

    async def download_all_quotes(self) -> list[T]: ...

    async def download_all_quotes_with_tag(self, tag: str) -> list[T]: ...

    async def download_all_quotes_with_any_tag(self, tags: Sequence[str]) -> list[T]: ...

    async def aclose(self) -> None: ...
