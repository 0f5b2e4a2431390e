"""Quote generator combining a downloader with a blockable quote cache."""

import logging
from typing import Generic, Iterable, Optional, Sequence, TypeVar, Union

from jollyquotes.lib.errors import InvalidOperationError
from jollyquotes.lib.logging_config import log_with_context
from jollyquotes.services.cache import BlockableQuoteCache, QuoteCacheManager, create_blockable_cache
from jollyquotes.services.cache.tag_index import check_tag
from jollyquotes.services.quotes import (
    Possibility,
    QuoteId,
    QuoteInclude,
    RandomNumberGenerator,
    ThreadRandom,
)

from .downloader import QuoteDownloader

logger = logging.getLogger(__name__)

T = TypeVar("T")

Include = Union[QuoteInclude, str]


def _clean_tags(tags: Optional[Iterable[str]]) -> list[str]:
    if not tags:
        return []
    if isinstance(tags, str):
        tags = [tags]
    return [tag for tag in tags if isinstance(tag, str) and tag.strip()]


def _merge(*groups: Iterable[T]) -> list[T]:
    """Concatenate quote lists keeping the first quote seen for each id."""
    merged: dict[QuoteId, T] = {}
    for group in groups:
        for quote in group:
            merged.setdefault(QuoteId.of(quote.id), quote)
    return list(merged.values())


class CachedQuoteGenerator(Generic[T]):
    """Random and bulk quote access with a local cache.

    With QuoteInclude.ALL, a random quote is downloaded when the cache is
    empty or when the possibility says so; otherwise it comes from the
    cache. Every downloaded quote is cached unless the cache is blocked.

    Args:
        downloader: Provider-specific download strategy
        cache: Cache to use. A plain cache is wrapped in a
            BlockableQuoteCache; None creates a new one.
        possibility: Decides between cache and download (defaults to 50/50)
        random: Random source for picking among cached tag matches

    Example:
        >>> generator = CachedQuoteGenerator(KanyeRestDownloader(service))
        >>> quote = await generator.get_random_quote()
        >>> quote = await generator.get_random_quote(QuoteInclude.CACHED)
    """

    def __init__(
        self,
        downloader: QuoteDownloader[T],
        *,
        cache: Optional[QuoteCacheManager[T]] = None,
        possibility: Optional[Possibility] = None,
        random: Optional[RandomNumberGenerator] = None,
    ):
        if downloader is None:
            raise ValueError("downloader must not be None")

        self.downloader = downloader
        self.cache: BlockableQuoteCache[T] = create_blockable_cache(cache)
        self.random = random or ThreadRandom()
        self.possibility = possibility or Possibility(self.random)

    @property
    def api_name(self) -> str:
        return self.downloader.api_name

    @property
    def source(self) -> str:
        return self.downloader.source

    def _should_download(self) -> bool:
        return self.cache.is_empty or self.possibility.determine()

    def _cache_downloaded(self, quotes: Sequence[T]) -> None:
        if self.cache.is_blocked:
            return
        added = self.cache.cache_quotes(quotes)
        if added:
            log_with_context(
                logger, logging.DEBUG, f"Cached {added} quote(s) from {self.api_name}", api_name=self.api_name, count=added
            )

    def _random_cached_with_any_tag(self, tags: list[str]) -> Optional[T]:
        candidates = self.cache.get_cached_with_any_tag(tags)
        if not candidates:
            return None
        return candidates[self.random.next_int(0, len(candidates))]

    # =========================================================================
    # Random quotes
    # =========================================================================

    async def get_random_quote(self, which: Include = QuoteInclude.ALL) -> T:
        """Return a random quote.

        Args:
            which: ALL (cache or download), CACHED (cache only) or DOWNLOAD

        Raises:
            InvalidOperationError: If which is CACHED and the cache is empty
        """
        which = QuoteInclude(which)
        if which is QuoteInclude.CACHED:
            return self.cache.get_random_quote()

        if which is QuoteInclude.ALL and not self._should_download():
            try:
                return self.cache.get_random_quote()
            except InvalidOperationError:
                logger.debug("Cache was emptied before a quote could be taken, downloading")

        log_with_context(logger, logging.INFO, f"Downloading random quote from {self.api_name}", api_name=self.api_name)
        quote = await self.downloader.download_random_quote()
        self._cache_downloaded([quote])
        return quote

    async def get_random_quote_with_tag(self, tag: str, which: Include = QuoteInclude.ALL) -> Optional[T]:
        """Return a random quote tagged with tag, or None if there is none.

        Raises:
            ValueError: If tag is blank
        """
        check_tag(tag)
        which = QuoteInclude(which)
        if which is QuoteInclude.CACHED:
            return self.cache.try_get_random_quote(tag)

        if which is QuoteInclude.ALL and not self._should_download():
            quote = self.cache.try_get_random_quote(tag)
            if quote is not None:
                return quote

        log_with_context(
            logger, logging.INFO, f"Downloading random quote tagged '{tag}' from {self.api_name}", api_name=self.api_name, tag=tag
        )
        quote = await self.downloader.download_random_quote_with_tag(tag)
        if quote is not None:
            self._cache_downloaded([quote])
        return quote

    async def get_random_quote_with_any_tag(
        self, tags: Optional[Sequence[str]], which: Include = QuoteInclude.ALL
    ) -> Optional[T]:
        """Return a random quote carrying at least one of tags.

        No tags (None, empty, or only blank entries) matches nothing.
        """
        tags = _clean_tags(tags)
        if not tags:
            return None

        which = QuoteInclude(which)
        if which is QuoteInclude.CACHED:
            return self._random_cached_with_any_tag(tags)

        if which is QuoteInclude.ALL and not self._should_download():
            quote = self._random_cached_with_any_tag(tags)
            if quote is not None:
                return quote

        log_with_context(
            logger, logging.INFO, f"Downloading random quote tagged any of {tags} from {self.api_name}", api_name=self.api_name, tags=tags
        )
        quote = await self.downloader.download_random_quote_with_any_tag(tags)
        if quote is not None:
            self._cache_downloaded([quote])
        return quote

    # =========================================================================
    # All quotes
    # =========================================================================

    async def get_all_quotes(self, which: Include = QuoteInclude.ALL) -> list[T]:
        """Return cached quotes, downloaded quotes, or both (deduplicated by id)."""
        which = QuoteInclude(which)
        cached = self.cache.get_cached() if which is not QuoteInclude.DOWNLOAD else []
        if which is QuoteInclude.CACHED:
            return cached

        log_with_context(logger, logging.INFO, f"Downloading all quotes from {self.api_name}", api_name=self.api_name)
        downloaded = await self.downloader.download_all_quotes()
        self._cache_downloaded(downloaded)
        return _merge(cached, downloaded)

    async def get_all_quotes_with_tag(self, tag: str, which: Include = QuoteInclude.ALL) -> list[T]:
        check_tag(tag)
        which = QuoteInclude(which)
        cached = self.cache.get_cached_with_tag(tag) if which is not QuoteInclude.DOWNLOAD else []
        if which is QuoteInclude.CACHED:
            return cached

        log_with_context(
            logger, logging.INFO, f"Downloading all quotes tagged '{tag}' from {self.api_name}", api_name=self.api_name, tag=tag
        )
        downloaded = await self.downloader.download_all_quotes_with_tag(tag)
        self._cache_downloaded(downloaded)
        return _merge(cached, downloaded)

    async def get_all_quotes_with_any_tag(
        self, tags: Optional[Sequence[str]], which: Include = QuoteInclude.ALL
    ) -> list[T]:
        tags = _clean_tags(tags)
        if not tags:
            return []

        which = QuoteInclude(which)
        cached = self.cache.get_cached_with_any_tag(tags) if which is not QuoteInclude.DOWNLOAD else []
        if which is QuoteInclude.CACHED:
            return cached

        log_with_context(
            logger, logging.INFO, f"Downloading all quotes tagged any of {tags} from {self.api_name}", api_name=self.api_name, tags=tags
        )
        downloaded = await self.downloader.download_all_quotes_with_any_tag(tags)
        self._cache_downloaded(downloaded)
        return _merge(cached, downloaded)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self) -> None:
        await self.downloader.aclose()

    async def __aenter__(self) -> "CachedQuoteGenerator[T]":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
