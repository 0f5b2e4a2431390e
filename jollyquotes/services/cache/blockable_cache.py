"""Cache wrapper that can temporarily refuse modifications."""

import logging
from typing import Generic, Iterable, Iterator, Optional, TypeVar

from jollyquotes.lib.errors import BlockedCacheError
from jollyquotes.services.quotes import IdLike, QuoteId

from .cache_manager import QuoteCacheManager
from .tag_index import check_tag

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BlockableQuoteCache(Generic[T]):
    """Wraps a quote cache and gates every modification behind a block flag.

    Reads always go straight to the wrapped cache. While blocked, calls
    that would modify it either do nothing and report "no effect", or raise
    BlockedCacheError when throw_if_blocked is set.

    With preserve_state set (the default), block() clears the wrapped cache,
    so a blocked cache is always empty until it is unblocked and filled
    again. Turning preserve_state off while blocked clears it immediately.

    The wrapped cache is shared, not owned.

    Args:
        cache: Cache to wrap
        preserve_state: Clear the wrapped cache when blocking
        throw_if_blocked: Raise instead of ignoring modifications while blocked

    Example:
        >>> cache = BlockableQuoteCache(QuoteCache(), throw_if_blocked=True)
        >>> cache.block()
        >>> cache.cache_quote(quote)
        Traceback (most recent call last):
        ...
        jollyquotes.lib.errors.BlockedCacheError: Blocked cache cannot be modified
    """

    def __init__(
        self,
        cache: QuoteCacheManager[T],
        preserve_state: bool = True,
        throw_if_blocked: bool = False,
    ):
        if cache is None:
            raise ValueError("cache must not be None")

        self._cache = cache
        self._preserve_state = preserve_state
        self.throw_if_blocked = throw_if_blocked
        self._is_blocked = False

    @property
    def cache(self) -> QuoteCacheManager[T]:
        """The wrapped cache."""
        return self._cache

    @property
    def is_blocked(self) -> bool:
        return self._is_blocked

    @property
    def preserve_state(self) -> bool:
        return self._preserve_state

    @preserve_state.setter
    def preserve_state(self, value: bool) -> None:
        self._preserve_state = value
        if not value and self._is_blocked:
            self.force_clear()

    def block(self) -> None:
        """Stop accepting modifications."""
        self._is_blocked = True
        if self._preserve_state:
            self.force_clear()
        logger.debug("Quote cache blocked")

    def unblock(self) -> None:
        """Accept modifications again. Nothing is restored."""
        self._is_blocked = False
        logger.debug("Quote cache unblocked")

    def force_clear(self) -> None:
        """Clear the wrapped cache even while blocked."""
        self._cache.clear()

    def _can_be_modified(self) -> bool:
        if not self._is_blocked:
            return True
        if self.throw_if_blocked:
            raise BlockedCacheError()
        return False

    # =========================================================================
    # Gated operations
    # =========================================================================

    def cache_quote(self, quote: T, replace: bool = False) -> bool:
        if quote is None:
            raise ValueError("quote must not be None")
        if not self._can_be_modified():
            return False
        return self._cache.cache_quote(quote, replace)

    def cache_quotes(self, quotes: Iterable[T], replace: bool = False) -> int:
        if quotes is None:
            raise ValueError("quotes must not be None")
        if not self._can_be_modified():
            return 0
        return self._cache.cache_quotes(quotes, replace)

    def clear(self) -> None:
        if self._can_be_modified():
            self._cache.clear()

    def remove_quote(self, quote_id: IdLike) -> bool:
        quote_id = QuoteId.of(quote_id)
        if not self._can_be_modified():
            return False
        return self._cache.remove_quote(quote_id)

    def pop_quote(self, quote_id: IdLike) -> Optional[T]:
        quote_id = QuoteId.of(quote_id)
        if not self._can_be_modified():
            return None
        return self._cache.pop_quote(quote_id)

    def remove_cached_quote(self, quote: T) -> bool:
        if quote is None:
            raise ValueError("quote must not be None")
        if not self._can_be_modified():
            return False
        return self._cache.remove_cached_quote(quote)

    def remove_quotes(self, tag: str) -> bool:
        check_tag(tag)
        if not self._can_be_modified():
            return False
        return self._cache.remove_quotes(tag)

    def pop_quotes(self, tag: str) -> Optional[list[T]]:
        check_tag(tag)
        if not self._can_be_modified():
            return None
        return self._cache.pop_quotes(tag)

    def get_random_quote(self, remove: bool = False) -> T:
        """Return a random quote; removal only happens while unblocked."""
        if remove and not self._can_be_modified():
            remove = False
        return self._cache.get_random_quote(remove)

    def try_get_random_quote(self, tag: str, remove: bool = False) -> Optional[T]:
        check_tag(tag)
        if remove and not self._can_be_modified():
            remove = False
        return self._cache.try_get_random_quote(tag, remove)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_cached(self) -> list[T]:
        return self._cache.get_cached()

    def get_cached_with_tag(self, tag: str) -> list[T]:
        return self._cache.get_cached_with_tag(tag)

    def get_cached_with_any_tag(self, tags: Optional[Iterable[str]]) -> list[T]:
        return self._cache.get_cached_with_any_tag(tags)

    def is_cached(self, quote_id: IdLike) -> bool:
        return self._cache.is_cached(quote_id)

    def is_quote_cached(self, quote: T) -> bool:
        return self._cache.is_quote_cached(quote)

    def get_quote(self, quote_id: IdLike) -> T:
        return self._cache.get_quote(quote_id)

    def try_get_quote(self, quote_id: IdLike) -> Optional[T]:
        return self._cache.try_get_quote(quote_id)

    @property
    def count(self) -> int:
        return self._cache.count

    @property
    def is_empty(self) -> bool:
        return self._cache.is_empty

    def __len__(self) -> int:
        return len(self._cache)

    def __iter__(self) -> Iterator[T]:
        return iter(self._cache)
