"""Thread-safe in-memory quote cache with tag indexing.

Quotes are stored by id. A secondary TagIndex maps every tag to the ids
of the quotes carrying it, so tag queries only touch the matching
bucket. Both structures are guarded by a single re-entrant lock, so a
reader never sees a quote that is missing from the index or the other
way around.
"""

import logging
import threading
from typing import Generic, Iterable, Iterator, Optional, TypeVar

from jollyquotes.lib.errors import InvalidOperationError, QuoteNotFoundError
from jollyquotes.services.quotes import (
    DefaultEqualityComparer,
    EqualityComparer,
    IdLike,
    QuoteId,
    QuoteLike,
    RandomNumberGenerator,
    ThreadRandom,
)

from .tag_index import TagIndex, check_tag

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=QuoteLike)


def _check_quote(quote: object) -> None:
    if quote is None:
        raise ValueError("quote must not be None")


class QuoteCache(Generic[T]):
    """In-memory quote cache (no persistence, no eviction).

    Quotes live until they are removed explicitly, taken out with
    get_random_quote(remove=True), or cleared.

    Args:
        comparer: Equality used by is_quote_cached and remove_cached_quote
            (defaults to the quotes' own ==)
        random: Random source for random selection (defaults to ThreadRandom)

    Example:
        >>> from jollyquotes.services.cache import QuoteCache
        >>> from jollyquotes.services.quotes import Quote
        >>> cache = QuoteCache()
        >>> cache.cache_quote(Quote(id=1, value="Hi", author="Me", tags=["x"]))
        True
        >>> [q.value for q in cache.get_cached_with_tag("x")]
        ['Hi']
    """

    def __init__(
        self,
        comparer: Optional[EqualityComparer] = None,
        random: Optional[RandomNumberGenerator] = None,
    ):
        self._quotes: dict[QuoteId, T] = {}
        self._tags = TagIndex()
        self._comparer = comparer or DefaultEqualityComparer()
        self._random = random or ThreadRandom()
        self._lock = threading.RLock()

    @property
    def comparer(self) -> EqualityComparer:
        return self._comparer

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._quotes)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[T]:
        return iter(self.get_cached())

    # =========================================================================
    # Adding
    # =========================================================================

    def cache_quote(self, quote: T, replace: bool = False) -> bool:
        _check_quote(quote)
        with self._lock:
            return self._add(quote, replace)

    def cache_quotes(self, quotes: Iterable[T], replace: bool = False) -> int:
        if quotes is None:
            raise ValueError("quotes must not be None")

        added = 0
        skipped = 0
        with self._lock:
            for quote in quotes:
                if quote is None:
                    continue
                if self._add(quote, replace):
                    added += 1
                else:
                    skipped += 1

        if skipped:
            logger.debug(f"Skipped {skipped} quote(s) whose id was already cached")
        return added

    def _add(self, quote: T, replace: bool) -> bool:
        quote_id = QuoteId.of(quote.id)
        existing = self._quotes.get(quote_id)
        if existing is not None:
            if not replace:
                return False
            self._tags.remove(quote_id, existing.tags)

        self._quotes[quote_id] = quote
        self._tags.add(quote_id, quote.tags)
        return True

    # =========================================================================
    # Reading
    # =========================================================================

    def get_cached(self) -> list[T]:
        with self._lock:
            return list(self._quotes.values())

    def get_cached_with_tag(self, tag: str) -> list[T]:
        check_tag(tag)
        with self._lock:
            return [self._quotes[quote_id] for quote_id in self._tags.lookup(tag)]

    def get_cached_with_any_tag(self, tags: Optional[Iterable[str]]) -> list[T]:
        if tags is None:
            return []
        if isinstance(tags, str):
            tags = [tags]
        with self._lock:
            return [self._quotes[quote_id] for quote_id in self._tags.lookup_any(tags)]

    def is_cached(self, quote_id: IdLike) -> bool:
        quote_id = QuoteId.of(quote_id)
        with self._lock:
            return quote_id in self._quotes

    def is_quote_cached(self, quote: T) -> bool:
        _check_quote(quote)
        with self._lock:
            cached = self._quotes.get(QuoteId.of(quote.id))
            return cached is not None and self._comparer.equals(cached, quote)

    def get_quote(self, quote_id: IdLike) -> T:
        quote_id = QuoteId.of(quote_id)
        with self._lock:
            if not self._quotes:
                raise InvalidOperationError("Cache is empty")
            quote = self._quotes.get(quote_id)
        if quote is None:
            raise QuoteNotFoundError(f"Quote with id '{quote_id}' is not cached")
        return quote

    def try_get_quote(self, quote_id: IdLike) -> Optional[T]:
        quote_id = QuoteId.of(quote_id)
        with self._lock:
            return self._quotes.get(quote_id)

    def get_random_quote(self, remove: bool = False) -> T:
        with self._lock:
            if not self._quotes:
                raise InvalidOperationError("Cache is empty")
            candidates = list(self._quotes)
            quote_id = candidates[self._random.next_int(0, len(candidates))]
            if remove:
                return self._remove(quote_id)
            return self._quotes[quote_id]

    def try_get_random_quote(self, tag: str, remove: bool = False) -> Optional[T]:
        check_tag(tag)
        with self._lock:
            candidates = list(self._tags.lookup(tag))
            if not candidates:
                return None
            quote_id = candidates[self._random.next_int(0, len(candidates))]
            if remove:
                return self._remove(quote_id)
            return self._quotes[quote_id]

    # =========================================================================
    # Removing
    # =========================================================================

    def remove_quote(self, quote_id: IdLike) -> bool:
        return self.pop_quote(quote_id) is not None

    def pop_quote(self, quote_id: IdLike) -> Optional[T]:
        quote_id = QuoteId.of(quote_id)
        with self._lock:
            return self._remove(quote_id)

    def remove_cached_quote(self, quote: T) -> bool:
        _check_quote(quote)
        quote_id = QuoteId.of(quote.id)
        with self._lock:
            cached = self._quotes.get(quote_id)
            if cached is None or not self._comparer.equals(cached, quote):
                return False
            self._remove(quote_id)
            return True

    def remove_quotes(self, tag: str) -> bool:
        return self.pop_quotes(tag) is not None

    def pop_quotes(self, tag: str) -> Optional[list[T]]:
        """Remove every quote tagged with tag.

        The quotes are also dropped from the buckets of their other tags.

        Returns:
            The removed quotes, or None if the tag is unknown or the cache
            is empty
        """
        check_tag(tag)
        with self._lock:
            if not self._quotes:
                return None
            quote_ids = self._tags.lookup(tag)
            if not quote_ids:
                return None
            removed = [self._remove(quote_id) for quote_id in quote_ids]

        logger.debug(f"Removed {len(removed)} quote(s) tagged '{tag}'")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._quotes.clear()
            self._tags.clear()

    def _remove(self, quote_id: QuoteId) -> Optional[T]:
        quote = self._quotes.pop(quote_id, None)
        if quote is not None:
            self._tags.remove(quote_id, quote.tags)
        return quote
