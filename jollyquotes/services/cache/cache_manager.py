"""Protocol defining the quote cache interface.

Generators and the blockable wrapper depend on this protocol rather
than on QuoteCache, so any conforming cache can be injected.
"""

from typing import Iterable, Iterator, Optional, Protocol, TypeVar, runtime_checkable

from jollyquotes.services.quotes import IdLike

T = TypeVar("T")


@runtime_checkable
class QuoteCacheManager(Protocol[T]):
    """Protocol for quote cache implementations.

    Implementations must keep the primary id → quote store and the tag
    index consistent with each other at every observable point.

    Example:
        >>> def warm_up(cache: QuoteCacheManager, quotes):
        ...     cache.cache_quotes(quotes)
    """

    def cache_quote(self, quote: T, replace: bool = False) -> bool:
        """Add a quote.

        Args:
            quote: Quote to store
            replace: Overwrite an existing quote with the same id

        Returns:
            True if the quote was stored, False if its id was already cached
            and replace was False

        Raises:
            ValueError: If quote is None
        """
        ...

    def cache_quotes(self, quotes: Iterable[T], replace: bool = False) -> int:
        """Add several quotes, skipping None items.

        Returns:
            Number of quotes actually stored
        """
        ...

    def get_cached(self) -> list[T]:
        """All cached quotes."""
        ...

    def get_cached_with_tag(self, tag: str) -> list[T]:
        """Quotes tagged with tag. Raises ValueError for a blank tag."""
        ...

    def get_cached_with_any_tag(self, tags: Optional[Iterable[str]]) -> list[T]:
        """Quotes tagged with at least one of tags; nothing for no tags."""
        ...

    def is_cached(self, quote_id: IdLike) -> bool:
        """Check whether a quote with this id is cached."""
        ...

    def is_quote_cached(self, quote: T) -> bool:
        """Check whether an equal quote with the same id is cached."""
        ...

    def get_quote(self, quote_id: IdLike) -> T:
        """Return the quote with this id.

        Raises:
            InvalidOperationError: If the cache is empty
            QuoteNotFoundError: If the id is not cached
        """
        ...

    def try_get_quote(self, quote_id: IdLike) -> Optional[T]:
        """Return the quote with this id, or None."""
        ...

    def get_random_quote(self, remove: bool = False) -> T:
        """Return a random quote, optionally removing it.

        Raises:
            InvalidOperationError: If the cache is empty
        """
        ...

    def try_get_random_quote(self, tag: str, remove: bool = False) -> Optional[T]:
        """Return a random quote tagged with tag, or None."""
        ...

    def remove_quote(self, quote_id: IdLike) -> bool:
        """Remove the quote with this id."""
        ...

    def pop_quote(self, quote_id: IdLike) -> Optional[T]:
        """Remove and return the quote with this id."""
        ...

    def remove_cached_quote(self, quote: T) -> bool:
        """Remove quote if an equal quote with the same id is cached."""
        ...

    def remove_quotes(self, tag: str) -> bool:
        """Remove every quote tagged with tag."""
        ...

    def pop_quotes(self, tag: str) -> Optional[list[T]]:
        """Remove and return every quote tagged with tag."""
        ...

    def clear(self) -> None:
        """Remove every quote."""
        ...

    @property
    def count(self) -> int: ...

    @property
    def is_empty(self) -> bool: ...

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[T]: ...
