"""Factory functions for creating quote caches with sensible defaults."""

from typing import Optional

from jollyquotes.services.quotes import EqualityComparer, RandomNumberGenerator

from .blockable_cache import BlockableQuoteCache
from .cache_manager import QuoteCacheManager
from .config import CacheConfig
from .quote_cache import QuoteCache


def create_quote_cache(
    comparer: Optional[EqualityComparer] = None,
    random: Optional[RandomNumberGenerator] = None,
) -> QuoteCache:
    """Create an empty QuoteCache.

    Args:
        comparer: Equality comparer (defaults to ==)
        random: Random source (defaults to ThreadRandom)

    Returns:
        QuoteCache instance
    """
    return QuoteCache(comparer=comparer, random=random)


def create_blockable_cache(
    cache: Optional[QuoteCacheManager] = None,
    config: Optional[CacheConfig] = None,
) -> BlockableQuoteCache:
    """Wrap a cache (a new QuoteCache by default) in a BlockableQuoteCache.

    An already blockable cache is returned unchanged.

    Example:
        >>> cache = create_blockable_cache(config=CacheConfig(throw_if_blocked=True))
        >>> cache.is_blocked
        False
    """
    if isinstance(cache, BlockableQuoteCache):
        return cache

    config = config or CacheConfig()
    return BlockableQuoteCache(
        cache if cache is not None else create_quote_cache(),
        preserve_state=config.preserve_state,
        throw_if_blocked=config.throw_if_blocked,
    )
