"""Quote caching with tag indexing and blocking.

This module provides:
- QuoteCacheManager protocol (interface for dependency injection)
- QuoteCache: thread-safe in-memory store with a tag index
- BlockableQuoteCache: wrapper that can freeze a cache
- Factory functions for creating cache instances

Example:
    >>> from jollyquotes.services.cache import create_quote_cache
    >>> cache = create_quote_cache()
    >>> cache.cache_quote(quote)
    >>> cache.get_random_quote()
"""

from .blockable_cache import BlockableQuoteCache
from .cache_manager import QuoteCacheManager
from .config import CacheConfig
from .factory import create_blockable_cache, create_quote_cache
from .quote_cache import QuoteCache
from .tag_index import TagIndex

__all__ = [
    "QuoteCacheManager",
    "QuoteCache",
    "BlockableQuoteCache",
    "TagIndex",
    "CacheConfig",
    "create_quote_cache",
    "create_blockable_cache",
]
