"""Quote generators: random selection and caching on top of provider services.

This module provides:
- QuoteDownloader protocol (the provider-specific download strategy)
- CachedQuoteGenerator: cache-or-download generator for one API
- CompositeQuoteGenerator: random choice between several APIs

Example:
    >>> from jollyquotes.services.generators import CachedQuoteGenerator
    >>> generator = CachedQuoteGenerator(downloader)
    >>> quote = await generator.get_random_quote()
"""

from .cached_generator import CachedQuoteGenerator
from .composite import CompositeQuoteGenerator
from .downloader import QuoteDownloader

__all__ = [
    "QuoteDownloader",
    "CachedQuoteGenerator",
    "CompositeQuoteGenerator",
]
