"""HTTP access for quote providers.

Example:
    >>> from jollyquotes.services.http import create_http_resolver
    >>> resolver = create_http_resolver("https://api.quotable.io")
    >>> quote = await resolver.resolve("random", QuoteModel)
"""

from .config import ResolverConfig
from .resolver import HttpResolver, create_http_resolver

__all__ = [
    "ResolverConfig",
    "HttpResolver",
    "create_http_resolver",
]
