"""Quote value types and collaborator protocols.

This module provides:
- QuoteId and Quote (immutable, validated on construction)
- QuoteInclude (where generators may take quotes from)
- Protocols for random sources, equality comparers and resolvers
- ThreadRandom and Possibility random helpers

Example:
    >>> from jollyquotes.services.quotes import Quote
    >>> quote = Quote(id=1, value="Stay hungry.", author="Steve Jobs")
"""

from .models import IdLike, Quote, QuoteId, QuoteInclude, content_id, to_generic_quote
from .protocols import (
    DefaultEqualityComparer,
    EqualityComparer,
    QuoteGenerator,
    QuoteLike,
    QuoteService,
    RandomNumberGenerator,
    ResourceResolver,
    StreamResolver,
)
from .random import Possibility, SeededRandom, ThreadRandom

__all__ = [
    "IdLike",
    "Quote",
    "QuoteId",
    "QuoteInclude",
    "content_id",
    "to_generic_quote",
    "DefaultEqualityComparer",
    "EqualityComparer",
    "QuoteGenerator",
    "QuoteLike",
    "QuoteService",
    "RandomNumberGenerator",
    "ResourceResolver",
    "StreamResolver",
    "Possibility",
    "SeededRandom",
    "ThreadRandom",
]
