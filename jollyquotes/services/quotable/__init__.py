"""quotable: searchable database of famous quotes.

Example:
    >>> from jollyquotes.services.quotable import QuoteSearchModel, QuotableService
    >>> async with QuotableService() as service:
    ...     model = await service.get_random_quote(QuoteSearchModel(tags="wisdom"))
"""

from . import resources
from .converter import QuotableModelConverter
from .generator import QuotableDownloader, create_quotable_generator
from .models import (
    AuthorModel,
    AuthorSearchModel,
    FuzzyMatchingThreshold,
    QuotableQuote,
    QuoteContentSearchModel,
    QuoteListSearchModel,
    QuoteModel,
    QuoteSearchField,
    QuoteSearchModel,
    QuoteSortBy,
    SearchOperator,
    SearchResultModel,
    SortBy,
    SortOrder,
    TagExpression,
    TagModel,
)
from .service import QuotableService

__all__ = [
    "resources",
    "QuotableModelConverter",
    "QuotableDownloader",
    "QuotableService",
    "create_quotable_generator",
    "AuthorModel",
    "AuthorSearchModel",
    "FuzzyMatchingThreshold",
    "QuotableQuote",
    "QuoteContentSearchModel",
    "QuoteListSearchModel",
    "QuoteModel",
    "QuoteSearchField",
    "QuoteSearchModel",
    "QuoteSortBy",
    "SearchOperator",
    "SearchResultModel",
    "SortBy",
    "SortOrder",
    "TagExpression",
    "TagModel",
]
