"""tronalddump: archive of Donald Trump's statements, with memes.

Example:
    >>> from jollyquotes.services.tronald_dump import QuoteSearchModel, TronaldDumpService
    >>> async with TronaldDumpService() as service:
    ...     result = await service.search_quotes(QuoteSearchModel(tag="Hillary Clinton"))
"""

from . import resources
from .converter import TronaldDumpModelConverter
from .generator import TronaldDumpDownloader, create_tronald_dump_generator
from .models import (
    AuthorModel,
    AuthorsAndSourcesModel,
    LinkModel,
    PageHierarchyModel,
    QuoteListModel,
    QuoteModel,
    QuoteSearchModel,
    QuoteSourceModel,
    SearchResultModel,
    SelfLinkModel,
    TagListModel,
    TagModel,
    TronaldDumpQuote,
)
from .service import TronaldDumpService

__all__ = [
    "resources",
    "TronaldDumpModelConverter",
    "TronaldDumpDownloader",
    "TronaldDumpService",
    "create_tronald_dump_generator",
    "AuthorModel",
    "AuthorsAndSourcesModel",
    "LinkModel",
    "PageHierarchyModel",
    "QuoteListModel",
    "QuoteModel",
    "QuoteSearchModel",
    "QuoteSourceModel",
    "SearchResultModel",
    "SelfLinkModel",
    "TagListModel",
    "TagModel",
    "TronaldDumpQuote",
]
