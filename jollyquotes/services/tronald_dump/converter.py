"""Maps Tronald Dump models to quotes and query parameters."""

from typing import Any

from . import resources
from .models import QuoteListModel, QuoteModel, QuoteSearchModel, SearchResultModel, TronaldDumpQuote


class TronaldDumpModelConverter:
    """Converts between Tronald Dump's wire models and jollyquotes types."""

    def convert_quote_model(self, model: QuoteModel) -> TronaldDumpQuote:
        if model is None:
            raise ValueError("model must not be None")

        sources = model.embedded.sources
        return TronaldDumpQuote(
            id=model.quote_id,
            value=model.value,
            source=sources[0].url if sources else resources.API_PAGE,
            tags=model.tags,
            date=model.appeared_at,
            appeared_at=model.appeared_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def enumerate_quotes(self, model: QuoteListModel) -> list[TronaldDumpQuote]:
        if model is None:
            raise ValueError("model must not be None")
        return [self.convert_quote_model(quote) for quote in model.quotes]

    def count_pages(self, model: SearchResultModel) -> int:
        """Number of pages needed to list every result of a search."""
        if model is None:
            raise ValueError("model must not be None")
        pages, rest = divmod(model.total, resources.MAX_ITEMS_PER_PAGE)
        return pages + 1 if rest else pages

    def get_search_query(self, search: QuoteSearchModel) -> dict[str, Any]:
        """Query parameters for GET /search/quote.

        Example:
            >>> converter.get_search_query(QuoteSearchModel(query="wall", page=2))
            {'query': 'wall', 'page': 2}
        """
        if search is None:
            raise ValueError("search must not be None")

        params: dict[str, Any] = {}
        if search.phrases:
            # httpx encodes the spaces as '+'
            params["query"] = " ".join(search.phrases)
        if search.tag:
            params["tag"] = search.tag
        if search.page > 0:
            params["page"] = search.page
        return params
