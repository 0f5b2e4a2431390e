"""Maps quotable models to quotes and search models to query parameters."""

from typing import Any

from . import resources
from .models import (
    AuthorSearchModel,
    QuotableQuote,
    QuoteContentSearchModel,
    QuoteListSearchModel,
    QuoteModel,
    QuoteSearchModel,
    SearchOperator,
    TagExpression,
)


def _require(value: Any, name: str) -> None:
    if value is None:
        raise ValueError(f"{name} must not be None")


class QuotableModelConverter:
    """Converts between quotable's wire models and jollyquotes types."""

    def convert_quote_model(self, model: QuoteModel) -> QuotableQuote:
        _require(model, "model")
        return QuotableQuote(
            id=model.id,
            value=model.content,
            author=model.author,
            author_slug=model.author_slug,
            tags=model.tags,
            date=model.date_added,
            date_added=model.date_added,
            date_modified=model.date_modified,
            source=resources.API_PAGE,
        )

    def get_tag_expression(self, expression: TagExpression) -> str:
        _require(expression, "expression")
        return str(expression)

    def get_search_query(self, search: QuoteSearchModel) -> dict[str, Any]:
        """Query parameters for GET /random.

        Example:
            >>> converter.get_search_query(QuoteSearchModel(min_length=10, tags="love"))
            {'minLength': 10, 'tags': 'love'}
        """
        _require(search, "search")
        params: dict[str, Any] = {}
        if search.min_length > 0:
            params["minLength"] = search.min_length
        if search.max_length is not None:
            params["maxLength"] = search.max_length
        if search.tags is not None:
            params["tags"] = str(search.tags)
        if search.has_author:
            params["author"] = SearchOperator.OR.value.join(search.authors)
        return params

    def get_list_search_query(self, search: QuoteListSearchModel) -> dict[str, Any]:
        """Query parameters for GET /quotes."""
        params = self.get_search_query(search)
        params["sortBy"] = search.sort_by.value
        params["order"] = search.order.value
        params["limit"] = search.limit
        params["page"] = search.page
        return params

    def get_content_search_query(self, search: QuoteContentSearchModel) -> dict[str, Any]:
        """Query parameters for GET /search/quotes."""
        _require(search, "search")
        return {
            "query": search.query,
            "fields": ",".join(sorted(field.value for field in search.fields)),
            "fuzzyMaxEdits": int(search.fuzzy_max_edits),
            "fuzzyMaxExpansions": search.fuzzy_max_expansions,
            "limit": search.limit,
            "page": search.page,
        }

    def get_author_search_query(self, search: AuthorSearchModel) -> dict[str, Any]:
        """Query parameters for GET /authors."""
        _require(search, "search")
        params: dict[str, Any] = {}
        if search.slugs:
            params["slug"] = SearchOperator.OR.value.join(search.slugs)
        params["sortBy"] = search.sort_by.value
        params["order"] = search.order.value
        params["limit"] = search.limit
        params["page"] = search.page
        return params
