"""Tests for the quotable models, converter, service and generator.

Run with: uv run pytest jollyquotes/services/tests/unit/test_quotable.py
"""

import httpx
import pytest
from pydantic import ValidationError

from jollyquotes.lib.errors import QuoteError
from jollyquotes.services.quotable import (
    AuthorSearchModel,
    FuzzyMatchingThreshold,
    QuotableDownloader,
    QuotableModelConverter,
    QuotableQuote,
    QuotableService,
    QuoteContentSearchModel,
    QuoteListSearchModel,
    QuoteModel,
    QuoteSearchField,
    QuoteSearchModel,
    SearchOperator,
    SortOrder,
    TagExpression,
    create_quotable_generator,
    resources,
)
from jollyquotes.services.quotes import QuoteId
from jollyquotes.services.tests.fakes import create_mock_resolver


def quote_payload(quote_id: str, content: str = "", tags=("famous-quotes",)) -> dict:
    return {
        "_id": quote_id,
        "content": content or f"Content of {quote_id}",
        "author": "Albert Einstein",
        "authorSlug": "albert-einstein",
        "tags": list(tags),
        "length": 42,
        "dateAdded": "2020-01-01T00:00:00.000Z",
        "dateModified": "2023-04-14T00:00:00.000Z",
    }


def page_payload(results: list[dict], page: int = 1, total_count: int = 0, total_pages: int = 1) -> dict:
    return {
        "count": len(results),
        "totalCount": total_count or len(results),
        "page": page,
        "totalPages": total_pages,
        "lastItemIndex": None,
        "results": results,
    }


# =============================================================================
# Tag expressions and search models
# =============================================================================


class TestTagExpression:
    """Test cases for TagExpression."""

    @pytest.mark.unit
    def test_single_tag(self):
        assert str(TagExpression.tag("love")) == "love"

    @pytest.mark.unit
    def test_operators(self):
        expression = (TagExpression.tag("love") & "happiness") | "wisdom"
        assert str(expression) == "love,happiness|wisdom"

    @pytest.mark.unit
    def test_all_of_and_any_of(self):
        assert str(TagExpression.all_of(["a", "b", "c"])) == "a,b,c"
        assert str(TagExpression.any_of(["a", "b"])) == "a|b"

    @pytest.mark.unit
    def test_combine_requires_tags(self):
        with pytest.raises(ValueError):
            TagExpression.any_of([])

    @pytest.mark.unit
    def test_blank_value_rejected(self):
        with pytest.raises(ValidationError):
            TagExpression.tag("  ")

    @pytest.mark.unit
    def test_node_requires_operator(self):
        leaf = TagExpression.tag("a")
        with pytest.raises(ValidationError):
            TagExpression(left=leaf, right=leaf)

    @pytest.mark.unit
    def test_leaf_cannot_have_children(self):
        leaf = TagExpression.tag("a")
        with pytest.raises(ValidationError):
            TagExpression(value="b", left=leaf, right=leaf, operator=SearchOperator.AND)

    @pytest.mark.unit
    def test_empty_expression_rejected(self):
        with pytest.raises(ValidationError):
            TagExpression()


class TestSearchModels:
    """Test cases for search model validation."""

    @pytest.mark.unit
    def test_tags_from_string(self):
        assert str(QuoteSearchModel(tags="love").tags) == "love"

    @pytest.mark.unit
    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ValidationError):
            QuoteSearchModel(min_length=100, max_length=10)

    @pytest.mark.unit
    @pytest.mark.parametrize("limit", [0, resources.RESULTS_PER_PAGE_MAX + 1])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            QuoteListSearchModel(limit=limit)

    @pytest.mark.unit
    def test_page_starts_at_one(self):
        with pytest.raises(ValidationError):
            QuoteListSearchModel(page=0)

    @pytest.mark.unit
    def test_content_search_requires_query(self):
        with pytest.raises(ValidationError):
            QuoteContentSearchModel(query=" ")

    @pytest.mark.unit
    def test_content_search_requires_fields(self):
        with pytest.raises(ValidationError):
            QuoteContentSearchModel(query="life", fields=frozenset())

    @pytest.mark.unit
    def test_has_author(self):
        assert QuoteSearchModel(authors="albert-einstein").has_author
        assert not QuoteSearchModel().has_author


# =============================================================================
# Converter
# =============================================================================


class TestQuotableModelConverter:
    """Test cases for QuotableModelConverter."""

    @pytest.mark.unit
    def test_convert_quote_model(self):
        model = QuoteModel.model_validate(quote_payload("q1", "Imagination is everything."))

        quote = QuotableModelConverter().convert_quote_model(model)

        assert isinstance(quote, QuotableQuote)
        assert quote.id == QuoteId("q1")
        assert quote.value == "Imagination is everything."
        assert quote.author_slug == "albert-einstein"
        assert quote.tags == ("famous-quotes",)
        assert quote.date == quote.date_added
        assert quote.source == resources.API_PAGE

    @pytest.mark.unit
    def test_convert_none_raises(self):
        with pytest.raises(ValueError):
            QuotableModelConverter().convert_quote_model(None)

    @pytest.mark.unit
    def test_search_query(self):
        search = QuoteSearchModel(
            min_length=10,
            max_length=100,
            tags=TagExpression.any_of(["love", "life"]),
            authors=["albert-einstein", "mark-twain"],
        )

        assert QuotableModelConverter().get_search_query(search) == {
            "minLength": 10,
            "maxLength": 100,
            "tags": "love|life",
            "author": "albert-einstein|mark-twain",
        }

    @pytest.mark.unit
    def test_empty_search_query(self):
        assert QuotableModelConverter().get_search_query(QuoteSearchModel()) == {}

    @pytest.mark.unit
    def test_list_search_query(self):
        search = QuoteListSearchModel(limit=150, page=3, order=SortOrder.DESCENDING)

        params = QuotableModelConverter().get_list_search_query(search)

        assert params["limit"] == 150
        assert params["page"] == 3
        assert params["order"] == SortOrder.DESCENDING.value
        assert "sortBy" in params

    @pytest.mark.unit
    def test_content_search_query(self):
        search = QuoteContentSearchModel(
            query="every good man",
            fields=frozenset({QuoteSearchField.CONTENT}),
            fuzzy_max_edits=FuzzyMatchingThreshold.ONE,
        )

        params = QuotableModelConverter().get_content_search_query(search)

        assert params["query"] == "every good man"
        assert params["fields"] == QuoteSearchField.CONTENT.value
        assert params["fuzzyMaxEdits"] == 1
        assert params["fuzzyMaxExpansions"] == resources.FUZZY_EXPANSIONS_DEFAULT

    @pytest.mark.unit
    def test_author_search_query(self):
        params = QuotableModelConverter().get_author_search_query(AuthorSearchModel(slugs=("a", "b")))

        assert params["slug"] == "a|b"
        assert params["page"] == 1


# =============================================================================
# Service
# =============================================================================


class TestQuotableService:
    """Test cases for QuotableService over a mock transport."""

    @pytest.mark.unit
    async def test_get_quote(self):
        service = QuotableService(resolver=create_mock_resolver({"/quotes/q1": quote_payload("q1")}))

        model = await service.get_quote("q1")

        assert model.id == "q1"
        assert model.author_slug == "albert-einstein"

    @pytest.mark.unit
    async def test_get_missing_quote_raises_quote_error(self):
        service = QuotableService(resolver=create_mock_resolver({}))

        with pytest.raises(QuoteError, match="'nope' does not exist"):
            await service.get_quote("nope")

    @pytest.mark.unit
    async def test_get_quote_blank_id_raises(self):
        service = QuotableService(resolver=create_mock_resolver({}))

        with pytest.raises(ValueError):
            await service.get_quote(" ")

    @pytest.mark.unit
    async def test_random_quote_sends_search(self):
        requests = []
        resolver = create_mock_resolver({"/random": quote_payload("q1")}, requests=requests)
        service = QuotableService(resolver=resolver)

        await service.get_random_quote(QuoteSearchModel(tags=TagExpression.all_of(["a", "b"])))

        assert requests[0].url.params["tags"] == "a,b"

    @pytest.mark.unit
    async def test_random_quote_without_match_raises(self):
        def not_found(request):
            return httpx.Response(404, json={"statusCode": 404})

        service = QuotableService(resolver=create_mock_resolver({"/random": not_found}))

        with pytest.raises(QuoteError, match="Could not find any matching quote"):
            await service.get_random_quote(QuoteSearchModel(tags="nothing"))

    @pytest.mark.unit
    async def test_get_quotes_page(self):
        payload = page_payload([quote_payload("q1"), quote_payload("q2")], total_count=10, total_pages=5)
        service = QuotableService(resolver=create_mock_resolver({"/quotes": payload}))

        result = await service.get_quotes()

        assert result.count == 2
        assert result.total_count == 10
        assert [model.id for model in result.results] == ["q1", "q2"]

    @pytest.mark.unit
    async def test_search_quotes(self):
        requests = []
        resolver = create_mock_resolver(
            {"/search/quotes": page_payload([quote_payload("q1")])}, requests=requests
        )
        service = QuotableService(resolver=resolver)

        result = await service.search_quotes(QuoteContentSearchModel(query="imagination"))

        assert result.results[0].id == "q1"
        assert requests[0].url.params["query"] == "imagination"

    @pytest.mark.unit
    async def test_get_tags(self):
        tags = [{"_id": "t1", "name": "wisdom", "quoteCount": 3}]
        service = QuotableService(resolver=create_mock_resolver({"/tags": tags}))

        result = await service.get_tags()

        assert result[0].name == "wisdom"
        assert result[0].quote_count == 3

    @pytest.mark.unit
    async def test_get_author(self):
        author = {"_id": "a1", "name": "Albert Einstein", "slug": "albert-einstein", "quoteCount": 52}
        service = QuotableService(resolver=create_mock_resolver({"/authors/slug/albert-einstein": author}))

        assert (await service.get_author("albert-einstein")).quote_count == 52

        with pytest.raises(QuoteError):
            await service.get_author("nobody")

    @pytest.mark.unit
    async def test_get_authors(self):
        author = {"_id": "a1", "name": "Albert Einstein", "slug": "albert-einstein"}
        service = QuotableService(resolver=create_mock_resolver({"/authors": page_payload([author])}))

        result = await service.get_authors()

        assert result.results[0].slug == "albert-einstein"


# =============================================================================
# Downloader
# =============================================================================


class TestQuotableDownloader:
    """Test cases for QuotableDownloader."""

    @pytest.mark.unit
    async def test_download_random_quote(self):
        service = QuotableService(resolver=create_mock_resolver({"/random": quote_payload("q1")}))

        quote = await QuotableDownloader(service).download_random_quote()

        assert quote.id == QuoteId("q1")

    @pytest.mark.unit
    async def test_any_tag_uses_or_expression(self):
        requests = []
        resolver = create_mock_resolver({"/random": quote_payload("q1")}, requests=requests)
        downloader = QuotableDownloader(QuotableService(resolver=resolver))

        await downloader.download_random_quote_with_any_tag(["love", "life"])

        assert requests[0].url.params["tags"] == "love|life"

    @pytest.mark.unit
    async def test_random_with_tag_no_match_returns_none(self):
        downloader = QuotableDownloader(QuotableService(resolver=create_mock_resolver({})))

        assert await downloader.download_random_quote_with_tag("nothing") is None

    @pytest.mark.unit
    async def test_any_tag_empty_returns_nothing(self):
        requests = []
        downloader = QuotableDownloader(QuotableService(resolver=create_mock_resolver({}, requests=requests)))

        assert await downloader.download_random_quote_with_any_tag([]) is None
        assert await downloader.download_all_quotes_with_any_tag([]) == []
        assert requests == []

    @pytest.mark.unit
    async def test_download_all_follows_pages(self):
        pages = {
            "1": page_payload([quote_payload("q1"), quote_payload("q2")], page=1, total_count=3, total_pages=2),
            "2": page_payload([quote_payload("q3")], page=2, total_count=3, total_pages=2),
        }
        requests = []

        def paged(request):
            return httpx.Response(200, json=pages[request.url.params["page"]])

        resolver = create_mock_resolver({"/quotes": paged}, requests=requests)
        downloader = QuotableDownloader(QuotableService(resolver=resolver))

        quotes = await downloader.download_all_quotes()

        assert [str(quote.id) for quote in quotes] == ["q1", "q2", "q3"]
        assert [request.url.params["page"] for request in requests] == ["1", "2"]
        assert requests[0].url.params["limit"] == str(resources.RESULTS_PER_PAGE_MAX)

    @pytest.mark.unit
    async def test_download_all_with_tag_stops_on_empty_page(self):
        resolver = create_mock_resolver({"/quotes": page_payload([], total_count=0)})
        downloader = QuotableDownloader(QuotableService(resolver=resolver))

        assert await downloader.download_all_quotes_with_tag("nothing") == []

    @pytest.mark.unit
    async def test_download_all_with_any_tag_sends_or_expression(self):
        requests = []
        resolver = create_mock_resolver({"/quotes": page_payload([quote_payload("q1")])}, requests=requests)
        downloader = QuotableDownloader(QuotableService(resolver=resolver))

        quotes = await downloader.download_all_quotes_with_any_tag(["a", "b"])

        assert len(quotes) == 1
        assert requests[0].url.params["tags"] == "a|b"

    @pytest.mark.unit
    async def test_generator_caches_tagged_quotes(self):
        resolver = create_mock_resolver({"/quotes": page_payload([quote_payload("q1", tags=["wisdom"])])})

        async with create_quotable_generator(QuotableService(resolver=resolver)) as generator:
            quotes = await generator.get_all_quotes_with_tag("wisdom")

            assert generator.api_name == "quotable"
            assert [str(q.id) for q in quotes] == ["q1"]
            assert generator.cache.is_cached("q1")
