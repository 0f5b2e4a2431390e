"""Tests for CachedQuoteGenerator.

Run with: uv run pytest jollyquotes/services/tests/unit/test_cached_generator.py
"""

import logging

import pytest

from jollyquotes.lib.errors import InvalidOperationError
from jollyquotes.services.cache import BlockableQuoteCache, QuoteCache
from jollyquotes.services.generators import CachedQuoteGenerator
from jollyquotes.services.quotes import Possibility, QuoteInclude
from jollyquotes.services.tests.fakes import (
    ALWAYS_DOWNLOAD,
    NEVER_DOWNLOAD,
    FakeDownloader,
    SequenceRandom,
    make_quote,
)


def create_generator(downloader, *, download: bool = True, cache=None) -> CachedQuoteGenerator:
    """Generator whose possibility always (or never) chooses to download."""
    draw = ALWAYS_DOWNLOAD if download else NEVER_DOWNLOAD
    return CachedQuoteGenerator(
        downloader,
        cache=cache,
        possibility=Possibility(SequenceRandom(default=draw)),
        random=SequenceRandom(),
    )


@pytest.fixture
def downloader(sample_quotes):
    return FakeDownloader(sample_quotes)


class TestConstruction:
    """Test cases for wiring the cache."""

    @pytest.mark.unit
    def test_none_downloader_raises(self):
        with pytest.raises(ValueError):
            CachedQuoteGenerator(None)

    @pytest.mark.unit
    def test_creates_blockable_cache(self, downloader):
        generator = CachedQuoteGenerator(downloader)

        assert isinstance(generator.cache, BlockableQuoteCache)
        assert generator.cache.is_empty

    @pytest.mark.unit
    def test_wraps_plain_cache(self, downloader):
        plain = QuoteCache()
        generator = CachedQuoteGenerator(downloader, cache=plain)

        assert generator.cache.cache is plain

    @pytest.mark.unit
    def test_reuses_blockable_cache(self, downloader):
        blockable = BlockableQuoteCache(QuoteCache())
        assert CachedQuoteGenerator(downloader, cache=blockable).cache is blockable

    @pytest.mark.unit
    def test_api_name_and_source_from_downloader(self, downloader):
        generator = CachedQuoteGenerator(downloader)

        assert generator.api_name == "fake"
        assert generator.source == "https://fake.test"


class TestRandomQuote:
    """Test cases for get_random_quote."""

    @pytest.mark.unit
    async def test_empty_cache_downloads(self, downloader, sample_quotes):
        generator = create_generator(downloader, download=False)

        quote = await generator.get_random_quote()

        assert quote is sample_quotes[0]
        assert downloader.calls == ["download_random_quote"]
        assert generator.cache.is_cached(quote.id)

    @pytest.mark.unit
    async def test_filled_cache_served_when_possibility_says_cache(self, downloader):
        generator = create_generator(downloader, download=False)
        generator.cache.cache_quote(make_quote(99))

        quote = await generator.get_random_quote()

        assert str(quote.id) == "99"
        assert downloader.calls == []

    @pytest.mark.unit
    async def test_filled_cache_downloads_when_possibility_says_download(self, downloader, sample_quotes):
        generator = create_generator(downloader, download=True)
        generator.cache.cache_quote(make_quote(99))

        quote = await generator.get_random_quote()

        assert quote is sample_quotes[0]
        assert generator.cache.count == 2

    @pytest.mark.unit
    async def test_cached_only_on_empty_cache_raises(self, downloader):
        generator = create_generator(downloader)

        with pytest.raises(InvalidOperationError):
            await generator.get_random_quote(QuoteInclude.CACHED)

        assert downloader.calls == []

    @pytest.mark.unit
    async def test_download_only_ignores_cache(self, downloader):
        generator = create_generator(downloader, download=False)
        generator.cache.cache_quote(make_quote(99))

        await generator.get_random_quote("download")

        assert downloader.calls == ["download_random_quote"]

    @pytest.mark.unit
    async def test_blocked_cache_not_filled(self, downloader):
        generator = create_generator(downloader)
        generator.cache.block()

        await generator.get_random_quote()

        assert generator.cache.is_empty

    @pytest.mark.unit
    async def test_blocked_throwing_cache_still_downloads(self, downloader, sample_quotes):
        cache = BlockableQuoteCache(QuoteCache(), throw_if_blocked=True)
        generator = create_generator(downloader, cache=cache)
        cache.block()

        assert await generator.get_random_quote() is sample_quotes[0]

    @pytest.mark.unit
    async def test_invalid_include_raises(self, downloader):
        generator = create_generator(downloader)
        with pytest.raises(ValueError):
            await generator.get_random_quote("sometimes")


class TestRandomQuoteWithTags:
    """Test cases for tag-filtered random quotes."""

    @pytest.mark.unit
    async def test_cached_tag_match_served(self, downloader):
        generator = create_generator(downloader, download=False)
        generator.cache.cache_quote(make_quote(99, tags=["life"]))

        quote = await generator.get_random_quote_with_tag("life")

        assert str(quote.id) == "99"
        assert downloader.calls == []

    @pytest.mark.unit
    async def test_cache_miss_falls_back_to_download(self, downloader, sample_quotes):
        generator = create_generator(downloader, download=False)
        generator.cache.cache_quote(make_quote(99, tags=["other"]))

        quote = await generator.get_random_quote_with_tag("work")

        assert quote is sample_quotes[0]
        assert generator.cache.is_cached(1)

    @pytest.mark.unit
    async def test_download_logged_with_api_and_tag(self, downloader, caplog):
        generator = create_generator(downloader)

        with caplog.at_level(logging.INFO, logger="jollyquotes.services.generators.cached_generator"):
            await generator.get_random_quote_with_tag("work")

        record = caplog.records[-1]
        assert record.ctx_api_name == "fake"
        assert record.ctx_tag == "work"

    @pytest.mark.unit
    async def test_cached_only_returns_none_on_miss(self, downloader):
        generator = create_generator(downloader)

        assert await generator.get_random_quote_with_tag("life", QuoteInclude.CACHED) is None

    @pytest.mark.unit
    async def test_no_match_returns_none(self, downloader):
        generator = create_generator(downloader)

        assert await generator.get_random_quote_with_tag("missing") is None
        assert generator.cache.is_empty

    @pytest.mark.unit
    async def test_blank_tag_raises(self, downloader):
        generator = create_generator(downloader)

        with pytest.raises(ValueError):
            await generator.get_random_quote_with_tag("  ")

    @pytest.mark.unit
    async def test_any_tag(self, downloader, sample_quotes):
        generator = create_generator(downloader)

        assert await generator.get_random_quote_with_any_tag(["missing", "work"]) is sample_quotes[0]

    @pytest.mark.unit
    async def test_any_tag_from_cache(self, downloader):
        generator = create_generator(downloader, download=False)
        generator.cache.cache_quote(make_quote(99, tags=["b"]))

        quote = await generator.get_random_quote_with_any_tag(["a", "b"], QuoteInclude.CACHED)

        assert str(quote.id) == "99"

    @pytest.mark.unit
    @pytest.mark.parametrize("tags", [None, [], ["", "  "]])
    async def test_any_tag_without_tags_matches_nothing(self, downloader, tags):
        generator = create_generator(downloader)

        assert await generator.get_random_quote_with_any_tag(tags) is None
        assert downloader.calls == []


class TestAllQuotes:
    """Test cases for bulk access."""

    @pytest.mark.unit
    async def test_all_merges_cache_first(self, downloader, sample_quotes):
        generator = create_generator(downloader)
        cached_first = make_quote(1, "Cached version")
        generator.cache.cache_quote(cached_first)

        quotes = await generator.get_all_quotes()

        assert [str(q.id) for q in quotes] == ["1", "2", "3"]
        assert quotes[0] is cached_first
        assert generator.cache.count == 3

    @pytest.mark.unit
    async def test_cached_only(self, downloader):
        generator = create_generator(downloader)
        generator.cache.cache_quote(make_quote(99))

        quotes = await generator.get_all_quotes(QuoteInclude.CACHED)

        assert [str(q.id) for q in quotes] == ["99"]
        assert downloader.calls == []

    @pytest.mark.unit
    async def test_download_only(self, downloader):
        generator = create_generator(downloader)
        generator.cache.cache_quote(make_quote(99))

        quotes = await generator.get_all_quotes(QuoteInclude.DOWNLOAD)

        assert [str(q.id) for q in quotes] == ["1", "2", "3"]

    @pytest.mark.unit
    async def test_with_tag(self, downloader):
        generator = create_generator(downloader)
        generator.cache.cache_quote(make_quote(99, tags=["life"]))

        quotes = await generator.get_all_quotes_with_tag("life")

        assert {str(q.id) for q in quotes} == {"99", "1", "2"}

    @pytest.mark.unit
    async def test_with_any_tag(self, downloader):
        generator = create_generator(downloader)

        quotes = await generator.get_all_quotes_with_any_tag(["work", "missing"])

        assert [str(q.id) for q in quotes] == ["1"]

    @pytest.mark.unit
    async def test_with_any_tag_empty_matches_nothing(self, downloader):
        generator = create_generator(downloader)

        assert await generator.get_all_quotes_with_any_tag([]) == []
        assert downloader.calls == []

    @pytest.mark.unit
    async def test_unsupported_enumeration_propagates(self, downloader):
        async def not_supported():
            raise NotImplementedError("no enumeration")

        downloader.download_all_quotes = not_supported
        generator = create_generator(downloader)

        with pytest.raises(NotImplementedError):
            await generator.get_all_quotes()


class TestLifecycle:
    @pytest.mark.unit
    async def test_context_manager_closes_downloader(self, downloader):
        async with create_generator(downloader):
            pass

        assert downloader.closed
        assert downloader.service.closed
