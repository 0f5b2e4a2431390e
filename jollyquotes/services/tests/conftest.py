"""Shared pytest fixtures for jollyquotes services tests."""

from datetime import datetime, timezone

import pytest

from jollyquotes.services.cache import BlockableQuoteCache, QuoteCache
from jollyquotes.services.quotes import Quote
from jollyquotes.services.tests.fakes import SequenceRandom, make_quote


# =============================================================================
# Pytest Fixtures
# =============================================================================

@pytest.fixture
def sequence_random():
    """Fixture providing a random source that always returns the lowest value."""
    return SequenceRandom()


@pytest.fixture
def sample_quotes():
    """Three quotes with overlapping tags.

    1: life, work
    2: life
    3: (no tags)
    """
    return [
        make_quote(1, "Stay hungry, stay foolish.", "Steve Jobs", ("life", "work")),
        make_quote(2, "Life is what happens.", "John Lennon", ("life",)),
        make_quote(3, "Simplicity is the ultimate sophistication.", "Leonardo da Vinci"),
    ]


@pytest.fixture
def dated_quote():
    return Quote(
        id="dated",
        value="The best way to predict the future is to invent it.",
        author="Alan Kay",
        date=datetime(1971, 1, 1, tzinfo=timezone.utc),
        source="https://example.com",
        tags=["future"],
    )


@pytest.fixture
def cache(sequence_random):
    """Fixture providing an empty QuoteCache with deterministic selection."""
    return QuoteCache(random=sequence_random)


@pytest.fixture
def filled_cache(cache, sample_quotes):
    cache.cache_quotes(sample_quotes)
    return cache


@pytest.fixture
def blockable_cache(filled_cache):
    """Fixture providing a BlockableQuoteCache around a filled cache."""
    return BlockableQuoteCache(filled_cache)
