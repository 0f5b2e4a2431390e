"""Fake collaborators for testing caches, generators and API services.

These fakes replace random sources, download strategies and the network,
so unit tests are deterministic and never leave the process.

Usage:
    from jollyquotes.services.tests.fakes import SequenceRandom, create_mock_resolver

    resolver = create_mock_resolver({"/random": {"_id": "1", ...}})
    service = QuotableService(resolver=resolver)
"""

from typing import Any, Callable, Optional, Union

import httpx

from jollyquotes.services.http import HttpResolver, ResolverConfig
from jollyquotes.services.quotes import Quote

Route = Union[dict, list, bytes, Callable[[httpx.Request], httpx.Response]]


def make_quote(quote_id, value: str = "", author: str = "Tester", tags=()) -> Quote:
    """Create a quote with sensible defaults for tests."""
    return Quote(
        id=quote_id,
        value=value or f"Quote number {quote_id}",
        author=author,
        tags=tags,
    )


class SequenceRandom:
    """Random source returning queued values.

    Values are clamped into [min_value, max_value) and the default is used
    once the queue is exhausted. Every call is recorded.

    Attributes:
        calls: List of (min_value, max_value) tuples for assertion
    """

    def __init__(self, *values: int, default: int = 0):
        self.values = list(values)
        self.default = default
        self.calls: list[tuple[int, int]] = []

    def next_int(self, min_value: int, max_value: int) -> int:
        self.calls.append((min_value, max_value))
        value = self.values.pop(0) if self.values else self.default
        return max(min_value, min(value, max_value - 1))


# Possibility.determine() draws from [1, upper_limit]; these force each outcome
ALWAYS_DOWNLOAD = 1_000_000
NEVER_DOWNLOAD = 0


class FakeService:
    """Service stand-in owned by FakeDownloader. It never resolves anything."""

    def __init__(self, api_name: str):
        self.api_name = api_name
        self.resolver = None
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


class FakeDownloader:
    """In-memory download strategy.

    Random downloads hand out the configured quotes in order, wrapping
    around. Bulk downloads return every matching quote.

    Attributes:
        calls: Names of the download methods called, in order
        closed: Whether aclose() was awaited
    """

    def __init__(self, quotes=(), api_name: str = "fake", source: str = "https://fake.test"):
        self.quotes = list(quotes)
        self._api_name = api_name
        self._source = source
        self._next = 0
        self.service = FakeService(api_name)
        self.calls: list[str] = []
        self.closed = False

    @property
    def api_name(self) -> str:
        return self._api_name

    @property
    def source(self) -> str:
        return self._source

    async def download_random_quote(self):
        self.calls.append("download_random_quote")
        quote = self.quotes[self._next % len(self.quotes)]
        self._next += 1
        return quote

    async def download_random_quote_with_tag(self, tag: str):
        self.calls.append("download_random_quote_with_tag")
        return next((quote for quote in self.quotes if tag in quote.tags), None)

    async def download_random_quote_with_any_tag(self, tags):
        self.calls.append("download_random_quote_with_any_tag")
        return next((quote for quote in self.quotes if set(tags) & set(quote.tags)), None)

    async def download_all_quotes(self):
        self.calls.append("download_all_quotes")
        return list(self.quotes)

    async def download_all_quotes_with_tag(self, tag: str):
        self.calls.append("download_all_quotes_with_tag")
        return [quote for quote in self.quotes if tag in quote.tags]

    async def download_all_quotes_with_any_tag(self, tags):
        self.calls.append("download_all_quotes_with_any_tag")
        return [quote for quote in self.quotes if set(tags) & set(quote.tags)]

    async def aclose(self) -> None:
        await self.service.aclose()
        self.closed = True


def create_mock_transport(
    routes: dict[str, Route],
    requests: Optional[list[httpx.Request]] = None,
) -> httpx.MockTransport:
    """Create an httpx transport answering from a path → response table.

    Args:
        routes: Maps URL paths to a JSON body, raw bytes, or a handler
            taking the request and returning an httpx.Response
        requests: If given, every request is appended to it

    Returns:
        MockTransport answering 404 for unknown paths
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)

        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"statusCode": 404, "statusMessage": "Not Found"})
        if callable(route):
            return route(request)
        if isinstance(route, bytes):
            return httpx.Response(200, content=route, headers={"Content-Type": "image/jpeg"})
        return httpx.Response(200, json=route)

    return httpx.MockTransport(handler)


def create_mock_resolver(
    routes: dict[str, Route],
    base_url: str = "https://api.test",
    requests: Optional[list[httpx.Request]] = None,
    **config: Any,
) -> HttpResolver:
    """Create an HttpResolver backed by create_mock_transport.

    Retries are disabled unless max_retries is passed.
    """
    config.setdefault("max_retries", 0)
    client = httpx.AsyncClient(
        transport=create_mock_transport(routes, requests),
        base_url=base_url,
    )
    return HttpResolver(
        client,
        config=ResolverConfig(base_url=base_url, **config),
        close_client=True,
    )
