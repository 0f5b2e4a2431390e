"""HTTP resource resolver built on httpx.

Services never talk to httpx directly. They ask a resolver for a path
and a model type and get a validated pydantic model (or raw bytes)
back, which keeps them testable with a fake resolver.
"""

import logging
from functools import lru_cache
from typing import Any, Mapping, Optional, TypeVar

import httpx
from pydantic import TypeAdapter

from jollyquotes.lib.errors import QuoteError
from jollyquotes.lib.logging_config import log_with_context
from jollyquotes.lib.retry import retry_on_failure_async

from .config import ResolverConfig

logger = logging.getLogger(__name__)

M = TypeVar("M")

QueryParams = Optional[Mapping[str, Any]]


@lru_cache(maxsize=128)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _check_source(source: str) -> None:
    if not source or not source.strip():
        raise ValueError("source must not be None or blank")


class HttpResolver:
    """Resolves relative paths against a base URL with GET requests.

    Transport errors (connection failures, timeouts) are retried with
    exponential backoff. Status errors are never retried: resolve()
    raises httpx.HTTPStatusError, try_resolve() returns None.

    Args:
        client: Existing AsyncClient to use (not closed by aclose unless
            close_client is True)
        config: Resolver settings (defaults to ResolverConfig.from_config())
        close_client: Whether aclose() closes the client. Defaults to True
            for clients created by the resolver.

    Example:
        >>> async with HttpResolver(config=ResolverConfig(base_url="https://api.kanye.rest")) as resolver:
        ...     data = await resolver.resolve("", dict)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        config: Optional[ResolverConfig] = None,
        close_client: Optional[bool] = None,
    ):
        self.config = config or ResolverConfig.from_config()

        if client is None:
            client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers={"User-Agent": self.config.user_agent},
                follow_redirects=True,
            )
            owns_client = True
        else:
            owns_client = False

        self._client = client
        self._close_client = owns_client if close_client is None else close_client
        self._get = retry_on_failure_async(
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_base_delay,
        )(self._send)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def _send(self, source: str, params: QueryParams = None) -> httpx.Response:
        response = await self._client.get(source, params=params)
        log_with_context(
            logger,
            logging.DEBUG,
            f"GET {response.request.url} -> {response.status_code}",
            url=str(response.request.url),
            status=response.status_code,
        )
        return response

    def _log_miss(self, response: httpx.Response) -> None:
        log_with_context(
            logger,
            logging.DEBUG,
            f"No resource at {response.request.url} ({response.status_code})",
            url=str(response.request.url),
            status=response.status_code,
        )

    def _deserialize(self, response: httpx.Response, response_type: type[M]) -> M:
        data = response.json()
        if data is None:
            raise QuoteError(f"Object could not be deserialized from source '{response.request.url}'")
        return _adapter(response_type).validate_python(data)

    async def resolve(self, source: str, response_type: type[M], params: QueryParams = None) -> M:
        """GET source and validate the JSON body into response_type.

        Args:
            source: Path relative to the base URL, or an absolute URL
            response_type: Pydantic model or any type TypeAdapter accepts
            params: Query string parameters

        Returns:
            Validated response

        Raises:
            ValueError: If source is blank
            httpx.HTTPStatusError: If the server answered with an error status
            QuoteError: If the body is JSON null
            pydantic.ValidationError: If the body does not match response_type
        """
        _check_source(source)
        response = await self._get(source, params)
        response.raise_for_status()
        return self._deserialize(response, response_type)

    async def try_resolve(
        self, source: str, response_type: type[M], params: QueryParams = None
    ) -> Optional[M]:
        """Like resolve(), but returns None for any non-success status."""
        _check_source(source)
        response = await self._get(source, params)
        if not response.is_success:
            self._log_miss(response)
            return None
        return self._deserialize(response, response_type)

    async def resolve_stream(self, source: str, params: QueryParams = None) -> bytes:
        """GET source and return the raw body."""
        _check_source(source)
        response = await self._get(source, params)
        response.raise_for_status()
        return response.content

    async def try_resolve_stream(self, source: str, params: QueryParams = None) -> Optional[bytes]:
        _check_source(source)
        response = await self._get(source, params)
        if not response.is_success:
            self._log_miss(response)
            return None
        return response.content

    async def aclose(self) -> None:
        if self._close_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpResolver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def create_http_resolver(base_url: str, client: Optional[httpx.AsyncClient] = None) -> HttpResolver:
    """Create a resolver for base_url using JOLLYQUOTES_* settings.

    Args:
        base_url: Root of the API
        client: Optional shared AsyncClient (left open on aclose)

    Returns:
        HttpResolver instance
    """
    return HttpResolver(client, config=ResolverConfig.from_config(base_url))
