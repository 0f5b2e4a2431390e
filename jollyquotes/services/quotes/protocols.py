"""Protocols for the collaborators used by caches, services and generators.

Using Protocol allows:
- Easy testing with fakes (seeded random sources, in-memory resolvers)
- Swapping HTTP backends without touching providers
- Type checking without inheritance
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from .models import QuoteId

T = TypeVar("T")
M = TypeVar("M")


@runtime_checkable
class QuoteLike(Protocol):
    """Anything that looks like a quote: id, text, author, date, source, tags."""

    @property
    def id(self) -> QuoteId: ...

    @property
    def value(self) -> str: ...

    @property
    def author(self) -> str: ...

    @property
    def date(self) -> Optional[datetime]: ...

    @property
    def source(self) -> str: ...

    @property
    def tags(self) -> Sequence[str]: ...


class RandomNumberGenerator(Protocol):
    """Source of uniformly distributed integers."""

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return a random integer in [min_value, max_value)."""
        ...


class EqualityComparer(Protocol[T]):
    """Decides whether two quotes are equal, independent of identity."""

    def equals(self, a: T, b: T) -> bool: ...

    def hash(self, a: T) -> int: ...


class DefaultEqualityComparer:
    """Equality comparer using the quotes' own == and hash()."""

    def equals(self, a: Any, b: Any) -> bool:
        return a == b

    def hash(self, a: Any) -> int:
        return hash(a)


class ResourceResolver(Protocol):
    """Fetches a resource by path and deserializes it into a model."""

    async def resolve(self, source: str, response_type: type[M], params: Optional[Mapping[str, Any]] = None) -> M:
        """Fetch source and validate it into response_type.

        Raises when the resource cannot be fetched or deserialized.
        """
        ...

    async def try_resolve(
        self, source: str, response_type: type[M], params: Optional[Mapping[str, Any]] = None
    ) -> Optional[M]:
        """Like resolve, but returns None when the resource does not exist."""
        ...


class StreamResolver(ResourceResolver, Protocol):
    """Resolver that can also return raw bytes."""

    async def resolve_stream(self, source: str, params: Optional[Mapping[str, Any]] = None) -> bytes: ...

    async def try_resolve_stream(self, source: str, params: Optional[Mapping[str, Any]] = None) -> Optional[bytes]: ...


@runtime_checkable
class QuoteService(Protocol):
    """Provider service issuing HTTP calls through a resolver.

    Every downloader owns one; closing the downloader closes the service,
    which closes the resolver if the service created it.
    """

    api_name: str
    resolver: ResourceResolver

    async def aclose(self) -> None: ...


class QuoteGenerator(Protocol):
    """Produces random quotes for one API."""

    @property
    def api_name(self) -> str: ...

    async def get_random_quote(self) -> Any: ...

    async def get_random_quote_with_tag(self, tag: str) -> Optional[Any]: ...

    async def get_random_quote_with_any_tag(self, tags: Optional[Sequence[str]]) -> Optional[Any]: ...
