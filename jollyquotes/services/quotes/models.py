"""Common quote representation shared by every provider."""

import hashlib
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)


class QuoteId:
    """Identifier of a quote, used as the cache key.

    Accepts a non-blank string or a non-negative integer. Integer ids are
    stored as their decimal string, so QuoteId(7) == QuoteId("7").

    Example:
        >>> QuoteId(42) == QuoteId("42")
        True
        >>> str(QuoteId("abc"))
        'abc'
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[int, str]):
        if value is None:
            raise ValueError("Quote id must not be None")
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise TypeError(f"Quote id must be int or str, not {type(value).__name__}")
        if isinstance(value, int):
            if value < 0:
                raise ValueError(f"Quote id must be greater than or equal to 0, got {value}")
            value = str(value)
        elif not value.strip():
            raise ValueError("Quote id must not be blank")
        self._value = value

    @classmethod
    def of(cls, value: Union["QuoteId", int, str]) -> "QuoteId":
        """Return value as a QuoteId, constructing one if needed."""
        if isinstance(value, QuoteId):
            return value
        return cls(value)

    @property
    def value(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QuoteId):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"QuoteId({self._value!r})"


IdLike = Union[QuoteId, int, str]

_DATE_ADAPTER = TypeAdapter(Optional[datetime])


def content_id(value: str, author: str, source: str = "", date: Optional[datetime] = None, tags=()) -> QuoteId:
    """Derive a stable id from quote content for quotes without one."""
    digest = hashlib.sha256()
    for part in (value, author, source, date.isoformat() if date else "", *tags):
        digest.update(str(part).encode("utf-8"))
        digest.update(b"\x1f")
    return QuoteId(digest.hexdigest()[:16])


class Quote(BaseModel):
    """Immutable quote.

    Two quotes share an identity when their ids are equal; they are equal
    (``==``) only when every field matches.

    Example:
        >>> quote = Quote(id=1, value="Stay hungry.", author="Steve Jobs", tags=["life"])
        >>> quote.id
        QuoteId('1')
        >>> quote.tags
        ('life',)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: QuoteId = Field(..., description="Identity of the quote within a cache")
    value: str = Field(..., description="Quote text")
    author: str = Field(..., description="Author of the quote")
    date: Optional[datetime] = Field(None, description="When the quote was said or published")
    source: str = Field("", description="Where the quote came from (url, api name)")
    tags: tuple[str, ...] = Field(default=(), description="Tags in display order")

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("id") is None:
            value = data.get("value")
            author = data.get("author")
            if isinstance(value, str) and isinstance(author, str):
                tags = data.get("tags") or ()
                data = dict(data)
                try:
                    date = _DATE_ADAPTER.validate_python(data.get("date"))
                except ValidationError:
                    # Left for the date field to reject
                    return data
                data["id"] = content_id(
                    value,
                    author,
                    data.get("source") or "",
                    date,
                    (tags,) if isinstance(tags, str) else tuple(tags),
                )
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> QuoteId:
        return QuoteId.of(value)

    @field_validator("value", "author")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"{info.field_name} must not be blank")
        return value

    @field_validator("source", mode="before")
    @classmethod
    def _source_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_or_empty(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_serializer("id")
    def _serialize_id(self, value: QuoteId) -> str:
        return str(value)

    @classmethod
    def unknown(cls) -> "Quote":
        """Placeholder quote used when nothing could be found."""
        return cls(id="unknown", value="No Content", author="Unknown")

    def with_id(self, quote_id: IdLike) -> "Quote":
        """Return a copy of this quote with a different id."""
        return self.model_copy(update={"id": QuoteId.of(quote_id)})

    def has_tag(self, tag: str) -> bool:
        if not tag or not tag.strip():
            raise ValueError("tag must not be blank")
        return tag in self.tags

    def __str__(self) -> str:
        return f'"{self.value}" - {self.author}'


def to_generic_quote(quote: Any) -> Quote:
    """Convert any quote-like object into a plain Quote.

    Args:
        quote: Object with id, value, author, date, source and tags attributes

    Returns:
        Quote carrying the same data (the same object if it is already a Quote
        and not a provider subclass)
    """
    if quote is None:
        raise ValueError("quote must not be None")
    if type(quote) is Quote:
        return quote
    return Quote(
        id=QuoteId.of(quote.id),
        value=quote.value,
        author=quote.author,
        date=getattr(quote, "date", None),
        source=getattr(quote, "source", ""),
        tags=tuple(getattr(quote, "tags", ()) or ()),
    )


class QuoteInclude(str, Enum):
    """Where a generator may take quotes from."""

    ALL = "all"
    CACHED = "cached"
    DOWNLOAD = "download"
