"""quotable response models, search models and quote type.

Response models mirror the API's JSON (camelCase names are exposed as
snake_case attributes through aliases). Search models validate their
arguments on construction, so an invalid query can never be sent.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jollyquotes.services.quotes import Quote

from . import resources

M = TypeVar("M")


# =============================================================================
# Enums
# =============================================================================


class SearchOperator(str, Enum):
    """Operator joining two tag expressions; the value is the query character."""

    AND = ","
    OR = "|"


class QuoteSortBy(str, Enum):
    DATE_ADDED = "dateAdded"
    DATE_MODIFIED = "dateModified"
    AUTHOR = "author"
    CONTENT = "content"


class SortBy(str, Enum):
    """Sort keys for authors and tags."""

    NAME = "name"
    DATE_ADDED = "dateAdded"
    DATE_MODIFIED = "dateModified"
    QUOTE_COUNT = "quoteCount"


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class QuoteSearchField(str, Enum):
    CONTENT = "content"
    AUTHOR = "author"
    TAGS = "tags"


class FuzzyMatchingThreshold(IntEnum):
    """Maximum number of edits allowed for a fuzzy match."""

    ZERO = 0
    ONE = 1
    TWO = 2


# =============================================================================
# Tag expressions
# =============================================================================


class TagExpression(BaseModel):
    """Boolean expression over tags, rendered as quotable's tags parameter.

    A leaf holds a single tag; a node joins two expressions with AND (",")
    or OR ("|").

    Example:
        >>> expr = TagExpression.tag("love") & "happiness"
        >>> str(expr)
        'love,happiness'
        >>> str(TagExpression.any_of(["history", "civil-rights"]))
        'history|civil-rights'
    """

    model_config = ConfigDict(frozen=True)

    value: Optional[str] = None
    left: Optional["TagExpression"] = None
    right: Optional["TagExpression"] = None
    operator: Optional[SearchOperator] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "TagExpression":
        if self.value is None:
            if self.left is None or self.right is None:
                raise ValueError("Either value or child nodes must be specified")
            if self.operator is None:
                raise ValueError("operator must be specified for an expression with child nodes")
            return self

        if not self.value.strip():
            raise ValueError("value must not be blank when no child nodes are specified")
        if self.left is not None or self.right is not None:
            raise ValueError("value and child nodes cannot be both specified")
        if self.operator is not None:
            raise ValueError("operator cannot be specified for an expression without child nodes")
        return self

    @property
    def is_end_node(self) -> bool:
        return self.value is not None

    @classmethod
    def tag(cls, value: str) -> "TagExpression":
        return cls(value=value)

    @classmethod
    def join(cls, left: "TagExpression", right: "TagExpression", operator: SearchOperator) -> "TagExpression":
        return cls(left=left, right=right, operator=operator)

    @classmethod
    def _combine(cls, tags: list[str], operator: SearchOperator) -> "TagExpression":
        if not tags:
            raise ValueError("at least one tag must be specified")
        expression = cls.tag(tags[0])
        for tag in tags[1:]:
            expression = cls.join(expression, cls.tag(tag), operator)
        return expression

    @classmethod
    def all_of(cls, tags: list[str]) -> "TagExpression":
        """Quotes carrying every tag."""
        return cls._combine(list(tags), SearchOperator.AND)

    @classmethod
    def any_of(cls, tags: list[str]) -> "TagExpression":
        """Quotes carrying at least one tag."""
        return cls._combine(list(tags), SearchOperator.OR)

    @staticmethod
    def _coerce(other: Union["TagExpression", str]) -> "TagExpression":
        return other if isinstance(other, TagExpression) else TagExpression.tag(other)

    def __and__(self, other: Union["TagExpression", str]) -> "TagExpression":
        return TagExpression.join(self, self._coerce(other), SearchOperator.AND)

    def __or__(self, other: Union["TagExpression", str]) -> "TagExpression":
        return TagExpression.join(self, self._coerce(other), SearchOperator.OR)

    def __str__(self) -> str:
        if self.is_end_node:
            return self.value
        return f"{self.left}{self.operator.value}{self.right}"


# =============================================================================
# Search models
# =============================================================================


class QuoteSearchModel(BaseModel):
    """Filters for GET /random."""

    model_config = ConfigDict(frozen=True)

    min_length: int = Field(0, ge=0, description="Minimum quote length in characters")
    max_length: Optional[int] = Field(None, ge=0, description="Maximum quote length in characters")
    tags: Optional[TagExpression] = Field(None, description="Tag filter")
    authors: tuple[str, ...] = Field(default=(), description="Author slugs (any of)")

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_from_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return TagExpression.tag(value)
        return value

    @field_validator("authors", mode="before")
    @classmethod
    def _authors_tuple(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @model_validator(mode="after")
    def _check_lengths(self) -> "QuoteSearchModel":
        if self.max_length is not None and self.min_length > self.max_length:
            raise ValueError("min_length must be less than or equal to max_length")
        return self

    @property
    def has_author(self) -> bool:
        return len(self.authors) > 0


class QuoteListSearchModel(QuoteSearchModel):
    """Filters, sorting and paging for GET /quotes."""

    sort_by: QuoteSortBy = QuoteSortBy.DATE_ADDED
    order: SortOrder = SortOrder.ASCENDING
    limit: int = Field(resources.RESULTS_PER_PAGE_DEFAULT, ge=1, le=resources.RESULTS_PER_PAGE_MAX)
    page: int = Field(1, ge=1)


class QuoteContentSearchModel(BaseModel):
    """Full-text search for GET /search/quotes."""

    model_config = ConfigDict(frozen=True)

    query: str
    fields: frozenset[QuoteSearchField] = frozenset(QuoteSearchField)
    fuzzy_max_edits: FuzzyMatchingThreshold = FuzzyMatchingThreshold.ZERO
    fuzzy_max_expansions: int = Field(resources.FUZZY_EXPANSIONS_DEFAULT, ge=0, le=resources.FUZZY_EXPANSIONS_MAX)
    limit: int = Field(resources.RESULTS_PER_PAGE_DEFAULT, ge=1, le=resources.RESULTS_PER_PAGE_MAX)
    page: int = Field(1, ge=1)

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value

    @field_validator("fields")
    @classmethod
    def _fields_not_empty(cls, value: frozenset) -> frozenset:
        if not value:
            raise ValueError("at least one search field must be specified")
        return value


class AuthorSearchModel(BaseModel):
    """Sorting and paging for GET /authors."""

    model_config = ConfigDict(frozen=True)

    slugs: tuple[str, ...] = ()
    sort_by: SortBy = SortBy.NAME
    order: SortOrder = SortOrder.ASCENDING
    limit: int = Field(resources.RESULTS_PER_PAGE_DEFAULT, ge=1, le=resources.RESULTS_PER_PAGE_MAX)
    page: int = Field(1, ge=1)


# =============================================================================
# Response models
# =============================================================================


class QuoteModel(BaseModel):
    """A quote as returned by quotable."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    content: str
    author: str
    author_slug: str = Field(..., alias="authorSlug")
    tags: list[str] = Field(default_factory=list)
    length: int
    date_added: datetime = Field(..., alias="dateAdded")
    date_modified: Optional[datetime] = Field(None, alias="dateModified")


class AuthorModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    slug: str
    link: str = ""
    bio: str = ""
    description: str = ""
    quote_count: int = Field(0, alias="quoteCount")
    date_added: Optional[datetime] = Field(None, alias="dateAdded")
    date_modified: Optional[datetime] = Field(None, alias="dateModified")


class TagModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    quote_count: int = Field(0, alias="quoteCount")
    date_added: Optional[datetime] = Field(None, alias="dateAdded")
    date_modified: Optional[datetime] = Field(None, alias="dateModified")


class SearchResultModel(BaseModel, Generic[M]):
    """One page of a paginated quotable response."""

    model_config = ConfigDict(populate_by_name=True)

    count: int
    total_count: int = Field(..., alias="totalCount")
    page: int = 1
    total_pages: int = Field(1, alias="totalPages")
    last_item_index: Optional[int] = Field(None, alias="lastItemIndex")
    results: list[M] = Field(default_factory=list)


# =============================================================================
# Quote type
# =============================================================================


class QuotableQuote(Quote):
    """Quote from quotable, with the author slug and database timestamps."""

    author_slug: str = ""
    date_added: Optional[datetime] = None
    date_modified: Optional[datetime] = None
