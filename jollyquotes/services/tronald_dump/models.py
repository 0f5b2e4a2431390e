"""Tronald Dump response models, search model and quote type.

The API follows HAL: related resources live under "_embedded" and links
under "_links". Both are exposed as embedded/links attributes.
"""

from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jollyquotes.services.quotes import Quote

from . import resources

M = TypeVar("M")


class _HalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LinkModel(_HalModel):
    href: str


class SelfLinkModel(_HalModel):
    self_link: LinkModel = Field(..., alias="self")


class PageHierarchyModel(_HalModel):
    """Links of a paginated result."""

    self_link: LinkModel = Field(..., alias="self")
    first: Optional[LinkModel] = None
    prev: Optional[LinkModel] = None
    next: Optional[LinkModel] = None
    last: Optional[LinkModel] = None


class AuthorModel(_HalModel):
    author_id: str
    name: str
    slug: str
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Optional[SelfLinkModel] = Field(None, alias="_links")


class QuoteSourceModel(_HalModel):
    quote_source_id: str
    url: str
    filename: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Optional[SelfLinkModel] = Field(None, alias="_links")


class AuthorsAndSourcesModel(_HalModel):
    authors: list[AuthorModel] = Field(default_factory=list, alias="author")
    sources: list[QuoteSourceModel] = Field(default_factory=list, alias="source")


class QuoteModel(_HalModel):
    quote_id: str
    value: str
    tags: list[str] = Field(default_factory=list)
    appeared_at: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None
    embedded: AuthorsAndSourcesModel = Field(default_factory=AuthorsAndSourcesModel, alias="_embedded")
    links: Optional[SelfLinkModel] = Field(None, alias="_links")


class TagModel(_HalModel):
    value: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    links: Optional[SelfLinkModel] = Field(None, alias="_links")


class QuoteListModel(_HalModel):
    quotes: list[QuoteModel] = Field(default_factory=list)


class TagListModel(_HalModel):
    tags: list[TagModel] = Field(default_factory=list, alias="tag")


class SearchResultModel(_HalModel, Generic[M]):
    """One page of results; the items are inside embedded."""

    count: int
    total: int
    embedded: M = Field(..., alias="_embedded")
    links: Optional[PageHierarchyModel] = Field(None, alias="_links")


class QuoteSearchModel(BaseModel):
    """Arguments of GET /search/quote.

    At least one of query and tag must be given. Pages start at 0.

    Example:
        >>> QuoteSearchModel(query="make america", page=1).phrases
        ['make', 'america']
    """

    model_config = ConfigDict(frozen=True)

    query: Optional[str] = None
    tag: Optional[str] = None
    page: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_terms(self) -> "QuoteSearchModel":
        if self.query is None and self.tag is None:
            raise ValueError("Either query or tag must be specified")
        if self.query is not None and not self.query.strip():
            raise ValueError("query must not be blank")
        if self.tag is not None and not self.tag.strip():
            raise ValueError("tag must not be blank")
        return self

    @property
    def phrases(self) -> list[str]:
        return self.query.split() if self.query else []


class TronaldDumpQuote(Quote):
    """Quote from Tronald Dump, with archive timestamps."""

    appeared_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _default_author(cls, data: Any) -> Any:
        if isinstance(data, dict) and "author" not in data:
            data = {**data, "author": resources.AUTHOR}
        return data
