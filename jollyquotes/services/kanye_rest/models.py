"""kanye.rest response models and quote type."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from jollyquotes.services.quotes import Quote

from . import resources


class QuoteModel(BaseModel):
    """Body of GET https://api.kanye.rest."""

    quote: str = Field(..., description="Quote text")


class KanyeRestQuote(Quote):
    """Quote from kanye.rest.

    The API has no ids or tags, so the quote text doubles as the id and
    the author is always Kanye West.

    Example:
        >>> KanyeRestQuote(value="I love sleep").id
        QuoteId('I love sleep')
    """

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if data.get("id") is None:
                data["id"] = data.get("value")
            data.setdefault("author", resources.AUTHOR)
            data.setdefault("source", resources.API_PAGE)
        return data
