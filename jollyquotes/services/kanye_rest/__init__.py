"""kanye.rest: random Kanye West quotes.

Example:
    >>> from jollyquotes.services.kanye_rest import create_kanye_rest_generator
    >>> generator = create_kanye_rest_generator()
    >>> quote = await generator.get_random_quote()
"""

from . import resources
from .generator import KanyeRestDownloader, create_kanye_rest_generator
from .models import KanyeRestQuote, QuoteModel
from .service import KanyeRestService

__all__ = [
    "resources",
    "KanyeRestDownloader",
    "KanyeRestQuote",
    "KanyeRestService",
    "QuoteModel",
    "create_kanye_rest_generator",
]
