"""Exception types raised by jollyquotes.

Argument problems (None values, blank tags, malformed ids) are reported
with the built-in ValueError and TypeError. The classes below cover the
failures specific to quote caches and quote providers.
"""


class InvalidOperationError(RuntimeError):
    """The object is in a state that does not allow the requested call.

    Raised for example when asking an empty cache for a quote.
    """


class BlockedCacheError(InvalidOperationError):
    """A blocked cache refused a modification."""

    def __init__(self, message: str = "Blocked cache cannot be modified"):
        super().__init__(message)


class QuoteNotFoundError(ValueError):
    """A cache lookup asked for an id that is not cached."""


class QuoteError(Exception):
    """A quote provider could not deliver the requested resource."""
