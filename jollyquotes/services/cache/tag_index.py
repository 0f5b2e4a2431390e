"""Tag → quote id index maintained alongside a quote cache."""

from typing import Iterable, Optional

from jollyquotes.services.quotes import QuoteId


def _is_blank(tag: Optional[str]) -> bool:
    return tag is None or not isinstance(tag, str) or not tag.strip()


def check_tag(tag: Optional[str]) -> None:
    """Raise ValueError unless tag is a non-blank string."""
    if _is_blank(tag):
        raise ValueError("tag must not be None or blank")


class TagIndex:
    """Maps each tag to the set of ids of quotes carrying it.

    The index is not thread-safe on its own; QuoteCache guards it with the
    same lock as its primary store. Tags are matched exactly.

    Example:
        >>> index = TagIndex()
        >>> index.add(QuoteId(1), ["life", "work"])
        >>> index.lookup("life")
        {QuoteId('1')}
    """

    def __init__(self):
        self._buckets: dict[str, set[QuoteId]] = {}

    def add(self, quote_id: QuoteId, tags: Optional[Iterable[str]]) -> None:
        """Insert quote_id into the bucket of every non-blank tag."""
        if not tags:
            return
        for tag in tags:
            if _is_blank(tag):
                continue
            self._buckets.setdefault(tag, set()).add(quote_id)

    def remove(self, quote_id: QuoteId, tags: Optional[Iterable[str]]) -> None:
        """Remove quote_id from the given tags' buckets, dropping emptied buckets."""
        if not tags:
            return
        for tag in tags:
            if _is_blank(tag):
                continue
            bucket = self._buckets.get(tag)
            if bucket is None:
                continue
            bucket.discard(quote_id)
            if not bucket:
                del self._buckets[tag]

    def lookup(self, tag: str) -> set[QuoteId]:
        """Ids tagged with tag; empty set for unknown tags."""
        return set(self._buckets.get(tag, ()))

    def lookup_any(self, tags: Optional[Iterable[str]]) -> set[QuoteId]:
        """Union of lookup() over tags.

        Blank entries are skipped. No tags at all matches nothing.
        """
        result: set[QuoteId] = set()
        if not tags:
            return result
        for tag in tags:
            if _is_blank(tag):
                continue
            result.update(self._buckets.get(tag, ()))
        return result

    def clear(self) -> None:
        self._buckets.clear()

    @property
    def tags(self) -> list[str]:
        """Tags that currently have at least one quote."""
        return list(self._buckets)

    def __contains__(self, tag: object) -> bool:
        return tag in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
