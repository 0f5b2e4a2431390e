"""Generator picking quotes from several APIs."""

import logging
from typing import Any, Iterable, Optional, Sequence

from jollyquotes.lib.errors import InvalidOperationError
from jollyquotes.services.quotes import QuoteGenerator, RandomNumberGenerator, ThreadRandom

logger = logging.getLogger(__name__)


class CompositeQuoteGenerator:
    """Registry of generators, one per API name, that can be switched on and off.

    Random quotes come from a randomly chosen enabled generator.

    Args:
        generators: Generators to register (all enabled)
        random: Random source for choosing a generator

    Example:
        >>> composite = CompositeQuoteGenerator([kanye, quotable])
        >>> composite.switch_to("quotable")
        >>> quote = await composite.get_random_quote()
    """

    def __init__(
        self,
        generators: Iterable[QuoteGenerator] = (),
        random: Optional[RandomNumberGenerator] = None,
    ):
        self.random = random or ThreadRandom()
        self._generators: dict[str, QuoteGenerator] = {}
        self._enabled: dict[str, bool] = {}
        for generator in generators:
            self.register(generator)

    @property
    def api_names(self) -> list[str]:
        return list(self._generators)

    def _require(self, api_name: str) -> QuoteGenerator:
        generator = self._generators.get(api_name)
        if generator is None:
            raise ValueError(f"No generator registered for API '{api_name}'")
        return generator

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, generator: QuoteGenerator, enabled: bool = True) -> bool:
        """Register a generator under its api_name.

        Returns:
            False if a generator with the same api_name is already registered
        """
        if generator is None:
            raise ValueError("generator must not be None")
        if generator.api_name in self._generators:
            return False
        self._generators[generator.api_name] = generator
        self._enabled[generator.api_name] = enabled
        return True

    def unregister(self, api_name: str) -> bool:
        if self._generators.pop(api_name, None) is None:
            return False
        del self._enabled[api_name]
        return True

    def is_registered(self, api_name: str) -> bool:
        return api_name in self._generators

    def get_generator(self, api_name: str) -> QuoteGenerator:
        return self._require(api_name)

    # =========================================================================
    # Enabling
    # =========================================================================

    def enable(self, api_name: str) -> None:
        self._require(api_name)
        self._enabled[api_name] = True

    def disable(self, api_name: str) -> None:
        self._require(api_name)
        self._enabled[api_name] = False

    def enable_all(self) -> None:
        for api_name in self._enabled:
            self._enabled[api_name] = True

    def disable_all(self) -> None:
        for api_name in self._enabled:
            self._enabled[api_name] = False

    def switch_to(self, api_name: str) -> None:
        """Enable api_name and disable every other generator."""
        self._require(api_name)
        for name in self._enabled:
            self._enabled[name] = name == api_name

    def is_enabled(self, api_name: str) -> bool:
        return self._enabled.get(api_name, False)

    def get_enabled_generators(self) -> list[QuoteGenerator]:
        return [self._generators[name] for name, enabled in self._enabled.items() if enabled]

    def get_random_generator(self) -> QuoteGenerator:
        """Pick one enabled generator at random.

        Raises:
            InvalidOperationError: If no generator is enabled
        """
        enabled = self.get_enabled_generators()
        if not enabled:
            raise InvalidOperationError("No quote generator is enabled")
        return enabled[self.random.next_int(0, len(enabled))]

    def _shuffled_enabled(self) -> list[QuoteGenerator]:
        remaining = self.get_enabled_generators()
        if not remaining:
            raise InvalidOperationError("No quote generator is enabled")
        shuffled = []
        while remaining:
            shuffled.append(remaining.pop(self.random.next_int(0, len(remaining))))
        return shuffled

    # =========================================================================
    # Quotes
    # =========================================================================

    async def get_random_quote(self) -> Any:
        generator = self.get_random_generator()
        logger.debug(f"Using {generator.api_name} for a random quote")
        return await generator.get_random_quote()

    async def get_random_quote_with_tag(self, tag: str) -> Optional[Any]:
        """Ask enabled generators in random order until one has a quote for tag."""
        for generator in self._shuffled_enabled():
            quote = await generator.get_random_quote_with_tag(tag)
            if quote is not None:
                return quote
        return None

    async def get_random_quote_with_any_tag(self, tags: Optional[Sequence[str]]) -> Optional[Any]:
        for generator in self._shuffled_enabled():
            quote = await generator.get_random_quote_with_any_tag(tags)
            if quote is not None:
                return quote
        return None

    async def aclose(self) -> None:
        for generator in self._generators.values():
            close = getattr(generator, "aclose", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> "CompositeQuoteGenerator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
