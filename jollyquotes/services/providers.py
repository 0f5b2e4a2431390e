"""Factory wiring every built-in quote API into one composite generator."""

from typing import Optional

from jollyquotes.services.generators import CompositeQuoteGenerator
from jollyquotes.services.kanye_rest import create_kanye_rest_generator
from jollyquotes.services.quotable import create_quotable_generator
from jollyquotes.services.quotes import RandomNumberGenerator, ThreadRandom
from jollyquotes.services.tronald_dump import create_tronald_dump_generator


def create_default_generator(random: Optional[RandomNumberGenerator] = None) -> CompositeQuoteGenerator:
    """Create a composite generator with kanye.rest, quotable and Tronald Dump enabled.

    Example:
        >>> async with create_default_generator() as generator:
        ...     generator.switch_to("quotable")
        ...     quote = await generator.get_random_quote_with_tag("wisdom")
    """
    random = random or ThreadRandom()
    return CompositeQuoteGenerator(
        [
            create_kanye_rest_generator(random=random),
            create_quotable_generator(random=random),
            create_tronald_dump_generator(random=random),
        ],
        random=random,
    )
