"""Configuration for quote caches."""

from dataclasses import dataclass


@dataclass
class CacheConfig:
    """Flags for the blockable cache wrapper.

    Example:
        >>> config = CacheConfig(throw_if_blocked=True)
        >>> cache = create_blockable_cache(config=config)
    """

    preserve_state: bool = True  # clear the wrapped cache on block()
    throw_if_blocked: bool = False  # raise BlockedCacheError instead of ignoring
