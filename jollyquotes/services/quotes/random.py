"""Random sources used for quote selection."""

import random
import threading
from typing import Optional

from jollyquotes.lib.config_manager import config

from .protocols import RandomNumberGenerator


class ThreadRandom:
    """Random number generator keeping one random.Random per thread.

    Each thread's generator is seeded from a shared, lock-protected seed
    generator, so threads never share generator state.

    Example:
        >>> rng = ThreadRandom()
        >>> 0 <= rng.next_int(0, 10) < 10
        True
    """

    _seed_lock = threading.Lock()
    _seed_source = random.Random()

    def __init__(self):
        self._local = threading.local()

    @classmethod
    def _next_seed(cls) -> int:
        with cls._seed_lock:
            return cls._seed_source.getrandbits(64)

    @property
    def instance(self) -> random.Random:
        """The generator owned by the calling thread."""
        rng = getattr(self._local, "rng", None)
        if rng is None:
            rng = random.Random(self._next_seed())
            self._local.rng = rng
        return rng

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return a random integer in [min_value, max_value)."""
        if max_value <= min_value:
            raise ValueError(f"max_value ({max_value}) must be greater than min_value ({min_value})")
        return self.instance.randrange(min_value, max_value)


class SeededRandom:
    """Deterministic generator for reproducible selection."""

    def __init__(self, seed: int):
        self._random = random.Random(seed)

    def next_int(self, min_value: int, max_value: int) -> int:
        if max_value <= min_value:
            raise ValueError(f"max_value ({max_value}) must be greater than min_value ({min_value})")
        return self._random.randrange(min_value, max_value)


class Possibility:
    """Weighted coin deciding between two outcomes.

    determine() draws a number from [1, upper_limit] and returns True when
    it is greater than step. With the defaults (100 and 50) both outcomes
    are equally likely; a lower step favors True.

    Args:
        random: Random source (defaults to ThreadRandom)
        upper_limit: Highest number that can be drawn
        step: Draws above this value count as True
    """

    DEFAULT_UPPER_LIMIT = 100
    DEFAULT_STEP = 50

    def __init__(
        self,
        random: Optional[RandomNumberGenerator] = None,
        upper_limit: Optional[int] = None,
        step: Optional[int] = None,
    ):
        self.random = random or ThreadRandom()
        self._upper_limit = self.DEFAULT_UPPER_LIMIT
        self._step = self.DEFAULT_STEP
        self.bound(
            upper_limit if upper_limit is not None else config.get("JOLLYQUOTES_POSSIBILITY_UPPER_LIMIT"),
            step if step is not None else config.get("JOLLYQUOTES_POSSIBILITY_STEP"),
        )

    @property
    def upper_limit(self) -> int:
        return self._upper_limit

    @property
    def step(self) -> int:
        return self._step

    def bound(self, upper_limit: int, step: Optional[int] = None) -> None:
        """Set new limits.

        Args:
            upper_limit: Highest number that can be drawn (>= 1)
            step: Threshold (1..upper_limit). Defaults to half of upper_limit,
                or 1 when upper_limit is 1.

        Raises:
            ValueError: If the limits are out of range
        """
        if upper_limit < 1:
            raise ValueError(f"upper_limit must be greater than or equal to 1, got {upper_limit}")
        if step is None:
            step = 1 if upper_limit == 1 else upper_limit // 2
        if step < 1:
            raise ValueError(f"step must be greater than or equal to 1, got {step}")
        if step > upper_limit:
            raise ValueError(f"step ({step}) must be less than or equal to upper_limit ({upper_limit})")
        self._upper_limit = upper_limit
        self._step = step

    def reset(self) -> None:
        """Restore the default limits."""
        self.bound(self.DEFAULT_UPPER_LIMIT, self.DEFAULT_STEP)

    def determine(self) -> bool:
        return self.random.next_int(1, self._upper_limit + 1) > self._step
