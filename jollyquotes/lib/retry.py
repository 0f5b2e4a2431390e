"""Retry decorator with exponential backoff for HTTP calls.

Quote providers are free public services and occasionally drop
connections or time out. The HTTP resolver wraps its requests with
retry_on_failure_async so transient transport errors are retried before
they reach the caller. HTTP status errors are not retried.

Example:
    @retry_on_failure_async(max_retries=3, base_delay=0.5)
    async def fetch_random_quote(client: httpx.AsyncClient) -> dict:
        response = await client.get("https://api.kanye.rest")
        response.raise_for_status()
        return response.json()
"""

import asyncio
import logging
import random
from functools import wraps
from typing import Callable, TypeVar

import httpx

from jollyquotes.lib.logging_config import log_with_context

logger = logging.getLogger(__name__)

T = TypeVar("T")

# httpx.TimeoutException and httpx.ConnectError are httpx.TransportError subclasses
RETRYABLE_EXCEPTIONS = (
    ConnectionError,
    TimeoutError,
    httpx.TransportError,
)


def _backoff_delay(attempt: int, base_delay: float, max_delay: float, jitter: bool) -> float:
    delay = min(base_delay * (2**attempt), max_delay)
    if jitter:
        delay += random.uniform(0, delay * 0.25)
    return delay


def retry_on_failure_async(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exceptions: tuple = RETRYABLE_EXCEPTIONS,
    jitter: bool = True,
) -> Callable:
    """Decorator retrying a coroutine function with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        base_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay between retries (default: 30.0)
        exceptions: Tuple of exception types to retry on
        jitter: Add up to 25% random jitter to each delay

    Returns:
        Decorated coroutine function that retries on failure

    Backoff schedule (with base_delay=1.0):
        Attempt 1: immediate
        Attempt 2: 1s delay (+ jitter)
        Attempt 3: 2s delay (+ jitter)
        Attempt 4: 4s delay (+ jitter)
        (capped at max_delay)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_retries:
                        log_with_context(
                            logger,
                            logging.WARNING,
                            f"{func.__qualname__} failed after {max_retries + 1} attempts: {e}",
                            operation=func.__qualname__,
                            attempts=max_retries + 1,
                            error=type(e).__name__,
                        )
                        raise

                    delay = _backoff_delay(attempt, base_delay, max_delay, jitter)
                    log_with_context(
                        logger,
                        logging.INFO,
                        f"{func.__qualname__} attempt {attempt + 1} failed: {e}. Retrying in {delay:.1f}s...",
                        operation=func.__qualname__,
                        attempt=attempt + 1,
                        delay=round(delay, 3),
                        error=type(e).__name__,
                    )
                    await asyncio.sleep(delay)

            raise AssertionError("unreachable")

        return wrapper

    return decorator
