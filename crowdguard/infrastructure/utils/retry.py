"""
Retry helper for external service calls.

Exponential backoff with jitter; used by the HTTP speech engine.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    max_retries: int = 2,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
) -> T:
    """
    Await `func` until it succeeds or the retries run out.

    Args:
        func: Zero-argument coroutine function
        max_retries: Retries after the first attempt
        initial_delay: Delay before the first retry (seconds)
        max_delay: Upper bound for any delay (seconds)
        exponential_base: Backoff multiplier per attempt
        jitter: Randomize delays to avoid synchronized retries
        exceptions: Exception types worth retrying

    Returns:
        The result of the first successful call

    Raises:
        The last exception once all attempts failed
    """
    for attempt in range(max_retries + 1):
        try:
            return await func()
        except exceptions as e:
            if attempt >= max_retries:
                logger.error(f"All {max_retries + 1} attempts failed. Last error: {e}")
                raise

            delay = min(initial_delay * (exponential_base ** attempt), max_delay)
            if jitter:
                delay = delay * (0.5 + random.random())

            logger.warning(
                f"Attempt {attempt + 1}/{max_retries + 1} failed: {e}. Retrying in {delay:.2f}s..."
            )
            await asyncio.sleep(delay)
