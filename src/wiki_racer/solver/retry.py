"""
Fixed-delay retry helper for fallible async operations.
"""
import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from wiki_racer.exceptions import FetchFailed

T = TypeVar("T")


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    delay: float = 2.0,
) -> T:
    """
    Await ``operation()`` until it succeeds or ``max_attempts`` is used up.

    Every exception counts as retryable. Between attempts we sleep a fixed
    ``delay`` seconds; there is no sleep after the final attempt.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per call
        max_attempts: Total number of attempts (at least 1)
        delay: Seconds to wait between attempts

    Returns:
        The result of the first successful attempt

    Raises:
        FetchFailed: If every attempt failed; chained from the last error
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    last_error: Optional[Exception] = None
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            if attempt < max_attempts:
                await asyncio.sleep(delay)

    raise FetchFailed(
        f"Operation failed after {max_attempts} attempts: {last_error!r}",
        last_error=last_error,
    ) from last_error
