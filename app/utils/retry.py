"""
Retry with exponential backoff for calls to remote hosts.
"""
import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, Type, TypeVar

logger = logging.getLogger("app.retry")

T = TypeVar("T")


def backoff_delay(
    attempt: int,
    initial_delay: float,
    max_delay: float,
    exponential_base: float = 2.0,
    jitter: bool = True,
) -> float:
    """Delay before the retry following a failed attempt (0-based)."""
    delay = min(initial_delay * (exponential_base ** attempt), max_delay)
    if jitter:
        delay = delay * (0.5 + random.random() * 0.5)
    return delay


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    initial_delay: float = 0.5,
    max_delay: float = 5.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retryable_exceptions: tuple[Type[BaseException], ...] = (Exception,),
    target: Optional[str] = None,
) -> T:
    """
    Await func until it succeeds or max_attempts is reached.

    Args:
        func: Zero-argument coroutine function
        max_attempts: Total number of attempts
        initial_delay: Delay after the first failure (seconds)
        max_delay: Upper bound for a single delay (seconds)
        exponential_base: Backoff multiplier
        jitter: Randomize each delay between 50% and 100%
        retryable_exceptions: Exceptions that trigger another attempt
        target: Label for logs, e.g. "proxy.fetch"

    Raises:
        The exception from the last attempt.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(max_attempts):
        try:
            return await func()
        except retryable_exceptions as e:
            extra = {
                "event": "retry",
                "attempt": attempt + 1,
                "max_attempts": max_attempts,
                "error_type": type(e).__name__,
            }
            if target is not None:
                extra["retry_target"] = target

            if attempt == max_attempts - 1:
                logger.error(
                    f"Retry exhausted after {max_attempts} attempts",
                    extra=extra,
                )
                raise

            delay = backoff_delay(attempt, initial_delay, max_delay, exponential_base, jitter)
            extra["delay"] = round(delay, 3)
            logger.warning(
                f"Retry attempt {attempt + 1}/{max_attempts} after {delay:.2f}s",
                extra=extra,
            )
            await asyncio.sleep(delay)

    raise RuntimeError("unreachable")
