"""Retry utilities using tenacity for resilient record hand-off."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_WAIT = 0.5  # seconds
DEFAULT_MAX_WAIT = 5.0  # seconds
DEFAULT_JITTER = 0.25  # seconds


class RetryableError(Exception):
    """Base class for errors that should trigger retries."""

    pass


class TransientError(RetryableError):
    """Network timeouts, 5xx responses from the record store."""

    pass


class PermanentError(Exception):
    """Errors that should NOT be retried (rejected line, bad request)."""

    pass


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff settings for one kind of outbound call.

    Wait formula: min(initial * 2^n + random(0, jitter), max)
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_wait: float = DEFAULT_INITIAL_WAIT
    max_wait: float = DEFAULT_MAX_WAIT
    jitter: float = DEFAULT_JITTER

    def retrying(self, retryable_exceptions: tuple) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.initial_wait,
                max=self.max_wait,
                jitter=self.jitter,
            ),
            retry=retry_if_exception_type(retryable_exceptions),
            reraise=True,
        )


def with_retry(
    policy: RetryPolicy | None = None,
    retryable_exceptions: tuple = (RetryableError, ConnectionError, TimeoutError),
) -> Callable:
    """Decorator for async methods with exponential backoff retry.

    If the decorated object has a ``retry_policy`` attribute it overrides
    ``policy``, so each adapter instance can carry its own settings.

    Args:
        policy: Fallback backoff settings
        retryable_exceptions: Tuple of exception types to retry on

    Returns:
        Decorated async function with retry behavior
    """
    default_policy = policy or RetryPolicy()

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            active = default_policy
            if args and isinstance(getattr(args[0], "retry_policy", None), RetryPolicy):
                active = args[0].retry_policy

            async for attempt in active.retrying(retryable_exceptions):
                with attempt:
                    attempt_num = attempt.retry_state.attempt_number
                    if attempt_num > 1:
                        logger.warning(
                            f"Retry attempt {attempt_num}/{active.max_attempts} for {func.__name__}"
                        )
                    return await func(*args, **kwargs)

        return wrapper

    return decorator
