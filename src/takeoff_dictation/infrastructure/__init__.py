"""Infrastructure layer - external system integrations."""

from .retry import (
    PermanentError,
    RetryableError,
    RetryPolicy,
    TransientError,
    with_retry,
)

__all__ = [
    "PermanentError",
    "RetryPolicy",
    "RetryableError",
    "TransientError",
    "with_retry",
]
