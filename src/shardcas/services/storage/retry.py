"""Retry logic for transient storage failures with exponential backoff.

The stores never retry on their own. Callers that want to ride out a
flaky filesystem wrap individual operations with call_with_retry.
"""

import logging
import random
import time
from collections.abc import Callable
from typing import TypeVar

from ...errors import StorageIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TooManyRetriesError(StorageIOError):
    """Raised when an operation keeps failing after all retry attempts."""
    pass


def call_with_retry(
    fn: Callable[..., T],
    *args,
    max_attempts: int = 3,
    initial_delay: float = 0.1,
    **kwargs,
) -> T:
    """Call a storage operation, retrying on StorageIOError.

    ObjectNotFoundError and IntegrityError are not I/O failures and
    propagate immediately; retrying cannot change their outcome.

    Args:
        fn: Operation to call, e.g. ``store.store``
        *args: Positional arguments for fn
        max_attempts: Maximum attempts before giving up
        initial_delay: Initial retry delay in seconds (doubles each attempt)
        **kwargs: Keyword arguments for fn

    Returns:
        Whatever fn returns

    Raises:
        TooManyRetriesError: If every attempt raised StorageIOError
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    last_error: StorageIOError | None = None
    for attempt in range(max_attempts):
        try:
            return fn(*args, **kwargs)
        except StorageIOError as e:
            last_error = e

        if attempt < max_attempts - 1:
            delay = (2**attempt) * initial_delay  # 0.1s, 0.2s, 0.4s, ...
            jitter = random.uniform(0, initial_delay)
            total_delay = delay + jitter
            logger.warning(
                f"Storage operation failed on attempt {attempt + 1}/{max_attempts}: "
                f"{last_error}, retrying in {total_delay:.3f}s"
            )
            time.sleep(total_delay)

    raise TooManyRetriesError(
        f"Storage operation failed after {max_attempts} attempts: {last_error}",
        last_error.path,
    ) from last_error
