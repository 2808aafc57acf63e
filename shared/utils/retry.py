"""Retry decorator with exponential backoff."""

import functools
import logging
import time
from typing import Callable, Optional, Tuple, Type

import requests

logger = logging.getLogger(__name__)


def _retry_after_seconds(error: Exception) -> Optional[float]:
    """Read a Retry-After header from an HTTP 429 response, if present."""
    response = getattr(error, "response", None)
    if response is None or getattr(response, "status_code", None) != 429:
        return None
    header = response.headers.get("Retry-After")
    if not header:
        return None
    try:
        return float(header)
    except ValueError:
        return None


def _is_retryable(error: Exception) -> bool:
    """Client errors other than 429 fail the same way every time."""
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    if not isinstance(status, int):
        return True
    return status == 429 or status >= 500


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exceptions: Tuple[Type[Exception], ...] = (requests.RequestException,),
    sleep: Optional[Callable[[float], None]] = None,
):
    """Retry the wrapped call on the given exceptions.

    The delay doubles after each failed attempt, capped at ``max_delay``.
    HTTP 429 responses honour the server's Retry-After header instead.
    Other 4xx responses are raised at once without retrying.
    The last exception is re-raised once ``max_retries`` retries are spent.

    Args:
        max_retries: Number of retries after the first attempt
        base_delay: Delay before the first retry, in seconds
        max_delay: Upper bound for any single delay
        exceptions: Exception types that trigger a retry
        sleep: Sleep function, defaults to time.sleep
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_retries or not _is_retryable(e):
                        logger.debug(f"{func.__name__} failed after {attempt + 1} attempts: {e}")
                        raise
                    delay = _retry_after_seconds(e)
                    if delay is None:
                        delay = min(max_delay, base_delay * (2 ** attempt))
                    attempt += 1
                    logger.warning(
                        f"{func.__name__} failed ({e}); retry {attempt}/{max_retries} in {delay:.1f}s"
                    )
                    (sleep or time.sleep)(delay)

        return wrapper

    return decorator
