"""Shared utility modules.

- retry: Exponential backoff with HTTP 429 Retry-After support
- cache: Thread-safe in-memory TTL cache with an injectable clock
- logging: Console + JSON-lines logging setup
"""

from .retry import retry_with_backoff
from .cache import TTLCache
from .logging import JSONFormatter, setup_logging

__all__ = [
    "retry_with_backoff",
    "TTLCache",
    "JSONFormatter",
    "setup_logging",
]
