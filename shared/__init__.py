"""Shared infrastructure for LinkUp.

- adapters: Datamuse API adapter with response caching
- utils: Common utilities (retry, TTL cache, logging)
"""

__version__ = "0.1.0"
