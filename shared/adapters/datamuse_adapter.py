"""Datamuse API adapter for word lookups.

API docs: https://www.datamuse.com/api/

Endpoints used:
- /words?sp={word}&qe=sp&md=f&max=1  -> existence check + frequency tag
- /words?{relation}={word}&max={n}   -> related words for one relation code
  (rel_syn, rel_trg, rel_jja, rel_jjb, rel_bga, rel_bgb, rel_cns)

Responses are cached by request URL in an explicit TTLCache owned by the
adapter. Transport failures are retried with backoff, then logged and
reported as an empty result; they are never raised to callers.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from ..utils.cache import TTLCache
from ..utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.datamuse.com"
DEFAULT_CACHE_TTL = 60 * 30  # 30 minutes
DEFAULT_MAX_RESULTS = 100


@dataclass(frozen=True)
class RelatedWord:
    """One word entry returned by Datamuse."""
    word: str
    score: float = 0.0
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelatedWord":
        score = data.get("score") or 0
        try:
            score = float(score)
        except (TypeError, ValueError):
            score = 0.0
        return cls(word=str(data.get("word", "")), score=score, tags=list(data.get("tags") or []))


def _normalize(word: str) -> str:
    return word.strip().lower()


class DatamuseAdapter:
    """Stateful Datamuse client with an injected response cache."""

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 10.0,
        max_retries: int = 2,
        cache: Optional[TTLCache] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=DEFAULT_CACHE_TTL)
        self._session = session or requests.Session()
        self._get_json = retry_with_backoff(
            max_retries=max_retries,
            base_delay=0.5,
            exceptions=(requests.RequestException, ValueError),
        )(self._request)

        logger.debug(f"Datamuse adapter ready: base={self.api_base}, ttl={self.cache.ttl}s")

    def _build_url(self, params: Dict[str, Any]) -> str:
        return f"{self.api_base}/words?{urlencode(params)}"

    def _request(self, url: str) -> List[Dict[str, Any]]:
        response = self._session.get(url, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Unexpected Datamuse payload type: {type(data).__name__}")
        return data

    def _cached_fetch(self, url: str) -> List[RelatedWord]:
        """Fetch a word list, serving from cache while fresh.

        Failures are not cached, so the next call retries the network.
        """
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        start_time = time.time()
        try:
            data = self._get_json(url)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Datamuse fetch failed for {url}: {e}")
            return []

        latency_ms = (time.time() - start_time) * 1000
        words = [RelatedWord.from_dict(item) for item in data if isinstance(item, dict)]
        self.cache.set(url, words)
        logger.debug(f"Datamuse returned {len(words)} words in {latency_ms:.1f}ms: {url}")
        return words

    def verify_word(self, word: str) -> Optional[RelatedWord]:
        """Check that a word exists, returning its entry (with frequency tag) or None.

        Only an exact case-insensitive spelling match counts.
        """
        normalized = _normalize(word)
        if not normalized:
            return None

        url = self._build_url({"sp": normalized, "qe": "sp", "md": "f", "max": 1})
        for result in self._cached_fetch(url):
            if result.word.lower() == normalized:
                return result
        return None

    def query_related(self, word: str, relation, max_results: int = DEFAULT_MAX_RESULTS) -> List[RelatedWord]:
        """Get words related to ``word`` under one relation code, best match first.

        ``relation`` is a Datamuse relation code such as ``"rel_syn"`` or an
        enum whose value is one.
        """
        normalized = _normalize(word)
        if not normalized:
            return []

        code = getattr(relation, "value", relation)
        url = self._build_url({code: normalized, "max": max_results})
        return self._cached_fetch(url)

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> Dict[str, Any]:
        return self.cache.stats()
