"""Tests for the Datamuse adapter, its cache and retry helper."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from linkup.relations import RelationKind, RelationResolver
from shared.adapters.datamuse_adapter import DatamuseAdapter, RelatedWord
from shared.utils.cache import TTLCache
from shared.utils.retry import retry_with_backoff


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_response(payload, status=200):
    response = Mock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def query_of(url):
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}


class TestDatamuseAdapter:
    def setup_method(self):
        self.clock = FakeClock()
        self.session = Mock()
        self.adapter = DatamuseAdapter(
            api_base="https://api.example.test/",
            max_retries=0,
            cache=TTLCache(ttl_seconds=60, clock=self.clock),
            session=self.session,
        )

    def test_verify_word_exact_match(self):
        self.session.get.return_value = make_response(
            [{"word": "Ocean", "score": 5000, "tags": ["f:80.5"]}]
        )
        result = self.adapter.verify_word(" ocean ")

        assert result == RelatedWord(word="Ocean", score=5000.0, tags=["f:80.5"])
        url = self.session.get.call_args[0][0]
        assert url.startswith("https://api.example.test/words?")
        assert query_of(url) == {"sp": "ocean", "qe": "sp", "md": "f", "max": "1"}

    def test_verify_word_rejects_near_match(self):
        self.session.get.return_value = make_response([{"word": "oceans", "score": 10}])
        assert self.adapter.verify_word("ocean") is None

    def test_verify_empty_word(self):
        assert self.adapter.verify_word("   ") is None
        self.session.get.assert_not_called()

    def test_query_related(self):
        self.session.get.return_value = make_response([
            {"word": "sea", "score": 2000},
            {"word": "wave", "score": 1000},
        ])
        results = self.adapter.query_related("Ocean", RelationKind.TRIGGER, max_results=50)

        assert [r.word for r in results] == ["sea", "wave"]
        assert results[0].score == 2000
        assert query_of(self.session.get.call_args[0][0]) == {"rel_trg": "ocean", "max": "50"}

    def test_query_related_accepts_plain_code(self):
        self.session.get.return_value = make_response([])
        self.adapter.query_related("ocean", "rel_syn")
        assert query_of(self.session.get.call_args[0][0])["rel_syn"] == "ocean"

    def test_missing_score_defaults_to_zero(self):
        self.session.get.return_value = make_response([{"word": "sea"}])
        assert self.adapter.query_related("ocean", "rel_syn")[0].score == 0.0

    def test_responses_are_cached(self):
        self.session.get.return_value = make_response([{"word": "sea", "score": 1}])

        self.adapter.query_related("ocean", RelationKind.SYNONYM)
        self.adapter.query_related("ocean", RelationKind.SYNONYM)

        assert self.session.get.call_count == 1
        assert self.adapter.cache_stats()["hits"] == 1

    def test_empty_results_are_cached(self):
        self.session.get.return_value = make_response([])

        self.adapter.query_related("ocean", RelationKind.SYNONYM)
        self.adapter.query_related("ocean", RelationKind.SYNONYM)

        assert self.session.get.call_count == 1

    def test_cache_keyed_by_query(self):
        self.session.get.return_value = make_response([])

        self.adapter.query_related("ocean", RelationKind.SYNONYM)
        self.adapter.query_related("ocean", RelationKind.TRIGGER)
        self.adapter.query_related("ocean", RelationKind.SYNONYM, max_results=10)

        assert self.session.get.call_count == 3

    def test_cache_expires(self):
        self.session.get.return_value = make_response([{"word": "sea", "score": 1}])

        self.adapter.query_related("ocean", RelationKind.SYNONYM)
        self.clock.advance(61)
        self.adapter.query_related("ocean", RelationKind.SYNONYM)

        assert self.session.get.call_count == 2

    def test_network_failure_returns_empty(self):
        self.session.get.side_effect = requests.ConnectionError("down")

        assert self.adapter.query_related("ocean", RelationKind.SYNONYM) == []
        assert self.adapter.verify_word("ocean") is None

    def test_failures_are_not_cached(self):
        self.session.get.side_effect = [
            requests.ConnectionError("down"),
            make_response([{"word": "sea", "score": 1}]),
        ]

        assert self.adapter.query_related("ocean", "rel_syn") == []
        assert len(self.adapter.query_related("ocean", "rel_syn")) == 1

    def test_http_error_returns_empty(self):
        self.session.get.return_value = make_response({"error": "boom"}, status=500)
        assert self.adapter.query_related("ocean", "rel_syn") == []

    def test_client_error_not_retried(self):
        adapter = DatamuseAdapter(max_retries=2, session=self.session)
        self.session.get.return_value = make_response({"error": "bad query"}, status=400)

        assert adapter.query_related("ocean", "rel_syn") == []
        assert self.session.get.call_count == 1

    def test_unexpected_payload_returns_empty(self):
        self.session.get.return_value = make_response({"not": "a list"})
        assert self.adapter.query_related("ocean", "rel_syn") == []

    def test_clear_cache(self):
        self.session.get.return_value = make_response([])
        self.adapter.query_related("ocean", "rel_syn")
        self.adapter.clear_cache()

        assert self.adapter.cache_stats()["size"] == 0

    def test_retries_transient_failure(self):
        adapter = DatamuseAdapter(max_retries=2, session=self.session)
        adapter._get_json = retry_with_backoff(max_retries=2, sleep=lambda s: None)(adapter._request)
        self.session.get.side_effect = [
            requests.Timeout("slow"),
            make_response([{"word": "sea", "score": 1}]),
        ]

        assert [r.word for r in adapter.query_related("ocean", "rel_syn")] == ["sea"]
        assert self.session.get.call_count == 2


class TestTTLCache:
    def setup_method(self):
        self.clock = FakeClock()
        self.cache = TTLCache(ttl_seconds=10, clock=self.clock)

    def test_get_and_set(self):
        assert self.cache.get("k") is None
        self.cache.set("k", [1, 2])
        assert self.cache.get("k") == [1, 2]
        assert "k" in self.cache
        assert len(self.cache) == 1

    def test_expiry(self):
        self.cache.set("k", "v")
        self.clock.advance(9)
        assert self.cache.get("k") == "v"
        self.clock.advance(1)
        assert self.cache.get("k") is None
        assert "k" not in self.cache

    def test_clear_expired(self):
        self.cache.set("old", 1)
        self.clock.advance(5)
        self.cache.set("new", 2)
        self.clock.advance(6)

        assert self.cache.clear_expired() == 1
        assert self.cache.stats()["keys"] == ["new"]

    def test_stats(self):
        self.cache.set("k", 1)
        self.cache.get("k")
        self.cache.get("missing")
        stats = self.cache.stats()

        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1
        assert stats["ttl_seconds"] == 10

    def test_concurrent_get_and_set(self):
        def worker(n):
            seen = []
            for i in range(200):
                key = f"k{(n + i) % 10}"
                self.cache.set(key, key.upper())
                seen.append(self.cache.get(key))
            return seen

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(worker, range(8)))

        for seen in results:
            assert all(value is not None and value.startswith("K") for value in seen)
        stats = self.cache.stats()
        assert stats["hits"] + stats["misses"] == 8 * 200
        assert stats["hits"] == 8 * 200
        assert stats["size"] == 10

    def test_invalid_ttl(self):
        with pytest.raises(ValueError):
            TTLCache(ttl_seconds=0)


class TestRetryWithBackoff:
    def setup_method(self):
        self.delays = []

    def test_succeeds_after_retries(self):
        outcomes = iter([requests.ConnectionError(), requests.ConnectionError(), "ok"])

        def flaky():
            outcome = next(outcomes)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        wrapped = retry_with_backoff(max_retries=3, base_delay=1.0, sleep=self.delays.append)(flaky)

        assert wrapped() == "ok"
        assert self.delays == [1.0, 2.0]

    def test_gives_up(self):
        def always_fails():
            raise requests.ConnectionError("down")

        wrapped = retry_with_backoff(max_retries=2, sleep=self.delays.append)(always_fails)
        with pytest.raises(requests.ConnectionError):
            wrapped()
        assert len(self.delays) == 2

    def test_delay_capped(self):
        def always_fails():
            raise requests.ConnectionError("down")

        wrapped = retry_with_backoff(max_retries=4, base_delay=10, max_delay=15, sleep=self.delays.append)(always_fails)
        with pytest.raises(requests.ConnectionError):
            wrapped()
        assert self.delays == [10, 15, 15, 15]

    def test_honours_retry_after(self):
        response = Mock(status_code=429, headers={"Retry-After": "7"})
        attempts = []

        def rate_limited():
            attempts.append(1)
            if len(attempts) == 1:
                raise requests.HTTPError("429", response=response)
            return "ok"

        wrapped = retry_with_backoff(max_retries=1, sleep=self.delays.append)(rate_limited)
        assert wrapped() == "ok"
        assert self.delays == [7.0]

    def test_other_exceptions_not_retried(self):
        def broken():
            raise KeyError("bug")

        wrapped = retry_with_backoff(max_retries=3, sleep=self.delays.append)(broken)
        with pytest.raises(KeyError):
            wrapped()
        assert self.delays == []

    def test_client_error_raised_immediately(self):
        response = Mock(status_code=404, headers={})

        def not_found():
            raise requests.HTTPError("404", response=response)

        wrapped = retry_with_backoff(max_retries=3, sleep=self.delays.append)(not_found)
        with pytest.raises(requests.HTTPError):
            wrapped()
        assert self.delays == []

    def test_server_error_retried(self):
        response = Mock(status_code=503, headers={})
        attempts = []

        def unavailable():
            attempts.append(1)
            if len(attempts) < 3:
                raise requests.HTTPError("503", response=response)
            return "ok"

        wrapped = retry_with_backoff(max_retries=3, base_delay=1.0, sleep=self.delays.append)(unavailable)
        assert wrapped() == "ok"
        assert self.delays == [1.0, 2.0]


class TestConcurrentLookups:
    """Parallel relation lookups sharing one adapter and cache."""

    RELATED = {
        "rel_syn": [{"word": "sea", "score": 1000}],
        "rel_trg": [{"word": "sea", "score": 2000}, {"word": "wave", "score": 1000}],
    }

    def setup_method(self):
        self.fetched = []
        self.session = Mock()
        self.session.get.side_effect = self._respond
        self.adapter = DatamuseAdapter(
            max_retries=0,
            cache=TTLCache(ttl_seconds=60, clock=FakeClock()),
            session=self.session,
        )
        self.resolver = RelationResolver(self.adapter, max_workers=7)

    def _respond(self, url, timeout=None):
        self.fetched.append(url)
        params = query_of(url)
        code = next(key for key in params if key.startswith("rel_"))
        return make_response(self.RELATED.get(code, []))

    def test_parallel_resolvers_share_cache(self):
        lookups = 20

        with ThreadPoolExecutor(max_workers=4) as executor:
            matches = list(executor.map(
                lambda _: self.resolver.find_best_relation("ocean", "wave"), range(lookups)
            ))

        assert all(m is not None for m in matches)
        assert {m.kind for m in matches} == {RelationKind.TRIGGER}
        assert {m.heat for m in matches} == {0.5}

        stats = self.adapter.cache_stats()
        kinds = len(RelationKind)
        assert stats["hits"] + stats["misses"] == lookups * kinds
        assert stats["size"] == kinds
        assert kinds <= len(self.fetched) <= lookups * kinds
