"""Shared fixtures: an in-memory lexical source standing in for Datamuse."""

import pytest

from shared.adapters.datamuse_adapter import RelatedWord


def rw(word, score=0.0, freq=None):
    tags = [f"f:{freq}"] if freq is not None else []
    return RelatedWord(word=word, score=score, tags=tags)


class FakeLexicon:
    """Lexical source backed by dicts; records every call."""

    def __init__(self, words=None, related=None):
        self.words = dict(words or {})  # normalized word -> RelatedWord
        self.related = dict(related or {})  # (word, relation code) -> [RelatedWord]
        self.calls = []

    def verify_word(self, word):
        self.calls.append(("verify", word))
        return self.words.get(word.strip().lower())

    def query_related(self, word, relation, max_results=100):
        code = getattr(relation, "value", relation)
        self.calls.append(("related", word, code))
        return list(self.related.get((word, code), []))[:max_results]


def build_lexicon():
    """Lexicon around "ocean" covering every validation outcome."""
    words = {
        "ocean": rw("ocean", 0, freq=80.5),
        "sea": rw("sea", 0, freq=120.0),
        "wave": rw("wave", 0, freq=50.0),
        "paris": rw("Paris", 0, freq=20.0),
        "thing": rw("thing", 0, freq=500.0),
        "zyzzyva": rw("zyzzyva", 0, freq=0.001),
        "floor": rw("floor", 0),
        "fire": rw("fire", 0, freq=90.0),
        "salt": rw("salt", 0, freq=40.0),
    }
    related = {
        ("ocean", "rel_syn"): [rw("sea", 1000), rw("main", 500)],
        ("ocean", "rel_trg"): [rw("sea", 2000), rw("wave", 1000), rw("tide", 500)],
        ("ocean", "rel_jja"): [rw("deep", 1000), rw("Paris", 700)],
        ("ocean", "rel_bga"): [rw("floor", 1000), rw("thing", 100)],
        ("ocean", "rel_cns"): [rw("oceans", 1000), rw("zyzzyva", 100)],
        ("wave", "rel_trg"): [rw("surf", 900), rw("salt", 300)],
    }
    return FakeLexicon(words=words, related=related)


@pytest.fixture
def lexicon():
    return build_lexicon()
