"""Relation kinds and the resolver that links two words.

Relation kinds are checked in a fixed priority order. Earlier kinds are the
more obvious associations (synonyms, direct triggers); later ones are weaker
(shared modifiers, adjacency in phrases, consonant similarity). When several
kinds would match, the earliest one is reported.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from shared.adapters.datamuse_adapter import DEFAULT_MAX_RESULTS, RelatedWord

logger = logging.getLogger(__name__)


class RelationKind(str, Enum):
    """Lexical relation categories; values are Datamuse query codes."""
    SYNONYM = "rel_syn"
    TRIGGER = "rel_trg"
    ADJECTIVE_FOR_NOUN = "rel_jja"
    NOUN_FOR_ADJECTIVE = "rel_jjb"
    FOLLOWS = "rel_bga"
    PRECEDES = "rel_bgb"
    CONSONANT_MATCH = "rel_cns"


RELATION_PRIORITY: List[RelationKind] = [
    RelationKind.SYNONYM,
    RelationKind.TRIGGER,
    RelationKind.ADJECTIVE_FOR_NOUN,
    RelationKind.NOUN_FOR_ADJECTIVE,
    RelationKind.FOLLOWS,
    RelationKind.PRECEDES,
    RelationKind.CONSONANT_MATCH,
]

RELATION_LABELS: Dict[RelationKind, str] = {
    RelationKind.SYNONYM: "Synonym",
    RelationKind.TRIGGER: "Association",
    RelationKind.ADJECTIVE_FOR_NOUN: "Property",
    RelationKind.NOUN_FOR_ADJECTIVE: "Property",
    RelationKind.FOLLOWS: "Phrase",
    RelationKind.PRECEDES: "Phrase",
    RelationKind.CONSONANT_MATCH: "Slant Link",
}


@dataclass(frozen=True)
class RelationMatch:
    """Target word found in the source word's results for one relation kind."""
    kind: RelationKind
    match: RelatedWord
    top_score: float

    @property
    def label(self) -> str:
        return RELATION_LABELS[self.kind]

    @property
    def heat(self) -> float:
        """Match strength relative to the best result of the same query."""
        return self.match.score / self.top_score


class RelationResolver:
    """Find the highest-priority relation linking a source word to a target.

    ``source`` is any object with a ``query_related(word, kind, max_results)``
    method returning a best-first list of ``RelatedWord`` (normally a
    ``DatamuseAdapter``).

    With ``max_workers > 1`` all kinds are queried concurrently; the answer is
    still the first kind in priority order that matched.
    """

    def __init__(
        self,
        source,
        max_results: int = DEFAULT_MAX_RESULTS,
        max_workers: int = 1,
        priority: Optional[List[RelationKind]] = None,
    ):
        self.source = source
        self.max_results = max_results
        self.max_workers = max_workers
        self.priority = list(priority) if priority is not None else list(RELATION_PRIORITY)

    def _related(self, word: str, kind: RelationKind) -> List[RelatedWord]:
        # One failing kind must not abort the whole resolution
        try:
            return self.source.query_related(word, kind, self.max_results)
        except Exception as e:
            logger.warning(f"Related-word query failed for {kind.value}={word!r}: {e}")
            return []

    @staticmethod
    def _match_in(related: List[RelatedWord], kind: RelationKind, target: str) -> Optional[RelationMatch]:
        if not related:
            return None

        top_score = related[0].score or 1
        for entry in related:
            if entry.word.lower() == target:
                return RelationMatch(kind=kind, match=entry, top_score=top_score)
        return None

    def find_word_in_relation(self, source_word: str, target_word: str, kind: RelationKind) -> Optional[RelationMatch]:
        """Check whether target_word is among source_word's related words for one kind."""
        source_word = source_word.strip().lower()
        target_word = target_word.strip().lower()
        return self._match_in(self._related(source_word, kind), kind, target_word)

    def find_best_relation(self, source_word: str, target_word: str) -> Optional[RelationMatch]:
        """Return the first relation (in priority order) linking the two words, or None."""
        source_word = source_word.strip().lower()
        target_word = target_word.strip().lower()

        if self.max_workers > 1:
            return self._find_parallel(source_word, target_word)

        for kind in self.priority:
            match = self._match_in(self._related(source_word, kind), kind, target_word)
            if match:
                logger.debug(f"{source_word} -> {target_word}: {kind.value} (heat {match.heat:.2f})")
                return match

        logger.debug(f"{source_word} -> {target_word}: no relation")
        return None

    def _find_parallel(self, source_word: str, target_word: str) -> Optional[RelationMatch]:
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(self.priority))) as executor:
            futures = [executor.submit(self._related, source_word, kind) for kind in self.priority]
            # Walk results in priority order, not completion order
            for kind, future in zip(self.priority, futures):
                match = self._match_in(future.result(), kind, target_word)
                if match:
                    logger.debug(f"{source_word} -> {target_word}: {kind.value} (heat {match.heat:.2f})")
                    return match

        logger.debug(f"{source_word} -> {target_word}: no relation")
        return None
