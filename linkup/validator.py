"""Link validation pipeline for LinkUp.

Validation steps for one candidate word:
  1. Normalize both words
  2. Reject a repeat of the previous word (no I/O)
  3. Reject a word already in the chain (no I/O)
  4. Verify the word exists via the lexical source
  5. Find the highest-priority relation to the previous word
  6. Rate creativity and flag hub words

Every outcome is a value: ``ValidAccept`` or ``Reject``. Data-source failures
surface as ``not_a_word`` or ``no_connection`` rejections, never exceptions.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from linkup.creativity import DEFAULT_RARITY_THRESHOLD, creativity_stars, parse_frequency
from linkup.relations import RelationKind, RelationResolver
from shared.adapters.datamuse_adapter import DatamuseAdapter
from shared.utils.cache import TTLCache

logger = logging.getLogger(__name__)

# Generic words that add a penalty step without blocking the move
HUB_WORDS = ("thing", "good", "man", "time", "world", "go", "get")


class RejectReason(str, Enum):
    SAME_WORD = "same_word"
    ALREADY_USED = "already_used"
    NOT_A_WORD = "not_a_word"
    NO_CONNECTION = "no_connection"


@dataclass(frozen=True)
class ValidAccept:
    """An accepted link."""
    word: str  # canonical casing from the lexical source
    relation_kind: RelationKind
    relation_label: str
    heat: float
    creativity_stars: int
    is_hub_word: bool
    frequency: float

    @property
    def valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Reject:
    """A rejected link. ``word`` is the player's raw input."""
    word: str
    reason: RejectReason
    message: str

    @property
    def valid(self) -> bool:
        return False


ValidationResult = Union[ValidAccept, Reject]


def _normalize(word: str) -> str:
    return word.strip().lower()


def is_hub_word(word: str, hub_words: Iterable[str] = HUB_WORDS) -> bool:
    """Check if a word is a hub word (adds a penalty step when used)."""
    return _normalize(word) in {_normalize(w) for w in hub_words}


class LinkValidator:
    """Decide whether a candidate word may extend a chain.

    Holds no game state; the caller appends accepted links itself.
    """

    def __init__(
        self,
        source,
        resolver: Optional[RelationResolver] = None,
        hub_words: Iterable[str] = HUB_WORDS,
        rarity_threshold: float = DEFAULT_RARITY_THRESHOLD,
    ):
        """
        Args:
            source: Lexical source with ``verify_word`` and ``query_related``
            resolver: Relation resolver (defaults to one over ``source``)
            hub_words: Words that cost an extra step
            rarity_threshold: Frequency below which 3 stars are capped to 2
        """
        self.source = source
        self.resolver = resolver or RelationResolver(source)
        self.hub_words = frozenset(_normalize(w) for w in hub_words)
        self.rarity_threshold = rarity_threshold

    @classmethod
    def from_config(cls, config, source=None) -> "LinkValidator":
        """Build a validator (and a Datamuse adapter if none is given) from a LinkUpConfig."""
        if source is None:
            source = DatamuseAdapter(
                api_base=config.api_base,
                timeout=config.timeout,
                max_retries=config.max_retries,
                cache=TTLCache(ttl_seconds=config.cache_ttl_seconds),
            )
        resolver = RelationResolver(source, max_results=config.max_results, max_workers=config.max_workers)
        return cls(
            source,
            resolver=resolver,
            hub_words=config.hub_words,
            rarity_threshold=config.rarity_threshold,
        )

    def is_hub_word(self, word: str) -> bool:
        return _normalize(word) in self.hub_words

    def validate_link(
        self,
        previous_word: str,
        input_word: str,
        used_words: Iterable[str] = (),
    ) -> ValidationResult:
        """Validate that input_word can follow previous_word in the chain.

        ``used_words`` should include the start word and every word already
        in the chain.
        """
        normalized_input = _normalize(input_word)
        normalized_previous = _normalize(previous_word)

        if normalized_input == normalized_previous:
            return Reject(
                word=input_word,
                reason=RejectReason.SAME_WORD,
                message="Can't use the same word twice in a row",
            )

        if normalized_input in {_normalize(w) for w in used_words}:
            return Reject(
                word=input_word,
                reason=RejectReason.ALREADY_USED,
                message="This word is already in your chain",
            )

        word_data = self.source.verify_word(normalized_input)
        if word_data is None:
            logger.info(f"Rejected {input_word!r}: not a recognized word")
            return Reject(
                word=input_word,
                reason=RejectReason.NOT_A_WORD,
                message="Not a valid word",
            )

        relation = self.resolver.find_best_relation(normalized_previous, normalized_input)
        if relation is None:
            logger.info(f"Rejected {input_word!r}: no connection to {normalized_previous!r}")
            return Reject(
                word=input_word,
                reason=RejectReason.NO_CONNECTION,
                message=f'No connection found to "{normalized_previous}"',
            )

        heat = relation.heat
        frequency = parse_frequency(word_data.tags)
        stars = creativity_stars(heat, frequency, self.rarity_threshold)

        result = ValidAccept(
            word=word_data.word,
            relation_kind=relation.kind,
            relation_label=relation.label,
            heat=heat,
            creativity_stars=stars,
            is_hub_word=self.is_hub_word(normalized_input),
            frequency=frequency,
        )
        logger.info(
            f"Accepted {normalized_previous} -> {result.word}: {result.relation_label} "
            f"(heat {heat:.2f}, {stars} stars{', hub word' if result.is_hub_word else ''})"
        )
        return result

    def validate_final_link(self, current_word: str, end_word: str) -> ValidationResult:
        """Check whether the chain's current word connects directly to the target."""
        return self.validate_link(current_word, end_word)
