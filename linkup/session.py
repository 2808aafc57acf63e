"""Game session state for one LinkUp puzzle."""

import logging
import time
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from linkup.errors import GameStateError
from linkup.scoring import Score, calculate_score, most_creative_link
from linkup.validator import LinkValidator, ValidAccept, ValidationResult

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    DAILY = "daily"
    PRACTICE = "practice"


class GameStatus(str, Enum):
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class ChainLink:
    """One accepted move in a chain."""
    word: str
    relation_label: str
    creativity_stars: int
    heat: float
    is_hub_word: bool
    timestamp: float

    @classmethod
    def from_accept(cls, accept: ValidAccept, timestamp: Optional[float] = None) -> "ChainLink":
        return cls(
            word=accept.word,
            relation_label=accept.relation_label,
            creativity_stars=accept.creativity_stars,
            heat=accept.heat,
            is_hub_word=accept.is_hub_word,
            timestamp=timestamp if timestamp is not None else time.time(),
        )


@dataclass(frozen=True)
class FailedAttempt:
    word: str
    reason: str
    timestamp: float


def daily_seed(day: Optional[date] = None) -> int:
    """Seed for the daily puzzle, e.g. 2026-10-19 -> 20261019."""
    day = day or date.today()
    return day.year * 10000 + day.month * 100 + day.day


class GameSession:
    """Chain, penalties and status for one game.

    The session owns the mutable state; the validator it is given stays
    stateless.
    """

    def __init__(
        self,
        start_word: str,
        end_word: str,
        mode: GameMode = GameMode.DAILY,
        seed: int = 0,
    ):
        if not start_word.strip() or not end_word.strip():
            raise GameStateError("Start and end words must be non-empty")
        if start_word.strip().lower() == end_word.strip().lower():
            raise GameStateError(f"Start and end words must differ, got {start_word!r} twice")

        self.start_word = start_word.strip()
        self.end_word = end_word.strip()
        self.mode = mode
        self.seed = seed

        self.chain: List[ChainLink] = []
        self.penalty_steps = 0
        self.status = GameStatus.PLAYING
        self.last_failed_attempt: Optional[FailedAttempt] = None

    @property
    def current_word(self) -> str:
        return self.chain[-1].word if self.chain else self.start_word

    @property
    def used_words(self) -> List[str]:
        """Start word plus every word in the chain."""
        return [self.start_word] + [link.word for link in self.chain]

    @property
    def chain_length(self) -> int:
        return len(self.chain)

    @property
    def total_stars(self) -> int:
        return sum(link.creativity_stars for link in self.chain)

    @property
    def is_over(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.LOST)

    def _require_playing(self, action: str) -> None:
        if self.status != GameStatus.PLAYING:
            raise GameStateError(f"Cannot {action}: game is {self.status.value}")

    def add_link(self, accept: ValidAccept) -> ChainLink:
        """Append an accepted link, applying the hub penalty and win check."""
        self._require_playing("add a link")

        link = ChainLink.from_accept(accept)
        self.chain.append(link)
        if link.is_hub_word:
            self.penalty_steps += 1
        self.last_failed_attempt = None

        if link.word.lower() == self.end_word.lower():
            self.status = GameStatus.WON
            logger.info(f"Puzzle solved in {self.chain_length} steps (+{self.penalty_steps} penalty)")

        return link

    def record_failure(self, word: str, reason: str) -> None:
        self.last_failed_attempt = FailedAttempt(word=word, reason=reason, timestamp=time.time())

    def clear_failure(self) -> None:
        self.last_failed_attempt = None

    def submit(self, word: str, validator: LinkValidator) -> ValidationResult:
        """Validate a word against the current word and apply the outcome."""
        self._require_playing("submit a word")

        result = validator.validate_link(self.current_word, word, self.used_words)
        if result.valid:
            self.add_link(result)
        else:
            self.record_failure(result.word, result.reason.value)
        return result

    def give_up(self) -> None:
        self._require_playing("give up")
        self.status = GameStatus.LOST
        logger.info(f"Gave up after {self.chain_length} links")

    def reset(self) -> None:
        """Start the same puzzle over."""
        self.chain = []
        self.penalty_steps = 0
        self.status = GameStatus.PLAYING
        self.last_failed_attempt = None

    def score(self) -> Score:
        return calculate_score(self.chain_length, self.penalty_steps, self.total_stars)

    def most_creative_link(self) -> Optional[ChainLink]:
        return most_creative_link(self.chain)

    def to_dict(self) -> Dict[str, Any]:
        best = self.most_creative_link()
        return {
            "mode": self.mode.value,
            "seed": self.seed,
            "start_word": self.start_word,
            "end_word": self.end_word,
            "status": self.status.value,
            "chain": [asdict(link) for link in self.chain],
            "penalty_steps": self.penalty_steps,
            "total_stars": self.total_stars,
            "score": asdict(self.score()),
            "most_creative_link": asdict(best) if best else None,
        }
