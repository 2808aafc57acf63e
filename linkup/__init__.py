"""LinkUp: a word-chain puzzle game.

Transform a start word into a target word one link at a time. Each new word
must be related to the previous one (synonym, association, shared property,
common phrase or sound-alike) according to the Datamuse API.

- Fewer links is better (golf scoring)
- Hub words ("thing", "good", ...) cost an extra step
- Surprising links earn creativity stars, each worth half a step
"""

from linkup.relations import RELATION_PRIORITY, RelationKind, RelationResolver
from linkup.scoring import Score, calculate_score, most_creative_link
from linkup.session import ChainLink, GameSession
from linkup.validator import HUB_WORDS, LinkValidator, Reject, RejectReason, ValidAccept, is_hub_word

__version__ = "0.1.0"

__all__ = [
    "RELATION_PRIORITY",
    "RelationKind",
    "RelationResolver",
    "Score",
    "calculate_score",
    "most_creative_link",
    "ChainLink",
    "GameSession",
    "HUB_WORDS",
    "LinkValidator",
    "Reject",
    "RejectReason",
    "ValidAccept",
    "is_hub_word",
]
