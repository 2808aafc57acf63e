"""Final puzzle scoring.

Golf scoring: lower is better. Each link is a step, each hub word adds a
penalty step, and every creativity star takes half a step off.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Protocol, Sequence, TypeVar

STAR_BONUS = 0.5


class RatedLink(Protocol):
    @property
    def creativity_stars(self) -> int: ...

    @property
    def heat(self) -> float: ...


LinkT = TypeVar("LinkT", bound=RatedLink)


@dataclass(frozen=True)
class Score:
    steps: int
    effective_steps: int
    star_bonus: float
    final_score: float


def _round_one_decimal(value: float) -> float:
    return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calculate_score(chain_length: int, hub_penalty_count: int, total_stars: int) -> Score:
    """Score a completed chain.

    Example: 5 links, 1 hub word, 6 stars -> effective 6, bonus 3.0, final 3.0
    """
    effective_steps = chain_length + hub_penalty_count
    star_bonus = total_stars * STAR_BONUS
    final_score = max(0.0, _round_one_decimal(effective_steps - star_bonus))
    return Score(
        steps=chain_length,
        effective_steps=effective_steps,
        star_bonus=star_bonus,
        final_score=final_score,
    )


def most_creative_link(chain: Sequence[LinkT]) -> Optional[LinkT]:
    """Pick the link with the most stars; ties go to the lower heat.

    Works on anything with ``creativity_stars`` and ``heat`` attributes.
    Returns None for an empty chain.
    """
    best: Optional[LinkT] = None
    for link in chain:
        if best is None:
            best = link
        elif link.creativity_stars > best.creativity_stars:
            best = link
        elif link.creativity_stars == best.creativity_stars and link.heat < best.heat:
            best = link
    return best
