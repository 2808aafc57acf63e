"""Creativity rating for accepted links.

heat = match score / top score of the same query. Lower heat means a more
surprising link and earns more stars:

- heat >= 0.66         -> 1 star (obvious)
- 0.40 <= heat < 0.66  -> 2 stars
- heat < 0.40          -> 3 stars (creative)

Words rarer than the rarity threshold are capped at 2 stars so obscure
dictionary words can't be farmed for creativity.
"""

import math
from typing import Iterable, Optional

OBVIOUS_THRESHOLD = 0.66
CREATIVE_THRESHOLD = 0.40
DEFAULT_RARITY_THRESHOLD = 0.01


def compute_heat(match_score: float, top_score: float) -> float:
    return match_score / top_score


def creativity_stars(heat: float, frequency: float, rarity_threshold: float = DEFAULT_RARITY_THRESHOLD) -> int:
    """Map heat (and word frequency) to a 1-3 star rating."""
    if heat >= OBVIOUS_THRESHOLD:
        stars = 1
    elif heat >= CREATIVE_THRESHOLD:
        stars = 2
    else:
        stars = 3

    if frequency < rarity_threshold and stars == 3:
        stars = 2

    return stars


def parse_frequency(tags: Optional[Iterable[str]]) -> float:
    """Extract the ``f:<value>`` frequency tag from Datamuse tags (0.0 if absent)."""
    if not tags:
        return 0.0

    for tag in tags:
        if tag.startswith("f:"):
            try:
                value = float(tag[2:])
            except ValueError:
                return 0.0
            return 0.0 if math.isnan(value) else value
    return 0.0
