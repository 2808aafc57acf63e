"""Tests for final scoring and most-creative-link selection."""

from dataclasses import dataclass

import pytest

from linkup.scoring import Score, calculate_score, most_creative_link
from linkup.session import ChainLink


@dataclass
class Link:
    word: str
    creativity_stars: int
    heat: float


class TestCalculateScore:
    def test_example_chain(self):
        score = calculate_score(chain_length=5, hub_penalty_count=1, total_stars=6)
        assert score == Score(steps=5, effective_steps=6, star_bonus=3.0, final_score=3.0)

    def test_half_step_bonus(self):
        score = calculate_score(3, 0, 1)
        assert score.star_bonus == 0.5
        assert score.final_score == 2.5

    @pytest.mark.parametrize(
        "length, hubs, stars",
        [(1, 0, 3), (2, 0, 9), (0, 0, 1), (3, 1, 12)],
    )
    def test_never_negative(self, length, hubs, stars):
        assert calculate_score(length, hubs, stars).final_score == 0

    def test_empty_chain(self):
        assert calculate_score(0, 0, 0) == Score(steps=0, effective_steps=0, star_bonus=0.0, final_score=0.0)

    def test_more_stars_lower_score(self):
        assert calculate_score(6, 0, 6).final_score < calculate_score(6, 0, 2).final_score

    def test_hub_penalties_raise_score(self):
        assert calculate_score(4, 2, 0).final_score == 6.0


class TestMostCreativeLink:
    def test_highest_stars_lowest_heat(self):
        chain = [Link("a", 1, 0.9), Link("b", 3, 0.3), Link("c", 3, 0.2)]
        assert most_creative_link(chain).word == "c"

    def test_stars_beat_heat(self):
        chain = [Link("a", 2, 0.05), Link("b", 3, 0.39)]
        assert most_creative_link(chain).word == "b"

    def test_exact_tie_keeps_first(self):
        chain = [Link("a", 2, 0.5), Link("b", 2, 0.5)]
        assert most_creative_link(chain).word == "a"

    def test_empty_chain(self):
        assert most_creative_link([]) is None

    def test_returns_chain_link(self):
        chain = [
            ChainLink("sea", "Synonym", 1, 1.0, False, 0.0),
            ChainLink("wave", "Association", 2, 0.5, False, 1.0),
        ]
        best = most_creative_link(chain)
        assert isinstance(best, ChainLink)
        assert best is chain[1]
