"""Tests for creativity star rating."""

import pytest

from linkup.creativity import compute_heat, creativity_stars, parse_frequency


class TestCreativityStars:
    """Heat thresholds and the rarity cap."""

    @pytest.mark.parametrize(
        "heat, expected",
        [
            (1.0, 1),
            (0.67, 1),
            (0.6600000, 1),
            (0.6599999, 2),
            (0.5, 2),
            (0.40, 2),
            (0.3999999, 3),
            (0.01, 3),
        ],
    )
    def test_heat_boundaries(self, heat, expected):
        """0.66 itself is obvious (1 star); 0.40 itself is moderate (2 stars)."""
        assert creativity_stars(heat, frequency=1.0) == expected

    def test_heat_of_exactly_two_thirds_cutoff(self):
        heat = compute_heat(660, 1000)
        assert heat == 0.66
        assert creativity_stars(heat, frequency=1.0) == 1

    def test_rare_word_capped_at_two_stars(self):
        assert creativity_stars(0.10, frequency=0.005) == 2

    def test_common_word_keeps_three_stars(self):
        assert creativity_stars(0.10, frequency=0.02) == 3

    def test_rarity_cap_only_affects_three_stars(self):
        assert creativity_stars(0.9, frequency=0.0) == 1
        assert creativity_stars(0.5, frequency=0.0) == 2

    def test_custom_rarity_threshold(self):
        assert creativity_stars(0.1, frequency=0.5, rarity_threshold=1.0) == 2
        assert creativity_stars(0.1, frequency=0.5, rarity_threshold=0.1) == 3


class TestHeat:
    def test_top_match_is_full_heat(self):
        assert compute_heat(1500, 1500) == 1.0

    def test_relative_to_top_score(self):
        assert compute_heat(250, 1000) == pytest.approx(0.25)


class TestParseFrequency:
    def test_reads_frequency_tag(self):
        assert parse_frequency(["syn", "f:12.345"]) == pytest.approx(12.345)

    def test_missing_tags(self):
        assert parse_frequency(None) == 0.0
        assert parse_frequency([]) == 0.0
        assert parse_frequency(["n", "syn"]) == 0.0

    def test_unparseable_value(self):
        assert parse_frequency(["f:abc"]) == 0.0
        assert parse_frequency(["f:nan"]) == 0.0
