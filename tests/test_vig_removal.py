"""Tests for implied probability and vig removal."""

import pytest

from edgebet_agent.agents.analysis_agent.vig_removal import (
    average,
    devig,
    get_market_vig,
    implied_probability,
    round_half_up,
)


class TestImpliedProbability:
    """Tests for implied_probability."""

    def test_negative_odds(self):
        """-110 implies 110/210."""
        assert implied_probability(-110) == pytest.approx(0.5238, abs=1e-4)

    def test_positive_odds(self):
        """+150 implies 100/250."""
        assert implied_probability(150) == pytest.approx(0.4)

    def test_even_money_both_signs(self):
        """-100 and +100 both imply 50%."""
        assert implied_probability(-100) == pytest.approx(0.5)
        assert implied_probability(100) == pytest.approx(0.5)

    def test_monotonically_decreasing_in_payout(self):
        """Better prices always imply a lower probability."""
        prices = [-400, -200, -150, -110, 100, 120, 150, 300, 800]
        probs = [implied_probability(p) for p in prices]
        assert probs == sorted(probs, reverse=True)

    def test_bounded(self):
        """Result stays inside [0, 1]."""
        for price in (-10000, -101, 101, 10000):
            assert 0 <= implied_probability(price) <= 1


class TestDevig:
    """Tests for devig."""

    def test_symmetric_market(self):
        """-110/-110 devigs to an even split."""
        p1, p2 = devig(-110, -110)
        assert p1 == pytest.approx(0.5)
        assert p2 == pytest.approx(0.5)

    def test_sums_to_one(self):
        """Fair probabilities always sum to 1."""
        for pair in [(-150, 130), (-300, 250), (105, -125), (-110, -110)]:
            assert sum(devig(*pair)) == pytest.approx(1.0)

    def test_favorite_keeps_higher_probability(self):
        """Devigging preserves which side is favored."""
        fav, dog = devig(-200, 170)
        assert fav > dog


class TestMarketVig:
    """Tests for get_market_vig."""

    def test_standard_juice(self):
        """-110/-110 carries about 4.76% vig."""
        assert get_market_vig(-110, -110) == pytest.approx(4.76, abs=0.01)

    def test_no_vig_market(self):
        """+100/-100 is a fair market."""
        assert get_market_vig(100, -100) == pytest.approx(0.0)


class TestHelpers:
    """Tests for average and round_half_up."""

    def test_average(self):
        assert average([100, 100, 170]) == pytest.approx(123.3333, abs=1e-4)

    def test_average_of_generator(self):
        assert average(x for x in (1, 2, 3)) == 2

    def test_average_empty_raises(self):
        with pytest.raises(ValueError):
            average([])

    @pytest.mark.parametrize(
        "value,expected",
        [(62.5, 63), (63.5, 64), (62.49, 62), (85.4167, 85), (82.5, 83), (-2.5, -2)],
    )
    def test_round_half_up(self, value, expected):
        """Halves round upward, unlike Python's banker's rounding."""
        assert round_half_up(value) == expected
