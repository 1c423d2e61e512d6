"""Unit tests for CLI formatters and filters.

Tests Rich table formatting, filtering logic, and helper functions.
"""

import pytest
from rich.panel import Panel
from rich.table import Table

from edgebet_agent.agents.analysis_agent.agent import scan_games
from edgebet_agent.agents.analysis_agent.props import BookPrice, PlayerProp, PropOpportunity
from edgebet_agent.cli.filters import filter_picks, get_filter_summary, suggest_relaxed_filters
from edgebet_agent.cli.formatters import (
    format_analytics_table,
    format_arbitrage_table,
    format_pick_detail,
    format_picks_table,
    format_props_table,
    render_to_text,
)
from edgebet_agent.history import AnalyticsSummary


@pytest.fixture
def result(sharp_dog_game, flat_game, second_dog_game):
    return scan_games([sharp_dog_game, flat_game, second_dog_game])


class TestFilterPicks:
    """Tests for filter_picks."""

    def test_no_filters(self, result):
        assert filter_picks(result.picks) == result.picks

    def test_sport_case_insensitive(self, result):
        assert len(filter_picks(result.picks, sport="nba")) == 2
        assert filter_picks(result.picks, sport="NHL") == []

    def test_min_confidence_inclusive(self, result):
        assert [p.confidence for p in filter_picks(result.picks, min_confidence=83)] == [85, 83]
        assert [p.confidence for p in filter_picks(result.picks, min_confidence=84)] == [85]

    def test_min_edge(self, result):
        assert [p.edge for p in filter_picks(result.picks, min_edge=4.5)] == [5.0]

    def test_team_substring(self, result):
        assert [p.team for p in filter_picks(result.picks, team="nuggets")] == ["Utah Jazz"]

    def test_bet_type(self, result):
        assert filter_picks(result.picks, bet_type="moneyline") == []

    def test_combined_filters_and_order(self, result):
        filtered = filter_picks(result.picks, sport="NBA", min_confidence=70, bet_type="spread")
        assert [p.rank for p in filtered] == [1, 2]


class TestFilterHelpers:
    """Tests for filter summary and suggestion helpers."""

    def test_summary(self):
        assert get_filter_summary({"sport": "NBA", "min_edge": 4.0, "team": None}) == "sport=NBA, min_edge=4.0%"

    def test_summary_empty(self):
        assert get_filter_summary({}) == ""

    def test_suggestions(self):
        assert suggest_relaxed_filters({"min_confidence": 80, "team": "heat"}) == (
            "Try: lower --min-confidence or try a different --team"
        )

    def test_generic_suggestion(self):
        assert suggest_relaxed_filters({"bet_type": "spread"}).startswith("Try adjusting your filters")


class TestFormatters:
    """Tests for Rich table formatters."""

    def test_picks_table(self, result):
        table = format_picks_table(result.picks, active_filters={"min_confidence": 70})

        assert isinstance(table, Table)
        assert table.row_count == 2
        assert table.caption == "Filters: min_confidence=70"

    def test_empty_picks_table(self):
        text = render_to_text(format_picks_table([]))
        assert "No picks passed the consensus gate" in text

    def test_pick_detail(self, result):
        panel = format_pick_detail(result.picks[0])

        assert isinstance(panel, Panel)
        text = render_to_text(panel)
        assert "Sharp Action: RLM detected" in text
        assert "Best Book: pinnacle" in text

    def test_arbitrage_table(self, result):
        text = render_to_text(format_arbitrage_table(result.arbitrage))

        assert "pinnacle +8 (+170)" in text
        assert "9.19%" in text

    def test_empty_arbitrage_table(self):
        assert "No arbitrage found" in render_to_text(format_arbitrage_table([]))

    def test_props_table(self):
        prop = PlayerProp(
            id="p",
            sport="NBA",
            emoji="🏀",
            game="Miami Heat @ Boston Celtics",
            player="Jimmy Butler",
            market="player_assists",
            side="Over",
            line=5.5,
            books=[BookPrice("draftkings", 120), BookPrice("fanduel", 150)],
        )
        opportunity = PropOpportunity(prop=prop, best_book="fanduel", best_odds="+150", edge=2.6, confidence=60.2)

        text = render_to_text(format_props_table([opportunity]))

        assert "Jimmy Butler Over 5.5 player_assists" in text
        assert "+150" in text

    def test_analytics_table(self):
        summary = AnalyticsSummary(days=7, total_picks=3, avg_edge=4.25, by_sport={"NBA": 3}, by_agent={"sharp": 1})

        text = render_to_text(format_analytics_table(summary))

        assert "Pick Analytics (last 7 days)" in text
        assert "4.25%" in text
        assert "sharp agent" in text
