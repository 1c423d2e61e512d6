"""Integration tests for the LangGraph scan workflow.

The Lines Agent node is patched to return fixture games, so the full graph
(injuries, analysis, arbitrage, communication) runs without any network.
"""

from unittest.mock import patch

import pytest

from edgebet_agent.agents.analysis_agent.agent import scan_games
from edgebet_agent.agents.lines_agent.agent import NoOddsDataError
from edgebet_agent.graph import build_graph, initial_state, run_scan
from edgebet_agent.graph.nodes import analysis_agent, arbitrage_agent, communication_agent
from edgebet_agent.history import InMemoryPickHistory

LINES_PATH = "edgebet_agent.graph.nodes.lines_agent_impl"


@pytest.fixture
def slate(sharp_dog_game, flat_game, second_dog_game):
    return [sharp_dog_game, flat_game, second_dog_game]


@pytest.fixture
def patched_lines(slate):
    with patch(LINES_PATH) as mock_lines:
        mock_lines.return_value = {"games": slate, "sources_failed": [], "errors": []}
        yield mock_lines


class TestBuildGraph:
    """Tests for graph compilation."""

    def test_has_every_agent_node(self):
        compiled = build_graph()
        assert {"lines", "injuries", "analysis", "arbitrage", "communication"} <= set(compiled.nodes)

    def test_initial_state_defaults(self):
        state = initial_state()

        assert state["sports"] == []
        assert state["filter_params"] == {}
        assert state["errors"] == []


class TestRunScan:
    """Tests for run_scan through the compiled graph."""

    def test_no_odds_raises(self):
        with pytest.raises(NoOddsDataError, match="No odds data available"):
            run_scan(sports=["NBA"])

    def test_full_pipeline(self, patched_lines, slate):
        result = run_scan(sports=["NBA"], teams=["heat"])

        assert [p.id for p in result.picks] == [
            "NBA_Boston_Celtics_Miami_Heat_1",
            "NBA_Denver_Nuggets_Utah_Jazz_2",
        ]
        assert len(result.arbitrage) == 4
        assert result.errors == []
        assert result.games_analyzed == 3

        state = patched_lines.call_args.args[0]
        assert state["sports"] == ["NBA"]
        assert state["teams"] == ["heat"]

    def test_matches_direct_scoring(self, patched_lines, slate):
        """The graph produces the same picks as scoring the slate directly."""
        assert run_scan().picks == scan_games(slate).picks

    def test_records_history(self, patched_lines):
        history = InMemoryPickHistory()

        run_scan(history=history)

        assert sorted(r.pick_id for r in history.list_records()) == [
            "NBA_Boston_Celtics_Miami_Heat_1",
            "NBA_Denver_Nuggets_Utah_Jazz_2",
        ]

    def test_top_n(self, patched_lines):
        assert len(run_scan(top_n=1).picks) == 1

    def test_filters_applied(self, patched_lines):
        result = run_scan(filter_params={"min_confidence": 84, "min_edge": None})
        assert [p.confidence for p in result.picks] == [85]

    def test_everything_filtered_out(self, patched_lines):
        history = InMemoryPickHistory()

        result = run_scan(filter_params={"min_confidence": 90}, history=history)

        assert result.picks == []
        assert result.errors == ["Communication Agent: all picks filtered out"]
        assert history.list_records() == []


class TestNodes:
    """Tests for node functions called directly."""

    def test_analysis_without_games(self):
        update = analysis_agent({"games": []})

        assert update["picks"] == []
        assert update["errors"] == ["Analysis Agent: no odds data available (Lines Agent may have failed)"]

    def test_arbitrage_without_games(self):
        assert arbitrage_agent({"games": []}) == {"arbitrage": []}

    def test_communication_without_games(self):
        assert communication_agent({"games": []}) == {"recommendation": "No odds data available"}

    def test_communication_renders_picks(self, slate):
        result = scan_games(slate)
        state = {"games": slate, "picks": result.picks, "arbitrage": result.arbitrage, "filter_params": {}}

        update = communication_agent(state)

        assert update["picks"] == result.picks
        assert "Consensus Picks" in update["recommendation"]
        assert "Miami Heat +6.5" in update["recommendation"]
        assert "Arbitrage Opportunities" in update["recommendation"]

    def test_communication_explains_empty_filter_result(self, slate):
        result = scan_games(slate)
        state = {
            "games": slate,
            "picks": result.picks,
            "arbitrage": [],
            "filter_params": {"sport": "NHL", "team": None},
        }

        update = communication_agent(state)

        assert update["picks"] == []
        assert update["recommendation"] == (
            "No picks match your filters (sport=NHL).\nTry: try a different --sport"
        )
        assert update["errors"] == ["Communication Agent: all picks filtered out"]
