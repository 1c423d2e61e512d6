"""Node functions for the scan workflow graph."""

from edgebet_agent.agents.analysis_agent.agent import analysis_agent_impl, arbitrage_agent_impl
from edgebet_agent.agents.injury_agent.agent import injury_agent_impl
from edgebet_agent.agents.lines_agent.agent import lines_agent_impl
from edgebet_agent.cli.filters import filter_picks, get_filter_summary, suggest_relaxed_filters
from edgebet_agent.cli.formatters import format_arbitrage_table, format_picks_table, render_to_text
from edgebet_agent.graph.state import ScanState

FILTER_KEYS = {"sport", "min_confidence", "min_edge", "team", "bet_type"}


def lines_agent(state: ScanState) -> dict:
    """Lines Agent: fetch and normalize odds for every requested sport.

    Args:
        state: Current workflow state

    Returns:
        Partial state update with games, sources_failed and errors
    """
    return lines_agent_impl(state)


def injury_agent(state: ScanState) -> dict:
    """Injury Agent: fetch injury reports (no-op without a SportsDataIO key)."""
    return injury_agent_impl(state)


def analysis_agent(state: ScanState) -> dict:
    """Analysis Agent: attach injuries, run the six signal agents, rank picks.

    Args:
        state: Current workflow state with games and injury_reports

    Returns:
        Partial state update with picks
    """
    if not state.get("games"):
        return {
            "picks": [],
            "errors": ["Analysis Agent: no odds data available (Lines Agent may have failed)"],
        }
    return analysis_agent_impl(state)


def arbitrage_agent(state: ScanState) -> dict:
    """Arbitrage Agent: cross-book two-leg arbitrage over the same games."""
    if not state.get("games"):
        return {"arbitrage": []}
    return arbitrage_agent_impl(state)


def communication_agent(state: ScanState) -> dict:
    """Communication Agent: apply display filters and render a summary.

    Args:
        state: Current workflow state with picks, arbitrage and filter_params

    Returns:
        Partial state update with filtered picks and the recommendation text
    """
    if not state.get("games"):
        return {"recommendation": "No odds data available"}

    filter_params = {
        k: v
        for k, v in (state.get("filter_params") or {}).items()
        if v is not None and k in FILTER_KEYS
    }
    picks = filter_picks(state.get("picks", []), **filter_params)

    if not picks and filter_params and state.get("picks"):
        summary = get_filter_summary(filter_params)
        suggestion = suggest_relaxed_filters(filter_params)
        return {
            "picks": [],
            "recommendation": f"No picks match your filters ({summary}).\n{suggestion}",
            "errors": ["Communication Agent: all picks filtered out"],
        }

    recommendation = render_to_text(
        format_picks_table(picks, active_filters=filter_params),
        format_arbitrage_table(state.get("arbitrage", [])),
    )
    return {"picks": picks, "recommendation": recommendation}
