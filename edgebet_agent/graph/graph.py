"""LangGraph StateGraph compilation with parallel and sequential execution.

This module builds the multi-agent scan workflow with:
- Parallel execution: Lines and Injury agents run concurrently
- Parallel execution: Analysis and Arbitrage both consume the slate
- Sequential execution: Communication waits for both
- State reducers: Prevent INVALID_CONCURRENT_GRAPH_UPDATE errors
"""

import uuid

from langgraph.graph import END, START, StateGraph

from edgebet_agent.agents.analysis_agent.agent import ScanResult
from edgebet_agent.agents.lines_agent.agent import NoOddsDataError
from edgebet_agent.graph.nodes import (
    analysis_agent,
    arbitrage_agent,
    communication_agent,
    injury_agent,
    lines_agent,
)
from edgebet_agent.graph.state import ScanState, initial_state
from edgebet_agent.history.repository import PickHistoryRepository
from edgebet_agent.monitoring import bind_correlation_id, get_logger, unbind_correlation_id

log = get_logger()


def build_graph() -> StateGraph:
    """Build the scan StateGraph with parallel and sequential edges.

    Graph structure:
        START
          ├─> lines ─────┐      ┌─> analysis ──┐
          └─> injuries ──┴──────┴─> arbitrage ─┴─> communication -> END

    Returns:
        Compiled StateGraph ready for invocation
    """
    graph = StateGraph(ScanState)

    graph.add_node("lines", lines_agent)
    graph.add_node("injuries", injury_agent)
    graph.add_node("analysis", analysis_agent)
    graph.add_node("arbitrage", arbitrage_agent)
    graph.add_node("communication", communication_agent)

    # Both feeds start immediately
    graph.add_edge(START, "lines")
    graph.add_edge(START, "injuries")

    # Scoring waits for both feeds
    graph.add_edge("lines", "analysis")
    graph.add_edge("injuries", "analysis")
    graph.add_edge("lines", "arbitrage")
    graph.add_edge("injuries", "arbitrage")

    graph.add_edge("analysis", "communication")
    graph.add_edge("arbitrage", "communication")

    graph.add_edge("communication", END)

    return graph.compile()


# Pre-compiled app for easy import and invocation
app = build_graph()


def run_scan(
    sports: list[str] | None = None,
    teams: list[str] | None = None,
    top_n: int = 0,
    filter_params: dict | None = None,
    history: PickHistoryRepository | None = None,
) -> ScanResult:
    """Run one full scan through the workflow graph.

    Args:
        sports: Sport keys or labels (empty = all configured sports)
        teams: Team-name substrings to keep
        top_n: Maximum picks (0 = configured default)
        filter_params: Display filters applied by the communication node
        history: Repository to record emitted picks in (None = don't record)

    Returns:
        ScanResult with picks, arbitrage and accumulated errors

    Raises:
        NoOddsDataError: If every sport returned zero games
    """
    scan_id = uuid.uuid4().hex[:12]
    bind_correlation_id(scan_id)
    try:
        log.info("scan_started", sports=sports or "all", teams=teams or [])
        state = app.invoke(initial_state(sports, teams, top_n, filter_params))

        games = state.get("games", [])
        if not games:
            log.warning("scan_no_odds_data", errors=state.get("errors", []))
            raise NoOddsDataError("No odds data available")

        result = ScanResult(
            picks=state.get("picks", []),
            arbitrage=state.get("arbitrage", []),
            errors=state.get("errors", []),
            games_analyzed=len(games),
        )

        if history is not None and result.picks:
            history.record_picks(result.picks)

        log.info(
            "scan_completed",
            games=len(games),
            picks=len(result.picks),
            arbitrage=len(result.arbitrage),
            errors=len(result.errors),
        )
        return result
    finally:
        unbind_correlation_id()
