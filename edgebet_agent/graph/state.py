"""State management for the multi-agent scan workflow.

Uses TypedDict for performance (not Pydantic) with reducers for parallel execution.
"""

import operator
from typing import Annotated, TypedDict

from edgebet_agent.agents.analysis_agent.arbitrage import ArbitrageOpportunity
from edgebet_agent.agents.analysis_agent.consensus import Pick
from edgebet_agent.agents.injury_agent.models import InjuryReport
from edgebet_agent.agents.lines_agent.models import NormalizedGame


class ScanState(TypedDict):
    """State shared across all agents in the scan workflow.

    Input fields:
        sports: Sport keys or labels to scan (empty = all configured)
        teams: Team-name substrings to keep (empty = all games)
        top_n: Maximum picks to rank (0 = configured default)
        filter_params: Display filters (sport, min_confidence, min_edge, team, bet_type)

    Lines Agent outputs:
        games: Normalized games across all sports
        sources_failed: Sport labels that returned no data

    Injury Agent outputs:
        injury_reports: Sport label -> injury reports

    Analysis / Arbitrage outputs:
        picks: Ranked consensus picks
        arbitrage: Arbitrage opportunities

    Communication Agent outputs:
        recommendation: Rendered text summary

    Metadata (with reducers for parallel execution):
        errors: Error accumulation with add reducer
    """

    # Input fields
    sports: list[str]
    teams: list[str]
    top_n: int
    filter_params: dict

    # Lines Agent outputs
    games: list[NormalizedGame]
    sources_failed: list[str]

    # Injury Agent outputs
    injury_reports: dict[str, list[InjuryReport]]

    # Analysis / Arbitrage outputs
    picks: list[Pick]
    arbitrage: list[ArbitrageOpportunity]

    # Communication Agent outputs
    recommendation: str

    # Metadata with reducers (parallel nodes both append errors)
    errors: Annotated[list[str], operator.add]


def initial_state(
    sports: list[str] | None = None,
    teams: list[str] | None = None,
    top_n: int = 0,
    filter_params: dict | None = None,
) -> ScanState:
    """Empty workflow state for one scan."""
    return ScanState(
        sports=sports or [],
        teams=teams or [],
        top_n=top_n,
        filter_params=filter_params or {},
        games=[],
        sources_failed=[],
        injury_reports={},
        picks=[],
        arbitrage=[],
        recommendation="",
        errors=[],
    )
