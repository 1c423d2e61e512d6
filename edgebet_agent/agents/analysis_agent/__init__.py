"""Analysis agent: multi-signal scoring of normalized games.

This module provides:
- Implied probability and vig removal
- Six signal agents (value, line movement, public money, sharp money,
  injury/anomaly, situational)
- The consensus scorer that ranks value picks
- Cross-book arbitrage detection
- Player prop aggregation
"""

from edgebet_agent.agents.analysis_agent.agent import (
    ScanResult,
    analysis_agent_impl,
    arbitrage_agent_impl,
    scan_games,
)
from edgebet_agent.agents.analysis_agent.arbitrage import ArbitrageOpportunity, detect_arbitrage
from edgebet_agent.agents.analysis_agent.consensus import (
    ModelBreakdown,
    Pick,
    build_candidates,
    collect_signals,
    rank_candidates,
    score_candidate,
)
from edgebet_agent.agents.analysis_agent.injury import assess_injury_risk
from edgebet_agent.agents.analysis_agent.line_movement import detect_line_movement
from edgebet_agent.agents.analysis_agent.props import (
    PlayerProp,
    PropOpportunity,
    analyze_props,
    collect_props,
    parse_props,
)
from edgebet_agent.agents.analysis_agent.public_money import detect_public_money
from edgebet_agent.agents.analysis_agent.sharp_money import detect_sharp_money
from edgebet_agent.agents.analysis_agent.signals import (
    InjuryAssessment,
    InjuryFlag,
    LineImpact,
    LineMovementSignal,
    PublicMoneySignal,
    SharpMoneySignal,
    SituationalEdge,
    Strength,
    ValuePick,
)
from edgebet_agent.agents.analysis_agent.situational import find_situational_edges
from edgebet_agent.agents.analysis_agent.value import find_value_picks
from edgebet_agent.agents.analysis_agent.vig_removal import (
    average,
    devig,
    get_market_vig,
    implied_probability,
)

__all__ = [
    # Agent
    "scan_games",
    "analysis_agent_impl",
    "arbitrage_agent_impl",
    "ScanResult",
    # Probability
    "implied_probability",
    "devig",
    "get_market_vig",
    "average",
    # Signal agents
    "find_value_picks",
    "detect_line_movement",
    "detect_public_money",
    "detect_sharp_money",
    "assess_injury_risk",
    "find_situational_edges",
    # Signals
    "Strength",
    "LineImpact",
    "ValuePick",
    "LineMovementSignal",
    "PublicMoneySignal",
    "SharpMoneySignal",
    "InjuryFlag",
    "InjuryAssessment",
    "SituationalEdge",
    # Consensus
    "collect_signals",
    "score_candidate",
    "build_candidates",
    "rank_candidates",
    "Pick",
    "ModelBreakdown",
    # Arbitrage
    "detect_arbitrage",
    "ArbitrageOpportunity",
    # Props
    "parse_props",
    "analyze_props",
    "collect_props",
    "PlayerProp",
    "PropOpportunity",
]
