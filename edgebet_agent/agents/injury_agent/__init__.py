"""Injury Agent - optional injury feed collaborator.

This module provides:
- SportsDataIOInjuriesClient: injury reports with cache fallback
- Team-name matching and severity classification
- collect_injuries: concurrent per-sport injury fetch
"""

from edgebet_agent.agents.injury_agent.agent import collect_injuries, injury_agent_impl
from edgebet_agent.agents.injury_agent.matching import (
    attach_injuries,
    classify_impact,
    injuries_for_game,
    is_significant_status,
    normalize_team_name,
    team_matches,
)
from edgebet_agent.agents.injury_agent.models import InjuryReport
from edgebet_agent.agents.injury_agent.sportsdata_injuries import SportsDataIOInjuriesClient

__all__ = [
    "collect_injuries",
    "injury_agent_impl",
    "SportsDataIOInjuriesClient",
    "InjuryReport",
    "attach_injuries",
    "injuries_for_game",
    "team_matches",
    "normalize_team_name",
    "is_significant_status",
    "classify_impact",
]
