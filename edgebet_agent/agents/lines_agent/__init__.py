"""Lines Agent - fetches and normalizes odds from sportsbooks.

This module provides:
- Pydantic models for raw feed games and normalized per-book lines
- The normalizer that pairs both sides of each market per book
- collect_odds: concurrent per-sport fetch with graceful degradation
"""

from edgebet_agent.agents.lines_agent.agent import (
    NoOddsDataError,
    collect_odds,
    lines_agent_impl,
)
from edgebet_agent.agents.lines_agent.models import (
    BookmakerOdds,
    GameInjury,
    Market,
    MoneylineLine,
    NormalizedGame,
    Outcome,
    RawGame,
    SpreadLine,
    TotalLine,
)
from edgebet_agent.agents.lines_agent.normalizer import (
    format_american_odds,
    format_point,
    make_game_id,
    normalize_game,
)

__all__ = [
    # Agent
    "collect_odds",
    "lines_agent_impl",
    "NoOddsDataError",
    # Raw models
    "Outcome",
    "Market",
    "BookmakerOdds",
    "RawGame",
    # Normalized models
    "SpreadLine",
    "TotalLine",
    "MoneylineLine",
    "GameInjury",
    "NormalizedGame",
    # Normalizer functions
    "normalize_game",
    "make_game_id",
    "format_american_odds",
    "format_point",
]
