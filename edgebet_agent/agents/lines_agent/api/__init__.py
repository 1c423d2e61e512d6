"""Odds feed API clients."""

from edgebet_agent.agents.lines_agent.api.odds_api import OddsAPIClient

__all__ = ["OddsAPIClient"]
