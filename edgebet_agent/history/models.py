"""Stored pick model for history and analytics."""

from datetime import datetime

from pydantic import BaseModel

from edgebet_agent.agents.analysis_agent.consensus import Pick


class PickRecord(BaseModel):
    """A pick as stored after a scan.

    Attributes:
        pick_id: Deterministic pick id (``{game_id}_{rank}``)
        sport: Sport label
        game: Display game string
        bet: Bet description
        bet_type: "spread" or "moneyline"
        odds: Formatted American odds
        confidence: 55-90
        edge: Displayed edge percentage
        value_grade: Value agent summary (e.g., "A: 9.2% edge")
        sharp_action: Sharp agent summary ("RLM detected", "Active", "Quiet")
        stored_at: When the pick was recorded (UTC)
    """

    pick_id: str
    sport: str
    game: str
    bet: str
    bet_type: str
    odds: str
    confidence: int
    edge: float
    value_grade: str
    sharp_action: str
    stored_at: datetime

    @classmethod
    def from_pick(cls, pick: Pick, stored_at: datetime) -> "PickRecord":
        return cls(
            pick_id=pick.id,
            sport=pick.sport,
            game=pick.game,
            bet=pick.bet,
            bet_type=pick.bet_type,
            odds=pick.odds,
            confidence=pick.confidence,
            edge=pick.edge,
            value_grade=pick.model_breakdown.value,
            sharp_action=pick.model_breakdown.sharp_action,
            stored_at=stored_at,
        )
