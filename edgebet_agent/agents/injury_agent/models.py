"""Pydantic models for injury feed data."""

from datetime import datetime

from pydantic import BaseModel


class InjuryReport(BaseModel):
    """Single injury report entry.

    Attributes:
        team: Feed team name (e.g., "Celtics")
        player: Player display name
        position: Player position (e.g., "PG", "QB") - optional
        status: Injury status ("Out", "Doubtful", "Questionable", ...)
        injury: Injury type (e.g., "Ankle", "Knee")
        updated: Feed's last-update stamp, passed through as text
        fetched_at: Timestamp when injury data was fetched
    """

    team: str
    player: str
    position: str | None = None
    status: str
    injury: str = "Unknown"
    updated: str | None = None
    fetched_at: datetime
