"""Summary statistics over recent pick history."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone

from edgebet_agent.history.models import PickRecord

HIGH_CONFIDENCE = 75


@dataclass
class AnalyticsSummary:
    """Aggregate view of picks stored in the lookback window.

    Attributes:
        days: Lookback window in days
        total_picks: Picks stored inside the window
        avg_edge: Mean displayed edge (0.0 when there are no picks)
        by_sport: Pick count per sport label
        by_agent: Picks where an agent was decisive ("value" for A-grade
            value picks, "sharp" for RLM-backed picks)
        high_confidence_picks: Picks with confidence >= 75
    """

    days: int
    total_picks: int = 0
    avg_edge: float = 0.0
    by_sport: dict[str, int] = field(default_factory=dict)
    by_agent: dict[str, int] = field(default_factory=dict)
    high_confidence_picks: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def summarize_picks(
    records: list[PickRecord],
    days: int = 30,
    now: datetime | None = None,
) -> AnalyticsSummary:
    """Summarize picks stored within the last ``days`` days."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=days)
    recent = [r for r in records if r.stored_at > cutoff]

    summary = AnalyticsSummary(days=days, total_picks=len(recent))
    if not recent:
        return summary

    for record in recent:
        summary.by_sport[record.sport] = summary.by_sport.get(record.sport, 0) + 1
        if record.value_grade.startswith("A"):
            summary.by_agent["value"] = summary.by_agent.get("value", 0) + 1
        if "RLM" in record.sharp_action:
            summary.by_agent["sharp"] = summary.by_agent.get("sharp", 0) + 1

    summary.avg_edge = round(sum(r.edge for r in recent) / len(recent), 2)
    summary.high_confidence_picks = sum(1 for r in recent if r.confidence >= HIGH_CONFIDENCE)
    return summary
