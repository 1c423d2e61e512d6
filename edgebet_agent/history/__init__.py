"""Pick history storage and analytics."""

from edgebet_agent.history.analytics import AnalyticsSummary, summarize_picks
from edgebet_agent.history.models import PickRecord
from edgebet_agent.history.repository import (
    DiskPickHistory,
    InMemoryPickHistory,
    PickHistoryRepository,
)

__all__ = [
    "PickRecord",
    "PickHistoryRepository",
    "InMemoryPickHistory",
    "DiskPickHistory",
    "AnalyticsSummary",
    "summarize_picks",
]
