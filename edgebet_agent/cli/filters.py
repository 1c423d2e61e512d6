"""Filter logic for ranked picks.

Provides filtering by sport, confidence, edge, team and bet type, plus
filter summary helpers for empty-result messages.
"""

from typing import Optional

from edgebet_agent.agents.analysis_agent.consensus import Pick


def filter_picks(
    picks: list[Pick],
    sport: Optional[str] = None,
    min_confidence: Optional[int] = None,
    min_edge: Optional[float] = None,
    team: Optional[str] = None,
    bet_type: Optional[str] = None,
) -> list[Pick]:
    """Filter picks by criteria.

    All filters are optional (None = no filter) and combine with AND logic.
    Ranking order is preserved.

    Args:
        picks: Ranked picks
        sport: Sport label to match (case-insensitive)
        min_confidence: Minimum confidence (inclusive)
        min_edge: Minimum displayed edge (inclusive)
        team: Substring that must appear in the game (case-insensitive)
        bet_type: "spread" or "moneyline"

    Returns:
        Filtered list of picks (may be empty)
    """
    filtered = picks

    if sport is not None:
        sport_lower = sport.lower()
        filtered = [p for p in filtered if p.sport.lower() == sport_lower]

    if min_confidence is not None:
        filtered = [p for p in filtered if p.confidence >= min_confidence]

    if min_edge is not None:
        filtered = [p for p in filtered if p.edge >= min_edge]

    if team is not None:
        team_lower = team.lower()
        filtered = [p for p in filtered if team_lower in p.game.lower()]

    if bet_type is not None:
        filtered = [p for p in filtered if p.bet_type == bet_type]

    return filtered


def get_filter_summary(filters: dict) -> str:
    """Generate human-readable filter summary.

    Returns:
        Filter summary string (e.g., "sport=NBA, min_confidence=70")
        Empty string if no filters are active
    """
    parts = []
    for key in ("sport", "min_confidence", "min_edge", "team", "bet_type"):
        if filters.get(key) is not None:
            suffix = "%" if key == "min_edge" else ""
            parts.append(f"{key}={filters[key]}{suffix}")
    return ", ".join(parts)


def suggest_relaxed_filters(filters: dict) -> str:
    """Suggest how to relax filters when results are empty."""
    suggestions = []

    if filters.get("min_confidence") is not None:
        suggestions.append("lower --min-confidence")

    if filters.get("min_edge") is not None:
        suggestions.append("lower --min-edge")

    if filters.get("sport"):
        suggestions.append("try a different --sport")

    if filters.get("team"):
        suggestions.append("try a different --team")

    if not suggestions:
        return "Try adjusting your filters or checking back later for new picks"

    return "Try: " + " or ".join(suggestions)
