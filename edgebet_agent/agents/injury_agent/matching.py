"""Team-name matching and severity classification for injury reports.

Odds feed team names ("Boston Celtics") and injury feed team names
("Celtics", "Boston") rarely agree exactly. Matching is a deliberately
loose heuristic, so it can produce false positives (two teams sharing a
nickname across leagues) and false negatives (renamed teams). Reports are
always matched within one sport to limit the former.
"""

import re

from edgebet_agent.agents.injury_agent.models import InjuryReport
from edgebet_agent.agents.lines_agent.models import GameInjury, NormalizedGame

HIGH_IMPACT_POSITIONS = re.compile(r"QB|PG|C|G")
SIGNIFICANT_STATUSES = ("out", "doubtful")


def normalize_team_name(name: str) -> str:
    """Lowercase and collapse whitespace.

    Example:
        >>> normalize_team_name("  Boston   Celtics ")
        'boston celtics'
    """
    return " ".join(name.lower().split())


def team_matches(game_team: str, feed_team: str) -> bool:
    """Whether an injury feed team name refers to an odds feed team.

    True when either normalized name contains the other, or when the game
    team's last word (usually the nickname) appears in the feed name.

    Examples:
        >>> team_matches("Boston Celtics", "Celtics")
        True
        >>> team_matches("Los Angeles Lakers", "LA Lakers")
        True
        >>> team_matches("Boston Celtics", "Miami Heat")
        False
    """
    game = normalize_team_name(game_team)
    feed = normalize_team_name(feed_team)
    if not game or not feed:
        return False
    if feed in game or game in feed:
        return True
    return game.split()[-1] in feed


def is_significant_status(status: str | None) -> bool:
    """Out or doubtful players are the only ones that move lines."""
    text = (status or "").lower()
    return any(s in text for s in SIGNIFICANT_STATUSES)


def classify_impact(position: str | None) -> str:
    """Key positions (QB, PG, C, G) are high impact, everyone else medium."""
    if position and HIGH_IMPACT_POSITIONS.search(position):
        return "high"
    return "medium"


def injuries_for_game(home_team: str, away_team: str, reports: list[InjuryReport]) -> list[GameInjury]:
    """Significant injuries on either team, home team first."""
    matched: list[GameInjury] = []
    for team in (home_team, away_team):
        for report in reports:
            if not team_matches(team, report.team) or not is_significant_status(report.status):
                continue
            matched.append(
                GameInjury(
                    player=report.player,
                    team=report.team,
                    status=report.status,
                    impact=classify_impact(report.position),
                )
            )
    return matched


def attach_injuries(game: NormalizedGame, reports: list[InjuryReport]) -> NormalizedGame:
    """Return a copy of ``game`` carrying its significant injuries."""
    injuries = injuries_for_game(game.home_team, game.away_team, reports)
    if not injuries:
        return game
    return game.model_copy(update={"injuries": tuple(injuries)})
