"""Injury/anomaly agent.

Mostly a heuristic over line shape: very large spreads, heavy moneyline
juice and wide cross-book spread disagreement often follow roster news.
When the injury feed has been attached to the game, high-impact absences
are flagged first.
"""

from edgebet_agent.agents.analysis_agent.signals import InjuryAssessment, InjuryFlag, LineImpact
from edgebet_agent.agents.lines_agent.models import NormalizedGame

LARGE_UNDERDOG_POINTS = 14
HEAVY_JUICE_PRICE = -135
NEWS_MIN_BOOKS = 3
NEWS_POINT_RANGE = 2


def assess_injury_risk(game: NormalizedGame) -> InjuryAssessment:
    """Flag injury-driven line anomalies for one game.

    Returns:
        InjuryAssessment whose line_impact is high_impact if any flag is
        high severity, check_reports if any flag was raised, else none.
    """
    flags: list[InjuryFlag] = []

    high_impact = [i for i in game.injuries if i.impact == "high"]
    if high_impact:
        flags.append(
            InjuryFlag(
                flag=f"{len(high_impact)} high-impact players OUT/Doubtful",
                severity="high",
                players=tuple(i.player for i in high_impact),
            )
        )

    if game.spread_lines and game.spread_lines[0].away_point > LARGE_UNDERDOG_POINTS:
        flags.append(InjuryFlag(flag=f"{game.away_team} large underdogs, verify roster", severity="check"))

    if game.ml_lines:
        first = game.ml_lines[0]
        if first.home_price < HEAVY_JUICE_PRICE or first.away_price < HEAVY_JUICE_PRICE:
            flags.append(InjuryFlag(flag="Heavy juice, possible injury-driven pricing", severity="moderate"))

    if len(game.spread_lines) >= NEWS_MIN_BOOKS:
        points = [l.away_point for l in game.spread_lines]
        if max(points) - min(points) >= NEWS_POINT_RANGE:
            flags.append(InjuryFlag(flag="Books split on the spread, market reacting to news", severity="check"))

    if any(f.severity == "high" for f in flags):
        impact = LineImpact.HIGH_IMPACT
    elif flags:
        impact = LineImpact.CHECK_REPORTS
    else:
        impact = LineImpact.NONE

    return InjuryAssessment(game=game.game, flags=tuple(flags), line_impact=impact)
