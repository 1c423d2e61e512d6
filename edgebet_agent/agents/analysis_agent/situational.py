"""Situational agent: static spot heuristics from the first listed lines."""

from edgebet_agent.agents.analysis_agent.signals import SituationalEdge, Strength
from edgebet_agent.agents.lines_agent.models import NormalizedGame
from edgebet_agent.agents.lines_agent.normalizer import format_american_odds


def _road_dog_strength(away_point: float) -> Strength:
    if away_point > 6:
        return Strength.STRONG
    if away_point > 3:
        return Strength.MODERATE
    return Strength.WEAK


def find_situational_edges(game: NormalizedGame) -> list[SituationalEdge]:
    """Road underdog, home chalk fade and big-dog moneyline spots.

    Reads only the first spread line and first moneyline; no cross-book
    aggregation.
    """
    edges: list[SituationalEdge] = []

    if game.spread_lines:
        first = game.spread_lines[0]
        if first.away_point > 0:
            edges.append(
                SituationalEdge(
                    edge="Road underdog spot",
                    side=game.away_team,
                    bet_type="spread",
                    strength=_road_dog_strength(first.away_point),
                    note="Road underdogs historically undervalued",
                )
            )
        if first.home_point < -9:
            edges.append(
                SituationalEdge(
                    edge="Large home chalk fade",
                    side=game.away_team,
                    bet_type="spread",
                    strength=Strength.MODERATE if first.home_point < -13 else Strength.WEAK,
                    note="Public inflates heavy home favorite lines",
                )
            )

    if game.ml_lines:
        away_price = game.ml_lines[0].away_price
        if away_price > 160:
            edges.append(
                SituationalEdge(
                    edge="Big underdog ML value",
                    side=game.away_team,
                    bet_type="moneyline",
                    strength=Strength.MODERATE if away_price > 250 else Strength.WEAK,
                    note=f"Public undervalues {game.away_team} at {format_american_odds(away_price)}",
                    odds=away_price,
                )
            )

    return edges
