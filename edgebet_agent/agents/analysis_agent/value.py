"""Value agent: best available price vs devigged cross-book consensus.

For each side, the consensus price is the arithmetic mean of every book's
price. Devigging the consensus pair estimates the true win probability; the
edge is that probability minus the implied probability of the best price
on offer, in percentage points.
"""

from edgebet_agent.agents.analysis_agent.signals import ValuePick
from edgebet_agent.agents.analysis_agent.vig_removal import average, devig, implied_probability
from edgebet_agent.agents.lines_agent.models import NormalizedGame
from edgebet_agent.agents.lines_agent.normalizer import format_point

MIN_BOOKS = 2
SPREAD_EDGE_THRESHOLD = 2.5
ML_EDGE_THRESHOLD = 3.5
# Away moneyline value is only flagged for prices longer than +110
ML_MIN_AWAY_PRICE = 110


def _best(lines, attr: str):
    """Line with the highest price for ``attr`` (first one wins ties)."""
    return max(lines, key=lambda line: getattr(line, attr))


def find_value_picks(game: NormalizedGame) -> list[ValuePick]:
    """Find spread and away-moneyline value picks for one game.

    Args:
        game: Normalized game

    Returns:
        Value picks, spread picks first (home before away), then moneyline.
        Empty when fewer than two books quote a market.
    """
    picks: list[ValuePick] = []

    spreads = game.spread_lines
    if len(spreads) >= MIN_BOOKS:
        best_home = _best(spreads, "home_price")
        best_away = _best(spreads, "away_price")
        true_home, true_away = devig(
            average(l.home_price for l in spreads),
            average(l.away_price for l in spreads),
        )
        edge_home = (true_home - implied_probability(best_home.home_price)) * 100
        edge_away = (true_away - implied_probability(best_away.away_price)) * 100

        # Bet text uses the first listed book's points
        home_point = spreads[0].home_point
        away_point = spreads[0].away_point

        if edge_home > SPREAD_EDGE_THRESHOLD:
            picks.append(
                ValuePick(
                    side="home",
                    team=game.home_team,
                    bet=f"{game.home_team} {format_point(home_point)}",
                    odds=best_home.home_price,
                    edge=edge_home,
                    market="spread",
                    book=best_home.book,
                )
            )
        if edge_away > SPREAD_EDGE_THRESHOLD:
            picks.append(
                ValuePick(
                    side="away",
                    team=game.away_team,
                    bet=f"{game.away_team} {format_point(away_point)}",
                    odds=best_away.away_price,
                    edge=edge_away,
                    market="spread",
                    book=best_away.book,
                )
            )

    moneylines = game.ml_lines
    if len(moneylines) >= MIN_BOOKS:
        best_away_ml = _best(moneylines, "away_price")
        _, true_away = devig(
            average(l.home_price for l in moneylines),
            average(l.away_price for l in moneylines),
        )
        edge_away_ml = (true_away - implied_probability(best_away_ml.away_price)) * 100

        # Home moneyline value is not modeled
        if edge_away_ml > ML_EDGE_THRESHOLD and best_away_ml.away_price > ML_MIN_AWAY_PRICE:
            picks.append(
                ValuePick(
                    side="away",
                    team=game.away_team,
                    bet=f"{game.away_team} ML",
                    odds=best_away_ml.away_price,
                    edge=edge_away_ml,
                    market="moneyline",
                    book=best_away_ml.book,
                )
            )

    return picks
