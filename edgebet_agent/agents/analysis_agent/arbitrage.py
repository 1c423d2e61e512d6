"""Two-way arbitrage detection across books.

Arbitrage exists when the implied probabilities of the away side at one
book and the home side at another sum to less than 1.0: staking both sides
in proportion to their implied probabilities returns the same amount
whichever side wins.

A 2% margin is required (total < 0.98) so that small rounding gaps and
stale quotes are not reported.

Example:
    Away +110 at Book A (47.6%), Home +105 at Book B (48.8%)
    Total 96.4% < 98%: profit (1/0.964 - 1) * 100 = 3.7%
"""

from dataclasses import dataclass
from itertools import product

from edgebet_agent.agents.analysis_agent.vig_removal import implied_probability
from edgebet_agent.agents.lines_agent.models import NormalizedGame
from edgebet_agent.agents.lines_agent.normalizer import format_american_odds
from edgebet_agent.monitoring import get_logger

log = get_logger()

ARBITRAGE_THRESHOLD = 0.98
STAKE_TOTAL = 100


@dataclass(frozen=True)
class ArbitrageOpportunity:
    """One cross-book two-leg arbitrage.

    Attributes:
        type: "spread" or "moneyline"
        game: Display game string
        sport: Sport label
        away_book: Book for the away leg
        away_odds: Formatted away price
        home_book: Book for the home leg
        home_odds: Formatted home price
        total_implied: Sum of both legs' implied probabilities (< 0.98)
        profit: Guaranteed return percentage, (1/total - 1) * 100
        away_stake: Share of a 100-unit bankroll on the away leg
        home_stake: Share of a 100-unit bankroll on the home leg
        away_line: Away point (spread only)
        home_line: Home point (spread only)
    """

    type: str
    game: str
    sport: str
    away_book: str
    away_odds: str
    home_book: str
    home_odds: str
    total_implied: float
    profit: float
    away_stake: float
    home_stake: float
    away_line: float | None = None
    home_line: float | None = None


def _check_pair(away_price: int, home_price: int) -> tuple[float, float, float, float] | None:
    """Return (total, profit, away_stake, home_stake) if the pair is an arb."""
    away_implied = implied_probability(away_price)
    home_implied = implied_probability(home_price)
    total = away_implied + home_implied
    if total >= ARBITRAGE_THRESHOLD:
        return None
    return (
        total,
        (1 / total - 1) * 100,
        STAKE_TOTAL * away_implied / total,
        STAKE_TOTAL * home_implied / total,
    )


def find_game_arbitrage(game: NormalizedGame) -> list[ArbitrageOpportunity]:
    """All spread and moneyline arbitrages for one game, in discovery order."""
    opportunities: list[ArbitrageOpportunity] = []

    if len(game.spread_lines) >= 2:
        for away, home in product(game.spread_lines, repeat=2):
            if away.book == home.book:
                continue
            result = _check_pair(away.away_price, home.home_price)
            if result is None:
                continue
            total, profit, away_stake, home_stake = result
            opportunities.append(
                ArbitrageOpportunity(
                    type="spread",
                    game=game.game,
                    sport=game.sport,
                    away_book=away.book,
                    away_odds=format_american_odds(away.away_price),
                    home_book=home.book,
                    home_odds=format_american_odds(home.home_price),
                    total_implied=total,
                    profit=profit,
                    away_stake=away_stake,
                    home_stake=home_stake,
                    away_line=away.away_point,
                    home_line=home.home_point,
                )
            )

    if len(game.ml_lines) >= 2:
        for away, home in product(game.ml_lines, repeat=2):
            if away.book == home.book:
                continue
            result = _check_pair(away.away_price, home.home_price)
            if result is None:
                continue
            total, profit, away_stake, home_stake = result
            opportunities.append(
                ArbitrageOpportunity(
                    type="moneyline",
                    game=game.game,
                    sport=game.sport,
                    away_book=away.book,
                    away_odds=format_american_odds(away.away_price),
                    home_book=home.book,
                    home_odds=format_american_odds(home.home_price),
                    total_implied=total,
                    profit=profit,
                    away_stake=away_stake,
                    home_stake=home_stake,
                )
            )

    return opportunities


def detect_arbitrage(games: list[NormalizedGame]) -> list[ArbitrageOpportunity]:
    """Pool arbitrages from every game, most profitable first.

    The sort is stable, so equal-profit opportunities keep discovery order.
    """
    opportunities: list[ArbitrageOpportunity] = []
    for game in games:
        opportunities.extend(find_game_arbitrage(game))

    opportunities.sort(key=lambda o: o.profit, reverse=True)
    if opportunities:
        log.info(
            "arbitrage_detected",
            count=len(opportunities),
            best_profit=round(opportunities[0].profit, 2),
        )
    return opportunities
