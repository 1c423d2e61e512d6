"""Public money agent: infer the public side from square-book juice.

Sharp books shade juice for different reasons, so only square books are
read. The heavier-juiced side is assumed to be where the public is.
"""

from edgebet_agent.agents.analysis_agent.signals import PublicMoneySignal
from edgebet_agent.agents.analysis_agent.vig_removal import average, implied_probability, round_half_up
from edgebet_agent.agents.lines_agent.models import NormalizedGame

# Calibration mapping heavier-side juice onto a plausible public-percentage range
PUBLIC_PCT_OFFSET = 8
PUBLIC_PCT_MIN = 55
PUBLIC_PCT_MAX = 80


def public_percentage(max_juice: float) -> int:
    """Map the heavier side's mean implied probability to a public-betting %.

    Example:
        >>> public_percentage(0.5238)
        60
    """
    return min(PUBLIC_PCT_MAX, max(PUBLIC_PCT_MIN, round_half_up(max_juice * 100) + PUBLIC_PCT_OFFSET))


def detect_public_money(game: NormalizedGame) -> list[PublicMoneySignal]:
    """Infer public and contrarian sides on the spread from square books."""
    square = [l for l in game.spread_lines if not l.is_sharp]
    if not square:
        return []

    home_juice = average(implied_probability(l.home_price) for l in square)
    away_juice = average(implied_probability(l.away_price) for l in square)
    public_is_home = home_juice > away_juice
    pct = public_percentage(max(home_juice, away_juice))

    return [
        PublicMoneySignal(
            market="spread",
            public_side=game.home_team if public_is_home else game.away_team,
            public_pct=pct,
            contrarian_side=game.away_team if public_is_home else game.home_team,
            contrarian_pct=100 - pct,
        )
    ]
