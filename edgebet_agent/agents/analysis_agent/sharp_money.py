"""Sharp money detection from cross-book spread data.

Two independent checks:

Reverse line movement (RLM): sharp books hang a bigger number on the away
side than square books do, while charging more juice on the home side. The
market is moving toward the away team despite the home side being priced
as the popular one, which is read as professional money on the away team.

Juice imbalance: across all books, one side of the spread carries
materially more implied probability than the other. The heavier side is
treated as the public side and the cheaper side as the sharp side.

Example:
    Sharp books: Heat +7.5 (-105) / Celtics -7.5 (-115)
    Square books: Heat +6.5 (-110) / Celtics -6.5 (-110)
    Sharp away point is 1.0 higher and sharp home juice is heavier: RLM on Heat.
"""

from edgebet_agent.agents.analysis_agent.signals import SharpMoneySignal, Strength
from edgebet_agent.agents.analysis_agent.vig_removal import average, implied_probability
from edgebet_agent.agents.lines_agent.models import NormalizedGame

RLM_POINT_GAP = 0.5
JUICE_IMBALANCE_THRESHOLD = 0.04
STRONG_JUICE_IMBALANCE = 0.07


def detect_sharp_money(game: NormalizedGame) -> list[SharpMoneySignal]:
    """Detect RLM and juice-imbalance signals on the spread.

    Args:
        game: Normalized game

    Returns:
        Signals in check order: RLM first (if any), then juice imbalance.
        Empty when fewer than two books quote the spread.
    """
    signals: list[SharpMoneySignal] = []
    lines = game.spread_lines
    if len(lines) < 2:
        return signals

    sharp = [l for l in lines if l.is_sharp]
    square = [l for l in lines if not l.is_sharp]

    if sharp and square:
        sharp_away = average(l.away_point for l in sharp)
        square_away = average(l.away_point for l in square)
        sharp_home_juice = average(implied_probability(l.home_price) for l in sharp)
        square_home_juice = average(implied_probability(l.home_price) for l in square)

        if sharp_away > square_away + RLM_POINT_GAP and sharp_home_juice > square_home_juice:
            signals.append(
                SharpMoneySignal(
                    kind="RLM",
                    sharp_side=game.away_team,
                    strength=Strength.STRONG,
                    rlm_detected=True,
                    description=(
                        f"Sharp books giving {game.away_team} "
                        f"{sharp_away - square_away:.1f} more points"
                    ),
                )
            )

    home_juice = average(implied_probability(l.home_price) for l in lines)
    away_juice = average(implied_probability(l.away_price) for l in lines)
    juice_diff = home_juice - away_juice

    if abs(juice_diff) > JUICE_IMBALANCE_THRESHOLD:
        public_is_home = juice_diff > 0
        public_side = game.home_team if public_is_home else game.away_team
        sharp_side = game.away_team if public_is_home else game.home_team
        signals.append(
            SharpMoneySignal(
                kind="juice_imbalance",
                sharp_side=sharp_side,
                strength=Strength.STRONG if abs(juice_diff) > STRONG_JUICE_IMBALANCE else Strength.MODERATE,
                rlm_detected=False,
                public_side=public_side,
                juice_diff=round(abs(juice_diff) * 100, 1),
                description=f"Public juiced on {public_side}, value on {sharp_side}",
            )
        )

    return signals
