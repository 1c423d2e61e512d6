"""Line movement agent: cross-book divergence on the spread.

There is no historical line feed, so "movement" is inferred from how far
books disagree on the away point right now, and from whether sharp books
sit on a different number than square books.
"""

from edgebet_agent.agents.analysis_agent.signals import LineMovementSignal, Strength
from edgebet_agent.agents.analysis_agent.vig_removal import average
from edgebet_agent.agents.lines_agent.models import NormalizedGame
from edgebet_agent.agents.lines_agent.normalizer import format_point

MIN_RANGE = 0.5
MIN_SHARP_DIFF = 0.5


def _range_strength(spread: float) -> Strength:
    if spread >= 1.5:
        return Strength.STRONG
    if spread >= 1:
        return Strength.MODERATE
    return Strength.WEAK


def detect_line_movement(game: NormalizedGame) -> list[LineMovementSignal]:
    """Detect spread divergence across books.

    Args:
        game: Normalized game

    Returns:
        Up to two signals: a line_range signal for the away side, then a
        sharp_vs_square signal naming the side sharp books favor.
    """
    signals: list[LineMovementSignal] = []
    lines = game.spread_lines
    if len(lines) < 2:
        return signals

    away_points = [l.away_point for l in lines]
    spread = max(away_points) - min(away_points)
    if spread >= MIN_RANGE:
        best = max(lines, key=lambda l: l.away_point)
        signals.append(
            LineMovementSignal(
                kind="line_range",
                side=game.away_team,
                strength=_range_strength(spread),
                best_line=format_point(best.away_point),
                best_book=best.book,
                spread=spread,
            )
        )

    sharp = [l for l in lines if l.is_sharp]
    square = [l for l in lines if not l.is_sharp]
    if sharp and square:
        diff = average(l.away_point for l in sharp) - average(l.away_point for l in square)
        if abs(diff) >= MIN_SHARP_DIFF:
            signals.append(
                LineMovementSignal(
                    kind="sharp_vs_square",
                    side=game.away_team if diff > 0 else game.home_team,
                    strength=Strength.STRONG if abs(diff) >= 1 else Strength.MODERATE,
                    diff=round(diff, 1),
                )
            )

    return signals
