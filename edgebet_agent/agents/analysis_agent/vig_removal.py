"""Implied probability and vig removal for American odds.

Uses the margin-proportional method:
1. Convert both sides' American odds to implied probabilities
2. Sum them (> 1.0 because of the bookmaker's vig)
3. Divide each by the sum so the pair sums to exactly 1.0

Example:
    Standard -110/-110 line:
    - Implied probs: [0.5238, 0.5238] = 104.76% (4.76% vig)
    - Fair probs: [0.50, 0.50]

Devigging is applied to averaged (consensus) prices across books. Devigging a
single book only strips that book's own margin.
"""

import math
from collections.abc import Iterable


def implied_probability(odds: float) -> float:
    """Convert American odds to implied probability (vig included).

    Args:
        odds: American odds (e.g., -110, +150)

    Returns:
        Probability in [0, 1]

    Examples:
        >>> round(implied_probability(-110), 4)
        0.5238
        >>> implied_probability(150)
        0.4
    """
    if odds > 0:
        return 100 / (odds + 100)
    return abs(odds) / (abs(odds) + 100)


def devig(price1: float, price2: float) -> tuple[float, float]:
    """Remove the vig from a two-way market.

    Args:
        price1: American odds for side 1
        price2: American odds for side 2

    Returns:
        Tuple of fair probabilities (side1, side2) summing to 1.0

    Raises:
        ValueError: If the implied probabilities sum to zero

    Example:
        >>> devig(-110, -110)
        (0.5, 0.5)
    """
    ip1 = implied_probability(price1)
    ip2 = implied_probability(price2)
    total = ip1 + ip2
    if total <= 0:
        raise ValueError(f"Cannot devig prices {price1}/{price2}: zero total probability.")
    return ip1 / total, ip2 / total


def get_market_vig(price1: float, price2: float) -> float:
    """Bookmaker margin of a two-way market as a percentage.

    Example:
        >>> round(get_market_vig(-110, -110), 2)
        4.76
    """
    return (implied_probability(price1) + implied_probability(price2) - 1.0) * 100


def average(values: Iterable[float]) -> float:
    """Arithmetic mean.

    Raises:
        ValueError: If ``values`` is empty
    """
    values = list(values)
    if not values:
        raise ValueError("Cannot average an empty sequence.")
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Python's round() uses banker's rounding; scores and percentages here
    round .5 upwards.

    Examples:
        >>> round_half_up(62.5)
        63
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)
