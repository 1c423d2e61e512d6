"""Normalization of raw feed games into per-book line sets.

A RawGame carries every bookmaker's markets as loose outcome lists. The
normalizer pairs up both sides of each market per book:
- spreads: outcomes named after the home and away teams
- totals: outcomes named "Over" and "Under"
- h2h: outcomes named after the home and away teams

A book's line is kept only when both sides are present and both prices are
valid American odds; partial or malformed quotes are dropped without raising,
and the rest of the game is kept.
"""

from collections.abc import Collection, Iterable

from edgebet_agent.agents.lines_agent.models import (
    GameInjury,
    MoneylineLine,
    NormalizedGame,
    Outcome,
    RawGame,
    SpreadLine,
    TotalLine,
)
from edgebet_agent.config import DEFAULT_SHARP_BOOKS


def format_american_odds(odds: int) -> str:
    """Render American odds with an explicit sign for positive prices.

    Examples:
        >>> format_american_odds(150)
        '+150'
        >>> format_american_odds(-110)
        '-110'
    """
    return f"+{odds}" if odds > 0 else f"{odds}"


def format_point(point: float) -> str:
    """Render a spread point with an explicit sign (``+3.5``, ``-7``, ``0``)."""
    text = f"{point:g}"
    return f"+{text}" if point > 0 else text


def make_game_id(sport_label: str, home_team: str, away_team: str) -> str:
    """Build the stable game identifier ``{sport}_{home}_{away}``.

    Examples:
        >>> make_game_id("NBA", "Boston Celtics", "Miami Heat")
        'NBA_Boston_Celtics_Miami_Heat'
    """
    return "_".join(f"{sport_label}_{home_team}_{away_team}".split())


def _find_outcome(outcomes: list[Outcome], name: str) -> Outcome | None:
    for outcome in outcomes:
        if outcome.name == name:
            return outcome
    return None


def _both_sides(first: Outcome | None, second: Outcome | None) -> bool:
    """Both outcomes quoted with usable prices."""
    if first is None or second is None:
        return False
    return first.has_american_price and second.has_american_price


def normalize_game(
    raw: RawGame,
    sport_label: str,
    emoji: str,
    sharp_books: Collection[str] | None = None,
    injuries: Iterable[GameInjury] = (),
) -> NormalizedGame:
    """Normalize one raw game into spread, total, and moneyline line sets.

    Args:
        raw: Game from the odds feed
        sport_label: Display label for the sport (e.g., "NBA")
        emoji: Display emoji for the sport
        sharp_books: Book keys treated as sharp (defaults to the built-in set)
        injuries: Significant injuries already matched to this game

    Returns:
        Frozen NormalizedGame
    """
    if sharp_books is None:
        sharp_books = DEFAULT_SHARP_BOOKS

    spread_lines: list[SpreadLine] = []
    total_lines: list[TotalLine] = []
    ml_lines: list[MoneylineLine] = []

    for bookmaker in raw.bookmakers:
        is_sharp = bookmaker.key in sharp_books
        for market in bookmaker.markets:
            if market.key == "spreads":
                home = _find_outcome(market.outcomes, raw.home_team)
                away = _find_outcome(market.outcomes, raw.away_team)
                if not _both_sides(home, away) or home.point is None or away.point is None:
                    continue
                spread_lines.append(
                    SpreadLine(
                        book=bookmaker.key,
                        is_sharp=is_sharp,
                        home_point=home.point,
                        home_price=home.price,
                        away_point=away.point,
                        away_price=away.price,
                    )
                )
            elif market.key == "totals":
                over = _find_outcome(market.outcomes, "Over")
                under = _find_outcome(market.outcomes, "Under")
                if not _both_sides(over, under) or over.point is None:
                    continue
                total_lines.append(
                    TotalLine(
                        book=bookmaker.key,
                        is_sharp=is_sharp,
                        point=over.point,
                        over_price=over.price,
                        under_price=under.price,
                    )
                )
            elif market.key == "h2h":
                home = _find_outcome(market.outcomes, raw.home_team)
                away = _find_outcome(market.outcomes, raw.away_team)
                if not _both_sides(home, away):
                    continue
                ml_lines.append(
                    MoneylineLine(
                        book=bookmaker.key,
                        is_sharp=is_sharp,
                        home_price=home.price,
                        away_price=away.price,
                    )
                )

    return NormalizedGame(
        sport=sport_label,
        emoji=emoji,
        game_id=make_game_id(sport_label, raw.home_team, raw.away_team),
        game=f"{raw.away_team} @ {raw.home_team}",
        home_team=raw.home_team,
        away_team=raw.away_team,
        commence_time=raw.commence_time,
        spread_lines=tuple(spread_lines),
        total_lines=tuple(total_lines),
        ml_lines=tuple(ml_lines),
        injuries=tuple(injuries),
    )
