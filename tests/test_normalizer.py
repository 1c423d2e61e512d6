"""Tests for raw feed validation and line normalization."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from edgebet_agent.agents.lines_agent.models import BookmakerOdds, Market, Outcome, RawGame
from edgebet_agent.agents.lines_agent.normalizer import (
    format_american_odds,
    format_point,
    make_game_id,
    normalize_game,
)

HOME = "Boston Celtics"
AWAY = "Miami Heat"


def _book(key: str, *markets: Market) -> BookmakerOdds:
    return BookmakerOdds(key=key, title=key.title(), markets=list(markets))


def _spreads(home_point: float, home_price: int, away_point: float, away_price: int) -> Market:
    return Market(
        key="spreads",
        outcomes=[
            Outcome(name=HOME, price=home_price, point=home_point),
            Outcome(name=AWAY, price=away_price, point=away_point),
        ],
    )


def _h2h(home_price: int, away_price: int) -> Market:
    return Market(key="h2h", outcomes=[Outcome(name=HOME, price=home_price), Outcome(name=AWAY, price=away_price)])


def _totals(point: float, over: int, under: int) -> Market:
    return Market(
        key="totals",
        outcomes=[Outcome(name="Over", price=over, point=point), Outcome(name="Under", price=under, point=point)],
    )


def _raw(*bookmakers: BookmakerOdds) -> RawGame:
    return RawGame(
        id="evt1",
        sport_key="basketball_nba",
        commence_time=datetime(2026, 10, 20, 23, 30, tzinfo=timezone.utc),
        home_team=HOME,
        away_team=AWAY,
        bookmakers=list(bookmakers),
    )


class TestOutcomeValidation:
    """American odds checks on raw outcomes."""

    @pytest.mark.parametrize("price", [-110, 150, -100, 100, -10000])
    def test_accepts_american_odds(self, price):
        outcome = Outcome(name=HOME, price=price)
        assert outcome.price == price
        assert outcome.has_american_price is True

    @pytest.mark.parametrize("price", [50, -99, 0])
    def test_prices_inside_the_gap_kept_but_flagged(self, price):
        """A bad quote parses so the rest of the game survives."""
        outcome = Outcome(name=HOME, price=price)
        assert outcome.price == price
        assert outcome.has_american_price is False

    def test_rejects_decimal_odds(self):
        with pytest.raises(ValidationError):
            Outcome(name=HOME, price=1.91)


class TestNormalizeGame:
    """Tests for normalize_game."""

    def test_pairs_both_sides_per_book(self):
        raw = _raw(
            _book("draftkings", _spreads(-6.5, -110, 6.5, -110), _h2h(-240, 195), _totals(221.5, -110, -110)),
            _book("pinnacle", _spreads(-7.5, -115, 7.5, -105)),
        )

        game = normalize_game(raw, "NBA", "🏀")

        assert game.game_id == "NBA_Boston_Celtics_Miami_Heat"
        assert game.game == "Miami Heat @ Boston Celtics"
        assert [(l.book, l.is_sharp, l.away_point, l.away_price) for l in game.spread_lines] == [
            ("draftkings", False, 6.5, -110),
            ("pinnacle", True, 7.5, -105),
        ]
        assert game.ml_lines[0].home_price == -240
        assert game.ml_lines[0].away_price == 195
        assert game.total_lines[0].point == 221.5

    def test_one_sided_quotes_dropped(self):
        """A book quoting only one side of a market contributes nothing to it."""
        partial = Market(key="spreads", outcomes=[Outcome(name=HOME, price=-110, point=-6.5)])
        raw = _raw(_book("draftkings", partial, _h2h(-240, 195)))

        game = normalize_game(raw, "NBA", "🏀")

        assert game.spread_lines == ()
        assert len(game.ml_lines) == 1

    def test_bad_price_drops_only_that_line(self):
        """One book quoting +50 loses that spread; the game and other books stay."""
        raw = _raw(
            _book("draftkings", _spreads(-6.5, -110, 6.5, -110)),
            _book("weirdbook", _spreads(-6.5, 50, 6.5, -110), _h2h(-240, 195)),
            _book("pinnacle", _spreads(-7.5, -115, 7.5, -105)),
        )

        game = normalize_game(raw, "NBA", "🏀")

        assert game.game_id == "NBA_Boston_Celtics_Miami_Heat"
        assert [l.book for l in game.spread_lines] == ["draftkings", "pinnacle"]
        assert [l.book for l in game.ml_lines] == ["weirdbook"]

    def test_bad_moneyline_price_dropped(self):
        raw = _raw(
            _book("draftkings", _h2h(-240, 195)),
            _book("fanduel", _h2h(-240, -99)),
        )

        game = normalize_game(raw, "NBA", "🏀")

        assert [l.book for l in game.ml_lines] == ["draftkings"]

    def test_bad_total_price_dropped(self):
        raw = _raw(_book("draftkings", _totals(221.5, -110, 0)))
        assert normalize_game(raw, "NBA", "🏀").total_lines == ()

    def test_spread_without_points_dropped(self):
        market = Market(key="spreads", outcomes=[Outcome(name=HOME, price=-110), Outcome(name=AWAY, price=-110)])
        game = normalize_game(_raw(_book("draftkings", market)), "NBA", "🏀")
        assert game.spread_lines == ()

    def test_custom_sharp_books(self):
        raw = _raw(_book("draftkings", _spreads(-6.5, -110, 6.5, -110)))
        game = normalize_game(raw, "NBA", "🏀", sharp_books={"draftkings"})
        assert game.spread_lines[0].is_sharp is True

    def test_prop_markets_ignored(self):
        props = Market(key="player_points", outcomes=[Outcome(name="Over", price=-115, point=24.5, description="Jayson Tatum")])
        game = normalize_game(_raw(_book("draftkings", props)), "NBA", "🏀")
        assert (game.spread_lines, game.total_lines, game.ml_lines) == ((), (), ())

    def test_normalized_game_is_frozen(self):
        game = normalize_game(_raw(), "NBA", "🏀")
        with pytest.raises(ValidationError):
            game.sport = "NFL"


class TestFormatting:
    """Tests for display helpers."""

    @pytest.mark.parametrize("odds,expected", [(150, "+150"), (-110, "-110"), (100, "+100")])
    def test_format_american_odds(self, odds, expected):
        assert format_american_odds(odds) == expected

    @pytest.mark.parametrize("point,expected", [(3.5, "+3.5"), (-7.0, "-7"), (0.0, "0"), (8.0, "+8")])
    def test_format_point(self, point, expected):
        assert format_point(point) == expected

    def test_game_id_strips_whitespace(self):
        assert make_game_id("NBA", "Los Angeles  Lakers", "Miami Heat") == "NBA_Los_Angeles_Lakers_Miami_Heat"
