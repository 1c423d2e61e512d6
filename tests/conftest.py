"""Shared pytest fixtures for EdgeBet agent tests.

Game fixtures are built so every signal they trigger can be checked by hand:

sharp_dog_game (Miami Heat @ Boston Celtics):
    draftkings  Heat +6.5 (+100) / Celtics -6.5 (-120)
    fanduel     Heat +6.5 (+100) / Celtics -6.5 (-120)
    pinnacle    Heat +8.0 (+170) / Celtics -8.0 (-210)   [sharp]

    consensus   away +123.33 -> 0.44776, home -150 -> 0.60000
    devigged    away 0.42735, home 0.57265
    value       away edge (0.42735 - 100/270) = 5.698 pts at +170
                home edge (0.57265 - 120/220) = 2.720 pts at -120
"""

from datetime import datetime, timezone

import pytest
from circuitbreaker import CircuitBreakerMonitor

from edgebet_agent.agents.lines_agent.agent import ODDS_CIRCUIT
from edgebet_agent.agents.lines_agent.models import (
    GameInjury,
    MoneylineLine,
    NormalizedGame,
    SpreadLine,
    TotalLine,
)
from edgebet_agent.agents.lines_agent.normalizer import make_game_id
from edgebet_agent.config import get_settings
from edgebet_agent.monitoring import configure_logging

SHARP = {"pinnacle", "lowvig"}


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Configure structlog for test output."""
    configure_logging("development")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Fresh settings per test: no API keys, no on-disk cache."""
    monkeypatch.setenv("EDGEBET_ODDS_API_KEY", "")
    monkeypatch.setenv("EDGEBET_SPORTSDATA_API_KEY", "")
    monkeypatch.setenv("EDGEBET_CACHE_ENABLED", "false")
    monkeypatch.setenv("EDGEBET_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("EDGEBET_HISTORY_DIR", str(tmp_path / "history"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def closed_odds_circuit():
    """Each test starts and ends with the odds feed circuit closed."""
    breaker = CircuitBreakerMonitor.get(ODDS_CIRCUIT)
    breaker.reset()
    yield
    breaker.reset()


def spread(book: str, away_point: float, away_price: int, home_price: int, home_point: float | None = None) -> SpreadLine:
    return SpreadLine(
        book=book,
        is_sharp=book in SHARP,
        home_point=-away_point if home_point is None else home_point,
        home_price=home_price,
        away_point=away_point,
        away_price=away_price,
    )


def moneyline(book: str, away_price: int, home_price: int) -> MoneylineLine:
    return MoneylineLine(book=book, is_sharp=book in SHARP, home_price=home_price, away_price=away_price)


def build_game(
    home: str = "Boston Celtics",
    away: str = "Miami Heat",
    sport: str = "NBA",
    spreads=(),
    moneylines=(),
    totals=(),
    injuries=(),
    commence_time: datetime | None = None,
) -> NormalizedGame:
    return NormalizedGame(
        sport=sport,
        emoji="🏀",
        game_id=make_game_id(sport, home, away),
        game=f"{away} @ {home}",
        home_team=home,
        away_team=away,
        commence_time=commence_time or datetime(2026, 10, 20, 23, 30, tzinfo=timezone.utc),
        spread_lines=tuple(spreads),
        total_lines=tuple(totals),
        ml_lines=tuple(moneylines),
        injuries=tuple(injuries),
    )


@pytest.fixture
def make_game():
    """Factory for NormalizedGame fixtures."""
    return build_game


@pytest.fixture
def sharp_dog_game():
    """Road underdog with a cheap sharp-book price and reverse line movement."""
    return build_game(
        spreads=[
            spread("draftkings", 6.5, 100, -120),
            spread("fanduel", 6.5, 100, -120),
            spread("pinnacle", 8.0, 170, -210),
        ],
        totals=[TotalLine(book="draftkings", is_sharp=False, point=221.5, over_price=-110, under_price=-110)],
    )


@pytest.fixture
def second_dog_game():
    """Same shape as sharp_dog_game with a smaller edge (away +160 at pinnacle).

    consensus away +120 -> 0.45455, home -146.67 -> 0.59459
    away edge (0.43326 - 100/260) = 4.864 pts
    """
    return build_game(
        home="Denver Nuggets",
        away="Utah Jazz",
        spreads=[
            spread("draftkings", 6.5, 100, -120),
            spread("fanduel", 6.5, 100, -120),
            spread("pinnacle", 8.0, 160, -200),
        ],
    )


@pytest.fixture
def flat_game():
    """Every book hangs the same -110/-110 number: no divergence at all."""
    return build_game(
        home="Chicago Bulls",
        away="New York Knicks",
        spreads=[
            spread("draftkings", 3.5, -110, -110),
            spread("fanduel", 3.5, -110, -110),
            spread("pinnacle", 3.5, -110, -110),
        ],
        moneylines=[
            moneyline("draftkings", 140, -160),
            moneyline("fanduel", 140, -160),
        ],
    )


@pytest.fixture
def conflicted_game():
    """Home value at one cheap book while every other agent backs the road team.

    draftkings  Kings +5.5 (+100) / Suns -5.5 (-105)
    fanduel     Kings +5.5 (+120) / Suns -5.5 (-150)
    betmgm      Kings +5.5 (+120) / Suns -5.5 (-150)
    pinnacle    Kings +7.0 (+130) / Suns -7.0 (-160)   [sharp]

    consensus   home -141.25 -> 0.58549, away +117.5 -> 0.45977
    devigged    home 0.56014, away 0.43986
    value       home edge (0.56014 - 105/205) = 4.794 pts at -105
                away edge (0.43986 - 100/230) = 0.508 pts (below threshold)
    opposition  line range 1.5 and sharp +1.5 on Kings, RLM on Kings,
                square juice 57% on Suns (public 65%), road dog Kings
    score       4.794 * 4.5 = 21.57 -> confidence 55, below the gate
    """
    return build_game(
        home="Phoenix Suns",
        away="Sacramento Kings",
        spreads=[
            spread("draftkings", 5.5, 100, -105),
            spread("fanduel", 5.5, 120, -150),
            spread("betmgm", 5.5, 120, -150),
            spread("pinnacle", 7.0, 130, -160),
        ],
    )


@pytest.fixture
def ml_value_game():
    """Away moneyline outlier at one book.

    consensus away +138.33 -> 0.41958, home -163.33 -> 0.62025
    devigged away 0.40351; best +175 -> 0.36364; edge 3.987 pts
    """
    return build_game(
        home="Toronto Raptors",
        away="Orlando Magic",
        moneylines=[
            moneyline("draftkings", 175, -210),
            moneyline("fanduel", 120, -140),
            moneyline("betmgm", 120, -140),
        ],
    )


@pytest.fixture
def injured_game():
    """Game carrying a high-impact injury from the feed."""
    return build_game(
        spreads=[spread("draftkings", 3.5, -110, -110), spread("fanduel", 3.5, -110, -110)],
        injuries=[GameInjury(player="Jimmy Butler", team="Heat", status="Out", impact="high")],
    )
