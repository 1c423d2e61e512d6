"""Pydantic models for raw feed odds and normalized game lines.

Raw models mirror The Odds API response with ``oddsFormat=american``: every
price is an integer American price (e.g., -110, +150). Normalized models
are frozen; a NormalizedGame is built once per scan and only read afterwards.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Outcome(BaseModel):
    """Single betting outcome as quoted by one book.

    Prices are stored as quoted. A price strictly between -100 and +100 is
    not American odds; the normalizer drops the line carrying it and keeps
    the rest of the game.

    Attributes:
        name: Outcome identifier (team name, "Over", "Under")
        price: American odds (e.g., -110, +150)
        point: Point value for spreads/totals/props, None for h2h
        description: Player name for prop markets, None otherwise
    """

    name: str
    price: int
    point: float | None = None
    description: str | None = None

    @property
    def has_american_price(self) -> bool:
        return is_american_odds(self.price)


def is_american_odds(price: int) -> bool:
    """American odds have magnitude >= 100 by construction.

    Anything smaller is usually a decimal price sent with the wrong
    ``oddsFormat``, or one book's bad quote.
    """
    return not -100 < price < 100


class Market(BaseModel):
    """Betting market with outcomes.

    Attributes:
        key: Market identifier ("h2h", "spreads", "totals", or a prop market
            such as "player_points")
        outcomes: Quoted outcomes for this market
    """

    key: str
    outcomes: list[Outcome]


class BookmakerOdds(BaseModel):
    """Odds from a single sportsbook for a game.

    Attributes:
        key: Sportsbook identifier (e.g., "draftkings", "pinnacle")
        title: Display name (e.g., "DraftKings")
        markets: Quoted markets
        last_update: When these odds were last updated
    """

    key: str
    title: str = ""
    markets: list[Market] = []
    last_update: datetime | None = None


class RawGame(BaseModel):
    """One game from the odds feed across all sportsbooks.

    Attributes:
        id: Feed game/event identifier
        sport_key: Feed sport key (e.g., "basketball_nba")
        commence_time: Scheduled start
        home_team: Home team name
        away_team: Away team name
        bookmakers: Sportsbooks quoting this game
    """

    id: str
    sport_key: str
    commence_time: datetime
    home_team: str
    away_team: str
    bookmakers: list[BookmakerOdds] = []


class SpreadLine(BaseModel):
    """Both sides of one book's point spread."""

    model_config = ConfigDict(frozen=True)

    book: str
    is_sharp: bool
    home_point: float
    home_price: int
    away_point: float
    away_price: int


class TotalLine(BaseModel):
    """Both sides of one book's over/under."""

    model_config = ConfigDict(frozen=True)

    book: str
    is_sharp: bool
    point: float
    over_price: int
    under_price: int


class MoneylineLine(BaseModel):
    """Both sides of one book's moneyline."""

    model_config = ConfigDict(frozen=True)

    book: str
    is_sharp: bool
    home_price: int
    away_price: int


class GameInjury(BaseModel):
    """Injury attached to a game from the injury feed.

    Attributes:
        player: Player name
        team: Feed team name
        status: Feed status text (e.g., "Out", "Doubtful")
        impact: "high" for key positions, otherwise "medium"
    """

    model_config = ConfigDict(frozen=True)

    player: str
    team: str
    status: str
    impact: str


class NormalizedGame(BaseModel):
    """A game reduced to per-book lines for each market.

    Attributes:
        sport: Sport label (e.g., "NBA")
        emoji: Sport emoji for display
        game_id: Stable identifier ``{sport}_{home}_{away}`` without whitespace
        game: Display string ``"{away} @ {home}"``
        home_team: Home team name
        away_team: Away team name
        commence_time: Scheduled start
        spread_lines: One SpreadLine per book with both sides quoted
        total_lines: One TotalLine per book with both sides quoted
        ml_lines: One MoneylineLine per book with both sides quoted
        injuries: Significant injuries from the injury feed (may be empty)
    """

    model_config = ConfigDict(frozen=True)

    sport: str
    emoji: str
    game_id: str
    game: str
    home_team: str
    away_team: str
    commence_time: datetime
    spread_lines: tuple[SpreadLine, ...] = ()
    total_lines: tuple[TotalLine, ...] = ()
    ml_lines: tuple[MoneylineLine, ...] = ()
    injuries: tuple[GameInjury, ...] = ()
