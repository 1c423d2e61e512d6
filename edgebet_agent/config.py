"""Configuration management for EdgeBet Agent.

Settings are loaded from environment variables (prefix ``EDGEBET_``) and an
optional ``.env`` file using pydantic-settings. API keys are optional so the
scoring core can run against fixtures without any credentials.
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SportConfig(BaseModel):
    """One sport scanned by the odds feed.

    Attributes:
        key: Odds API sport key (e.g., "basketball_nba")
        label: Short display label (e.g., "NBA")
        emoji: Display emoji
        injury_sport: SportsDataIO sport path for injuries, None if unsupported
    """

    key: str
    label: str
    emoji: str
    injury_sport: str | None = None


DEFAULT_SPORTS = [
    SportConfig(key="basketball_nba", label="NBA", emoji="🏀", injury_sport="nba"),
    SportConfig(key="americanfootball_nfl", label="NFL", emoji="🏈", injury_sport="nfl"),
    SportConfig(key="icehockey_nhl", label="NHL", emoji="🏒", injury_sport="nhl"),
    SportConfig(key="basketball_ncaab", label="NCAAB", emoji="🎓", injury_sport=None),
    SportConfig(key="baseball_mlb", label="MLB", emoji="⚾", injury_sport="mlb"),
]

# Low-vig / professional books whose lines are treated as sharp
DEFAULT_SHARP_BOOKS = {"pinnacle", "betcris", "betonlineag", "bovada", "lowvig"}

PROP_MARKETS = {
    "basketball_nba": [
        "player_points",
        "player_rebounds",
        "player_assists",
        "player_threes",
        "player_blocks",
        "player_steals",
    ],
    "americanfootball_nfl": [
        "player_pass_tds",
        "player_pass_yds",
        "player_rush_yds",
        "player_receptions",
        "player_receiving_yds",
    ],
    "icehockey_nhl": ["player_goals", "player_assists", "player_points", "player_shots_on_goal"],
    "baseball_mlb": ["player_hits", "player_runs", "player_rbis", "player_home_runs"],
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Optional secrets:
    - EDGEBET_ODDS_API_KEY: The Odds API key (scans return no data without it)
    - EDGEBET_SPORTSDATA_API_KEY: SportsDataIO key (injury feed disabled without it)

    Everything else has a default suitable for local runs.
    """

    odds_api_key: str = Field(default="", description="The Odds API key")
    odds_api_base_url: str = Field(default="https://api.the-odds-api.com/v4")
    odds_regions: str = Field(default="us")
    odds_markets: str = Field(default="spreads,totals,h2h")

    sportsdata_api_key: str = Field(default="", description="SportsDataIO key for injury reports")
    sportsdata_base_url: str = Field(default="https://api.sportsdata.io/v3")

    sports: list[SportConfig] = Field(default_factory=lambda: list(DEFAULT_SPORTS))
    sharp_books: set[str] = Field(default_factory=lambda: set(DEFAULT_SHARP_BOOKS))

    # Fetch limits
    request_timeout: float = Field(default=8.0, gt=0, le=60)
    sport_fetch_timeout: float = Field(
        default=20.0,
        gt=0,
        le=120,
        description="Upper bound for one sport's fetch including retries",
    )
    injury_timeout: float = Field(default=5.0, gt=0, le=60)
    games_per_sport: int = Field(default=8, ge=1, le=50)
    prop_events_per_sport: int = Field(default=5, ge=1, le=20)

    # Ranking
    top_n: int = Field(default=10, ge=1, le=50)
    arbitrage_limit: int = Field(default=10, ge=1, le=100)

    # Cache
    cache_enabled: bool = Field(default=True)
    cache_dir: str = Field(default=".cache/edgebet")
    history_dir: str = Field(default=".cache/edgebet_history")

    log_mode: str = Field(default="development")

    model_config = SettingsConfigDict(
        env_prefix="EDGEBET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def sport_by_key(self, key: str) -> SportConfig | None:
        """Look up a configured sport by Odds API key or label."""
        key_lower = key.lower()
        for sport in self.sports:
            if sport.key == key_lower or sport.label.lower() == key_lower:
                return sport
        return None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (singleton).

    Returns:
        Settings instance with validated configuration
    """
    return Settings()
