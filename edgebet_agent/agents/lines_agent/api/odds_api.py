"""The Odds API client for fetching per-sport betting odds.

Async client for The Odds API v4 (https://the-odds-api.com) with retry on
transient transport errors, credit tracking from response headers, and
per-sportsbook coverage metrics. Odds are always requested in American format.
"""

import time
from datetime import datetime

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from edgebet_agent.agents.lines_agent.models import RawGame
from edgebet_agent.config import get_settings
from edgebet_agent.monitoring import SportsbookMetrics, get_logger

log = get_logger()

LOW_CREDIT_THRESHOLD = 50


class OddsAPIClient:
    """Async client for The Odds API.

    Attributes:
        remaining_credits: API credits remaining (from last response)
        used_credits: API credits used this month (from last response)
        sportsbook_metrics: Book key -> SportsbookMetrics for the last slate
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        sharp_books: set[str] | None = None,
    ) -> None:
        """Initialize the Odds API client.

        Args:
            api_key: API key. Defaults to the EDGEBET_ODDS_API_KEY setting.
            base_url: API root. Defaults to the configured base URL.
            timeout: Per-request timeout in seconds.
            sharp_books: Book keys flagged as sharp in coverage metrics.

        Raises:
            ValueError: If no API key is provided or configured.
        """
        settings = get_settings()

        self.api_key = api_key or settings.odds_api_key
        if not self.api_key:
            raise ValueError(
                "EDGEBET_ODDS_API_KEY not configured. "
                "Set it in .env or pass api_key parameter."
            )

        self.base_url = (base_url or settings.odds_api_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.regions = settings.odds_regions
        self.sharp_books = sharp_books if sharp_books is not None else settings.sharp_books

        self.remaining_credits: int | None = None
        self.used_credits: int | None = None
        self.sportsbook_metrics: dict[str, SportsbookMetrics] = {}

    async def _get(self, path: str, params: dict) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}{path}",
                params={"apiKey": self.api_key, **params},
            )
            response.raise_for_status()

        self._track_credits(response)
        return response

    def _track_credits(self, response: httpx.Response) -> None:
        remaining = response.headers.get("x-requests-remaining")
        used = response.headers.get("x-requests-used")
        if remaining:
            self.remaining_credits = int(float(remaining))
        if used:
            self.used_credits = int(float(used))

        if self.remaining_credits is not None and self.remaining_credits < LOW_CREDIT_THRESHOLD:
            log.warning(
                "low_api_credits",
                remaining=self.remaining_credits,
                message="Consider reducing scan frequency",
            )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
    )
    async def get_sport_odds(
        self,
        sport_key: str,
        markets: str = "spreads,totals,h2h",
    ) -> list[RawGame]:
        """Fetch current odds for one sport.

        Games that fail validation are skipped with a warning; the rest of
        the slate is still returned.

        Args:
            sport_key: Odds API sport key (e.g., "basketball_nba")
            markets: Comma-separated market keys

        Returns:
            List of RawGame objects, one per game.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            tenacity.RetryError: If transport errors persist after 3 attempts.
        """
        start_time = time.perf_counter()
        log.info("odds_api_request_started", sport=sport_key, markets=markets)

        response = await self._get(
            f"/sports/{sport_key}/odds",
            {"regions": self.regions, "markets": markets, "oddsFormat": "american"},
        )

        games: list[RawGame] = []
        for game_data in response.json():
            try:
                games.append(RawGame.model_validate(game_data))
            except ValidationError as e:
                log.warning(
                    "odds_api_game_skipped",
                    sport=sport_key,
                    game_id=game_data.get("id") if isinstance(game_data, dict) else None,
                    error_count=e.error_count(),
                )

        self.update_sportsbook_metrics(games)

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        log.info(
            "odds_api_request_completed",
            sport=sport_key,
            game_count=len(games),
            duration_ms=duration_ms,
            credits_remaining=self.remaining_credits,
        )
        return games

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
    )
    async def get_events(self, sport_key: str) -> list[dict]:
        """List upcoming events for a sport (id, teams, commence time)."""
        response = await self._get(f"/sports/{sport_key}/events", {})
        return response.json()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
    )
    async def get_event_props(
        self, sport_key: str, event_id: str, markets: list[str]
    ) -> RawGame:
        """Fetch player-prop markets for one event."""
        response = await self._get(
            f"/sports/{sport_key}/events/{event_id}/odds",
            {
                "regions": self.regions,
                "markets": ",".join(markets),
                "oddsFormat": "american",
            },
        )
        return RawGame.model_validate(response.json())

    def update_sportsbook_metrics(self, games: list[RawGame]) -> None:
        """Recompute per-book coverage over a slate.

        Called per response, and again by the Lines Agent over the merged
        slate of every sport in a scan.

        Args:
            games: Games to measure coverage across
        """
        if not games:
            self.sportsbook_metrics = {}
            return

        total_games = len(games)
        book_game_counts: dict[str, int] = {}
        book_markets: dict[str, set[str]] = {}
        book_last_update: dict[str, datetime] = {}

        for game in games:
            for bookmaker in game.bookmakers:
                book_key = bookmaker.key
                book_game_counts[book_key] = book_game_counts.get(book_key, 0) + 1
                book_markets.setdefault(book_key, set()).update(
                    market.key for market in bookmaker.markets
                )
                if bookmaker.last_update:
                    previous = book_last_update.get(book_key)
                    if previous is None or bookmaker.last_update > previous:
                        book_last_update[book_key] = bookmaker.last_update

        self.sportsbook_metrics = {
            book_key: SportsbookMetrics(
                name=book_key,
                games_with_odds=game_count,
                markets_available=sorted(book_markets.get(book_key, set())),
                last_seen=book_last_update.get(book_key),
                availability_pct=round((game_count / total_games) * 100, 1),
                is_sharp=book_key in self.sharp_books,
            )
            for book_key, game_count in book_game_counts.items()
        }

        if not any(metrics.is_sharp for metrics in self.sportsbook_metrics.values()):
            log.warning(
                "no_sharp_books_quoted",
                available=sorted(self.sportsbook_metrics),
            )

    def get_sportsbook_metrics(self) -> dict:
        """Current sportsbook metrics keyed by book, as plain dicts."""
        return {name: metrics.to_dict() for name, metrics in self.sportsbook_metrics.items()}
