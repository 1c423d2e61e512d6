"""SportsDataIO injuries client.

Endpoint: {base}/{sport}/scores/json/InjuriesByTeam?key=...

Response structure:
    [
      {
        "Name": "Celtics",
        "Injuries": [
          {"Name": "...", "Position": "PG", "Status": "Out",
           "Injury": "Ankle", "Updated": "2026-01-15T10:00:00"}
        ]
      }
    ]
"""

from datetime import datetime

import httpx
from tenacity import RetryError, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from edgebet_agent.agents.injury_agent.models import InjuryReport
from edgebet_agent.cache import FeedCache
from edgebet_agent.config import get_settings
from edgebet_agent.monitoring import get_logger

log = get_logger()


class SportsDataIOInjuriesClient:
    """Client for SportsDataIO injury reports.

    Uses httpx for async HTTP requests with retry on transport errors.
    Caches parsed reports (10-minute TTL, 1-hour stale window).
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        cache: FeedCache | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.sportsdata_api_key
        if not self.api_key:
            raise ValueError(
                "EDGEBET_SPORTSDATA_API_KEY not configured. "
                "Set it in .env to enable injury reports."
            )
        self.base_url = (base_url or settings.sportsdata_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.injury_timeout
        self._cache = cache

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
    )
    async def _fetch_injuries(self, sport: str) -> list:
        """Fetch raw injuries grouped by team.

        Raises:
            httpx.HTTPStatusError: On HTTP errors (4xx, 5xx)
            httpx.TransportError: On network errors (retried)
        """
        url = f"{self.base_url}/{sport}/scores/json/InjuriesByTeam"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url, params={"key": self.api_key})
            response.raise_for_status()
            return response.json()

    def _parse_injuries(self, data: list) -> list[InjuryReport]:
        now = datetime.now()
        injuries = []
        for team in data or []:
            team_name = team.get("Name") or ""
            for item in team.get("Injuries") or []:
                if not item.get("Name"):
                    continue
                injuries.append(
                    InjuryReport(
                        team=team_name,
                        player=item["Name"],
                        position=item.get("Position"),
                        status=item.get("Status") or "Unknown",
                        injury=item.get("Injury") or "Unknown",
                        updated=item.get("Updated"),
                        fetched_at=now,
                    )
                )
        return injuries

    async def get_injuries(self, sport: str) -> tuple[list[InjuryReport], list[str]]:
        """Get injury reports for a sport with cache fallback.

        Args:
            sport: SportsDataIO sport path (e.g., "nba", "nfl")

        Returns:
            Tuple of (list of InjuryReport, list of error/warning messages).
            Failures never raise; they yield an empty list and a message.
        """
        errors: list[str] = []
        cache_key = f"injuries:{sport}"

        cached = await self._cache.get(cache_key, "injuries") if self._cache else None
        if cached is not None and not cached.is_stale:
            return [InjuryReport.model_validate(i) for i in cached.data["injuries"]], errors

        try:
            data = await self._fetch_injuries(sport)
            injuries = self._parse_injuries(data)
            if self._cache:
                await self._cache.set(
                    cache_key,
                    {"injuries": [inj.model_dump(mode="json") for inj in injuries]},
                    "injuries",
                )
            log.info("injuries_fetched", sport=sport, count=len(injuries))
            return injuries, errors

        except httpx.HTTPStatusError as e:
            errors.append(f"Injury feed: {sport} HTTP {e.response.status_code}")
        except RetryError as e:
            errors.append(f"Injury feed: {sport} network error - {e.last_attempt.exception()}")
        except httpx.HTTPError as e:
            errors.append(f"Injury feed: {sport} network error - {e}")
        except Exception as e:
            errors.append(f"Injury feed: {sport} {type(e).__name__}: {e}")

        log.warning("injury_fetch_failed", sport=sport, error=errors[-1])

        if cached is not None:
            errors.append(f"Using stale injury data for {sport}")
            return [InjuryReport.model_validate(i) for i in cached.data["injuries"]], errors

        return [], errors
