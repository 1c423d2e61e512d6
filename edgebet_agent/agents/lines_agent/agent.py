"""Lines Agent - fetches and normalizes odds for every configured sport.

Entry points:
- collect_odds: async fan-out over sports, merged into one normalized slate
- lines_agent_impl: sync wrapper for LangGraph node execution

Each sport is fetched independently with a bounded timeout. A sport that
fails, times out, or returns a non-success status contributes zero games and
an error message; it never fails the whole scan. A circuit breaker stops
hammering the feed after repeated failures.
"""

import asyncio
import concurrent.futures

import httpx
from circuitbreaker import CircuitBreakerError, circuit
from tenacity import RetryError

from edgebet_agent.agents.lines_agent.api.odds_api import OddsAPIClient
from edgebet_agent.agents.lines_agent.models import NormalizedGame, RawGame
from edgebet_agent.agents.lines_agent.normalizer import normalize_game
from edgebet_agent.cache import FeedCache
from edgebet_agent.config import Settings, SportConfig, get_settings
from edgebet_agent.monitoring import get_logger

log = get_logger()


class NoOddsDataError(RuntimeError):
    """Raised when every sport returned zero games.

    Distinct from a computation fault: the feed had nothing to score.
    """


ODDS_CIRCUIT = "odds_feed"


# Opens after 5 consecutive failures, retries the feed after 2 minutes
@circuit(failure_threshold=5, recovery_timeout=120, name=ODDS_CIRCUIT)
async def fetch_sport_odds(
    client: OddsAPIClient, sport_key: str, markets: str, timeout: float
) -> list[RawGame]:
    """Fetch one sport's odds with circuit breaker protection.

    The timeout is enforced inside the circuit, so a feed that keeps timing
    out opens it like any other failure.

    Raises:
        CircuitBreakerError: If the circuit is open due to repeated failures
        asyncio.TimeoutError: If the fetch, retries included, exceeds ``timeout``
    """
    return await asyncio.wait_for(client.get_sport_odds(sport_key, markets=markets), timeout=timeout)


def _game_matches_teams(game: RawGame, teams: list[str]) -> bool:
    game_teams = {game.home_team.lower(), game.away_team.lower()}
    return any(any(t.lower() in name for name in game_teams) for t in teams)


async def _fetch_sport(
    client: OddsAPIClient,
    sport: SportConfig,
    settings: Settings,
    cache: FeedCache | None,
) -> tuple[list[RawGame], str | None]:
    """Fetch one sport, returning (games, error message or None).

    Fresh cache entries short-circuit the request; stale entries are only
    used when the live fetch fails.
    """
    cache_key = f"odds:{sport.key}:{settings.odds_markets}"
    cached = await cache.get(cache_key, "odds") if cache else None
    if cached is not None and not cached.is_stale:
        return [RawGame.model_validate(g) for g in cached.data["games"]], None

    error: str
    try:
        games = await fetch_sport_odds(
            client, sport.key, settings.odds_markets, settings.sport_fetch_timeout
        )
        if cache:
            await cache.set(
                cache_key,
                {"games": [g.model_dump(mode="json") for g in games]},
                "odds",
            )
        return games, None

    except CircuitBreakerError:
        error = f"Lines Agent: {sport.label} skipped, circuit breaker open"
    except asyncio.TimeoutError:
        error = f"Lines Agent: {sport.label} timed out after {settings.sport_fetch_timeout:g}s"
    except httpx.HTTPStatusError as e:
        error = f"Lines Agent: {sport.label} HTTP {e.response.status_code}"
    except RetryError as e:
        error = f"Lines Agent: {sport.label} network error after retries ({e.last_attempt.exception()})"
    except Exception as e:
        error = f"Lines Agent: {sport.label} {type(e).__name__}: {e}"

    log.warning("sport_fetch_failed", sport=sport.key, error=error)

    if cached is not None:
        log.info("sport_fetch_using_stale_cache", sport=sport.key)
        return [RawGame.model_validate(g) for g in cached.data["games"]], f"{error} (using stale odds)"

    return [], error


async def collect_odds(
    sports: list[SportConfig] | None = None,
    teams: list[str] | None = None,
    settings: Settings | None = None,
    client: OddsAPIClient | None = None,
    cache: FeedCache | None = None,
) -> dict:
    """Fetch every sport concurrently and normalize the merged slate.

    Args:
        sports: Sports to scan (defaults to configured sports)
        teams: Optional team-name substrings to keep (empty = all games)
        settings: Settings override (defaults to get_settings())
        client: Odds client override (built from settings if omitted)
        cache: Optional feed cache

    Returns:
        Dict with keys:
        - games: list of NormalizedGame, in sport order then feed order
        - errors: list of error/warning messages
        - sources_succeeded: sport labels that returned data
        - sources_failed: sport labels that failed
        - sportsbook_metrics: per-book coverage dicts across every fetched sport
    """
    settings = settings or get_settings()
    sports = sports if sports is not None else settings.sports

    result: dict = {
        "games": [],
        "errors": [],
        "sources_succeeded": [],
        "sources_failed": [],
        "sportsbook_metrics": {},
    }

    if client is None:
        try:
            client = OddsAPIClient(sharp_books=settings.sharp_books)
        except ValueError as e:
            result["errors"].append(f"Lines Agent: {e}")
            result["sources_failed"].extend(s.label for s in sports)
            return result

    fetched = await asyncio.gather(
        *(_fetch_sport(client, sport, settings, cache) for sport in sports)
    )

    games: list[NormalizedGame] = []
    slate: list[RawGame] = []
    for sport, (raw_games, error) in zip(sports, fetched):
        if error:
            result["errors"].append(error)
        if error and not raw_games:
            result["sources_failed"].append(sport.label)
            continue
        result["sources_succeeded"].append(sport.label)
        slate.extend(raw_games)

        kept = [g for g in raw_games if not teams or _game_matches_teams(g, teams)]
        for raw in kept[: settings.games_per_sport]:
            games.append(
                normalize_game(raw, sport.label, sport.emoji, sharp_books=settings.sharp_books)
            )

    result["games"] = games
    # Per-sport fetches share the client; coverage is measured over every sport
    client.update_sportsbook_metrics(slate)
    result["sportsbook_metrics"] = client.get_sportsbook_metrics()

    log.info(
        "lines_agent_completed",
        game_count=len(games),
        sports_succeeded=len(result["sources_succeeded"]),
        sports_failed=len(result["sources_failed"]),
    )
    return result


def run_sync(coro):
    """Run a coroutine from sync code, even when an event loop is running."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(asyncio.run, coro).result()
    return asyncio.run(coro)


def lines_agent_impl(state: dict) -> dict:
    """Lines Agent implementation for the LangGraph node.

    Args:
        state: Current workflow state dict (reads ``sports`` and ``teams``)

    Returns:
        Partial state update with ``games``, ``sources_failed`` and ``errors``.
    """
    settings = get_settings()
    sport_keys = state.get("sports") or []
    if sport_keys:
        sports = [s for s in (settings.sport_by_key(k) for k in sport_keys) if s is not None]
    else:
        sports = settings.sports

    cache = FeedCache(settings.cache_dir) if settings.cache_enabled else None
    try:
        result = run_sync(
            collect_odds(sports=sports, teams=state.get("teams", []), settings=settings, cache=cache)
        )
    finally:
        if cache:
            cache.close()

    return {
        "games": result["games"],
        "sources_failed": result["sources_failed"],
        "errors": result["errors"],
    }
