"""Injury Agent - gathers injury reports for every configured sport.

The injury feed is optional: without a SportsDataIO key the agent returns
no reports and the scoring core falls back to line-shape heuristics.
"""

import asyncio

from edgebet_agent.agents.injury_agent.models import InjuryReport
from edgebet_agent.agents.injury_agent.sportsdata_injuries import SportsDataIOInjuriesClient
from edgebet_agent.agents.lines_agent.agent import run_sync
from edgebet_agent.cache import FeedCache
from edgebet_agent.config import Settings, SportConfig, get_settings
from edgebet_agent.monitoring import get_logger

log = get_logger()


async def collect_injuries(
    sports: list[SportConfig] | None = None,
    settings: Settings | None = None,
    client: SportsDataIOInjuriesClient | None = None,
    cache: FeedCache | None = None,
) -> dict:
    """Fetch injuries for every sport that has an injury feed.

    Returns:
        Dict with keys:
        - injury_reports: sport label -> list of InjuryReport
        - errors: list of error/warning messages
    """
    settings = settings or get_settings()
    sports = sports if sports is not None else settings.sports
    result: dict = {"injury_reports": {}, "errors": []}

    supported = [s for s in sports if s.injury_sport]
    if not supported:
        return result

    if client is None:
        try:
            client = SportsDataIOInjuriesClient(cache=cache)
        except ValueError:
            log.info("injury_feed_disabled")
            return result

    fetched = await asyncio.gather(*(client.get_injuries(s.injury_sport) for s in supported))

    reports: dict[str, list[InjuryReport]] = {}
    for sport, (injuries, errors) in zip(supported, fetched):
        reports[sport.label] = injuries
        result["errors"].extend(errors)

    result["injury_reports"] = reports
    log.info(
        "injury_agent_completed",
        sports=len(supported),
        reports=sum(len(r) for r in reports.values()),
    )
    return result


def injury_agent_impl(state: dict) -> dict:
    """Injury Agent implementation for the LangGraph node.

    Returns:
        Partial state update with ``injury_reports`` and ``errors``.
    """
    settings = get_settings()
    sport_keys = state.get("sports") or []
    if sport_keys:
        sports = [s for s in (settings.sport_by_key(k) for k in sport_keys) if s is not None]
    else:
        sports = settings.sports

    cache = FeedCache(settings.cache_dir) if settings.cache_enabled else None
    try:
        result = run_sync(collect_injuries(sports=sports, settings=settings, cache=cache))
    finally:
        if cache:
            cache.close()
    return {"injury_reports": result["injury_reports"], "errors": result["errors"]}
