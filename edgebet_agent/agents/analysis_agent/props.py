"""Player prop aggregation and ranking.

Prop markets are softer than sides and totals, so the signal is simple: how
far the best price on offer sits from the cross-book average for the same
player, market, side and line.
"""

import asyncio
from dataclasses import dataclass, field

import httpx
from tenacity import RetryError

from edgebet_agent.agents.analysis_agent.vig_removal import average, implied_probability
from edgebet_agent.agents.lines_agent.api.odds_api import OddsAPIClient
from edgebet_agent.agents.lines_agent.models import RawGame
from edgebet_agent.agents.lines_agent.normalizer import format_american_odds
from edgebet_agent.cache import FeedCache
from edgebet_agent.config import PROP_MARKETS, Settings, SportConfig, get_settings
from edgebet_agent.monitoring import get_logger

log = get_logger()

MIN_PROP_BOOKS = 2
MAX_PROP_CONFIDENCE = 85


@dataclass(frozen=True)
class BookPrice:
    book: str
    price: int


@dataclass
class PlayerProp:
    """One player/market/side/line quoted by one or more books."""

    id: str
    sport: str
    emoji: str
    game: str
    player: str
    market: str
    side: str
    line: float | None
    books: list[BookPrice] = field(default_factory=list)

    @property
    def best_price(self) -> int:
        return max(b.price for b in self.books)


@dataclass(frozen=True)
class PropOpportunity:
    """A ranked prop.

    Attributes:
        prop: Aggregated prop
        edge: |implied(mean price) - implied(best price)| in percentage points
        confidence: min(85, 55 + 2 * edge)
        best_book: Book offering the best price
        best_odds: Formatted best price
    """

    prop: PlayerProp
    edge: float
    confidence: float
    best_book: str
    best_odds: str

    @property
    def description(self) -> str:
        line = f" {self.prop.line:g}" if self.prop.line is not None else ""
        return f"{self.prop.player} {self.prop.side}{line} {self.prop.market}"


def parse_props(event: RawGame, sport_label: str, emoji: str) -> list[PlayerProp]:
    """Group an event's prop outcomes across books.

    Outcomes without a player description, or with a price that is not
    American odds, are ignored.
    """
    game = f"{event.away_team} @ {event.home_team}"
    props: dict[tuple, PlayerProp] = {}

    for bookmaker in event.bookmakers:
        for market in bookmaker.markets:
            for outcome in market.outcomes:
                if not outcome.description or not outcome.has_american_price:
                    continue
                key = (outcome.description, market.key, outcome.name, outcome.point)
                prop = props.get(key)
                if prop is None:
                    prop_id = "_".join(
                        f"{sport_label}_{outcome.description}_{market.key}_{outcome.name}_{outcome.point}".split()
                    )
                    prop = PlayerProp(
                        id=prop_id,
                        sport=sport_label,
                        emoji=emoji,
                        game=game,
                        player=outcome.description,
                        market=market.key,
                        side=outcome.name,
                        line=outcome.point,
                    )
                    props[key] = prop
                prop.books.append(BookPrice(book=bookmaker.key, price=outcome.price))

    return list(props.values())


def analyze_props(props: list[PlayerProp], top_n: int = 10) -> list[PropOpportunity]:
    """Score props quoted by at least two books and keep the top N by edge."""
    opportunities: list[PropOpportunity] = []
    for prop in props:
        if len(prop.books) < MIN_PROP_BOOKS:
            continue
        best = max(prop.books, key=lambda b: b.price)
        mean_price = average(b.price for b in prop.books)
        edge = abs(implied_probability(mean_price) - implied_probability(best.price)) * 100
        opportunities.append(
            PropOpportunity(
                prop=prop,
                edge=round(edge, 1),
                confidence=min(MAX_PROP_CONFIDENCE, 55 + edge * 2),
                best_book=best.book,
                best_odds=format_american_odds(best.price),
            )
        )

    opportunities.sort(key=lambda o: o.edge, reverse=True)
    return opportunities[:top_n]


async def collect_props(
    sport: SportConfig,
    settings: Settings | None = None,
    client: OddsAPIClient | None = None,
    cache: FeedCache | None = None,
) -> dict:
    """Fetch prop markets for a sport's next events.

    Returns:
        Dict with ``props`` (list of PlayerProp) and ``errors``. A failed
        event is skipped; a failed event listing yields no props.
    """
    settings = settings or get_settings()
    result: dict = {"props": [], "errors": []}

    markets = PROP_MARKETS.get(sport.key)
    if not markets:
        result["errors"].append(f"Props: no prop markets configured for {sport.label}")
        return result

    if client is None:
        try:
            client = OddsAPIClient(sharp_books=settings.sharp_books)
        except ValueError as e:
            result["errors"].append(f"Props: {e}")
            return result

    cache_key = f"props:{sport.key}"
    cached = await cache.get(cache_key, "props") if cache else None
    if cached is not None and not cached.is_stale:
        events = [RawGame.model_validate(e) for e in cached.data["events"]]
    else:
        try:
            listing = await client.get_events(sport.key)
        except (httpx.HTTPError, RetryError) as e:
            log.warning("props_events_failed", sport=sport.key, error=str(e))
            result["errors"].append(f"Props: {sport.label} event listing failed")
            if cached is None:
                return result
            listing = []

        events = []
        for event in listing[: settings.prop_events_per_sport]:
            try:
                events.append(await client.get_event_props(sport.key, event["id"], markets))
            except (httpx.HTTPError, RetryError, asyncio.TimeoutError) as e:
                log.warning("props_event_failed", sport=sport.key, event_id=event.get("id"), error=str(e))
                result["errors"].append(f"Props: {sport.label} event {event.get('id')} failed")

        if events and cache:
            await cache.set(cache_key, {"events": [e.model_dump(mode="json") for e in events]}, "props")
        elif not events and cached is not None:
            events = [RawGame.model_validate(e) for e in cached.data["events"]]

    for event in events:
        result["props"].extend(parse_props(event, sport.label, sport.emoji))

    log.info("props_collected", sport=sport.key, events=len(events), props=len(result["props"]))
    return result
