"""Metrics dataclasses for feed and cache observability.

- SportsbookMetrics: per-book coverage across a fetched slate
- CacheMetrics: hit/miss/stale counters for the feed cache

Usage:
    sm = SportsbookMetrics(name="pinnacle", games_with_odds=8, availability_pct=100.0)
    cm = CacheMetrics(hits=80, misses=15, stale_hits=5)
    cm.hit_rate  # 85.0
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SportsbookMetrics:
    """Coverage metrics for a single sportsbook.

    Attributes:
        name: Sportsbook identifier (e.g., "draftkings", "pinnacle")
        games_with_odds: Number of games quoted by this book
        markets_available: Market keys quoted (e.g., ["h2h", "spreads"])
        last_seen: Latest ``last_update`` timestamp reported for this book
        availability_pct: Share of fetched games quoted by this book
        is_sharp: Whether the book belongs to the configured sharp set
    """

    name: str
    games_with_odds: int = 0
    markets_available: list[str] = field(default_factory=list)
    last_seen: datetime | None = None
    availability_pct: float = 0.0
    is_sharp: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "games_with_odds": self.games_with_odds,
            "markets_available": self.markets_available,
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
            "availability_pct": self.availability_pct,
            "is_sharp": self.is_sharp,
        }


@dataclass
class CacheMetrics:
    """Track cache performance.

    Attributes:
        hits: Fresh cache hits
        misses: Cache misses
        stale_hits: Hits past TTL but still inside the stale window
    """

    hits: int = 0
    misses: int = 0
    stale_hits: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.misses + self.stale_hits

    @property
    def hit_rate(self) -> float:
        """Fresh plus stale hits as a percentage (0.0 with no lookups)."""
        total = self.total
        return round((self.hits + self.stale_hits) / total * 100, 1) if total > 0 else 0.0

    @property
    def fresh_hit_rate(self) -> float:
        """Fresh hits only as a percentage (0.0 with no lookups)."""
        total = self.total
        return round(self.hits / total * 100, 1) if total > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "stale_hits": self.stale_hits,
            "hit_rate": self.hit_rate,
            "fresh_hit_rate": self.fresh_hit_rate,
        }
