"""Pick history repositories.

Scans record their emitted picks here so analytics can summarize recent
activity. The scoring core never reads history; storage is a key-value
side-table with two implementations:

- InMemoryPickHistory: process-local, used by tests and one-shot runs
- DiskPickHistory: diskcache-backed, survives across CLI invocations

Neither gives durability guarantees.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from diskcache import FanoutCache

from edgebet_agent.agents.analysis_agent.consensus import Pick
from edgebet_agent.history.models import PickRecord
from edgebet_agent.monitoring import get_logger

log = get_logger()


class PickHistoryRepository(ABC):
    """Get/set access to stored picks by key."""

    @abstractmethod
    def get(self, key: str) -> PickRecord | None:
        ...

    @abstractmethod
    def set(self, key: str, record: PickRecord) -> None:
        ...

    @abstractmethod
    def list_records(self) -> list[PickRecord]:
        """All stored records, oldest first."""

    def record_picks(self, picks: list[Pick], stored_at: datetime | None = None) -> list[str]:
        """Store a scan's picks, returning their keys.

        Keys combine the scan time with the pick id so repeated scans of the
        same slate do not overwrite each other.
        """
        stored_at = stored_at or datetime.now(timezone.utc)
        keys = []
        for pick in picks:
            key = f"{stored_at.isoformat()}|{pick.id}"
            self.set(key, PickRecord.from_pick(pick, stored_at))
            keys.append(key)
        log.debug("picks_recorded", count=len(keys))
        return keys

    def close(self) -> None:
        pass


class InMemoryPickHistory(PickHistoryRepository):
    """Dict-backed history (lost when the process exits)."""

    def __init__(self):
        self._records: dict[str, PickRecord] = {}

    def get(self, key: str) -> PickRecord | None:
        return self._records.get(key)

    def set(self, key: str, record: PickRecord) -> None:
        self._records[key] = record

    def list_records(self) -> list[PickRecord]:
        return sorted(self._records.values(), key=lambda r: r.stored_at)


class DiskPickHistory(PickHistoryRepository):
    """diskcache-backed history.

    Examples:
        >>> history = DiskPickHistory(".cache/edgebet_history")
        >>> history.record_picks(result.picks)
        >>> records = history.list_records()
        >>> history.close()
    """

    def __init__(self, directory: str = ".cache/edgebet_history"):
        self._cache: FanoutCache | None = FanoutCache(directory=directory, shards=4, timeout=0.01)
        log.info("pick_history_opened", directory=directory)

    def get(self, key: str) -> PickRecord | None:
        raw = self._cache.get(key, default=None)
        return PickRecord.model_validate(raw) if raw is not None else None

    def set(self, key: str, record: PickRecord) -> None:
        self._cache.set(key, record.model_dump(mode="json"))

    def list_records(self) -> list[PickRecord]:
        records = []
        for key in self._cache:
            record = self.get(key)
            if record is not None:
                records.append(record)
        return sorted(records, key=lambda r: r.stored_at)

    def close(self) -> None:
        """Close the disk cache to release file handles."""
        if self._cache is not None:
            self._cache.close()
            self._cache = None
