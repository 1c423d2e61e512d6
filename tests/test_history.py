"""Tests for pick history storage and analytics."""

from datetime import datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from edgebet_agent.agents.analysis_agent.agent import scan_games
from edgebet_agent.history import (
    DiskPickHistory,
    InMemoryPickHistory,
    PickRecord,
    summarize_picks,
)

NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


def _record(
    pick_id: str,
    days_ago: float,
    sport: str = "NBA",
    edge: float = 4.0,
    confidence: int = 70,
    value_grade: str = "B+: 4.0% edge",
    sharp_action: str = "Quiet",
) -> PickRecord:
    return PickRecord(
        pick_id=pick_id,
        sport=sport,
        game="Miami Heat @ Boston Celtics",
        bet="Miami Heat +6.5",
        bet_type="spread",
        odds="+170",
        confidence=confidence,
        edge=edge,
        value_grade=value_grade,
        sharp_action=sharp_action,
        stored_at=NOW - timedelta(days=days_ago),
    )


@pytest.fixture
def picks(sharp_dog_game, flat_game, second_dog_game):
    return scan_games([sharp_dog_game, flat_game, second_dog_game]).picks


class TestPickRecord:
    """Tests for PickRecord.from_pick."""

    def test_from_pick(self, picks):
        record = PickRecord.from_pick(picks[0], NOW)

        assert record.pick_id == "NBA_Boston_Celtics_Miami_Heat_1"
        assert record.bet == "Miami Heat +6.5"
        assert record.confidence == 85
        assert record.edge == 5.0
        assert record.value_grade == "B+: 5.0% edge"
        assert record.sharp_action == "RLM detected"
        assert record.stored_at == NOW


class TestInMemoryPickHistory:
    """Tests for the dict-backed repository."""

    def test_record_picks_keys(self, picks):
        history = InMemoryPickHistory()

        keys = history.record_picks(picks, stored_at=NOW)

        assert keys == [
            f"{NOW.isoformat()}|NBA_Boston_Celtics_Miami_Heat_1",
            f"{NOW.isoformat()}|NBA_Denver_Nuggets_Utah_Jazz_2",
        ]
        assert history.get(keys[1]).pick_id == "NBA_Denver_Nuggets_Utah_Jazz_2"
        assert history.get("missing") is None

    def test_repeated_scans_do_not_overwrite(self, picks):
        history = InMemoryPickHistory()

        history.record_picks(picks, stored_at=NOW)
        history.record_picks(picks, stored_at=NOW + timedelta(hours=1))

        assert len(history.list_records()) == 4

    def test_list_records_oldest_first(self):
        history = InMemoryPickHistory()
        history.set("b", _record("b", days_ago=1))
        history.set("a", _record("a", days_ago=3))

        assert [r.pick_id for r in history.list_records()] == ["a", "b"]

    @freeze_time("2026-10-21 12:00:00")
    def test_defaults_to_now(self, picks):
        history = InMemoryPickHistory()

        history.record_picks(picks[:1])

        assert history.list_records()[0].stored_at == NOW


class TestDiskPickHistory:
    """Tests for the diskcache-backed repository."""

    def test_survives_reopen(self, picks, tmp_path):
        directory = str(tmp_path / "history")

        history = DiskPickHistory(directory)
        keys = history.record_picks(picks, stored_at=NOW)
        history.close()

        reopened = DiskPickHistory(directory)
        try:
            records = reopened.list_records()
            assert sorted(r.pick_id for r in records) == [
                "NBA_Boston_Celtics_Miami_Heat_1",
                "NBA_Denver_Nuggets_Utah_Jazz_2",
            ]
            assert reopened.get(keys[0]) == PickRecord.from_pick(picks[0], NOW)
        finally:
            reopened.close()

    def test_close_is_idempotent(self, tmp_path):
        history = DiskPickHistory(str(tmp_path / "history"))
        history.close()
        history.close()


class TestSummarizePicks:
    """Tests for summarize_picks."""

    def test_empty(self):
        summary = summarize_picks([], days=7, now=NOW)

        assert summary.to_dict() == {
            "days": 7,
            "total_picks": 0,
            "avg_edge": 0.0,
            "by_sport": {},
            "by_agent": {},
            "high_confidence_picks": 0,
        }

    def test_aggregates_window(self):
        records = [
            _record("p1", days_ago=1, edge=5.0, confidence=85, value_grade="A: 9.2% edge", sharp_action="RLM detected"),
            _record("p2", days_ago=2, sport="NHL", edge=3.5, confidence=66),
            _record("p3", days_ago=10, edge=4.25, confidence=75, value_grade="A-: 7.1% edge", sharp_action="Active"),
            _record("old", days_ago=45, edge=14.0, confidence=90),
        ]

        summary = summarize_picks(records, days=30, now=NOW)

        assert summary.total_picks == 3
        assert summary.by_sport == {"NBA": 2, "NHL": 1}
        assert summary.by_agent == {"value": 2, "sharp": 1}
        assert summary.avg_edge == 4.25
        assert summary.high_confidence_picks == 2

    def test_cutoff_is_exclusive(self):
        records = [_record("edge", days_ago=7)]
        assert summarize_picks(records, days=7, now=NOW).total_picks == 0

    @freeze_time("2026-10-21 12:00:00")
    def test_defaults_to_now(self):
        records = [_record("p1", days_ago=1), _record("p2", days_ago=40)]
        assert summarize_picks(records).total_picks == 1
