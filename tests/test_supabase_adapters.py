"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

import pytest

from jab_tracker.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from jab_tracker.adapters.supabase_injection_repository import (
    SupabaseInjectionRepository,
)
from jab_tracker.adapters.supabase_profile_repository import SupabaseProfileRepository
from jab_tracker.adapters.supabase_weight_repository import SupabaseWeightRepository
from jab_tracker.domain.models import InjectionSite


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: list[list[dict[str, object]]] = field(default_factory=list)
    last_columns: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None

    def queue(self, data: list[dict[str, object]]) -> None:
        self.response_queue.append(data)

    def select(self, columns: str) -> "FakeTable":
        self.last_columns = columns
        self.last_filters = []
        self.last_order = None
        self.last_limit = None
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def execute(self) -> FakeResponse:
        data = self.response_queue.pop(0) if self.response_queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_weight_repository_lists_range() -> None:
    client = FakeSupabaseClient()
    table = client.table("weight_entries")
    table.queue(
        [
            {"weight_kg": "88.4", "recorded_at": "2025-03-01T08:00:00+00:00"},
            {"weight_kg": 87.9, "recorded_at": "2025-03-08T08:00:00", "notes": ""},
        ]
    )
    user_id = uuid4()
    start = datetime(2025, 3, 1, tzinfo=UTC)
    end = datetime(2025, 3, 31, tzinfo=UTC)

    entries = SupabaseWeightRepository(client).list_weights(user_id, start, end)

    assert [entry.weight_kg for entry in entries] == [88.4, 87.9]
    assert entries[1].recorded_at.tzinfo is UTC
    assert entries[1].notes is None
    assert ("eq", "user_id", str(user_id)) in table.last_filters
    assert ("gte", "recorded_at", start.isoformat()) in table.last_filters
    assert ("lte", "recorded_at", end.isoformat()) in table.last_filters
    assert table.last_order == ("recorded_at", False)


def test_weight_repository_open_range_has_no_bounds() -> None:
    client = FakeSupabaseClient()
    table = client.table("weight_entries")

    entries = SupabaseWeightRepository(client).list_weights(uuid4(), None, None)

    assert entries == []
    assert [f[0] for f in table.last_filters] == ["eq"]


def test_weight_repository_first_and_latest() -> None:
    client = FakeSupabaseClient()
    table = client.table("weight_entries")
    table.queue([{"weight_kg": 95, "recorded_at": "2025-01-01T07:00:00Z"}])
    repository = SupabaseWeightRepository(client)

    first = repository.get_first_weight(uuid4())
    assert first is not None
    assert first.weight_kg == 95
    assert table.last_order == ("recorded_at", False)

    assert repository.get_latest_weight(uuid4()) is None
    assert table.last_order == ("recorded_at", True)
    assert table.last_limit == 1


def test_weight_repository_rejects_missing_timestamp() -> None:
    client = FakeSupabaseClient()
    client.table("weight_entries").queue([{"weight_kg": 90, "recorded_at": None}])

    with pytest.raises(RuntimeError):
        SupabaseWeightRepository(client).list_weights(uuid4(), None, None)


def test_injection_repository_latest() -> None:
    client = FakeSupabaseClient()
    table = client.table("injections")
    table.queue(
        [
            {
                "dose_mg": "7.5",
                "injection_site": "thigh_right",
                "injection_date": "2025-03-05T19:00:00+00:00",
                "batch_number": "AB12",
                "notes": None,
            }
        ]
    )

    latest = SupabaseInjectionRepository(client).get_latest_injection(uuid4())

    assert latest is not None
    assert latest.dose_mg == 7.5
    assert latest.site == InjectionSite.THIGH_RIGHT
    assert latest.batch_number == "AB12"
    assert table.last_order == ("injection_date", True)
    assert table.last_limit == 1


def test_injection_repository_range() -> None:
    client = FakeSupabaseClient()
    table = client.table("injections")
    start = datetime(2025, 3, 1, tzinfo=UTC)
    end = datetime(2025, 3, 31, tzinfo=UTC)

    repository = SupabaseInjectionRepository(client)

    assert repository.list_injections(uuid4(), start, end) == []
    assert ("gte", "injection_date", start.isoformat()) in table.last_filters
    assert ("lte", "injection_date", end.isoformat()) in table.last_filters


def test_daily_log_repository_parses_embedded_rows() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_logs")
    table.queue(
        [
            {
                "log_date": "2025-03-10",
                "side_effects": [{"effect_type": "nausea", "severity": 2}],
                "activity_logs": [
                    {"workout_type": "walking", "duration_minutes": 30, "steps": None}
                ],
                "mental_logs": {"mood_level": "good"},
                "diet_logs": [],
            }
        ]
    )

    logs = SupabaseDailyLogRepository(client).list_daily_logs(
        uuid4(), date(2025, 3, 10), date(2025, 3, 16)
    )

    assert len(logs) == 1
    log = logs[0]
    assert log.log_date == date(2025, 3, 10)
    assert log.side_effects[0].effect_type == "nausea"
    assert log.activity is not None
    assert log.activity.duration_minutes == 30
    assert log.activity.steps is None
    assert log.mental is not None
    assert log.mental.mood_level == "good"
    assert log.diet is None
    assert ("lte", "log_date", "2025-03-16") in table.last_filters


def test_daily_log_repository_recent_dates() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_logs")
    table.queue([{"log_date": "2025-03-12"}, {"log_date": "2025-03-11"}])

    dates = SupabaseDailyLogRepository(client).list_recent_log_dates(uuid4(), 30)

    assert dates == [date(2025, 3, 12), date(2025, 3, 11)]
    assert table.last_columns == "log_date"
    assert table.last_order == ("log_date", True)
    assert table.last_limit == 30


def test_profile_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    table.queue(
        [
            {
                "starting_weight_kg": "102.5",
                "goal_weight_kg": 80,
                "treatment_start_date": "2025-01-06",
                "preferred_injection_day": 1,
                "height_cm": None,
            }
        ]
    )
    repository = SupabaseProfileRepository(client)

    profile = repository.get_profile(uuid4())

    assert profile is not None
    assert profile.starting_weight_kg == 102.5
    assert profile.treatment_start_date == date(2025, 1, 6)
    assert profile.preferred_injection_day == 1
    assert profile.height_cm is None
    assert repository.get_profile(uuid4()) is None


@pytest.mark.parametrize(
    ("stored", "expected"),
    [
        ("abdomen", InjectionSite.ABDOMEN_LEFT),
        ("Abdomen - Left", InjectionSite.ABDOMEN_LEFT),
        ("Abdomen - Right", InjectionSite.ABDOMEN_RIGHT),
        ("Upper Arm - Right", InjectionSite.ARM_RIGHT),
        ("thigh_left", InjectionSite.THIGH_LEFT),
    ],
)
def test_injection_repository_accepts_stored_site_names(
    stored: str, expected: InjectionSite
) -> None:
    client = FakeSupabaseClient()
    client.table("injections").queue(
        [
            {
                "dose_mg": 5,
                "injection_site": stored,
                "injection_date": "2025-03-05T19:00:00+00:00",
            }
        ]
    )

    latest = SupabaseInjectionRepository(client).get_latest_injection(uuid4())

    assert latest is not None
    assert latest.site == expected


def test_injection_repository_rejects_unknown_site() -> None:
    client = FakeSupabaseClient()
    client.table("injections").queue(
        [
            {
                "dose_mg": 5,
                "injection_site": "elbow",
                "injection_date": "2025-03-05T19:00:00+00:00",
            }
        ]
    )

    with pytest.raises(RuntimeError, match="elbow"):
        SupabaseInjectionRepository(client).get_latest_injection(uuid4())
