"""Persistence interfaces consumed by the tracking services."""

from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from jab_tracker.domain.models import (
    DailyLogEntry,
    InjectionEntry,
    ProfileSnapshot,
    WeightEntry,
)


class WeightRepository(Protocol):
    """Persistence interface for weight entries."""

    def list_weights(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[WeightEntry]:
        """Return weight entries in [start, end] ordered by recorded_at."""

    def get_first_weight(self, user_id: UUID) -> WeightEntry | None:
        """Return the earliest weight entry ever recorded."""

    def get_latest_weight(self, user_id: UUID) -> WeightEntry | None:
        """Return the most recent weight entry."""


class InjectionRepository(Protocol):
    """Persistence interface for injections."""

    def get_latest_injection(self, user_id: UUID) -> InjectionEntry | None:
        """Return the most recent injection."""

    def list_injections(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[InjectionEntry]:
        """Return injections in [start, end] ordered by injection_date."""

    def list_recent_injections(self, user_id: UUID, limit: int) -> list[InjectionEntry]:
        """Return the most recent injections, newest first."""


class DailyLogRepository(Protocol):
    """Persistence interface for daily check-ins."""

    def list_daily_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyLogEntry]:
        """Return daily logs with sub-records for dates in [start, end]."""

    def list_recent_log_dates(self, user_id: UUID, limit: int) -> list[date]:
        """Return the most recent log dates, newest first."""


class ProfileRepository(Protocol):
    """Persistence interface for the treatment profile."""

    def get_profile(self, user_id: UUID) -> ProfileSnapshot | None:
        """Return the user's profile, if onboarding is complete."""
