"""Supabase repository for injections."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from jab_tracker.adapters.supabase_rows import (
    optional_str,
    parse_datetime,
    parse_site,
)
from jab_tracker.domain.models import InjectionEntry
from jab_tracker.services.repositories import InjectionRepository

_COLUMNS = "dose_mg, injection_site, injection_date, batch_number, notes"


@dataclass
class SupabaseInjectionRepository(InjectionRepository):
    """Supabase implementation for injection queries."""

    client: Client

    def get_latest_injection(self, user_id: UUID) -> InjectionEntry | None:
        """Return the most recent injection."""
        rows = self.list_recent_injections(user_id, limit=1)
        return rows[0] if rows else None

    def list_injections(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[InjectionEntry]:
        """Return injections in the range, oldest first."""
        response = (
            self.client.table("injections")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("injection_date", start.isoformat())
            .lte("injection_date", end.isoformat())
            .order("injection_date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_recent_injections(self, user_id: UUID, limit: int) -> list[InjectionEntry]:
        """Return the most recent injections, newest first."""
        response = (
            self.client.table("injections")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("injection_date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> InjectionEntry:
    return InjectionEntry(
        dose_mg=float(row["dose_mg"]),  # type: ignore[arg-type]
        site=parse_site(row.get("injection_site")),
        injection_date=parse_datetime(row.get("injection_date")),
        batch_number=optional_str(row.get("batch_number")),
        notes=optional_str(row.get("notes")),
    )
