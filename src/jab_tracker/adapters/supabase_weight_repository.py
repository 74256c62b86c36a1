"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from jab_tracker.adapters.supabase_rows import optional_str, parse_datetime
from jab_tracker.domain.models import WeightEntry
from jab_tracker.services.repositories import WeightRepository

_COLUMNS = "weight_kg, recorded_at, notes"


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight queries."""

    client: Client

    def list_weights(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[WeightEntry]:
        """Return weight entries in the range, oldest first."""
        query = (
            self.client.table("weight_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("recorded_at", start.isoformat())
        if end is not None:
            query = query.lte("recorded_at", end.isoformat())
        response = query.order("recorded_at", desc=False).execute()
        return [_parse_row(row) for row in response.data or []]

    def get_first_weight(self, user_id: UUID) -> WeightEntry | None:
        """Return the earliest weight entry."""
        return self._get_one(user_id, desc=False)

    def get_latest_weight(self, user_id: UUID) -> WeightEntry | None:
        """Return the most recent weight entry."""
        return self._get_one(user_id, desc=True)

    def _get_one(self, user_id: UUID, *, desc: bool) -> WeightEntry | None:
        response = (
            self.client.table("weight_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("recorded_at", desc=desc)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None


def _parse_row(row: dict[str, object]) -> WeightEntry:
    return WeightEntry(
        weight_kg=float(row["weight_kg"]),  # type: ignore[arg-type]
        recorded_at=parse_datetime(row.get("recorded_at")),
        notes=optional_str(row.get("notes")),
    )
