"""Supabase repository for daily check-ins."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from jab_tracker.adapters.supabase_rows import (
    one_or_none,
    optional_float,
    optional_int,
    optional_str,
    parse_date,
)
from jab_tracker.domain.models import (
    ActivityRecord,
    DailyLogEntry,
    DietRecord,
    MentalRecord,
    SideEffectRecord,
)
from jab_tracker.services.repositories import DailyLogRepository

_COLUMNS = (
    "log_date, "
    "side_effects(effect_type, severity), "
    "activity_logs(workout_type, duration_minutes, steps), "
    "mental_logs(mood_level, motivation_level, cravings_level), "
    "diet_logs(hunger_level, meals_count, protein_grams, water_liters)"
)


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily log queries."""

    client: Client

    def list_daily_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyLogEntry]:
        """Return daily logs with their sub-records, oldest first."""
        response = (
            self.client.table("daily_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .lte("log_date", end.isoformat())
            .order("log_date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_recent_log_dates(self, user_id: UUID, limit: int) -> list[date]:
        """Return the most recent log dates, newest first."""
        response = (
            self.client.table("daily_logs")
            .select("log_date")
            .eq("user_id", str(user_id))
            .order("log_date", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_date(row.get("log_date")) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> DailyLogEntry:
    side_effects = row.get("side_effects") or []
    activity = one_or_none(row.get("activity_logs"))
    mental = one_or_none(row.get("mental_logs"))
    diet = one_or_none(row.get("diet_logs"))
    return DailyLogEntry(
        log_date=parse_date(row.get("log_date")),
        side_effects=tuple(
            SideEffectRecord(
                effect_type=str(effect["effect_type"]),
                severity=int(effect["severity"]),
            )
            for effect in side_effects  # type: ignore[union-attr]
        ),
        activity=(
            ActivityRecord(
                workout_type=optional_str(activity.get("workout_type")),
                duration_minutes=optional_int(activity.get("duration_minutes")),
                steps=optional_int(activity.get("steps")),
            )
            if activity
            else None
        ),
        mental=(
            MentalRecord(
                mood_level=optional_str(mental.get("mood_level")),
                motivation_level=optional_str(mental.get("motivation_level")),
                cravings_level=optional_str(mental.get("cravings_level")),
            )
            if mental
            else None
        ),
        diet=(
            DietRecord(
                hunger_level=optional_str(diet.get("hunger_level")),
                meals_count=optional_int(diet.get("meals_count")),
                protein_grams=optional_int(diet.get("protein_grams")),
                water_liters=optional_float(diet.get("water_liters")),
            )
            if diet
            else None
        ),
    )
