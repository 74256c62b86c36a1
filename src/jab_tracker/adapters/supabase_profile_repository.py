"""Supabase repository for treatment profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from jab_tracker.adapters.supabase_rows import (
    optional_date,
    optional_float,
    optional_int,
)
from jab_tracker.domain.models import ProfileSnapshot
from jab_tracker.services.repositories import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile reads."""

    client: Client

    def get_profile(self, user_id: UUID) -> ProfileSnapshot | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select(
                "starting_weight_kg, goal_weight_kg, treatment_start_date, "
                "preferred_injection_day, height_cm"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return ProfileSnapshot(
            starting_weight_kg=optional_float(row.get("starting_weight_kg")),
            goal_weight_kg=optional_float(row.get("goal_weight_kg")),
            treatment_start_date=optional_date(row.get("treatment_start_date")),
            preferred_injection_day=optional_int(row.get("preferred_injection_day")),
            height_cm=optional_float(row.get("height_cm")),
        )
