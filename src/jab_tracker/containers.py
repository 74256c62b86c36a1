"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from jab_tracker.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from jab_tracker.adapters.supabase_injection_repository import (
    SupabaseInjectionRepository,
)
from jab_tracker.adapters.supabase_profile_repository import SupabaseProfileRepository
from jab_tracker.adapters.supabase_weight_repository import SupabaseWeightRepository
from jab_tracker.config import Settings, parse_timezone
from jab_tracker.services.calendar import CalendarService
from jab_tracker.services.log_hub import LogHubService
from jab_tracker.services.schedule import ScheduleService
from jab_tracker.services.stats import WeightStatsService
from jab_tracker.services.wellness import WellnessService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    schedule_service: ScheduleService
    weight_stats_service: WeightStatsService
    wellness_service: WellnessService
    calendar_service: CalendarService
    log_hub_service: LogHubService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = parse_timezone(resolved_settings.timezone)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    weight_repository = SupabaseWeightRepository(supabase_client)
    injection_repository = SupabaseInjectionRepository(supabase_client)
    daily_log_repository = SupabaseDailyLogRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)

    return AppContainer(
        settings=resolved_settings,
        schedule_service=ScheduleService(
            injections=injection_repository,
            profiles=profile_repository,
            history_limit=resolved_settings.injection_history_limit,
        ),
        weight_stats_service=WeightStatsService(
            weights=weight_repository,
            profiles=profile_repository,
        ),
        wellness_service=WellnessService(
            daily_logs=daily_log_repository,
            timezone=timezone,
        ),
        calendar_service=CalendarService(
            weights=weight_repository,
            injections=injection_repository,
            daily_logs=daily_log_repository,
            timezone=timezone,
        ),
        log_hub_service=LogHubService(
            weights=weight_repository,
            injections=injection_repository,
            daily_logs=daily_log_repository,
            timezone=timezone,
            streak_lookback_days=resolved_settings.streak_lookback_days,
        ),
    )
