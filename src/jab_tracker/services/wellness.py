"""Weekly wellness summary from daily check-ins."""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from jab_tracker.domain.models import DailyLogEntry
from jab_tracker.domain.wellness import (
    ActivitySummary,
    DietSummary,
    MentalSummary,
    SideEffectSummary,
    WeekSummary,
)
from jab_tracker.services.memo import RequestMemo, fetch
from jab_tracker.services.repositories import DailyLogRepository
from jab_tracker.services.rounding import round_half_up

_logger = logging.getLogger(__name__)


def week_bounds(day: date) -> tuple[date, date]:
    """Return the Monday that starts day's week and the Sunday that ends it."""
    week_start = day - timedelta(days=day.weekday())
    return week_start, week_start + timedelta(days=6)


def summarize_week(logs: Sequence[DailyLogEntry], week_of: date) -> WeekSummary:
    """Aggregate the check-ins that fall inside week_of's Monday-start week."""
    week_start, week_end = week_bounds(week_of)
    in_week = sorted(
        (log for log in logs if week_start <= log.log_date <= week_end),
        key=lambda log: log.log_date,
    )
    return WeekSummary(
        week_start=week_start,
        week_end=week_end,
        days_logged=len(in_week),
        side_effects=_summarize_side_effects(in_week),
        activity=_summarize_activity(in_week),
        mental=_summarize_mental(in_week),
        diet=_summarize_diet(in_week),
    )


def _summarize_side_effects(logs: Sequence[DailyLogEntry]) -> list[SideEffectSummary]:
    severities: dict[str, list[int]] = {}
    for log in logs:
        for effect in log.side_effects:
            severities.setdefault(effect.effect_type, []).append(effect.severity)
    return [
        SideEffectSummary(
            effect_type=effect_type,
            occurrences=len(values),
            severities=values,
        )
        for effect_type, values in severities.items()
    ]


def _summarize_activity(logs: Sequence[DailyLogEntry]) -> ActivitySummary:
    workout_days = 0
    total_minutes = 0
    total_steps = 0
    workout_types: Counter[str] = Counter()
    for log in logs:
        activity = log.activity
        if activity is None:
            continue
        # Steps alone do not make a workout day.
        if activity.duration_minutes is not None:
            workout_days += 1
            total_minutes += activity.duration_minutes
        if activity.steps is not None:
            total_steps += activity.steps
        if activity.workout_type:
            workout_types[activity.workout_type] += 1

    days_logged = len(logs)
    return ActivitySummary(
        workout_days=workout_days,
        total_minutes=total_minutes,
        avg_minutes_per_workout=_average_int(total_minutes, workout_days),
        total_steps=total_steps,
        avg_daily_steps=_average_int(total_steps, days_logged),
        workout_types=dict(workout_types),
    )


def _summarize_mental(logs: Sequence[DailyLogEntry]) -> MentalSummary:
    mental_logs = [log.mental for log in logs if log.mental is not None]
    return MentalSummary(
        moods=[m.mood_level for m in mental_logs if m.mood_level is not None],
        motivations=[
            m.motivation_level for m in mental_logs if m.motivation_level is not None
        ],
        cravings=[
            m.cravings_level for m in mental_logs if m.cravings_level is not None
        ],
    )


def _summarize_diet(logs: Sequence[DailyLogEntry]) -> DietSummary:
    diet_logs = [log.diet for log in logs if log.diet is not None]
    days = len(diet_logs)
    if days == 0:
        return DietSummary()

    total_meals = sum(diet.meals_count or 0 for diet in diet_logs)
    total_protein = sum(diet.protein_grams or 0 for diet in diet_logs)
    total_water = sum(diet.water_liters or 0 for diet in diet_logs)
    return DietSummary(
        days_logged=days,
        total_meals=total_meals,
        avg_meals_per_day=round_half_up(total_meals / days, 1),
        total_protein_grams=total_protein,
        avg_protein_per_day=_average_int(total_protein, days),
        total_water_liters=round_half_up(total_water, 2),
        avg_water_per_day=round_half_up(total_water / days, 2),
    )


def _average_int(total: float, count: int) -> int:
    if count <= 0:
        return 0
    return int(round_half_up(total / count))


@dataclass
class WellnessService:
    """Service for weekly wellness summaries."""

    daily_logs: DailyLogRepository
    timezone: ZoneInfo

    async def get_week_summary(
        self,
        user_id: UUID,
        week_of: date | None = None,
        now: datetime | None = None,
        memo: RequestMemo | None = None,
    ) -> WeekSummary:
        """Return the summary for the week containing week_of.

        Without week_of the week is the one containing today in the service
        timezone.
        """
        resolved_now = now or datetime.now(tz=UTC)
        day = week_of or resolved_now.astimezone(self.timezone).date()
        week_start, week_end = week_bounds(day)
        logs = await fetch(
            memo,
            ("daily_logs", user_id, week_start, week_end),
            lambda: self.daily_logs.list_daily_logs(user_id, week_start, week_end),
        )
        summary = summarize_week(logs, day)
        _logger.info(
            "Week summary: user_id=%s week_start=%s days_logged=%s",
            user_id,
            summary.week_start.isoformat(),
            summary.days_logged,
        )
        return summary
