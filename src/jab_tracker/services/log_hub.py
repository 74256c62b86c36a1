"""Logging streak, week strip and today's check-in progress."""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from jab_tracker.domain.log_hub import LatestWeight, LogHub, TodayProgress, WeekStripDay
from jab_tracker.domain.models import DailyLogEntry, InjectionEntry, WeightEntry
from jab_tracker.services.calendar import build_day_matrix, local_date
from jab_tracker.services.memo import RequestMemo, fetch
from jab_tracker.services.repositories import (
    DailyLogRepository,
    InjectionRepository,
    WeightRepository,
)

MAX_STREAK_DAYS = 365
STRIP_DAYS_BEFORE = 2
STRIP_DAYS_AFTER = 4

_logger = logging.getLogger(__name__)


def week_strip_dates(today: date) -> list[date]:
    """Return the rolling strip from two days before today to four days after."""
    return [
        today + timedelta(days=offset)
        for offset in range(-STRIP_DAYS_BEFORE, STRIP_DAYS_AFTER + 1)
    ]


def build_week_strip(
    today: date,
    weights: Sequence[WeightEntry],
    injections: Sequence[InjectionEntry],
    daily_logs: Sequence[DailyLogEntry],
    tz: ZoneInfo | None = None,
) -> list[WeekStripDay]:
    matrix = build_day_matrix(
        week_strip_dates(today), weights, injections, daily_logs, tz
    )
    return [
        WeekStripDay(
            date=day.date,
            has_weight=day.has_weight,
            has_checkin=day.has_log,
            has_injection=day.has_injection,
        )
        for day in matrix
    ]


def calculate_streak(
    today: date, log_dates: Iterable[date], weight_dates: Iterable[date]
) -> int:
    """Count consecutive logged days walking back from today.

    A day counts when it has a daily log or a weight entry. An unlogged today
    means a streak of zero.
    """
    logged = set(log_dates) | set(weight_dates)
    streak = 0
    day = today
    while streak < MAX_STREAK_DAYS and day in logged:
        streak += 1
        day -= timedelta(days=1)
    return streak


def today_progress(
    today: date,
    weights: Sequence[WeightEntry],
    today_log: DailyLogEntry | None,
    tz: ZoneInfo | None = None,
) -> TodayProgress:
    return TodayProgress(
        weight=any(local_date(w.recorded_at, tz) == today for w in weights),
        mood=today_log is not None and today_log.mental is not None,
        diet=today_log is not None and today_log.diet is not None,
        activity=today_log is not None and today_log.activity is not None,
    )


def build_log_hub(  # noqa: PLR0913
    today: date,
    latest_weight: WeightEntry | None,
    weights: Sequence[WeightEntry],
    injections: Sequence[InjectionEntry],
    daily_logs: Sequence[DailyLogEntry],
    recent_log_dates: Iterable[date],
    tz: ZoneInfo | None = None,
) -> LogHub:
    """Assemble the log hub from records around today."""
    today_log = next((log for log in daily_logs if log.log_date == today), None)
    weight_dates = [local_date(w.recorded_at, tz) for w in weights]
    log_dates = [*recent_log_dates, *(log.log_date for log in daily_logs)]
    return LogHub(
        today=today,
        progress=today_progress(today, weights, today_log, tz),
        last_weight=(
            LatestWeight(
                weight_kg=latest_weight.weight_kg,
                recorded_at=latest_weight.recorded_at,
            )
            if latest_weight
            else None
        ),
        streak=calculate_streak(today, log_dates, weight_dates),
        week_strip=build_week_strip(today, weights, injections, daily_logs, tz),
    )


@dataclass
class LogHubService:
    """Service for the daily log hub."""

    weights: WeightRepository
    injections: InjectionRepository
    daily_logs: DailyLogRepository
    timezone: ZoneInfo
    streak_lookback_days: int = 30

    async def get_log_hub(
        self,
        user_id: UUID,
        now: datetime | None = None,
        memo: RequestMemo | None = None,
    ) -> LogHub:
        """Return today's progress, streak and week strip."""
        today = (now or datetime.now(tz=UTC)).astimezone(self.timezone).date()
        strip = week_strip_dates(today)
        strip_start, strip_end = strip[0], strip[-1]
        lookback_start = today - timedelta(days=self.streak_lookback_days)
        weights_from = min(strip_start, lookback_start)
        start = datetime.combine(weights_from, time.min, tzinfo=self.timezone)
        strip_from = datetime.combine(strip_start, time.min, tzinfo=self.timezone)
        end = datetime.combine(strip_end, time.max, tzinfo=self.timezone)

        latest, weights, injections, daily_logs, recent_dates = await asyncio.gather(
            fetch(
                memo,
                ("latest_weight", user_id),
                lambda: self.weights.get_latest_weight(user_id),
            ),
            fetch(
                memo,
                ("weights", user_id, start, end),
                lambda: self.weights.list_weights(user_id, start, end),
            ),
            fetch(
                memo,
                ("injections", user_id, strip_from, end),
                lambda: self.injections.list_injections(user_id, strip_from, end),
            ),
            fetch(
                memo,
                ("daily_logs", user_id, strip_start, strip_end),
                lambda: self.daily_logs.list_daily_logs(
                    user_id, strip_start, strip_end
                ),
            ),
            fetch(
                memo,
                ("recent_log_dates", user_id, self.streak_lookback_days),
                lambda: self.daily_logs.list_recent_log_dates(
                    user_id, self.streak_lookback_days
                ),
            ),
        )
        hub = build_log_hub(
            today, latest, weights, injections, daily_logs, recent_dates, self.timezone
        )
        _logger.info(
            "Log hub: user_id=%s streak=%s completed=%s",
            user_id,
            hub.streak,
            hub.progress.completed,
        )
        return hub
