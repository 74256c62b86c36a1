"""Calendar day matrix and month summary."""

import asyncio
import calendar
import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from jab_tracker.domain.calendar import (
    CalendarDay,
    CalendarInjection,
    CalendarMonth,
    MonthSummary,
)
from jab_tracker.domain.models import DailyLogEntry, InjectionEntry, WeightEntry
from jab_tracker.errors import InvalidInputError
from jab_tracker.services.memo import RequestMemo, fetch
from jab_tracker.services.repositories import (
    DailyLogRepository,
    InjectionRepository,
    WeightRepository,
)
from jab_tracker.services.rounding import round_half_up, round_optional

DECEMBER = 12

_logger = logging.getLogger(__name__)


def parse_year_month(year: int | str, month: int | str) -> tuple[int, int]:
    """Return integer year and month or raise InvalidInputError."""
    try:
        year_num = int(year)
        month_num = int(month)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("Invalid year or month") from exc
    if not 1 <= month_num <= DECEMBER:
        raise InvalidInputError("Invalid year or month")
    if not date.min.year <= year_num <= date.max.year:
        raise InvalidInputError("Invalid year or month")
    return year_num, month_num


def month_days(year: int, month: int) -> list[date]:
    """Return every date of the month, leap years included."""
    _, days_in_month = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, days_in_month + 1)]


def local_date(moment: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the calendar date of a timestamp, in tz when given."""
    if tz is not None and moment.tzinfo is not None:
        return moment.astimezone(tz).date()
    return moment.date()


def build_day_matrix(
    days: Sequence[date],
    weights: Sequence[WeightEntry],
    injections: Sequence[InjectionEntry],
    daily_logs: Sequence[DailyLogEntry],
    tz: ZoneInfo | None = None,
) -> list[CalendarDay]:
    """Overlay logged records onto the given days.

    Records are matched by calendar date. When two records share a date the
    chronologically later one wins.
    """
    matrix = {day: CalendarDay(date=day) for day in days}

    for entry in sorted(weights, key=lambda w: w.recorded_at):
        day = local_date(entry.recorded_at, tz)
        if day in matrix:
            matrix[day] = replace(
                matrix[day], has_weight=True, weight_kg=entry.weight_kg
            )

    for injection in sorted(injections, key=lambda i: i.injection_date):
        day = local_date(injection.injection_date, tz)
        if day in matrix:
            matrix[day] = replace(
                matrix[day],
                has_injection=True,
                injection=CalendarInjection(
                    dose_mg=float(injection.dose_mg), site=injection.site
                ),
            )

    for log in daily_logs:
        if log.log_date in matrix:
            matrix[log.log_date] = replace(
                matrix[log.log_date],
                has_log=True,
                side_effects_count=len(log.side_effects),
            )

    return list(matrix.values())


def build_calendar_month(  # noqa: PLR0913
    year: int | str,
    month: int | str,
    weights: Sequence[WeightEntry],
    injections: Sequence[InjectionEntry],
    daily_logs: Sequence[DailyLogEntry],
    tz: ZoneInfo | None = None,
) -> CalendarMonth:
    """Return the day matrix and summary for one month."""
    year_num, month_num = parse_year_month(year, month)
    days = month_days(year_num, month_num)

    def in_month(day: date) -> bool:
        return day.year == year_num and day.month == month_num

    month_weights = sorted(
        (w for w in weights if in_month(local_date(w.recorded_at, tz))),
        key=lambda w: w.recorded_at,
    )
    month_injections = [
        i for i in injections if in_month(local_date(i.injection_date, tz))
    ]
    month_logs = [log for log in daily_logs if in_month(log.log_date)]

    start_weight = month_weights[0].weight_kg if month_weights else None
    end_weight = month_weights[-1].weight_kg if month_weights else None
    monthly_change = None
    if start_weight is not None and end_weight is not None:
        monthly_change = round_half_up(end_weight - start_weight, 2)

    return CalendarMonth(
        year=year_num,
        month=month_num,
        days=build_day_matrix(days, month_weights, month_injections, month_logs, tz),
        summary=MonthSummary(
            weight_entries=len(month_weights),
            injections=len(month_injections),
            logs_completed=len(month_logs),
            start_weight=round_optional(start_weight),
            end_weight=round_optional(end_weight),
            monthly_change=monthly_change,
        ),
    )


@dataclass
class CalendarService:
    """Service for month calendar views."""

    weights: WeightRepository
    injections: InjectionRepository
    daily_logs: DailyLogRepository
    timezone: ZoneInfo

    async def get_month(
        self,
        user_id: UUID,
        year: int | str,
        month: int | str,
        memo: RequestMemo | None = None,
    ) -> CalendarMonth:
        """Return the calendar for a month."""
        year_num, month_num = parse_year_month(year, month)
        first_day = date(year_num, month_num, 1)
        last_day = month_days(year_num, month_num)[-1]
        start = datetime.combine(first_day, time.min, tzinfo=self.timezone)
        next_month = last_day + timedelta(days=1)
        end = datetime.combine(next_month, time.min, tzinfo=self.timezone)
        end -= timedelta(microseconds=1)

        weights, injections, daily_logs = await asyncio.gather(
            fetch(
                memo,
                ("weights", user_id, start, end),
                lambda: self.weights.list_weights(user_id, start, end),
            ),
            fetch(
                memo,
                ("injections", user_id, start, end),
                lambda: self.injections.list_injections(user_id, start, end),
            ),
            fetch(
                memo,
                ("daily_logs", user_id, first_day, last_day),
                lambda: self.daily_logs.list_daily_logs(user_id, first_day, last_day),
            ),
        )
        result = build_calendar_month(
            year_num, month_num, weights, injections, daily_logs, self.timezone
        )
        _logger.info(
            "Calendar month: user_id=%s month=%s-%02d logs=%s",
            user_id,
            year_num,
            month_num,
            result.summary.logs_completed,
        )
        return result
