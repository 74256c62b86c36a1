"""Domain models for calendar views."""

from dataclasses import dataclass
from datetime import date

from jab_tracker.domain.models import InjectionSite


@dataclass(frozen=True)
class CalendarInjection:
    """Injection shown on a calendar day."""

    dose_mg: float
    site: InjectionSite


@dataclass(frozen=True)
class CalendarDay:
    """Presence flags and values for one day."""

    date: date
    has_weight: bool = False
    has_injection: bool = False
    has_log: bool = False
    side_effects_count: int = 0
    weight_kg: float | None = None
    injection: CalendarInjection | None = None

    @property
    def date_key(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class MonthSummary:
    """Counts and weight change for a month."""

    weight_entries: int
    injections: int
    logs_completed: int
    start_weight: float | None
    end_weight: float | None
    monthly_change: float | None


@dataclass(frozen=True)
class CalendarMonth:
    """Day matrix plus summary for one month."""

    year: int
    month: int
    days: list[CalendarDay]
    summary: MonthSummary
