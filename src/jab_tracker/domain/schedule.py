"""Domain models for dose scheduling."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from jab_tracker.domain.models import InjectionSite


class ScheduleStatus(str, Enum):
    """Urgency of the next dose."""

    NOT_STARTED = "not_started"
    ON_TRACK = "on_track"
    DUE_SOON = "due_soon"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class LastInjectionSummary:
    """The most recent injection as seen from now."""

    dose_mg: float
    injection_date: datetime
    days_since: int


@dataclass(frozen=True)
class DerivedScheduleStatus:
    """Next due date and urgency for the weekly dose."""

    next_due_date: datetime
    days_until_due: int
    status: ScheduleStatus
    last_injection: LastInjectionSummary | None
    preferred_injection_day: int | None = None


@dataclass(frozen=True)
class LastInjectionDetail:
    """Display detail for the latest injection."""

    injection_date: datetime
    days_ago: int
    week_number: int
    dose_mg: float
    phase: int
    site: InjectionSite


@dataclass(frozen=True)
class InjectionOverview:
    """Injection history summary with titration hints."""

    total_injections: int
    current_dose: float | None
    weeks_on_current_dose: int
    suggested_site: InjectionSite
    treatment_start_date: date | None
    last_injection: LastInjectionDetail | None
    next_titration_dose: float | None
    dose_increase_recommended: bool
    schedule: DerivedScheduleStatus
