"""Dose scheduling, titration and site rotation."""

import asyncio
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jab_tracker.domain.models import (
    DOSES,
    InjectionEntry,
    InjectionSite,
    ProfileSnapshot,
)
from jab_tracker.domain.schedule import (
    DerivedScheduleStatus,
    InjectionOverview,
    LastInjectionDetail,
    LastInjectionSummary,
    ScheduleStatus,
)
from jab_tracker.services.memo import RequestMemo, fetch
from jab_tracker.services.metrics import DAYS_PER_WEEK, ONE_DAY, as_datetime
from jab_tracker.services.repositories import InjectionRepository, ProfileRepository

DOSE_INTERVAL = timedelta(days=7)
DUE_SOON_DAYS = 2
TITRATION_WEEKS = 4

_logger = logging.getLogger(__name__)


def evaluate_schedule(
    now: datetime,
    last_injection: InjectionEntry | None,
    profile: ProfileSnapshot | None,
) -> DerivedScheduleStatus:
    """Return the next due date and urgency relative to now.

    The due date is always seven days after the last injection. The preferred
    injection day is passed through for display only.
    """
    preferred_day = profile.preferred_injection_day if profile else None

    if last_injection is None:
        start = profile.treatment_start_date if profile else None
        next_due = as_datetime(start, now) if start is not None else now
        return DerivedScheduleStatus(
            next_due_date=next_due,
            days_until_due=max(0, math.ceil((next_due - now) / ONE_DAY)),
            status=ScheduleStatus.NOT_STARTED,
            last_injection=None,
            preferred_injection_day=preferred_day,
        )

    next_due = last_injection.injection_date + DOSE_INTERVAL
    days_until_due = math.ceil((next_due - now) / ONE_DAY)
    days_since = math.floor((now - last_injection.injection_date) / ONE_DAY)
    return DerivedScheduleStatus(
        next_due_date=next_due,
        days_until_due=days_until_due,
        status=classify_days_until_due(days_until_due),
        last_injection=LastInjectionSummary(
            dose_mg=float(last_injection.dose_mg),
            injection_date=last_injection.injection_date,
            days_since=days_since,
        ),
        preferred_injection_day=preferred_day,
    )


def classify_days_until_due(days_until_due: int) -> ScheduleStatus:
    if days_until_due < 0:
        return ScheduleStatus.OVERDUE
    if days_until_due == 0:
        return ScheduleStatus.DUE_TODAY
    if days_until_due <= DUE_SOON_DAYS:
        return ScheduleStatus.DUE_SOON
    return ScheduleStatus.ON_TRACK


def dose_phase(dose_mg: float) -> int:
    """Return the 1-based titration phase for a dose, 1 when unknown."""
    try:
        return DOSES.index(float(dose_mg)) + 1
    except ValueError:
        return 1


def next_titration_dose(dose_mg: float) -> float | None:
    """Return the next dose up the titration ladder, None at the top."""
    phase_index = dose_phase(dose_mg) - 1
    if float(dose_mg) not in DOSES or phase_index >= len(DOSES) - 1:
        return None
    return DOSES[phase_index + 1]


def is_dose_increase_recommended(dose_mg: float, weeks_on_current_dose: int) -> bool:
    if dose_mg >= DOSES[-1]:
        return False
    return weeks_on_current_dose >= TITRATION_WEEKS


def suggest_next_site(last_site: InjectionSite | str | None) -> InjectionSite:
    """Return the site after last_site in rotation order."""
    sites = list(InjectionSite)
    try:
        index = sites.index(InjectionSite(last_site))
    except ValueError:
        return sites[0]
    return sites[(index + 1) % len(sites)]


def weeks_on_current_dose(
    injections: Sequence[InjectionEntry], now: datetime
) -> int:
    """Return whole weeks since the current dose run began."""
    if not injections:
        return 0
    newest_first = sorted(injections, key=lambda inj: inj.injection_date, reverse=True)
    current_dose = float(newest_first[0].dose_mg)
    run_start = newest_first[0].injection_date
    for injection in newest_first:
        if float(injection.dose_mg) != current_dose:
            break
        run_start = injection.injection_date
    return math.floor((now - run_start) / ONE_DAY) // DAYS_PER_WEEK


def summarize_injections(
    injections: Sequence[InjectionEntry],
    now: datetime,
    profile: ProfileSnapshot | None = None,
) -> InjectionOverview:
    """Summarize injection history for the jabs screen."""
    ordered = sorted(injections, key=lambda inj: inj.injection_date)
    latest = ordered[-1] if ordered else None
    first = ordered[0] if ordered else None
    schedule = evaluate_schedule(now, latest, profile)

    if latest is None or first is None:
        return InjectionOverview(
            total_injections=0,
            current_dose=None,
            weeks_on_current_dose=0,
            suggested_site=suggest_next_site(None),
            treatment_start_date=None,
            last_injection=None,
            next_titration_dose=None,
            dose_increase_recommended=False,
            schedule=schedule,
        )

    current_dose = float(latest.dose_mg)
    weeks = weeks_on_current_dose(ordered, now)
    since_first = latest.injection_date - first.injection_date
    return InjectionOverview(
        total_injections=len(ordered),
        current_dose=current_dose,
        weeks_on_current_dose=weeks,
        suggested_site=suggest_next_site(latest.site),
        treatment_start_date=first.injection_date.date(),
        last_injection=LastInjectionDetail(
            injection_date=latest.injection_date,
            days_ago=math.floor((now - latest.injection_date) / ONE_DAY),
            week_number=math.floor(since_first / (ONE_DAY * DAYS_PER_WEEK)) + 1,
            dose_mg=current_dose,
            phase=dose_phase(current_dose),
            site=latest.site,
        ),
        next_titration_dose=next_titration_dose(current_dose),
        dose_increase_recommended=is_dose_increase_recommended(current_dose, weeks),
        schedule=schedule,
    )


@dataclass
class ScheduleService:
    """Service for next-dose status and injection history."""

    injections: InjectionRepository
    profiles: ProfileRepository
    history_limit: int = 50

    async def get_next_due(
        self,
        user_id: UUID,
        now: datetime | None = None,
        memo: RequestMemo | None = None,
    ) -> DerivedScheduleStatus:
        """Return the schedule status for the user's next dose."""
        resolved_now = now or datetime.now(tz=UTC)
        last_injection, profile = await asyncio.gather(
            fetch(
                memo,
                ("latest_injection", user_id),
                lambda: self.injections.get_latest_injection(user_id),
            ),
            fetch(
                memo,
                ("profile", user_id),
                lambda: self.profiles.get_profile(user_id),
            ),
        )
        status = evaluate_schedule(resolved_now, last_injection, profile)
        _logger.info(
            "Next dose: user_id=%s status=%s days_until_due=%s",
            user_id,
            status.status.value,
            status.days_until_due,
        )
        return status

    async def get_overview(
        self,
        user_id: UUID,
        now: datetime | None = None,
        memo: RequestMemo | None = None,
    ) -> InjectionOverview:
        """Return the injection history overview."""
        resolved_now = now or datetime.now(tz=UTC)
        injections, profile = await asyncio.gather(
            fetch(
                memo,
                ("recent_injections", user_id, self.history_limit),
                lambda: self.injections.list_recent_injections(
                    user_id, self.history_limit
                ),
            ),
            fetch(
                memo,
                ("profile", user_id),
                lambda: self.profiles.get_profile(user_id),
            ),
        )
        overview = summarize_injections(injections, resolved_now, profile)
        _logger.info(
            "Injection overview: user_id=%s total=%s current_dose=%s",
            user_id,
            overview.total_injections,
            overview.current_dose,
        )
        return overview
