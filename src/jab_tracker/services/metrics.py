"""BMI, weight change and goal progress calculations."""

import math
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from enum import Enum

from jab_tracker.domain.models import ProfileSnapshot, WeightEntry
from jab_tracker.domain.stats import ProgressSummary, WeightStats
from jab_tracker.errors import InvalidInputError
from jab_tracker.services.rounding import round_half_up

ONE_DAY = timedelta(days=1)
DAYS_PER_WEEK = 7


class BMICategory(str, Enum):
    """WHO BMI classification."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE_I = "Obese Class I"
    OBESE_II = "Obese Class II"
    OBESE_III = "Obese Class III"


_BMI_BANDS: tuple[tuple[float, BMICategory], ...] = (
    (18.5, BMICategory.UNDERWEIGHT),
    (25, BMICategory.NORMAL),
    (30, BMICategory.OVERWEIGHT),
    (35, BMICategory.OBESE_I),
    (40, BMICategory.OBESE_II),
)


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return BMI as weight(kg) / height(m)^2."""
    if height_cm <= 0:
        raise InvalidInputError("Height must be greater than 0")
    if weight_kg < 0:
        raise InvalidInputError("Weight cannot be negative")
    if weight_kg == 0:
        return 0
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def get_bmi_category(bmi: float) -> BMICategory:
    for upper_bound, category in _BMI_BANDS:
        if bmi < upper_bound:
            return category
    return BMICategory.OBESE_III


def calculate_total_change(start_weight: float, current_weight: float) -> float:
    """Return the signed change; negative means weight lost."""
    return current_weight - start_weight


def calculate_percent_change(start_weight: float, current_weight: float) -> float:
    if start_weight <= 0:
        raise InvalidInputError("Starting weight must be greater than 0")
    return (current_weight - start_weight) / start_weight * 100


def calculate_weekly_average(total_change: float, weeks: float) -> float:
    if weeks <= 0:
        return 0
    return total_change / weeks


def days_elapsed(start: date | datetime, now: datetime) -> int:
    """Return whole days from start to now, flooring partial days."""
    return math.floor((now - as_datetime(start, now)) / ONE_DAY)


def calculate_treatment_week(start: date | datetime, now: datetime) -> int:
    """Return the 1-indexed treatment week; days 0 to 6 are week 1."""
    return days_elapsed(start, now) // DAYS_PER_WEEK + 1


def calculate_treatment_day(start: date | datetime, now: datetime) -> int:
    """Return the 1-indexed treatment day."""
    return days_elapsed(start, now) + 1


def calculate_to_goal(current_weight: float, goal_weight: float) -> float:
    """Return the signed distance to goal; positive means still above it."""
    return current_weight - goal_weight


def calculate_goal_progress(
    start_weight: float, current_weight: float, goal_weight: float
) -> float:
    """Return progress toward goal as a percentage clamped to 0..100."""
    total_to_lose = start_weight - goal_weight
    if total_to_lose <= 0:
        return 100
    progress = (start_weight - current_weight) / total_to_lose * 100
    return max(0, min(100, progress))


def calculate_weight_stats(weights: Sequence[float]) -> WeightStats:
    """Summarize weights given in chronological order.

    The sequence is trusted to be ordered; first and last are positional.
    """
    if not weights:
        return WeightStats(
            min=None, max=None, avg=None, first=None, last=None, change=None
        )
    first = weights[0]
    last = weights[-1]
    return WeightStats(
        min=round_half_up(min(weights), 2),
        max=round_half_up(max(weights), 2),
        avg=round_half_up(sum(weights) / len(weights), 2),
        first=round_half_up(first, 2),
        last=round_half_up(last, 2),
        change=round_half_up(last - first, 2),
    )


def summarize_progress(
    weights: Sequence[WeightEntry],
    profile: ProfileSnapshot | None,
    now: datetime,
) -> ProgressSummary:
    """Return headline progress numbers from chronological weight entries."""
    start_date = profile.treatment_start_date if profile else None
    treatment_day = (
        calculate_treatment_day(start_date, now) if start_date is not None else None
    )
    treatment_week = (
        calculate_treatment_week(start_date, now) if start_date is not None else None
    )

    total_change = percent_change = weekly_average = None
    current_bmi = bmi_category = to_goal = None
    if weights:
        first, last = weights[0], weights[-1]
        change = calculate_total_change(first.weight_kg, last.weight_kg)
        weeks = (last.recorded_at - first.recorded_at) / (ONE_DAY * DAYS_PER_WEEK)
        total_change = round_half_up(change, 2)
        percent_change = round_half_up(
            calculate_percent_change(first.weight_kg, last.weight_kg), 2
        )
        weekly_average = round_half_up(calculate_weekly_average(change, weeks), 2)
        if profile and profile.height_cm:
            bmi = calculate_bmi(last.weight_kg, profile.height_cm)
            current_bmi = round_half_up(bmi, 1)
            bmi_category = get_bmi_category(bmi).value
        if profile and profile.goal_weight_kg is not None:
            to_goal = round_half_up(
                calculate_to_goal(last.weight_kg, profile.goal_weight_kg), 2
            )

    return ProgressSummary(
        treatment_day=treatment_day,
        treatment_week=treatment_week,
        total_change=total_change,
        percent_change=percent_change,
        weekly_average=weekly_average,
        current_bmi=current_bmi,
        bmi_category=bmi_category,
        to_goal=to_goal,
    )


def as_datetime(value: date | datetime, reference: datetime) -> datetime:
    """Return a datetime, turning bare dates into midnight in reference's zone."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=reference.tzinfo)
