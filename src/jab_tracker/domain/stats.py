"""Domain models for weight statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeightStats:
    """Aggregate statistics over an ordered weight sequence."""

    min: float | None
    max: float | None
    avg: float | None
    first: float | None
    last: float | None
    change: float | None


@dataclass(frozen=True)
class DerivedPeriodStats:
    """Statistics restricted to a requested window.

    Every value field is None together when the window holds no entries.
    """

    count: int
    start_weight: float | None = None
    end_weight: float | None = None
    min_weight: float | None = None
    max_weight: float | None = None
    avg_weight: float | None = None
    total_change: float | None = None
    percent_change: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.count == 0


@dataclass(frozen=True)
class DerivedOverallStats:
    """Lifetime progress anchored to the profile or first and latest entries."""

    starting_weight: float | None
    current_weight: float | None
    goal_weight: float | None
    total_lost: float | None
    remaining_to_goal: float | None
    progress_percent: float | None


@dataclass(frozen=True)
class WeightStatsReport:
    """Period and overall statistics returned together."""

    period: DerivedPeriodStats
    overall: DerivedOverallStats


@dataclass(frozen=True)
class ProgressSummary:
    """Headline numbers for the results screen."""

    treatment_day: int | None
    treatment_week: int | None
    total_change: float | None
    percent_change: float | None
    weekly_average: float | None
    current_bmi: float | None
    bmi_category: str | None
    to_goal: float | None
