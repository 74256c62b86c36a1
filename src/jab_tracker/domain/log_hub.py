"""Domain models for the daily log hub."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class WeekStripDay:
    """One day of the rolling week strip."""

    date: date
    has_weight: bool
    has_checkin: bool
    has_injection: bool


@dataclass(frozen=True)
class TodayProgress:
    """Which check-in sections are complete for today."""

    weight: bool
    mood: bool
    diet: bool
    activity: bool

    @property
    def completed(self) -> int:
        return sum((self.weight, self.mood, self.diet, self.activity))

    @property
    def total(self) -> int:
        return 4


@dataclass(frozen=True)
class LatestWeight:
    """Most recent weight value."""

    weight_kg: float
    recorded_at: datetime


@dataclass(frozen=True)
class LogHub:
    """Everything the log hub screen shows."""

    today: date
    progress: TodayProgress
    last_weight: LatestWeight | None
    streak: int
    week_strip: list[WeekStripDay]
