"""Domain models for weekly wellness summaries."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class SideEffectSummary:
    """Occurrences of one side effect type across a week."""

    effect_type: str
    occurrences: int
    severities: list[int]


@dataclass(frozen=True)
class ActivitySummary:
    """Aggregated activity for a week."""

    workout_days: int = 0
    total_minutes: int = 0
    avg_minutes_per_workout: int = 0
    total_steps: int = 0
    avg_daily_steps: int = 0
    workout_types: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class MentalSummary:
    """Mood, motivation and cravings observed across a week."""

    moods: list[str] = field(default_factory=list)
    motivations: list[str] = field(default_factory=list)
    cravings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DietSummary:
    """Aggregated diet for the days that logged a diet record."""

    days_logged: int = 0
    total_meals: int = 0
    avg_meals_per_day: float = 0
    total_protein_grams: int = 0
    avg_protein_per_day: int = 0
    total_water_liters: float = 0
    avg_water_per_day: float = 0


@dataclass(frozen=True)
class WeekSummary:
    """Wellness summary for a Monday-start week."""

    week_start: date
    week_end: date
    days_logged: int
    side_effects: list[SideEffectSummary]
    activity: ActivitySummary
    mental: MentalSummary
    diet: DietSummary
