"""Domain models for logged treatment data.

All weights are kilograms and all heights are centimeters. Unit conversion
happens only at presentation boundaries.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from jab_tracker.errors import InvalidInputError

DOSES: tuple[float, ...] = (2.5, 5.0, 7.5, 10.0, 12.5, 15.0)
MAX_SEVERITY = 5
SATURDAY = 6


class InjectionSite(str, Enum):
    """Anatomical injection sites in rotation order."""

    ABDOMEN_LEFT = "abdomen_left"
    ABDOMEN_RIGHT = "abdomen_right"
    THIGH_LEFT = "thigh_left"
    THIGH_RIGHT = "thigh_right"
    ARM_LEFT = "arm_left"
    ARM_RIGHT = "arm_right"


@dataclass(frozen=True)
class WeightEntry:
    """A single body-weight measurement."""

    weight_kg: float
    recorded_at: datetime
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.weight_kg <= 0:
            raise InvalidInputError("Weight must be greater than 0")


@dataclass(frozen=True)
class InjectionEntry:
    """A logged injection with its dose and site."""

    dose_mg: float
    site: InjectionSite
    injection_date: datetime
    batch_number: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if float(self.dose_mg) not in DOSES:
            raise InvalidInputError(f"Unsupported dose: {self.dose_mg}")


@dataclass(frozen=True)
class SideEffectRecord:
    """A side effect observed on a given day."""

    effect_type: str
    severity: int

    def __post_init__(self) -> None:
        if not 0 <= self.severity <= MAX_SEVERITY:
            raise InvalidInputError(f"Severity out of range: {self.severity}")


@dataclass(frozen=True)
class ActivityRecord:
    """Activity details for a day."""

    workout_type: str | None = None
    duration_minutes: int | None = None
    steps: int | None = None


@dataclass(frozen=True)
class MentalRecord:
    """Mood, motivation and cravings for a day."""

    mood_level: str | None = None
    motivation_level: str | None = None
    cravings_level: str | None = None


@dataclass(frozen=True)
class DietRecord:
    """Diet details for a day."""

    hunger_level: str | None = None
    meals_count: int | None = None
    protein_grams: int | None = None
    water_liters: float | None = None


@dataclass(frozen=True)
class DailyLogEntry:
    """Daily check-in keyed by calendar date."""

    log_date: date
    side_effects: tuple[SideEffectRecord, ...] = field(default_factory=tuple)
    activity: ActivityRecord | None = None
    mental: MentalRecord | None = None
    diet: DietRecord | None = None


@dataclass(frozen=True)
class ProfileSnapshot:
    """Read-only view of the user's treatment profile."""

    starting_weight_kg: float | None
    goal_weight_kg: float | None
    treatment_start_date: date | None
    preferred_injection_day: int | None = None
    height_cm: float | None = None

    def __post_init__(self) -> None:
        day = self.preferred_injection_day
        if day is not None and not 0 <= day <= SATURDAY:
            raise InvalidInputError(f"Preferred injection day out of range: {day}")
