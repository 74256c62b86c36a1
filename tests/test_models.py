"""Tests for domain model validation."""

from datetime import UTC, date, datetime

import pytest

from jab_tracker.domain.models import (
    InjectionEntry,
    InjectionSite,
    ProfileSnapshot,
    SideEffectRecord,
    WeightEntry,
)
from jab_tracker.errors import InvalidInputError

MOMENT = datetime(2025, 3, 1, 8, tzinfo=UTC)


@pytest.mark.parametrize("kg", [0, -1.5])
def test_weight_must_be_positive(kg: float) -> None:
    with pytest.raises(InvalidInputError):
        WeightEntry(weight_kg=kg, recorded_at=MOMENT)


def test_injection_dose_must_be_on_ladder() -> None:
    entry = InjectionEntry(
        dose_mg=12.5, site=InjectionSite.ARM_LEFT, injection_date=MOMENT
    )
    assert entry.dose_mg == 12.5

    with pytest.raises(InvalidInputError):
        InjectionEntry(dose_mg=3, site=InjectionSite.ARM_LEFT, injection_date=MOMENT)


def test_side_effect_severity_range() -> None:
    assert SideEffectRecord("nausea", 0).severity == 0
    assert SideEffectRecord("nausea", 5).severity == 5
    with pytest.raises(InvalidInputError):
        SideEffectRecord("nausea", 6)


def test_preferred_injection_day_range() -> None:
    with pytest.raises(InvalidInputError):
        ProfileSnapshot(
            starting_weight_kg=100,
            goal_weight_kg=80,
            treatment_start_date=date(2025, 1, 1),
            preferred_injection_day=7,
        )


def test_invalid_input_is_a_value_error() -> None:
    assert issubclass(InvalidInputError, ValueError)
