"""Tests for unit conversions."""

import pytest

from jab_tracker.errors import InvalidInputError
from jab_tracker.services.conversions import (
    WeightUnit,
    cm_to_feet_inches,
    convert_weight,
    feet_inches_to_cm,
    format_height,
    format_weight,
    kg_to_lbs,
    kg_to_stone,
    kg_to_stone_lbs,
    lbs_to_kg,
    stone_lbs_to_kg,
)


def test_kg_and_lbs_are_inverse() -> None:
    assert kg_to_lbs(100) == pytest.approx(220.462)
    assert lbs_to_kg(220.462) == pytest.approx(100)


def test_kg_to_stone() -> None:
    assert kg_to_stone(100) == pytest.approx(15.7473)


def test_kg_to_stone_lbs_splits_whole_stone() -> None:
    result = kg_to_stone_lbs(100)

    assert result.stone == 15
    assert result.lbs == 10.5


def test_stone_lbs_to_kg() -> None:
    assert stone_lbs_to_kg(15, 10.462) == pytest.approx(100, abs=0.01)


def test_cm_to_feet_inches() -> None:
    assert cm_to_feet_inches(180) == (5, 11)
    assert cm_to_feet_inches(152.4) == (5, 0)


def test_cm_to_feet_inches_keeps_twelve_inches_below_a_foot_boundary() -> None:
    feet, inches = cm_to_feet_inches(182.5)

    assert (feet, inches) == (5, 12)


def test_feet_inches_to_cm() -> None:
    assert feet_inches_to_cm(6) == pytest.approx(182.88, abs=0.01)


@pytest.mark.parametrize("unit", list(WeightUnit))
def test_convert_weight_same_unit_is_identity(unit: WeightUnit) -> None:
    assert convert_weight(81.3, unit, unit) == 81.3


@pytest.mark.parametrize(
    ("first", "second"),
    [("kg", "lbs"), ("lbs", "stone"), ("stone", "kg"), ("kg", "stone")],
)
def test_convert_weight_round_trip(first: str, second: str) -> None:
    converted = convert_weight(93.7, first, second)

    assert convert_weight(converted, second, first) == pytest.approx(93.7, abs=0.01)


def test_convert_weight_rejects_unknown_unit() -> None:
    with pytest.raises(InvalidInputError):
        convert_weight(80, "kg", "grams")


def test_format_weight_variants() -> None:
    assert format_weight(100) == "100.0 kg (220.5 lbs)"
    assert format_weight(100, "lbs") == "220.5 lbs (100.0 kg)"
    assert format_weight(100, WeightUnit.STONE) == "15st 11lb (100.0 kg)"


def test_format_height_variants() -> None:
    assert format_height(180) == "180 cm (5'11\")"
    assert format_height(180, "ft-in") == "5'11\" (180 cm)"
