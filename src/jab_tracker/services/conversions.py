"""Weight and height unit conversions.

Storage and every engine computation use kilograms and centimeters. These
helpers exist for the presentation boundary only.
"""

import math
from enum import Enum
from typing import NamedTuple

from jab_tracker.errors import InvalidInputError
from jab_tracker.services.rounding import round_half_up

KG_TO_LBS = 2.20462
KG_TO_STONE = 0.157473
CM_TO_INCH = 0.393701
INCHES_PER_FOOT = 12
LBS_PER_STONE = 14


class WeightUnit(str, Enum):
    """Supported weight units."""

    KG = "kg"
    LBS = "lbs"
    STONE = "stone"


class HeightUnit(str, Enum):
    """Supported height units."""

    CM = "cm"
    FEET_INCHES = "ft-in"


class StoneLbs(NamedTuple):
    """Whole stone plus remaining pounds."""

    stone: int
    lbs: float


class FeetInches(NamedTuple):
    """Whole feet plus rounded inches."""

    feet: int
    inches: int


def parse_weight_unit(value: str | WeightUnit) -> WeightUnit:
    """Return the weight unit for a name or raise InvalidInputError."""
    try:
        return WeightUnit(value)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown weight unit: {value}") from exc


def parse_height_unit(value: str | HeightUnit) -> HeightUnit:
    """Return the height unit for a name or raise InvalidInputError."""
    try:
        return HeightUnit(value)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown height unit: {value}") from exc


def kg_to_lbs(kg: float) -> float:
    return kg * KG_TO_LBS


def lbs_to_kg(lbs: float) -> float:
    return lbs / KG_TO_LBS


def kg_to_stone(kg: float) -> float:
    return kg * KG_TO_STONE


def stone_to_kg(stone: float) -> float:
    return stone / KG_TO_STONE


def kg_to_stone_lbs(kg: float) -> StoneLbs:
    """Split a weight into whole stone and remaining pounds."""
    total_lbs = kg_to_lbs(kg)
    stone = math.floor(total_lbs / LBS_PER_STONE)
    lbs = total_lbs % LBS_PER_STONE
    return StoneLbs(stone=stone, lbs=round_half_up(lbs, 1))


def stone_lbs_to_kg(stone: float, lbs: float) -> float:
    return lbs_to_kg(stone * LBS_PER_STONE + lbs)


def cm_to_feet_inches(cm: float) -> FeetInches:
    """Split a height into feet and rounded inches.

    Inches may come out as 12 just below a foot boundary; callers display it
    as-is.
    """
    total_inches = cm * CM_TO_INCH
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = int(round_half_up(total_inches % INCHES_PER_FOOT))
    return FeetInches(feet=feet, inches=inches)


def feet_inches_to_cm(feet: float, inches: float = 0) -> float:
    return (feet * INCHES_PER_FOOT + inches) / CM_TO_INCH


def convert_weight(
    value: float, from_unit: str | WeightUnit, to_unit: str | WeightUnit
) -> float:
    """Convert a weight between units through kilograms."""
    source = parse_weight_unit(from_unit)
    target = parse_weight_unit(to_unit)
    if source == target:
        return value

    if source == WeightUnit.LBS:
        kg = lbs_to_kg(value)
    elif source == WeightUnit.STONE:
        kg = stone_to_kg(value)
    else:
        kg = value

    if target == WeightUnit.LBS:
        return kg_to_lbs(kg)
    if target == WeightUnit.STONE:
        return kg_to_stone(kg)
    return kg


def format_weight(kg: float, primary_unit: str | WeightUnit = WeightUnit.KG) -> str:
    """Format a weight in the primary unit with a secondary unit in brackets."""
    unit = parse_weight_unit(primary_unit)
    lbs = kg_to_lbs(kg)
    if unit == WeightUnit.LBS:
        return f"{_fixed(lbs, 1)} lbs ({_fixed(kg, 1)} kg)"
    if unit == WeightUnit.STONE:
        stone, remaining_lbs = kg_to_stone_lbs(kg)
        return f"{stone}st {_fixed(remaining_lbs, 0)}lb ({_fixed(kg, 1)} kg)"
    return f"{_fixed(kg, 1)} kg ({_fixed(lbs, 1)} lbs)"


def format_height(cm: float, primary_unit: str | HeightUnit = HeightUnit.CM) -> str:
    """Format a height in the primary unit with a secondary unit in brackets."""
    unit = parse_height_unit(primary_unit)
    feet, inches = cm_to_feet_inches(cm)
    if unit == HeightUnit.FEET_INCHES:
        return f"{feet}'{inches}\" ({_fixed(cm, 0)} cm)"
    return f"{_fixed(cm, 0)} cm ({feet}'{inches}\")"


def _fixed(value: float, digits: int) -> str:
    return f"{round_half_up(value, digits):.{digits}f}"
