"""Shared rounding for displayed values."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to a number of decimals with halves rounded away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_optional(value: float | None, digits: int = 2) -> float | None:
    """Round like round_half_up, passing None through."""
    return round_half_up(value, digits) if value is not None else None
