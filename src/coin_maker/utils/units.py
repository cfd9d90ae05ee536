"""Numeric helpers: decimal coercion, nano rounding and chain value normalization."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

NANO = Decimal("0.000000001")
"""Nanocurrency precision (9 decimal places)."""

NANO_UNITS_THRESHOLD = Decimal("1e12")
"""Raw values above this are assumed to be expressed in nano units."""

NANO_PER_UNIT = Decimal("1e9")


def to_decimal(value: Any, default: Decimal | None = None) -> Decimal | None:
    """Coerce int/float/str/Decimal to Decimal. Returns default for None or unparsable input."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    return d if d.is_finite() else default


def round_nano(value: Decimal) -> Decimal:
    """Round to 9 decimal places, half away from zero."""
    return value.quantize(NANO, rounding=ROUND_HALF_UP)


def parse_chain_value(value: Any) -> Decimal:
    """Return an on-chain amount in standard units.

    Missing or non-numeric values count as 0. Values above 1e12 are taken to
    be nano units and divided by 1e9.
    """
    d = to_decimal(value)
    if d is None:
        return Decimal(0)
    if d > NANO_UNITS_THRESHOLD:
        return d / NANO_PER_UNIT
    return d
