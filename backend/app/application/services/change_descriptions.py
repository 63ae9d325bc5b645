"""Formatting helpers for confirmation messages and audit diffs."""

import math
from collections.abc import Mapping

from app.domain.entities import FACILITY_COUNTERS
from app.domain.exceptions import RecordValidationError

EMPTY_VALUE = "(empty)"


def format_number(value: float | int | None) -> str:
    """Render a number without a trailing ``.0``; None renders as ``(empty)``."""
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def transition(old: float | int | None, new: float | int | None) -> str:
    return f"{format_number(old)} -> {format_number(new)}"


def counter_changes(old: Mapping[str, int], new: Mapping[str, int]) -> str:
    """``label:old->new`` for every facility counter that changed."""
    return ", ".join(
        f"{label}:{old[field]}->{new[field]}"
        for field, label in FACILITY_COUNTERS.items()
        if old[field] != new[field]
    )


def counter_listing(counters: Mapping[str, int]) -> str:
    return ", ".join(f"{label}:{counters[field]}" for field, label in FACILITY_COUNTERS.items())


def parse_number(field: str, raw: str | float | int) -> float:
    """Parse user input as a number.

    Raises:
        RecordValidationError: The input is blank or not numeric.
    """
    if isinstance(raw, bool):
        raise RecordValidationError(field, "must be a number")
    try:
        value = float(raw) if isinstance(raw, (int, float)) else float(str(raw).strip())
    except ValueError:
        raise RecordValidationError(field, "must be a number") from None
    if not math.isfinite(value):
        raise RecordValidationError(field, "must be a number")
    return value
