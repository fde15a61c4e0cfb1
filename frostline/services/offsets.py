"""
Frost-relative offsets.

Users enter "N weeks/days before/after frost"; plants store a single signed
day count (negative = before the frost date). An offset that was left blank is
stored as NULL, never 0. Zero means "due on the frost date itself".
"""
from typing import Literal, Optional

OffsetUnit = Literal["days", "weeks"]
OffsetDirection = Literal["before", "after"]

DAYS_PER_WEEK = 7
# Largest distance from the frost date a single offset may reach
MAX_OFFSET_DAYS = 365


def parse_magnitude(raw: object) -> Optional[int]:
    """
    Parse a user-entered magnitude.

    None or a blank string means the offset is not configured and returns None.
    Anything else must be an integer >= 0; raises ValueError otherwise.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError("Offset must be a whole number")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError:
            raise ValueError(f"Offset {text!r} must be a whole number") from None
    if value < 0:
        raise ValueError("Offset must be zero or greater; use the direction to go before frost")
    return value


def to_days(magnitude: int, unit: OffsetUnit, direction: OffsetDirection) -> int:
    days = magnitude * (DAYS_PER_WEEK if unit == "weeks" else 1)
    return -days if direction == "before" else days


def split_offset(offset_days: Optional[int]) -> Optional[tuple[int, OffsetUnit, OffsetDirection]]:
    """Inverse of to_days, preferring weeks when the offset is a whole number of them."""
    if offset_days is None:
        return None
    direction: OffsetDirection = "before" if offset_days < 0 else "after"
    abs_days = abs(offset_days)
    if abs_days % DAYS_PER_WEEK == 0:
        return abs_days // DAYS_PER_WEEK, "weeks", direction
    return abs_days, "days", direction


def _pluralize(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_offset(offset_days: Optional[int]) -> str:
    """Render a signed offset for display, e.g. -14 -> "2 weeks before frost"."""
    split = split_offset(offset_days)
    if split is None:
        return ""
    magnitude, unit, direction = split
    word = "week" if unit == "weeks" else "day"
    return f"{_pluralize(magnitude, word)} {direction} frost"
