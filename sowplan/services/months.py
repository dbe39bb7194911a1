"""
Month-name arithmetic for year-agnostic planting and harvest windows.

Windows in the plant dataset are written as Swedish month names
("mars", "april", "sept", ...). This module is the only place those names
are turned into numbers.

Uses a fixed non-leap calendar for spans: February is always 28 days, even
in leap years. Concrete dates (first/last day of a month in a given year)
use the real calendar.

Ranges that wrap across the new year (e.g. "nov" → "feb") are rejected with
MonthRangeError, never silently computed.
"""
import calendar
from datetime import date


class MonthRangeError(ValueError):
    """Unknown month name or a month range whose end precedes its start."""


# ── Name table ────────────────────────────────────────────────────────────────

MONTH_ORDER: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mars": 3,
    "april": 4,
    "maj": 5,
    "juni": 6,
    "juli": 7,
    "aug": 8,
    "sept": 9,
    "sep": 9,  # alias for "sept", both spellings occur in the dataset
    "okt": 10,
    "nov": 11,
    "dec": 12,
}

# Canonical name per month (first spelling wins, so "sept" over "sep")
CANONICAL_MONTH_NAMES: dict[int, str] = {order: name for name, order in reversed(MONTH_ORDER.items())}

# Non-leap year
DAYS_IN_MONTH: dict[int, int] = {
    1: 31, 2: 28, 3: 31, 4: 30, 5: 31, 6: 30,
    7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31,
}


def month_order(month_name: str) -> int:
    """Return 1–12 for a month name (case-insensitive, surrounding whitespace ignored)."""
    if not isinstance(month_name, str):
        raise MonthRangeError(f"Unknown month: {month_name!r}")
    order = MONTH_ORDER.get(month_name.strip().lower())
    if order is None:
        raise MonthRangeError(f"Unknown month: {month_name!r}")
    return order


def month_name_from_order(order: int) -> str:
    name = CANONICAL_MONTH_NAMES.get(order)
    if name is None:
        raise MonthRangeError(f"Month order out of range: {order!r}")
    return name


def days_in_month(month_name: str) -> int:
    """Days in the named month, February fixed at 28."""
    return DAYS_IN_MONTH[month_order(month_name)]


def month_span(start_month: str, end_month: str) -> int:
    """
    Days from the first day of start_month to the last day of end_month, inclusive.

        month_span("feb", "april") -> 89
        month_span("jan", "jan")   -> 31
        month_span("april", "feb") -> MonthRangeError
    """
    start = month_order(start_month)
    end = month_order(end_month)
    if end < start:
        raise MonthRangeError(
            f"Month range {start_month!r}–{end_month!r} wraps across the year boundary"
        )
    return sum(DAYS_IN_MONTH[m] for m in range(start, end + 1))


def first_day_of_month(month_name: str, year: int) -> date:
    return date(year, month_order(month_name), 1)


def last_day_of_month(month_name: str, year: int) -> date:
    month = month_order(month_name)
    return date(year, month, calendar.monthrange(year, month)[1])


def parse_iso_date(value: str) -> date:
    """Parse "YYYY-MM-DD"; raises ValueError for anything else."""
    if not isinstance(value, str):
        raise ValueError(f"Invalid ISO date: {value!r}")
    return date.fromisoformat(value.strip())


def shift_years(value: date, years: int) -> date:
    """Same calendar day ``years`` later; 29 February falls back to the 28th."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, day=28)
