"""UTC calendar-day helpers for dashboard ranges and exports.

Every ``date`` handled here stands for a UTC calendar day. Datetimes coming in
from query strings or the database are converted to UTC before the day is
taken, so bucketing never depends on the host timezone.

Month and year shifts clamp the day of month to the target month's length
(Jan 31 + 1 month -> Feb 28/29, Feb 29 + 1 year -> Feb 28) instead of
overflowing into the following month.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

PLACEHOLDER = "—"

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_MONTH_ABBR = tuple(name[:3] for name in _MONTH_NAMES)


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``[start, end]`` span of UTC calendar days."""

    start: date
    end: date


# A slice is a DateRange that never crosses a month boundary.
MonthSlice = DateRange


def parse_iso_date(value: str | date | None) -> date | None:
    """Return the UTC calendar day for an ISO date or datetime, or None.

    Accepts ``YYYY-MM-DD``, full ISO datetimes (``Z`` suffix, explicit offset,
    or naive which is read as UTC) and ``date``/``datetime`` instances.
    Never raises on bad input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _utc_day(value)
    if isinstance(value, date):
        return value
    trimmed = value.strip()
    if not trimmed:
        return None
    try:
        if len(trimmed) == 10:
            return date.fromisoformat(trimmed)
        if trimmed.endswith(("Z", "z")):
            trimmed = f"{trimmed[:-1]}+00:00"
        return _utc_day(datetime.fromisoformat(trimmed))
    except ValueError:
        return None


def _utc_day(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def iso_date_string(day: date) -> str:
    return day.isoformat()


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def days_in_month(year: int, month: int) -> int:
    return end_of_month_utc(date(year, month, 1)).day


def start_of_month_utc(day: date) -> date:
    return day.replace(day=1)


def end_of_month_utc(day: date) -> date:
    # First day of the following month, minus one day
    if day.month == 12:
        return date(day.year, 12, 31)
    return date(day.year, day.month + 1, 1) - timedelta(days=1)


def add_months_utc(day: date, months: int) -> date:
    """Shift ``day`` by ``months`` (may be negative), clamping the day of month."""
    year, month_index = divmod(day.year * 12 + (day.month - 1) + months, 12)
    month = month_index + 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def add_years_utc(day: date, years: int) -> date:
    year = day.year + years
    return date(year, day.month, min(day.day, days_in_month(year, day.month)))


def shift_range_by_months(date_range: DateRange, months: int) -> DateRange:
    """Shift each endpoint on its own; the span length may change by a few days."""
    return DateRange(
        start=add_months_utc(date_range.start, months),
        end=add_months_utc(date_range.end, months),
    )


def shift_range_by_years(date_range: DateRange, years: int) -> DateRange:
    return DateRange(
        start=add_years_utc(date_range.start, years),
        end=add_years_utc(date_range.end, years),
    )


def slice_range_by_months(date_range: DateRange) -> list[MonthSlice]:
    """Partition a range into ordered, gap-free, month-aligned slices."""
    slices: list[MonthSlice] = []
    cursor = date_range.start
    while cursor <= date_range.end:
        month_end = end_of_month_utc(cursor)
        if month_end >= date_range.end:
            slices.append(MonthSlice(start=cursor, end=date_range.end))
            break
        slices.append(MonthSlice(start=cursor, end=month_end))
        # month_end < date.max here, so the next day always exists
        cursor = month_end + timedelta(days=1)
    return slices


def has_year_before(day: date) -> bool:
    """True when shifting ``day`` back one month or one year stays representable."""
    return day.year > date.min.year


def start_of_day_utc(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day_utc(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def format_date(value: str | date | None) -> str:
    """Render a day as ``DD/MM/YYYY``; unparseable strings are returned as-is."""
    day = parse_iso_date(value)
    if day is None:
        return value if isinstance(value, str) and value else PLACEHOLDER
    return day.strftime("%d/%m/%Y")


def format_date_range(start: str | date | None, end: str | date | None) -> str:
    return f"{format_date(start)} — {format_date(end)}"


def format_range_summary(start: str | date | None, end: str | date | None) -> str:
    start_day = parse_iso_date(start)
    end_day = parse_iso_date(end)
    if start_day is None or end_day is None:
        return PLACEHOLDER
    return f"From {_short_label(start_day)} to {_short_label(end_day)}"


def _short_label(day: date) -> str:
    return f"{day.day} {_MONTH_ABBR[day.month - 1]} {day.year}"


def month_abbr(month: int) -> str:
    return _MONTH_ABBR[month - 1]


def month_name(month: int) -> str:
    return _MONTH_NAMES[month - 1]
