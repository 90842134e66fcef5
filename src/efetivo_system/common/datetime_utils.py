from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple

from ..core.exceptions import ValidationError


def parse_iso_date(value) -> date:
    """Parse YYYY-MM-DD string into date.

    date/datetime values are accepted and canonicalized to a plain date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Data inválida: {value!r} (use AAAA-MM-DD)")


def parse_optional_date(value) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_iso_date(value)


def to_iso(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def format_br(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_within(day: date, start: date, end: date) -> bool:
    return start <= day <= end


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start <= b_end and a_end >= b_start


def overlap_range(a_start: date, a_end: date, b_start: date, b_end: date) -> Optional[Tuple[date, date]]:
    if not ranges_overlap(a_start, a_end, b_start, b_end):
        return None
    return max(a_start, b_start), min(a_end, b_end)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
