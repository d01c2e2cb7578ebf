"""Utility helpers."""

from datetime import datetime, timedelta
import math
import time
from typing import Optional

SHORT_DATE_FMT = "%d %b %Y"
DAY_LABEL_FMT = "%d %b"


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        if "T" in value:
            return datetime.fromisoformat(value)
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return None


def nights_between(start_date_str: str, end_date_str: str) -> int:
    """Whole nights between two dates, rounding partial days up and never negative."""

    start = _parse_iso(start_date_str)
    end = _parse_iso(end_date_str)
    if not start or not end:
        raise ValueError(f"Invalid trip dates: {start_date_str!r} to {end_date_str!r}")
    days = (end - start).total_seconds() / 86400
    return max(0, math.ceil(days))


def format_short_date(value: str) -> str:
    """Return a heading like '10 Jun 2025'."""

    parsed = _parse_iso(value)
    if not parsed:
        return value
    return parsed.strftime(SHORT_DATE_FMT)


def format_day_label(value: str) -> str:
    """Return a day badge like '10 Jun'."""

    parsed = _parse_iso(value)
    if not parsed:
        return value
    return parsed.strftime(DAY_LABEL_FMT)


def add_days(start_date_str: str, offset: int) -> Optional[str]:
    parsed = _parse_iso(start_date_str)
    if not parsed:
        return None
    return (parsed.date() + timedelta(days=offset)).isoformat()


def make_id(prefix: str) -> str:
    """Timestamped identifier such as 'itinerary_1718000000000'."""

    return f"{prefix}_{time.time_ns() // 1_000_000}"


def duration_label(nights: int) -> str:
    return f"{nights}N / {nights + 1}D"
