"""Day buckets for a conference's date span.

Every key is a UTC calendar date (``YYYY-MM-DD``). The same derivation is used
for the conference span and for each schedule entry, otherwise entries near
midnight land in the wrong day for venues with a timezone offset.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Iterable

from .models import Schedule
from .utils import to_utc_datetime

logger = logging.getLogger(__name__)

NO_START_TIME = "00:00"

# display names stay English whatever the process locale
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass
class DayGrouping:
    days: list[str] = field(default_factory=list)
    grouped: dict[str, list[Schedule]] = field(default_factory=dict)
    # ids of entries whose date could not be read
    skipped: list[str | None] = field(default_factory=list)


def date_key(v: Any) -> str | None:
    dt = to_utc_datetime(v)
    if dt is None:
        return None
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def day_span(start: Any, end: Any) -> list[str]:
    first = to_utc_datetime(start)
    last = to_utc_datetime(end)
    if first is None or last is None or last < first:
        return []

    first_day, last_day = first.date(), last.date()
    return [
        (first_day + timedelta(days=i)).isoformat()
        for i in range((last_day - first_day).days + 1)
    ]


def sort_by_start_time(entries: Iterable[Schedule]) -> list[Schedule]:
    return sorted(entries, key=lambda s: s.start_time or NO_START_TIME)


def group_by_day(start: Any, end: Any, entries: Iterable[Schedule]) -> DayGrouping:
    """Bucket schedule entries into the days from ``start`` to ``end``.

    Days without entries are kept with an empty list. Entries whose date does
    not parse are left out and reported in ``skipped``; entries dated outside
    the span are left out silently.
    """
    days = day_span(start, end)
    grouped: dict[str, list[Schedule]] = {d: [] for d in days}
    skipped = []

    for entry in entries:
        key = date_key(entry.date)
        if key is None:
            logger.warning("schedule %s has unreadable date %r; left out of the grid", entry.id, entry.date)
            skipped.append(entry.id)
            continue
        if key in grouped:
            grouped[key].append(entry)

    for key in grouped:
        grouped[key] = sort_by_start_time(grouped[key])

    return DayGrouping(days=days, grouped=grouped, skipped=skipped)


def day_number(key: str, conference_start: Any) -> int:
    """1-based ordinal of ``key`` inside the conference."""
    current = to_utc_datetime(key)
    start = to_utc_datetime(conference_start)
    if current is None or start is None:
        return 1
    diff_days = (current - start).total_seconds() / 86400
    return max(1, math.ceil(diff_days) + 1)


def format_day(key: str) -> str:
    """'2025-06-11' -> 'Wednesday, June 11, 2025' (display only)"""
    dt = to_utc_datetime(key)
    if dt is None:
        return key
    return f"{WEEKDAYS[dt.weekday()]}, {MONTHS[dt.month - 1]} {dt.day}, {dt.year}"


def day_title(key: str, number: int) -> str:
    # noon keeps the weekday stable whatever the viewer's offset
    dt = to_utc_datetime(f"{key}T12:00:00") if key else None
    if dt is None:
        return f"Day {number}: {key}"
    return f"{WEEKDAYS[dt.weekday()]}, {dt.day} {MONTHS[dt.month - 1]}"
