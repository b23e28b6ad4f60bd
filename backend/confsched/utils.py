# backend/confsched/utils.py
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any


def to_utc_datetime(v: Any) -> datetime | None:
    """
    Accepts:
      - None / ''
      - datetime/date
      - 'YYYY-MM-DD' or full ISO-8601 string ('Z' or offset allowed)
    Returns:
      - timezone-aware datetime in UTC, or None when unparseable

    Naive values are taken as UTC; dates become UTC midnight.
    """
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        dt = v
    elif isinstance(v, date):
        dt = datetime.combine(v, time.min)
    elif isinstance(v, str):
        try:
            dt = datetime.fromisoformat(v.strip())
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def clean_time(v: str | None) -> str | None:
    """'09:00:00' -> '09:00'; blanks -> None"""
    if not v:
        return None
    v = v.strip()
    return v[:5] if v else None
