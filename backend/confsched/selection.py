"""Conference selection per series: filter -> years -> pick one."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .models import Conference, ConferenceType
from .utils import to_utc_datetime


@dataclass
class ConferenceSelection:
    series: ConferenceType
    conferences: list[Conference] = field(default_factory=list)
    years: list[str] = field(default_factory=list)
    selected_year: Optional[str] = None
    conference: Optional[Conference] = None


def has_valid_range(conf: Conference) -> bool:
    start = to_utc_datetime(conf.start_date)
    end = to_utc_datetime(conf.end_date)
    if start is None or end is None:
        return False
    return end >= start


def conferences_for_series(conferences: Iterable[Conference], series: ConferenceType) -> list[Conference]:
    return [c for c in conferences if c.type == series and has_valid_range(c)]


def _year_sort_key(year: str):
    try:
        return (0, -int(year))
    except ValueError:
        return (1, year)


def available_years(conferences: Iterable[Conference]) -> list[str]:
    """Distinct years, newest first. Non-numeric labels go last."""
    years = {c.year for c in conferences if c.year}
    return sorted(years, key=_year_sort_key)


def select_conference(conferences: Iterable[Conference], year: Optional[str]) -> Optional[Conference]:
    for c in conferences:
        if c.year == year:
            return c
    return None


def select_for_series(conferences: Iterable[Conference], series: ConferenceType,
                      year: Optional[str] = None) -> ConferenceSelection:
    valid = conferences_for_series(conferences, series)
    years = available_years(valid)
    if year is None and years:
        year = years[0]
    return ConferenceSelection(
        series=series,
        conferences=valid,
        years=years,
        selected_year=year,
        conference=select_conference(valid, year),
    )


def normalize_series(value: Optional[str]) -> Optional[ConferenceType]:
    """Loose spelling -> series. 'admin_icicyta', 'ICICyTA', 'ICICoDSA' ..."""
    v = (value or "").strip().upper()
    if not v:
        return None
    if "ICICYTA" in v or v == "ICYCTA":
        return ConferenceType.ICICYTA
    if "ICODSA" in v:
        return ConferenceType.ICODSA
    return None


def series_for_role(role: Optional[str]) -> ConferenceType:
    return normalize_series(role) or ConferenceType.ICICYTA
