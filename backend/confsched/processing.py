"""Public read-only schedule: conference + schedules -> titled days of items."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Iterable, Optional

from .grouping import date_key, day_title, sort_by_start_time
from .models import (
    Conference, ProcessedConference, ProcessedDay, Room, RoomType, Schedule, ScheduleItem,
)
from .templates import DEFAULT_LOCATION, DEFAULT_TITLE, NOTE_TITLE_KEYWORDS, SCHEDULE_TYPE_TITLES
from .utils import clean_time

SPEAKER_RE = re.compile(r"(?:Speech by|Keynote by|by)\s*(?:[^:]*:)?\s*([^,\n.]+)", re.IGNORECASE)
MODERATOR_RE = re.compile(r"Moderator:\s*([^,\n.]+)", re.IGNORECASE)


def extract_moderator(description: Optional[str]) -> Optional[str]:
    if not description:
        return None
    m = MODERATOR_RE.search(description)
    return m.group(1).strip() if m else None


def extract_speaker(room: Optional[Room]) -> Optional[str]:
    if room is None:
        return None
    description = room.description or ""
    m = SPEAKER_RE.search(description)
    if m:
        return m.group(1).strip()
    moderator = extract_moderator(description)
    if moderator:
        return moderator
    return room.track.name if room.track else None


def title_from_type(type_value, notes: Optional[str] = None) -> str:
    if notes:
        lower = notes.lower()
        for t in NOTE_TITLE_KEYWORDS:
            if t["keyword"] in lower:
                return t["title"]
    key = getattr(type_value, "value", type_value)
    return SCHEDULE_TYPE_TITLES.get(key, DEFAULT_TITLE)


def schedule_title(schedule: Schedule, main_room: Optional[Room] = None) -> str:
    # main room description > notes > keyword/type title
    if main_room and main_room.description:
        return main_room.description
    if schedule.notes:
        return schedule.notes
    return title_from_type(schedule.type, schedule.notes)


def location_of(schedule: Schedule) -> str:
    if not schedule.rooms:
        return DEFAULT_LOCATION
    main = next((r for r in schedule.rooms if r.type == RoomType.MAIN), None)
    if main:
        return f"{main.name} (Online)" if main.online_meeting_url else main.name
    parallel = [r for r in schedule.rooms if r.type == RoomType.PARALLEL]
    if parallel:
        return f"{len(parallel)} Parallel Sessions"
    return "Conference Hall"


def time_display(start: Optional[str], end: Optional[str]) -> str:
    start, end = clean_time(start), clean_time(end)
    if not start and not end:
        return ""
    if not start:
        return f"Until {end}"
    if not end:
        return f"From {start}"
    return f"{start} - {end}"


def to_schedule_item(schedule: Schedule, day: str) -> ScheduleItem:
    main = next((r for r in schedule.rooms if r.type == RoomType.MAIN), None)
    parallel = next((r for r in schedule.rooms if r.type == RoomType.PARALLEL), None)
    first = main or parallel

    if not schedule.rooms:
        return ScheduleItem(
            id=schedule.id,
            title=title_from_type(schedule.type, schedule.notes),
            description=schedule.notes,
            location=DEFAULT_LOCATION,
            date=day,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            time_display=time_display(schedule.start_time, schedule.end_time),
            type=schedule.type,
        )

    return ScheduleItem(
        id=schedule.id,
        title=schedule_title(schedule, main),
        description=schedule.notes,
        speaker=extract_speaker(first),
        moderator=extract_moderator(first.description if first else None),
        location=location_of(schedule),
        date=day,
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        time_display=time_display(schedule.start_time, schedule.end_time),
        type=schedule.type,
        rooms=list(schedule.rooms),
        track=first.track if first else None,
        room_name=main.name if main else None,
        room_identifier=main.identifier if main else None,
        online_url=(main and main.online_meeting_url) or (parallel and parallel.online_meeting_url) or None,
    )


def build_days(schedules: Iterable[Schedule]) -> list[ProcessedDay]:
    """Days that have at least one entry, in date order, numbered from 1."""
    by_date: dict[str, list[Schedule]] = defaultdict(list)
    for s in schedules:
        key = date_key(s.date)
        if key is None:
            continue
        by_date[key].append(s)

    days = []
    for i, key in enumerate(sorted(by_date), start=1):
        items = [to_schedule_item(s, key) for s in sort_by_start_time(by_date[key])]
        days.append(ProcessedDay(date=key, day_number=i, day_title=day_title(key, i), items=items))
    return days


def process_conference(conference: Conference, schedules: Optional[Iterable[Schedule]] = None) -> ProcessedConference:
    if schedules is None:
        schedules = conference.schedules
    return ProcessedConference(
        id=conference.id,
        name=conference.name,
        description=conference.description,
        year=conference.year,
        type=conference.type,
        start_date=date_key(conference.start_date),
        end_date=date_key(conference.end_date),
        contact_email=conference.contact_email,
        timezone=conference.timezone_iana,
        onsite_location=conference.onsite_presentation,
        online_location=conference.online_presentation,
        notes=conference.notes,
        no_show_policy=conference.no_show_policy,
        days=build_days(schedules),
    )
