"""Per-page data loading for the admin conference view.

Each call fetches fresh copies; mutations are followed by a full reload
rather than patching anything held here.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Iterable

from . import services
from .client import ApiClient
from .grouping import day_number, format_day, group_by_day
from .merge import dedup_by_id
from .models import Conference, Room, Schedule, Track, TrackSession
from .rooms import day_room_columns, main_rooms, rooms_for_schedules


@dataclass
class ConferenceWorkspace:
    schedules: list[Schedule] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)
    track_sessions: list[TrackSession] = field(default_factory=list)


def scope_to_conference(conference_id: str, schedules: Iterable[Schedule], rooms: Iterable[Room],
                        tracks: Iterable[Track], track_sessions: Iterable[TrackSession]) -> ConferenceWorkspace:
    own_schedules = dedup_by_id(s for s in schedules if s.conference_schedule_id == conference_id)
    own_rooms = rooms_for_schedules(own_schedules, rooms)

    track_ids = {r.track_id for r in own_rooms if r.track_id}
    own_tracks = [t for t in tracks if t.id in track_ids]
    own_sessions = [ts for ts in track_sessions if ts.track_id in track_ids]

    return ConferenceWorkspace(
        schedules=own_schedules,
        rooms=own_rooms,
        tracks=own_tracks,
        track_sessions=own_sessions,
    )


async def load_conference_workspace(client: ApiClient, token: str, conference_id: str) -> ConferenceWorkspace:
    schedules, rooms, tracks, track_sessions = await asyncio.gather(
        services.list_schedules(client, token),
        services.list_rooms(client, token),
        services.list_tracks(client, token),
        services.list_track_sessions(client, token),
    )
    return scope_to_conference(conference_id, schedules, rooms, tracks, track_sessions)


def build_schedule_grid(conference: Conference, schedules: Iterable[Schedule], rooms: Iterable[Room]) -> dict:
    """Admin grid: one row group per day of the conference, empty days included."""
    rooms = list(rooms)
    grouping = group_by_day(conference.start_date, conference.end_date, schedules)

    days = []
    for key in grouping.days:
        entries = grouping.grouped[key]
        day_rooms = rooms_for_schedules(entries, rooms)
        days.append({
            "date": key,
            "day_number": day_number(key, conference.start_date),
            "label": format_day(key),
            "entries": entries,
            "main_rooms": main_rooms(day_rooms),
            "room_columns": day_room_columns(entries, rooms),
        })

    return {
        "conference_id": conference.id,
        "days": days,
        "skipped": grouping.skipped,
    }
