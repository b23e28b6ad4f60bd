"""Parallel-room columns (A..E) for one conference day."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, Optional

from .merge import merge_records, nested_rooms
from .models import Room, RoomColumn, RoomType, Schedule

logger = logging.getLogger(__name__)


class RoomLabel(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


ROOM_LABELS = list(RoomLabel)

ROOM_NAME_RE = re.compile(r"^room\s+([a-e])$", re.IGNORECASE)
PARALLEL_IDENTIFIER_RE = re.compile(r"parallel\s+session\s+1([a-e])$", re.IGNORECASE)


def label_from_name(name: Optional[str]) -> Optional[RoomLabel]:
    """'Room B' -> B"""
    m = ROOM_NAME_RE.match((name or "").strip())
    return RoomLabel(m.group(1).upper()) if m else None


def label_from_identifier(identifier: Optional[str]) -> Optional[RoomLabel]:
    """'Parallel Session 1B' -> B"""
    m = PARALLEL_IDENTIFIER_RE.search((identifier or "").strip())
    return RoomLabel(m.group(1).upper()) if m else None


def room_label(name: Optional[str], identifier: Optional[str]) -> Optional[RoomLabel]:
    return label_from_name(name) or label_from_identifier(identifier)


def derive_room_columns(rooms: Iterable[Room]) -> list[RoomColumn]:
    """Always five columns, A..E, each with its room or None.

    When two rooms resolve to the same label the first one in ``rooms`` keeps
    the column.
    """
    by_label: dict[RoomLabel, Room] = {}
    for room in rooms:
        label = room_label(room.name, room.identifier)
        if label is None:
            continue
        if label in by_label:
            logger.warning(
                "rooms %s and %s both map to column %s; keeping %s",
                by_label[label].id, room.id, label.value, by_label[label].id,
            )
            continue
        by_label[label] = room

    return [
        RoomColumn(label=label.value, position=i, title=f"Room {label.value}", room=by_label.get(label))
        for i, label in enumerate(ROOM_LABELS)
    ]


def rooms_for_schedules(schedules: Iterable[Schedule], rooms: Iterable[Room]) -> list[Room]:
    """Rooms belonging to ``schedules``: embedded rooms first, then the flat list."""
    schedules = list(schedules)
    schedule_ids = {s.id for s in schedules}
    flat = [r for r in rooms if r.schedule_id in schedule_ids]
    return merge_records(nested_rooms(schedules), flat)


def main_rooms(rooms: Iterable[Room]) -> list[Room]:
    return [r for r in rooms if r.type == RoomType.MAIN]


def parallel_rooms(rooms: Iterable[Room]) -> list[Room]:
    return [r for r in rooms if r.type == RoomType.PARALLEL]


def day_room_columns(day_entries: Iterable[Schedule], rooms: Iterable[Room]) -> list[RoomColumn]:
    return derive_room_columns(parallel_rooms(rooms_for_schedules(day_entries, rooms)))
