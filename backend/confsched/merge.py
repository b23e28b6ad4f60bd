"""Combine records fetched from the nested and the flat API shapes."""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from .models import Conference, Room, Schedule

T = TypeVar("T")


def dedup_by_id(records: Iterable[T]) -> list[T]:
    """One record per ``id``; the first occurrence wins and order is kept.

    Records without an id are passed through as they are.
    """
    seen = set()
    out = []
    for r in records:
        rid = getattr(r, "id", None)
        if rid is None:
            out.append(r)
            continue
        if rid in seen:
            continue
        seen.add(rid)
        out.append(r)
    return out


def merge_records(nested: Sequence[T], flat: Sequence[T]) -> list[T]:
    return dedup_by_id([*nested, *flat])


def nested_rooms(schedules: Iterable[Schedule]) -> list[Room]:
    out = []
    for s in schedules:
        for room in s.rooms:
            if room.schedule_id is None:
                room = room.model_copy(update={"schedule_id": s.id})
            out.append(room)
    return out


def nested_schedules(conferences: Iterable[Conference]) -> list[Schedule]:
    out = []
    for c in conferences:
        for s in c.schedules:
            if s.conference_schedule_id is None:
                s = s.model_copy(update={"conference_schedule_id": c.id})
            out.append(s)
    return out
