import asyncio

from confsched.models import Conference, Room, RoomType, Schedule, Track, TrackSession
from confsched.workspace import build_schedule_grid, load_conference_workspace, scope_to_conference

from conftest import envelope


def test_scope_to_conference():
    schedules = [
        Schedule(id="s1", conference_schedule_id="c1",
                 rooms=[Room(id="r1", name="Room A", type=RoomType.PARALLEL, track_id="t1")]),
        Schedule(id="s2", conference_schedule_id="c2"),
    ]
    rooms = [
        Room(id="r1", schedule_id="s1", name="stale copy"),
        Room(id="r2", schedule_id="s1", track_id="t2"),
        Room(id="r3", schedule_id="s2", track_id="t3"),
    ]
    tracks = [Track(id="t1"), Track(id="t2"), Track(id="t3")]
    sessions = [TrackSession(id="ts1", track_id="t1"), TrackSession(id="ts3", track_id="t3")]

    ws = scope_to_conference("c1", schedules, rooms, tracks, sessions)

    assert [s.id for s in ws.schedules] == ["s1"]
    assert [r.id for r in ws.rooms] == ["r1", "r2"]
    assert ws.rooms[0].name == "Room A"
    assert [t.id for t in ws.tracks] == ["t1", "t2"]
    assert [ts.id for ts in ws.track_sessions] == ["ts1"]


def test_load_conference_workspace(fake_api, api_client):
    fake_api.add("GET", "/api/v1/schedule", json=envelope([{"id": "s1", "conference_schedule_id": "c1"}]))
    fake_api.add("GET", "/api/v1/room", json=envelope([{"id": "r1", "schedule_id": "s1", "track_id": "t1"}]))
    fake_api.add("GET", "/api/v1/track", json=envelope([{"id": "t1", "name": "Track 1"}]))
    fake_api.add("GET", "/api/v1/track-session", json=envelope([{"id": "ts1", "track_id": "t1"}]))

    ws = asyncio.run(load_conference_workspace(api_client, "tok", "c1"))

    assert [t.name for t in ws.tracks] == ["Track 1"]
    assert [ts.id for ts in ws.track_sessions] == ["ts1"]
    assert len(fake_api.requests) == 4


def test_grid_has_every_day_and_five_columns():
    conf = Conference(id="c1", start_date="2025-06-10", end_date="2025-06-12")
    schedules = [
        Schedule(id="s1", date="2025-06-11T09:00:00Z", start_time="09:00"),
        Schedule(id="s0", date="2025-06-11T08:00:00Z", start_time="08:00"),
        Schedule(id="x", date="??"),
    ]
    rooms = [
        Room(id="m", schedule_id="s1", name="Main Hall", type=RoomType.MAIN),
        Room(id="b", schedule_id="s1", name="Room B", type=RoomType.PARALLEL),
    ]
    grid = build_schedule_grid(conf, schedules, rooms)

    assert [d["date"] for d in grid["days"]] == ["2025-06-10", "2025-06-11", "2025-06-12"]
    assert [d["day_number"] for d in grid["days"]] == [1, 2, 3]
    assert grid["skipped"] == ["x"]

    day2 = grid["days"][1]
    assert day2["label"] == "Wednesday, June 11, 2025"
    assert [e.id for e in day2["entries"]] == ["s0", "s1"]
    assert [r.id for r in day2["main_rooms"]] == ["m"]
    assert [c.room.id if c.room else None for c in day2["room_columns"]] == [None, "b", None, None, None]

    assert grid["days"][0]["entries"] == []
    assert len(grid["days"][0]["room_columns"]) == 5
