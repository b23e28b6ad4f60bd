"""Stateless wrappers over the remote API, one group per entity.

Every function takes the shared ``ApiClient`` and the caller's access token;
nothing is cached between calls.
"""

from typing import Optional

from pydantic import BaseModel

from .client import ApiClient
from .models import Conference, Room, Schedule, Track, TrackSession

CONFERENCE_PATH = "/api/v1/conference-schedule"
SCHEDULE_PATH = "/api/v1/schedule"
ROOM_PATH = "/api/v1/room"
TRACK_PATH = "/api/v1/track"
TRACK_SESSION_PATH = "/api/v1/track-session"


def _payload(body: BaseModel, partial: bool = False) -> dict:
    # partial: only what the caller actually sent
    return body.model_dump(mode="json", exclude_unset=partial)


def _as_list(data, model):
    if not isinstance(data, list):
        return []
    return [model.model_validate(x) for x in data]


def _deleted(envelope) -> bool:
    return envelope.code == 200 or envelope.status == "OK"


# -----------------------
# Conferences
# -----------------------
def _relation_params(include_schedules: bool) -> Optional[dict]:
    return {"include_relation[0]": "schedules"} if include_schedules else None


async def list_conferences(client: ApiClient, token: Optional[str],
                           include_schedules: bool = True) -> list[Conference]:
    env = await client.request("GET", CONFERENCE_PATH, token=token,
                               params=_relation_params(include_schedules))
    return _as_list(env.data, Conference)


async def get_conference(client: ApiClient, token: str, cid: str,
                         include_schedules: bool = True) -> Conference:
    env = await client.request("GET", f"{CONFERENCE_PATH}/{cid}", token=token,
                               params=_relation_params(include_schedules))
    return Conference.model_validate(env.data or {})


async def create_conference(client: ApiClient, token: str, body: BaseModel) -> Conference:
    env = await client.request("POST", CONFERENCE_PATH, token=token, json=_payload(body))
    return Conference.model_validate(env.data or {})


async def update_conference(client: ApiClient, token: str, cid: str, body: BaseModel) -> Conference:
    env = await client.request("PATCH", f"{CONFERENCE_PATH}/{cid}", token=token,
                               json=_payload(body, partial=True))
    return Conference.model_validate(env.data or {})


async def delete_conference(client: ApiClient, token: str, cid: str) -> bool:
    return _deleted(await client.request("DELETE", f"{CONFERENCE_PATH}/{cid}", token=token))


# -----------------------
# Schedules
# -----------------------
async def list_schedules(client: ApiClient, token: str,
                         conference_id: Optional[str] = None) -> list[Schedule]:
    params = {"conference_schedule_id": conference_id} if conference_id else None
    env = await client.request("GET", SCHEDULE_PATH, token=token, params=params)
    return _as_list(env.data, Schedule)


async def get_schedule(client: ApiClient, token: str, sid: str) -> Schedule:
    env = await client.request("GET", f"{SCHEDULE_PATH}/{sid}", token=token)
    return Schedule.model_validate(env.data or {})


async def create_schedule(client: ApiClient, token: str, body: BaseModel) -> Schedule:
    env = await client.request("POST", SCHEDULE_PATH, token=token, json=_payload(body))
    return Schedule.model_validate(env.data or {})


async def update_schedule(client: ApiClient, token: str, sid: str, body: BaseModel) -> Schedule:
    env = await client.request("PUT", f"{SCHEDULE_PATH}/{sid}", token=token,
                               json=_payload(body, partial=True))
    return Schedule.model_validate(env.data or {})


async def delete_schedule(client: ApiClient, token: str, sid: str) -> bool:
    return _deleted(await client.request("DELETE", f"{SCHEDULE_PATH}/{sid}", token=token))


# -----------------------
# Rooms
# -----------------------
async def list_rooms(client: ApiClient, token: str, schedule_id: Optional[str] = None) -> list[Room]:
    params = {"schedule_id": schedule_id} if schedule_id else None
    env = await client.request("GET", ROOM_PATH, token=token, params=params)
    return _as_list(env.data, Room)


async def get_room(client: ApiClient, token: str, rid: str) -> Room:
    env = await client.request("GET", f"{ROOM_PATH}/{rid}", token=token)
    return Room.model_validate(env.data or {})


async def create_room(client: ApiClient, token: str, body: BaseModel) -> Room:
    env = await client.request("POST", ROOM_PATH, token=token, json=_payload(body))
    return Room.model_validate(env.data or {})


async def update_room(client: ApiClient, token: str, rid: str, body: BaseModel) -> Room:
    env = await client.request("PUT", f"{ROOM_PATH}/{rid}", token=token,
                               json=_payload(body, partial=True))
    return Room.model_validate(env.data or {})


async def delete_room(client: ApiClient, token: str, rid: str) -> bool:
    return _deleted(await client.request("DELETE", f"{ROOM_PATH}/{rid}", token=token))


# -----------------------
# Tracks
# -----------------------
async def list_tracks(client: ApiClient, token: str) -> list[Track]:
    env = await client.request("GET", TRACK_PATH, token=token)
    return _as_list(env.data, Track)


async def get_track(client: ApiClient, token: str, tid: str) -> Track:
    env = await client.request("GET", f"{TRACK_PATH}/{tid}", token=token)
    return Track.model_validate(env.data or {})


async def create_track(client: ApiClient, token: str, body: BaseModel) -> Track:
    env = await client.request("POST", TRACK_PATH, token=token, json=_payload(body))
    return Track.model_validate(env.data or {})


async def update_track(client: ApiClient, token: str, tid: str, body: BaseModel) -> Track:
    env = await client.request("PUT", f"{TRACK_PATH}/{tid}", token=token,
                               json=_payload(body, partial=True))
    return Track.model_validate(env.data or {})


async def delete_track(client: ApiClient, token: str, tid: str) -> bool:
    return _deleted(await client.request("DELETE", f"{TRACK_PATH}/{tid}", token=token))


# -----------------------
# Track sessions
# -----------------------
async def list_track_sessions(client: ApiClient, token: str,
                              track_id: Optional[str] = None) -> list[TrackSession]:
    params = {"track_id": track_id} if track_id else None
    env = await client.request("GET", TRACK_SESSION_PATH, token=token, params=params)
    return _as_list(env.data, TrackSession)


async def get_track_session(client: ApiClient, token: str, tsid: str) -> TrackSession:
    env = await client.request("GET", f"{TRACK_SESSION_PATH}/{tsid}", token=token)
    return TrackSession.model_validate(env.data or {})


async def create_track_session(client: ApiClient, token: str, body: BaseModel) -> TrackSession:
    env = await client.request("POST", TRACK_SESSION_PATH, token=token, json=_payload(body))
    return TrackSession.model_validate(env.data or {})


async def update_track_session(client: ApiClient, token: str, tsid: str, body: BaseModel) -> TrackSession:
    env = await client.request("PUT", f"{TRACK_SESSION_PATH}/{tsid}", token=token,
                               json=_payload(body, partial=True))
    return TrackSession.model_validate(env.data or {})


async def delete_track_session(client: ApiClient, token: str, tsid: str) -> bool:
    return _deleted(await client.request("DELETE", f"{TRACK_SESSION_PATH}/{tsid}", token=token))
