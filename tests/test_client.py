import asyncio
import json

import httpx
import pytest

from confsched import services
from confsched.client import ApiError, AuthError, TransportError
from confsched.models import RoomType
from confsched.schemas import ConferenceUpdate, RoomCreate

from conftest import envelope


def test_request_sends_bearer_and_unwraps_envelope(fake_api, api_client):
    fake_api.add("GET", "/api/v1/room", json=envelope([
        {"id": "r1", "name": "Room A", "type": "PARALLEL", "schedule_id": "s1", "unknown": 1},
    ]))
    rooms = asyncio.run(services.list_rooms(api_client, "tok", schedule_id="s1"))

    assert [r.id for r in rooms] == ["r1"]
    assert rooms[0].type is RoomType.PARALLEL
    req = fake_api.requests[0]
    assert req.headers["Authorization"] == "Bearer tok"
    assert req.url.params["schedule_id"] == "s1"


def test_list_conferences_includes_schedules(fake_api, api_client):
    fake_api.add("GET", "/api/v1/conference-schedule", json=envelope([
        {"id": "c1", "name": "ICODSA", "year": 2025, "type": "ICODSA",
         "schedules": [{"id": "s1", "date": "2025-06-10", "type": "TALK"}]},
    ]))
    confs = asyncio.run(services.list_conferences(api_client, "tok"))

    assert confs[0].schedules[0].id == "s1"
    assert fake_api.requests[0].url.params["include_relation[0]"] == "schedules"


def test_list_returns_empty_when_data_not_a_list(fake_api, api_client):
    fake_api.add("GET", "/api/v1/track", json=envelope(None))
    assert asyncio.run(services.list_tracks(api_client, "tok")) == []


def test_envelope_error_code_raises(fake_api, api_client):
    fake_api.add("GET", "/api/v1/track", json=envelope(code=422, status="error", message="bad track"))
    with pytest.raises(ApiError) as e:
        asyncio.run(services.list_tracks(api_client, "tok"))
    assert e.value.message == "bad track"
    assert e.value.status_code == 422


def test_http_error_status_raises(fake_api, api_client):
    fake_api.add("GET", "/api/v1/room/r9", status_code=404,
                 json=envelope(code=404, status="error", message="Room not found"))
    with pytest.raises(ApiError) as e:
        asyncio.run(services.get_room(api_client, "tok", "r9"))
    assert e.value.status_code == 404
    assert e.value.message == "Room not found"


def test_unauthorized_raises_auth_error(fake_api, api_client):
    fake_api.add("GET", "/api/v1/schedule", status_code=401, json={"message": "jwt expired"})
    with pytest.raises(AuthError):
        asyncio.run(services.list_schedules(api_client, "stale"))


def test_transport_failure_is_not_retried(fake_api, api_client):
    fake_api.add("GET", "/api/v1/track", json=httpx.ConnectError("refused"))
    with pytest.raises(TransportError) as e:
        asyncio.run(services.list_tracks(api_client, "tok"))
    assert e.value.status_code == 502
    assert len(fake_api.requests) == 1


def test_update_sends_only_given_fields(fake_api, api_client):
    fake_api.add("PATCH", "/api/v1/conference-schedule/c1", json=envelope({"id": "c1", "name": "New"}))
    conf = asyncio.run(services.update_conference(api_client, "tok", "c1", ConferenceUpdate(name="New")))

    assert conf.name == "New"
    assert json.loads(fake_api.requests[0].read()) == {"name": "New"}


def test_create_room_payload(fake_api, api_client):
    fake_api.add("POST", "/api/v1/room", json=envelope({"id": "r1", "name": "Room A", "schedule_id": "s1"}))
    body = RoomCreate(schedule_id="s1", name="Room A", identifier="Parallel Session 1A")
    room = asyncio.run(services.create_room(api_client, "tok", body))

    assert room.id == "r1"
    sent = json.loads(fake_api.requests[0].read())
    assert sent["type"] == "PARALLEL"
    assert sent["identifier"] == "Parallel Session 1A"
    assert sent["track_id"] is None


def test_delete_reports_success(fake_api, api_client):
    fake_api.add("DELETE", "/api/v1/track-session/ts1", json=envelope(None, code=200))
    assert asyncio.run(services.delete_track_session(api_client, "tok", "ts1")) is True
