import logging
from datetime import datetime, timezone
from typing import Optional, List

from fastapi import FastAPI, Depends, HTTPException, Request, Cookie
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import auth, services
from .client import ApiClient, ApiError
from .config import (
    get_api_base_url, get_cors_origins, cookie_secure, refresh_cookie_max_age,
    get_http_timeout, get_log_level,
)
from .merge import merge_records, nested_schedules
from .models import Conference, ConferenceType, ProcessedConference, Room, Schedule, Track, TrackSession
from .processing import process_conference
from .schemas import (
    ConferenceCreate, ConferenceUpdate, ScheduleCreate, ScheduleUpdate, RoomCreate, RoomUpdate,
    TrackCreate, TrackUpdate, TrackSessionCreate, TrackSessionUpdate, LoginPayload, SetTokenPayload,
)
from .selection import normalize_series, select_for_series
from .workspace import build_schedule_grid, load_conference_workspace

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Conference Schedule Admin")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    app.state.client = ApiClient(get_api_base_url(), timeout=get_http_timeout())


@app.on_event("shutdown")
async def on_shutdown():
    client = getattr(app.state, "client", None)
    if client is not None:
        await client.aclose()


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(
        status_code=exc.status_code if 400 <= exc.status_code < 600 else 502,
        content={
            "code": exc.status_code,
            "status": "error",
            "message": exc.message,
            "data": None,
            "errors": exc.errors,
        },
    )


def get_client(request: Request) -> ApiClient:
    return request.app.state.client


async def require_access_token(
    refresh_token: Optional[str] = Cookie(default=None),
    client: ApiClient = Depends(get_client),
) -> str:
    # every authorized call refreshes first; a failed refresh is not retried
    result = await auth.refresh_access_token(client, refresh_token)
    return result.access_token


def set_refresh_cookie(response: JSONResponse, value: str) -> None:
    response.set_cookie(
        auth.REFRESH_COOKIE, value,
        httponly=True,
        secure=cookie_secure(),
        samesite="strict",
        max_age=refresh_cookie_max_age(),
        path="/",
    )


def forward_cookies(response: JSONResponse, set_cookies: List[str]) -> None:
    for cookie in set_cookies:
        response.headers.append("set-cookie", cookie)


def parse_series(series: str) -> ConferenceType:
    s = normalize_series(series)
    if s is None:
        raise HTTPException(404, f"Unknown conference series: {series}")
    return s


# -----------------------
# Auth
# -----------------------
@app.post("/api/auth/login")
async def login(body: LoginPayload, client: ApiClient = Depends(get_client)):
    result = await auth.login(client, body.email, body.password)
    response = JSONResponse(result.body)
    if result.set_cookies:
        forward_cookies(response, result.set_cookies)
    elif result.refresh_token:
        set_refresh_cookie(response, result.refresh_token)
    return response


@app.get("/api/auth/refresh")
def has_refresh_token(refresh_token: Optional[str] = Cookie(default=None)):
    return {
        "hasRefreshToken": bool(refresh_token),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.post("/api/auth/refresh")
async def refresh(
    refresh_token: Optional[str] = Cookie(default=None),
    client: ApiClient = Depends(get_client),
):
    result = await auth.refresh_access_token(client, refresh_token)
    response = JSONResponse({
        "code": 200,
        "status": "OK",
        "message": "Token refreshed",
        "data": {"accessToken": result.access_token, "user": None},
        "errors": None,
    })
    # rotated refresh token from the API
    forward_cookies(response, result.set_cookies)
    return response


@app.post("/api/auth/set-token")
def set_token(body: SetTokenPayload):
    if not body.refreshToken:
        raise HTTPException(400, "Refresh token is required")
    response = JSONResponse({"success": True})
    set_refresh_cookie(response, body.refreshToken)
    return response


@app.post("/api/auth/clear-cookies")
def clear_cookies():
    response = JSONResponse({"message": "Cookies cleared successfully"})
    for name in auth.AUTH_COOKIES:
        response.delete_cookie(name, path="/", httponly=True, secure=cookie_secure(), samesite="lax")
    return response


# -----------------------
# Conferences
# -----------------------
@app.get("/admin/conferences", response_model=List[Conference])
async def list_conferences(include_schedules: bool = True,
                           token: str = Depends(require_access_token),
                           client: ApiClient = Depends(get_client)):
    return await services.list_conferences(client, token, include_schedules)


@app.post("/admin/conferences", response_model=Conference)
async def create_conference(body: ConferenceCreate,
                            token: str = Depends(require_access_token),
                            client: ApiClient = Depends(get_client)):
    return await services.create_conference(client, token, body)


@app.get("/admin/conferences/series/{series}")
async def conferences_for_series(series: str, year: Optional[str] = None,
                                 token: str = Depends(require_access_token),
                                 client: ApiClient = Depends(get_client)):
    conferences = await services.list_conferences(client, token)
    sel = select_for_series(conferences, parse_series(series), year)
    return {
        "series": sel.series,
        "years": sel.years,
        "selected_year": sel.selected_year,
        "conference": sel.conference,
        "conferences": sel.conferences,
    }


@app.get("/admin/conferences/{cid}", response_model=Conference)
async def get_conference(cid: str, include_schedules: bool = True,
                         token: str = Depends(require_access_token),
                         client: ApiClient = Depends(get_client)):
    return await services.get_conference(client, token, cid, include_schedules)


@app.patch("/admin/conferences/{cid}", response_model=Conference)
async def patch_conference(cid: str, body: ConferenceUpdate,
                           token: str = Depends(require_access_token),
                           client: ApiClient = Depends(get_client)):
    return await services.update_conference(client, token, cid, body)


@app.delete("/admin/conferences/{cid}")
async def delete_conference(cid: str,
                            token: str = Depends(require_access_token),
                            client: ApiClient = Depends(get_client)):
    return {"ok": await services.delete_conference(client, token, cid)}


@app.get("/admin/conferences/{cid}/workspace")
async def conference_workspace(cid: str,
                               token: str = Depends(require_access_token),
                               client: ApiClient = Depends(get_client)):
    return await load_conference_workspace(client, token, cid)


@app.get("/admin/conferences/{cid}/grid")
async def conference_grid(cid: str,
                          token: str = Depends(require_access_token),
                          client: ApiClient = Depends(get_client)):
    conf = await services.get_conference(client, token, cid)
    ws = await load_conference_workspace(client, token, cid)
    schedules = merge_records(nested_schedules([conf]), ws.schedules)
    return build_schedule_grid(conf, schedules, ws.rooms)


# -----------------------
# Schedules
# -----------------------
@app.get("/admin/schedules", response_model=List[Schedule])
async def list_schedules(conference_id: Optional[str] = None,
                         token: str = Depends(require_access_token),
                         client: ApiClient = Depends(get_client)):
    return await services.list_schedules(client, token, conference_id)


@app.post("/admin/schedules", response_model=Schedule)
async def create_schedule(body: ScheduleCreate,
                          token: str = Depends(require_access_token),
                          client: ApiClient = Depends(get_client)):
    return await services.create_schedule(client, token, body)


@app.get("/admin/schedules/{sid}", response_model=Schedule)
async def get_schedule(sid: str,
                       token: str = Depends(require_access_token),
                       client: ApiClient = Depends(get_client)):
    return await services.get_schedule(client, token, sid)


@app.put("/admin/schedules/{sid}", response_model=Schedule)
async def update_schedule(sid: str, body: ScheduleUpdate,
                          token: str = Depends(require_access_token),
                          client: ApiClient = Depends(get_client)):
    return await services.update_schedule(client, token, sid, body)


@app.delete("/admin/schedules/{sid}")
async def delete_schedule(sid: str,
                          token: str = Depends(require_access_token),
                          client: ApiClient = Depends(get_client)):
    return {"ok": await services.delete_schedule(client, token, sid)}


# -----------------------
# Rooms
# -----------------------
@app.get("/admin/rooms", response_model=List[Room])
async def list_rooms(schedule_id: Optional[str] = None,
                     token: str = Depends(require_access_token),
                     client: ApiClient = Depends(get_client)):
    return await services.list_rooms(client, token, schedule_id)


@app.post("/admin/rooms", response_model=Room)
async def create_room(body: RoomCreate,
                      token: str = Depends(require_access_token),
                      client: ApiClient = Depends(get_client)):
    return await services.create_room(client, token, body)


@app.get("/admin/rooms/{rid}", response_model=Room)
async def get_room(rid: str,
                   token: str = Depends(require_access_token),
                   client: ApiClient = Depends(get_client)):
    return await services.get_room(client, token, rid)


@app.put("/admin/rooms/{rid}", response_model=Room)
async def update_room(rid: str, body: RoomUpdate,
                      token: str = Depends(require_access_token),
                      client: ApiClient = Depends(get_client)):
    return await services.update_room(client, token, rid, body)


@app.delete("/admin/rooms/{rid}")
async def delete_room(rid: str,
                      token: str = Depends(require_access_token),
                      client: ApiClient = Depends(get_client)):
    return {"ok": await services.delete_room(client, token, rid)}


# -----------------------
# Tracks
# -----------------------
@app.get("/admin/tracks", response_model=List[Track])
async def list_tracks(token: str = Depends(require_access_token),
                      client: ApiClient = Depends(get_client)):
    return await services.list_tracks(client, token)


@app.post("/admin/tracks", response_model=Track)
async def create_track(body: TrackCreate,
                       token: str = Depends(require_access_token),
                       client: ApiClient = Depends(get_client)):
    return await services.create_track(client, token, body)


@app.get("/admin/tracks/{tid}", response_model=Track)
async def get_track(tid: str,
                    token: str = Depends(require_access_token),
                    client: ApiClient = Depends(get_client)):
    return await services.get_track(client, token, tid)


@app.put("/admin/tracks/{tid}", response_model=Track)
async def update_track(tid: str, body: TrackUpdate,
                       token: str = Depends(require_access_token),
                       client: ApiClient = Depends(get_client)):
    return await services.update_track(client, token, tid, body)


@app.delete("/admin/tracks/{tid}")
async def delete_track(tid: str,
                       token: str = Depends(require_access_token),
                       client: ApiClient = Depends(get_client)):
    return {"ok": await services.delete_track(client, token, tid)}


# -----------------------
# Track sessions
# -----------------------
@app.get("/admin/track-sessions", response_model=List[TrackSession])
async def list_track_sessions(track_id: Optional[str] = None,
                              token: str = Depends(require_access_token),
                              client: ApiClient = Depends(get_client)):
    return await services.list_track_sessions(client, token, track_id)


@app.post("/admin/track-sessions", response_model=TrackSession)
async def create_track_session(body: TrackSessionCreate,
                               token: str = Depends(require_access_token),
                               client: ApiClient = Depends(get_client)):
    return await services.create_track_session(client, token, body)


@app.get("/admin/track-sessions/{tsid}", response_model=TrackSession)
async def get_track_session(tsid: str,
                            token: str = Depends(require_access_token),
                            client: ApiClient = Depends(get_client)):
    return await services.get_track_session(client, token, tsid)


@app.put("/admin/track-sessions/{tsid}", response_model=TrackSession)
async def update_track_session(tsid: str, body: TrackSessionUpdate,
                               token: str = Depends(require_access_token),
                               client: ApiClient = Depends(get_client)):
    return await services.update_track_session(client, token, tsid, body)


@app.delete("/admin/track-sessions/{tsid}")
async def delete_track_session(tsid: str,
                               token: str = Depends(require_access_token),
                               client: ApiClient = Depends(get_client)):
    return {"ok": await services.delete_track_session(client, token, tsid)}


# -----------------------
# Public schedule (no login)
# -----------------------
@app.get("/public/schedule/{series}", response_model=ProcessedConference)
async def public_schedule(series: str, year: Optional[str] = None,
                          client: ApiClient = Depends(get_client)):
    conferences = await services.list_conferences(client, None)
    sel = select_for_series(conferences, parse_series(series), year)
    if sel.conference is None:
        raise HTTPException(404, "Conference not found")
    return process_conference(sel.conference)


def main():
    import uvicorn

    uvicorn.run("confsched.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
