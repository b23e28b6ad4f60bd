from enum import Enum
from typing import Any, Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field


class ConferenceType(str, Enum):
    ICICYTA = "ICICYTA"
    ICODSA = "ICODSA"


class ScheduleType(str, Enum):
    TALK = "TALK"
    BREAK = "BREAK"
    ONE_DAY_ACTIVITY = "ONE_DAY_ACTIVITY"


class RoomType(str, Enum):
    MAIN = "MAIN"
    PARALLEL = "PARALLEL"


class PresentationMode(str, Enum):
    ONLINE = "ONLINE"
    ONSITE = "ONSITE"


def enum_or_none(enum_cls, v):
    """Unknown spellings from the API become None instead of failing the whole list."""
    if v is None or isinstance(v, enum_cls):
        return v
    try:
        return enum_cls(str(v).strip().upper())
    except ValueError:
        return None


def text_or_blank(v):
    return "" if v is None else v


# =========================
# Track
# =========================
class Track(SQLModel):
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_as_text(cls, v):
        return text_or_blank(v)


# =========================
# TrackSession
# =========================
class TrackSession(SQLModel):
    id: Optional[str] = None
    track_id: Optional[str] = None

    paper_id: Optional[str] = None
    title: str = ""
    authors: Optional[str] = None
    mode: Optional[PresentationMode] = None
    notes: Optional[str] = None

    start_time: Optional[str] = None
    end_time: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_as_text(cls, v):
        return text_or_blank(v)

    @field_validator("mode", mode="before")
    @classmethod
    def known_mode(cls, v):
        return enum_or_none(PresentationMode, v)


# =========================
# Room
# =========================
class Room(SQLModel):
    id: Optional[str] = None
    schedule_id: Optional[str] = None

    name: str = ""
    identifier: Optional[str] = None
    description: Optional[str] = None
    type: Optional[RoomType] = None
    online_meeting_url: Optional[str] = None

    start_time: Optional[str] = None
    end_time: Optional[str] = None

    track_id: Optional[str] = None
    track: Optional[Track] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_as_text(cls, v):
        return text_or_blank(v)

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v):
        return enum_or_none(RoomType, v)


# =========================
# Schedule (one entry of a conference day)
# =========================
class Schedule(SQLModel):
    id: Optional[str] = None
    conference_schedule_id: Optional[str] = None

    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    type: Optional[ScheduleType] = None
    notes: Optional[str] = None

    # present only when the API embeds them
    rooms: list[Room] = Field(default_factory=list)

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v):
        return enum_or_none(ScheduleType, v)


# =========================
# Conference
# =========================
class Conference(SQLModel):
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    year: Optional[str] = None
    type: Optional[ConferenceType] = None

    start_date: Optional[str] = None
    end_date: Optional[str] = None

    contact_email: Optional[str] = None
    timezone_iana: Optional[str] = None
    onsite_presentation: Optional[str] = None
    online_presentation: Optional[str] = None
    notes: Optional[str] = None
    no_show_policy: Optional[str] = None

    # present only with include_relation[0]=schedules
    schedules: list[Schedule] = Field(default_factory=list)

    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None

    @field_validator("year", mode="before")
    @classmethod
    def year_as_text(cls, v):
        # the API has served both 2025 and "2025"
        return None if v is None else str(v)

    @field_validator("name", mode="before")
    @classmethod
    def name_as_text(cls, v):
        return text_or_blank(v)

    @field_validator("type", mode="before")
    @classmethod
    def known_series(cls, v):
        # older records carry spellings like "ICYCTA"
        from .selection import normalize_series
        return v if isinstance(v, ConferenceType) else normalize_series(v)


# =========================
# API envelope
# =========================
class ApiEnvelope(SQLModel):
    code: Optional[int] = None
    status: Optional[str] = None
    message: Optional[str] = None
    pagination: Optional[Any] = None
    data: Optional[Any] = None
    errors: Optional[Any] = None


# =========================
# Derived (never persisted)
# =========================
class RoomColumn(SQLModel):
    label: str
    position: int
    title: str
    room: Optional[Room] = None


class ScheduleItem(SQLModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    speaker: Optional[str] = None
    moderator: Optional[str] = None
    location: str = "All Areas"

    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    time_display: str = ""
    type: Optional[ScheduleType] = None

    rooms: list[Room] = Field(default_factory=list)
    track: Optional[Track] = None
    room_name: Optional[str] = None
    room_identifier: Optional[str] = None
    online_url: Optional[str] = None


class ProcessedDay(SQLModel):
    date: str
    day_number: int
    day_title: str
    items: list[ScheduleItem] = Field(default_factory=list)


class ProcessedConference(SQLModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    year: Optional[str] = None
    type: Optional[ConferenceType] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    contact_email: Optional[str] = None
    timezone: Optional[str] = None
    onsite_location: Optional[str] = None
    online_location: Optional[str] = None
    notes: Optional[str] = None
    no_show_policy: Optional[str] = None

    days: list[ProcessedDay] = Field(default_factory=list)
