import datetime as dt
from typing import Optional
from pydantic import BaseModel, model_validator

from .models import ConferenceType, PresentationMode, RoomType, ScheduleType


class ConferenceCreate(BaseModel):
    name: str
    description: str = ""
    year: str
    start_date: dt.date
    end_date: dt.date
    type: ConferenceType
    contact_email: str = ""
    timezone_iana: str = "Asia/Jakarta"
    onsite_presentation: Optional[str] = None
    online_presentation: Optional[str] = None
    notes: Optional[str] = None
    no_show_policy: Optional[str] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ConferenceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    year: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    type: Optional[ConferenceType] = None
    contact_email: Optional[str] = None
    timezone_iana: Optional[str] = None
    onsite_presentation: Optional[str] = None
    online_presentation: Optional[str] = None
    notes: Optional[str] = None
    no_show_policy: Optional[str] = None
    is_active: Optional[bool] = None


class ScheduleCreate(BaseModel):
    conference_schedule_id: str
    date: dt.date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    type: ScheduleType = ScheduleType.TALK
    notes: Optional[str] = None


class ScheduleUpdate(BaseModel):
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    type: Optional[ScheduleType] = None
    notes: Optional[str] = None


class RoomCreate(BaseModel):
    schedule_id: str
    name: str
    identifier: Optional[str] = None
    description: Optional[str] = None
    type: RoomType = RoomType.PARALLEL
    online_meeting_url: Optional[str] = None
    track_id: Optional[str] = None


class RoomUpdate(BaseModel):
    name: Optional[str] = None
    identifier: Optional[str] = None
    description: Optional[str] = None
    type: Optional[RoomType] = None
    online_meeting_url: Optional[str] = None
    track_id: Optional[str] = None


class TrackCreate(BaseModel):
    name: str
    description: Optional[str] = None


class TrackUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class TrackSessionCreate(BaseModel):
    track_id: str
    paper_id: str
    title: str
    authors: str
    mode: PresentationMode = PresentationMode.ONSITE
    notes: Optional[str] = None
    start_time: str
    end_time: str


class TrackSessionUpdate(BaseModel):
    track_id: Optional[str] = None
    paper_id: Optional[str] = None
    title: Optional[str] = None
    authors: Optional[str] = None
    mode: Optional[PresentationMode] = None
    notes: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class LoginPayload(BaseModel):
    email: str
    password: str


class SetTokenPayload(BaseModel):
    refreshToken: Optional[str] = None
