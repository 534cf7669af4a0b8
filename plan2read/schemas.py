from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Literal, Optional
from datetime import datetime

from plan2read.timeutil import TimeRange, Weekday, normalize_hhmm


def _blank_to_none(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


class WireModel(BaseModel):
    """Row coming from or going to the remote store.

    Attributes use domain names; the wire names are accepted as aliases and
    emitted by ``to_wire()``.
    """

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Schedule(WireModel):
    """Schedule header row"""
    id: str = Field(alias="schedule_id")
    owner_id: str = Field(alias="user_id")
    name: str = Field(alias="schedule_name")
    description: str = ""
    is_public: bool = False
    updated_at: Optional[datetime] = None

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value):
        return "" if value is None else value

    @field_validator("is_public", mode="before")
    @classmethod
    def _is_public(cls, value):
        return False if _blank_to_none(value) is None else value

    @field_validator("updated_at", mode="before")
    @classmethod
    def _updated_at(cls, value):
        return _blank_to_none(value)


class Session(WireModel):
    """One study block inside a schedule"""
    id: str = Field(alias="session_id")
    schedule_id: str
    day_of_week: Weekday
    subject: str
    start_time: str  # zero-padded "HH:MM"
    end_time: str

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _day(cls, value):
        return Weekday.parse(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _time(cls, value):
        return normalize_hhmm(value)

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.from_strings(self.start_time, self.end_time)


class Post(WireModel):
    """Discussion post"""
    id: str = Field(alias="post_id")
    user_id: str = "guest"
    category: str = ""
    title: str
    content: str
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value):
        return _blank_to_none(value)


class Comment(WireModel):
    """Comment on a discussion post"""
    id: str = Field(alias="comment_id")
    post_id: str
    user_id: str = "guest"
    content: str
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value):
        return _blank_to_none(value)


# Request payloads, named exactly as the backend expects them

class Payload(BaseModel):
    """Base for action payloads; spreadsheet ids may arrive as numbers"""

    class Config:
        coerce_numbers_to_str = True


class ScheduleCreate(Payload):
    """Payload for createSchedule"""
    schedule_id: str
    user_id: str
    schedule_name: str
    description: Optional[str] = None
    is_public: Optional[bool] = None


class ScheduleClone(Payload):
    """Payload for cloneSchedule"""
    source_schedule_id: str
    new_schedule_id: str
    new_user_id: str
    new_schedule_name: str


class SessionCreate(Payload):
    """Payload for addSession"""
    session_id: str
    schedule_id: str
    day_of_week: Weekday
    subject: str
    start_time: str
    end_time: str


class PostCreate(Payload):
    """Payload for createPost"""
    post_id: str
    user_id: Optional[str] = None
    category: str = ""
    title: str
    content: str


class CommentCreate(Payload):
    """Payload for addComment"""
    comment_id: str
    post_id: str
    user_id: Optional[str] = None
    content: str


class Result(BaseModel):
    """Response envelope returned by every backend action"""
    status: Literal["success", "error"]
    message: Optional[str] = None
    data: Optional[Any] = None

    class Config:
        extra = "allow"

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def rows(self) -> List[dict]:
        return list(self.data or [])
