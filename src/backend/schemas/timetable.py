"""
Timetable schemas.

Times are 24-hour "HH:MM" strings; day_of_week runs from 0 (Sunday) to 6.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.cosmos_documents import ALERT_LEAD_MINUTES, EventColor

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _validate_time(v: str) -> str:
    v = v.strip()
    if not _TIME_PATTERN.match(v):
        raise ValueError("Time must be HH:MM (24-hour)")
    return v


def _validate_alert(v: int) -> int:
    if v not in ALERT_LEAD_MINUTES:
        raise ValueError(f"alert_before must be one of {list(ALERT_LEAD_MINUTES)}")
    return v


class TimetableEventCreate(BaseModel):
    """Schema for adding a class to the weekly timetable."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str
    end_time: str
    location: Optional[str] = Field(None, max_length=200)
    color: EventColor = EventColor.BLUE
    alert_before: int = 15

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v: str) -> str:
        return _validate_time(v)

    @field_validator("alert_before")
    @classmethod
    def check_alert(cls, v: int) -> int:
        return _validate_alert(v)

    @model_validator(mode="after")
    def check_order(self) -> "TimetableEventCreate":
        # Zero-padded HH:MM strings compare chronologically
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class TimetableEventUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    color: Optional[EventColor] = None
    alert_before: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _validate_time(v)

    @field_validator("alert_before")
    @classmethod
    def check_alert(cls, v: Optional[int]) -> Optional[int]:
        return None if v is None else _validate_alert(v)


class TimetableEvent(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    day_of_week: int
    start_time: str
    end_time: str
    location: Optional[str] = None
    color: EventColor
    alert_before: int
    is_active: bool

    model_config = {"from_attributes": True}


class TimetableAlert(BaseModel):
    """An upcoming-class reminder delivered to the event's owner."""

    event_id: str
    user_id: str
    title: str
    location: Optional[str] = None
    start_time: str
    minutes_before: int
    fired_at: datetime
