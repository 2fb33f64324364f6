"""
Request and response bodies. camelCase on the wire, snake_case in Python.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models import SessionType
from timewindows import as_utc

# Stored instants are naive UTC; make that explicit in every response.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class MessageOut(ApiModel):
    message: str


# --- Active timer session ---


class ActiveSessionCreate(ApiModel):
    session_type: SessionType
    # Accepted for compatibility; the server always stamps its own start time.
    start_time: Optional[datetime] = None
    time_elapsed: int = Field(default=0, ge=0)
    is_running: bool = True
    is_paused: bool = False
    session_count: int = Field(default=1, ge=1)


class ActiveSessionUpdate(ApiModel):
    time_elapsed: Optional[int] = Field(default=None, ge=0)
    is_running: Optional[bool] = None
    is_paused: Optional[bool] = None


class ActiveSessionOut(ApiModel):
    id: int
    user_id: str
    session_type: SessionType
    start_time: UtcDatetime
    time_elapsed: int
    is_running: bool
    is_paused: bool
    session_count: int


class ActiveSessionState(ActiveSessionOut):
    current_elapsed_time: int


class StopRequest(ApiModel):
    final_elapsed_time: Optional[int] = None


class StopResponse(ApiModel):
    message: str
    elapsed_time: int


# --- Work sessions ---


class WorkSessionCreate(ApiModel):
    session_type: SessionType
    start_time: datetime
    actual_duration: int = Field(ge=0)
    planned_duration: Optional[int] = Field(default=None, ge=0)
    completed: bool = True


class WorkSessionOut(ApiModel):
    id: int
    user_id: str
    session_type: SessionType
    start_time: UtcDatetime
    actual_duration: int
    planned_duration: int
    completed: bool


# --- Stats ---


class TodayStats(ApiModel):
    completed_sessions: int
    total_time: int
    efficiency: int


class DayTotal(ApiModel):
    day: str
    total_time: int


# --- Timer settings ---


class TimerSettingsIn(ApiModel):
    work_duration: int = Field(default=25, ge=1)
    short_break_duration: int = Field(default=5, ge=1)
    long_break_duration: int = Field(default=15, ge=1)
    sound_notifications: bool = True


class TimerSettingsOut(TimerSettingsIn):
    pass


# --- User ---


class UserOut(ApiModel):
    id: str
    timezone: str


class UserUpdate(ApiModel):
    timezone: str
