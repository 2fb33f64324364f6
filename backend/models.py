from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlmodel import SQLModel, Field

from timewindows import as_utc, utcnow


class SessionType(str, enum.Enum):
    work = "work"
    break_ = "break"


class UtcDateTime(sa.types.TypeDecorator):
    """Timestamps go in and come out as aware UTC, whatever the backend keeps."""

    impl = sa.DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value) if value is not None else None

    def process_result_value(self, value, dialect):
        return as_utc(value) if value is not None else None


# Store "work"/"break" rather than the member names.
SessionTypeColumn = sa.Enum(
    SessionType,
    name="sessiontype",
    values_callable=lambda members: [m.value for m in members],
)


class User(SQLModel, table=True):
    id: str = Field(primary_key=True, index=True)
    timezone: str = "UTC"
    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)


class ActiveTimerSession(SQLModel, table=True):
    """The one in-progress timer of a user. user_id is unique."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, unique=True, foreign_key="user.id")
    session_type: SessionType = Field(sa_type=SessionTypeColumn)
    start_time: datetime = Field(sa_type=UtcDateTime)
    time_elapsed: int = 0  # seconds
    is_running: bool = True
    is_paused: bool = False
    session_count: int = 1
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)


class WorkSession(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, foreign_key="user.id")
    session_type: SessionType = Field(sa_type=SessionTypeColumn)
    start_time: datetime = Field(index=True, sa_type=UtcDateTime)
    actual_duration: int  # seconds
    planned_duration: int  # seconds
    completed: bool = True


class TimerSettings(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, unique=True, foreign_key="user.id")
    work_duration: int = 25  # minutes
    short_break_duration: int = 5
    long_break_duration: int = 15
    sound_notifications: bool = True
    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
