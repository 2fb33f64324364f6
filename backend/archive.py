"""
Work session archive: append-only history of finished timers,
queried by UTC window or by civil date in the user's timezone.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Optional

from sqlmodel import Session, select

from errors import BadRequestError
from models import SessionType, WorkSession
from timewindows import Window, local_date_window, local_range_window, as_utc

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


def build_record(
    user_id: str,
    session_type: SessionType,
    start_time: datetime,
    actual_duration: int,
    planned_duration: Optional[int] = None,
    completed: bool = True,
) -> WorkSession:
    """
    A WorkSession ready to be added to a DB session. Planned duration
    defaults to the actual one (stopwatch timers have no plan).
    """
    if actual_duration < 0:
        raise BadRequestError("actualDuration must not be negative")
    if planned_duration is not None and planned_duration < 0:
        raise BadRequestError("plannedDuration must not be negative")
    return WorkSession(
        user_id=user_id,
        session_type=session_type,
        start_time=as_utc(start_time),
        actual_duration=actual_duration,
        planned_duration=actual_duration if planned_duration is None else planned_duration,
        completed=completed,
    )


def record(db: Session, user_id: str, session_type: SessionType, start_time: datetime,
           actual_duration: int, planned_duration: Optional[int] = None,
           completed: bool = True) -> WorkSession:
    work_session = build_record(
        user_id, session_type, start_time, actual_duration, planned_duration, completed
    )
    db.add(work_session)
    db.commit()
    db.refresh(work_session)
    logger.info(
        "Archived %s session for user %s (%ss)", session_type.value, user_id, actual_duration
    )
    return work_session


def recent(db: Session, user_id: str, limit: int = RECENT_LIMIT) -> list[WorkSession]:
    statement = (
        select(WorkSession)
        .where(WorkSession.user_id == user_id)
        .order_by(WorkSession.start_time.desc())
        .limit(limit)
    )
    return list(db.exec(statement).all())


def in_window(
    db: Session,
    user_id: str,
    window: Window,
    session_type: Optional[SessionType] = None,
) -> list[WorkSession]:
    """Sessions whose start_time lies in [window.start, window.end), newest first."""
    statement = select(WorkSession).where(
        WorkSession.user_id == user_id,
        WorkSession.start_time >= window.start,
        WorkSession.start_time < window.end,
    )
    if session_type is not None:
        statement = statement.where(WorkSession.session_type == session_type)
    statement = statement.order_by(WorkSession.start_time.desc())
    return list(db.exec(statement).all())


def by_date(db: Session, user_id: str, day: date, zone: tzinfo) -> list[WorkSession]:
    return in_window(db, user_id, local_date_window(zone, day))


def by_date_range(
    db: Session, user_id: str, start_date: date, end_date: date, zone: tzinfo
) -> list[WorkSession]:
    if start_date > end_date:
        raise BadRequestError("startDate must not be after endDate")
    return in_window(db, user_id, local_range_window(zone, start_date, end_date))
