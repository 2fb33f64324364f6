"""
Work session history: manual entries, recent list, and lookups by
civil date in the user's timezone.
"""
from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlmodel import Session

import archive
from auth import get_current_user, zone_for
from db import get_session
from models import User
from schemas import WorkSessionCreate, WorkSessionOut

router = APIRouter(prefix="/api", tags=["work-sessions"])


@router.post("/work-sessions", response_model=WorkSessionOut)
def create_work_session(
    req: WorkSessionCreate,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return archive.record(
        db,
        user.id,
        req.session_type,
        req.start_time,
        req.actual_duration,
        planned_duration=req.planned_duration,
        completed=req.completed,
    )


@router.get("/work-sessions", response_model=list[WorkSessionOut])
def list_work_sessions(
    limit: int = Query(default=archive.RECENT_LIMIT, ge=1, le=100),
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Most recent sessions, newest first."""
    return archive.recent(db, user.id, limit)


@router.get("/work-sessions/by-date", response_model=list[WorkSessionOut])
def work_sessions_by_date(
    response: Response,
    day: date = Query(alias="date"),
    timezone: str | None = None,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Sessions started on the given local calendar day (YYYY-MM-DD)."""
    resolved = zone_for(user, timezone)
    response.headers["X-Resolved-Timezone"] = resolved.name
    return archive.by_date(db, user.id, day, resolved.zone)


@router.get("/work-sessions/by-date-range", response_model=list[WorkSessionOut])
def work_sessions_by_date_range(
    response: Response,
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    timezone: str | None = None,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Sessions started between two local calendar days, both inclusive."""
    resolved = zone_for(user, timezone)
    response.headers["X-Resolved-Timezone"] = resolved.name
    return archive.by_date_range(db, user.id, start_date, end_date, resolved.zone)
