"""
Work statistics for the current local day and week.
"""
from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

import reporting
from auth import get_current_user, zone_for
from db import get_session
from models import User
from schemas import DayTotal, TodayStats

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/today", response_model=TodayStats)
def get_today_stats(
    response: Response,
    timezone: str | None = None,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Completed count, total seconds and efficiency for today's work sessions."""
    resolved = zone_for(user, timezone)
    response.headers["X-Resolved-Timezone"] = resolved.name
    return reporting.today_stats(db, user.id, resolved.zone)


@router.get("/weekly", response_model=list[DayTotal])
def get_weekly_stats(
    response: Response,
    timezone: str | None = None,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Work seconds per weekday of the current week, Sunday first."""
    resolved = zone_for(user, timezone)
    response.headers["X-Resolved-Timezone"] = resolved.name
    return reporting.weekly_stats(db, user.id, resolved.zone)
