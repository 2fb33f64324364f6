"""
Today / weekly work statistics, bucketed by the user's civil calendar.
"""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

from sqlmodel import Session

import archive
from models import SessionType
from timewindows import WEEKDAY_NAMES, day_window, local_weekday, week_window


def efficiency(total_time: int, planned_time: int) -> int:
    """Actual over planned time as a whole percentage, rounded half up."""
    if planned_time <= 0:
        return 0
    return (200 * total_time + planned_time) // (2 * planned_time)


def today_stats(
    db: Session, user_id: str, zone: tzinfo, now: Optional[datetime] = None
) -> dict:
    sessions = archive.in_window(db, user_id, day_window(zone, now), SessionType.work)
    total_time = sum(s.actual_duration for s in sessions)
    planned_time = sum(s.planned_duration for s in sessions)
    return {
        "completedSessions": sum(1 for s in sessions if s.completed),
        "totalTime": total_time,
        "efficiency": efficiency(total_time, planned_time),
    }


def weekly_stats(
    db: Session, user_id: str, zone: tzinfo, now: Optional[datetime] = None
) -> list[dict]:
    """Work seconds per local weekday of the current week, Sunday first."""
    totals = [0] * 7
    for s in archive.in_window(db, user_id, week_window(zone, now), SessionType.work):
        totals[local_weekday(zone, s.start_time)] += s.actual_duration
    return [{"day": name, "totalTime": total} for name, total in zip(WEEKDAY_NAMES, totals)]
