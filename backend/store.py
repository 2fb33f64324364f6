"""
Active timer sessions: at most one in-progress timer per user.

The client ticks its own display every second and pushes snapshots of
time_elapsed; the stored value is the last known good elapsed time and the
server never adds a derived delta on top of it.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select

from archive import build_record
from config import settings
from errors import BadRequestError, NotFoundError
from models import ActiveTimerSession, SessionType, WorkSession
from timewindows import as_utc, utcnow

logger = logging.getLogger(__name__)


def get(db: Session, user_id: str) -> Optional[ActiveTimerSession]:
    statement = select(ActiveTimerSession).where(ActiveTimerSession.user_id == user_id)
    return db.exec(statement).first()


def _require(db: Session, user_id: str) -> ActiveTimerSession:
    active = get(db, user_id)
    if active is None:
        raise NotFoundError("No active session found")
    return active


def _check_elapsed(value: int) -> None:
    if value < 0:
        raise BadRequestError("timeElapsed must not be negative")


def compute_elapsed(active: ActiveTimerSession) -> int:
    """Elapsed seconds to report to clients: the stored snapshot, verbatim."""
    return active.time_elapsed


def replace(
    db: Session,
    user_id: str,
    session_type: SessionType,
    time_elapsed: int = 0,
    is_running: bool = True,
    is_paused: bool = False,
    session_count: int = 1,
    archive_replaced: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> ActiveTimerSession:
    """
    Start a new active session for the user, dropping any existing one.

    The previous session's time is lost unless `archive_replaced` (default:
    the ARCHIVE_REPLACED_SESSIONS setting) is set, in which case it is kept
    as an interrupted WorkSession.
    """
    _check_elapsed(time_elapsed)
    if session_count < 1:
        raise BadRequestError("sessionCount must be at least 1")
    if archive_replaced is None:
        archive_replaced = settings.archive_replaced_sessions
    now = as_utc(now) if now is not None else utcnow()

    fields = dict(
        start_time=now,
        time_elapsed=time_elapsed,
        is_running=is_running,
        is_paused=is_paused,
        session_count=session_count,
        updated_at=now,
    )
    try:
        active = _swap(db, user_id, session_type, archive_replaced, fields)
    except (IntegrityError, StaleDataError):
        # Another start for this user committed between our read and write.
        db.rollback()
        logger.warning("Concurrent start for user %s; replacing the other one", user_id)
        active = _swap(db, user_id, session_type, archive_replaced, fields)
    logger.info("Started %s session for user %s", session_type.value, user_id)
    return active


def _swap(
    db: Session,
    user_id: str,
    session_type: SessionType,
    archive_replaced: bool,
    fields: dict,
) -> ActiveTimerSession:
    prior = get(db, user_id)
    if prior is not None:
        lost = compute_elapsed(prior)
        if archive_replaced and lost > 0:
            db.add(build_record(user_id, prior.session_type, prior.start_time, lost, completed=False))
            logger.warning(
                "Replacing active session for user %s; archived %ss as interrupted", user_id, lost
            )
        else:
            logger.warning(
                "Replacing active session for user %s; discarding %ss", user_id, lost
            )
        db.delete(prior)
        # The unique user_id row must be gone before the new insert.
        db.flush()

    active = ActiveTimerSession(user_id=user_id, session_type=session_type, **fields)
    db.add(active)
    db.commit()
    db.refresh(active)
    return active


def update(
    db: Session,
    user_id: str,
    time_elapsed: Optional[int] = None,
    is_running: Optional[bool] = None,
    is_paused: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> ActiveTimerSession:
    """Merge the given fields into the user's active session (last write wins)."""
    active = _require(db, user_id)
    if time_elapsed is not None:
        _check_elapsed(time_elapsed)
        active.time_elapsed = time_elapsed
    if is_running is not None:
        active.is_running = is_running
    if is_paused is not None:
        active.is_paused = is_paused
    active.updated_at = as_utc(now) if now is not None else utcnow()
    db.add(active)
    db.commit()
    db.refresh(active)
    return active


def stop_and_archive(
    db: Session, user_id: str, final_elapsed: Optional[int] = None
) -> tuple[int, Optional[WorkSession]]:
    """
    End the user's active session. A positive elapsed time is archived as a
    completed WorkSession; archive insert and active delete share one commit.
    Returns the elapsed seconds and the archived record, if any.
    """
    active = _require(db, user_id)
    elapsed = compute_elapsed(active) if final_elapsed is None else final_elapsed

    work_session = None
    if elapsed > 0:
        work_session = build_record(user_id, active.session_type, active.start_time, elapsed)
        db.add(work_session)
    db.delete(active)
    db.commit()
    if work_session is not None:
        db.refresh(work_session)
    logger.info("Stopped session for user %s after %ss", user_id, max(elapsed, 0))
    return max(elapsed, 0), work_session


def remove(db: Session, user_id: str) -> bool:
    """Discard the user's active session without archiving. Safe to repeat."""
    active = get(db, user_id)
    if active is None:
        return False
    db.delete(active)
    db.commit()
    logger.info("Removed active session for user %s", user_id)
    return True


def reconcile_stale(
    db: Session, max_age: timedelta, now: Optional[datetime] = None
) -> int:
    """
    Force-close active sessions nobody has touched for longer than `max_age`
    (clients that never stopped cleanly). Their elapsed time is archived as
    interrupted. Returns how many sessions were closed.
    """
    now = as_utc(now) if now is not None else utcnow()
    cutoff = now - max_age
    statement = select(ActiveTimerSession).where(ActiveTimerSession.updated_at < cutoff)
    stale = list(db.exec(statement).all())
    for active in stale:
        elapsed = compute_elapsed(active)
        if elapsed > 0:
            db.add(build_record(
                active.user_id, active.session_type, active.start_time, elapsed, completed=False
            ))
        db.delete(active)
    if stale:
        db.commit()
        logger.info("Closed %d stale active session(s)", len(stale))
    return len(stale)
