"""
The in-progress timer: start, autosave snapshots, stop (archive) or discard.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

import store
from auth import get_current_user
from db import get_session
from models import User
from schemas import (
    ActiveSessionCreate,
    ActiveSessionOut,
    ActiveSessionState,
    ActiveSessionUpdate,
    MessageOut,
    StopRequest,
    StopResponse,
)

router = APIRouter(prefix="/api", tags=["active-timer-session"])


@router.get("/active-timer-session", response_model=ActiveSessionState | None)
def get_active_session(
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Current active session with its elapsed time, or null."""
    active = store.get(db, user.id)
    if active is None:
        return None
    state = ActiveSessionOut.model_validate(active).model_dump()
    return ActiveSessionState(**state, current_elapsed_time=store.compute_elapsed(active))


@router.post("/active-timer-session", response_model=ActiveSessionOut)
def create_active_session(
    req: ActiveSessionCreate,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Start a timer. Any session already running for the user is replaced."""
    return store.replace(
        db,
        user.id,
        req.session_type,
        time_elapsed=req.time_elapsed,
        is_running=req.is_running,
        is_paused=req.is_paused,
        session_count=req.session_count,
    )


@router.patch("/active-timer-session", response_model=ActiveSessionOut)
def update_active_session(
    req: ActiveSessionUpdate,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Pause/resume or push an elapsed-time snapshot."""
    return store.update(
        db,
        user.id,
        time_elapsed=req.time_elapsed,
        is_running=req.is_running,
        is_paused=req.is_paused,
    )


@router.post("/active-timer-session/stop", response_model=StopResponse)
def stop_active_session(
    req: StopRequest | None = None,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """
    Stop the timer and archive it as a completed work session.
    Without finalElapsedTime the last saved snapshot is used.
    """
    final = req.final_elapsed_time if req is not None else None
    elapsed, _ = store.stop_and_archive(db, user.id, final)
    return StopResponse(message="Session stopped and saved", elapsed_time=elapsed)


@router.delete("/active-timer-session", response_model=MessageOut)
def remove_active_session(
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Discard the timer without saving anything."""
    store.remove(db, user.id)
    return MessageOut(message="Active session removed")
