"""
Per-user timer durations (minutes) and notification preference.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from auth import get_current_user
from db import get_session
from models import TimerSettings, User
from schemas import TimerSettingsIn, TimerSettingsOut
from timewindows import utcnow

router = APIRouter(prefix="/api", tags=["timer-settings"])


def _load(db: Session, user_id: str) -> TimerSettings | None:
    statement = select(TimerSettings).where(TimerSettings.user_id == user_id)
    return db.exec(statement).first()


@router.get("/timer-settings", response_model=TimerSettingsOut)
def get_timer_settings(
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Saved settings, or the defaults if the user never saved any."""
    settings = _load(db, user.id)
    if settings is None:
        return TimerSettingsOut()
    return settings


@router.post("/timer-settings", response_model=TimerSettingsOut)
def replace_timer_settings(
    req: TimerSettingsIn,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Replace the user's settings with the given values."""
    settings = _load(db, user.id)
    if settings is None:
        settings = TimerSettings(user_id=user.id)
    for key, value in req.model_dump().items():
        setattr(settings, key, value)
    settings.updated_at = utcnow()
    db.add(settings)
    db.commit()
    db.refresh(settings)
    return settings
