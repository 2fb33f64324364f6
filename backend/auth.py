"""
Authenticated user lookup. Login happens upstream; the gateway forwards
the user id in the X-User-Id header.
"""
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from config import settings
from db import get_session
from errors import UnauthorizedError
from models import User
from timewindows import ResolvedZone, resolve_timezone


def get_current_user(
    db: Session = Depends(get_session),
    user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
) -> User:
    """The requesting user, created with default settings on first sight."""
    if not user_id or not user_id.strip():
        raise UnauthorizedError("Unauthorized")
    user_id = user_id.strip()
    user = db.get(User, user_id)
    if user is None:
        user = User(id=user_id, timezone=settings.default_timezone)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # A parallel first request created the row already.
            db.rollback()
            return db.get(User, user_id)
        db.refresh(user)
    return user


def zone_for(user: User, requested: Optional[str] = None) -> ResolvedZone:
    """Timezone for a request: explicit parameter, then the user's preference."""
    return resolve_timezone(requested or user.timezone, default=settings.default_timezone)
