"""
The authenticated user's profile (timezone preference).
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from auth import get_current_user
from db import get_session
from errors import BadRequestError
from models import User
from schemas import UserOut, UserUpdate
from timewindows import is_known_timezone, utcnow

router = APIRouter(prefix="/api/auth", tags=["user"])


@router.get("/user", response_model=UserOut)
def get_user(user: User = Depends(get_current_user)):
    return user


@router.patch("/user", response_model=UserOut)
def update_user(
    req: UserUpdate,
    db: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Change the stored timezone. Only IANA names are accepted."""
    name = req.timezone.strip()
    if not is_known_timezone(name):
        raise BadRequestError(f"Unknown timezone: {req.timezone}")
    user.timezone = name
    user.updated_at = utcnow()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
