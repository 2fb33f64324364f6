import pytest
from sqlmodel import Session

from auth import get_current_user
from db import engine
from errors import UnauthorizedError
from models import User


def test_blank_user_id_is_unauthorized(db):
    with pytest.raises(UnauthorizedError):
        get_current_user(db=db, user_id="   ")


def test_first_sight_creates_user(db):
    user = get_current_user(db=db, user_id=" user-9 ")
    assert user.id == "user-9"
    assert user.timezone == "UTC"


def test_user_created_by_a_parallel_request_is_reused(db, monkeypatch):
    with Session(engine) as other:
        other.add(User(id="user-1", timezone="Europe/Paris"))
        other.commit()

    # This request looked before the other one committed.
    real_get = db.get
    calls = []

    def get_missing_once(model, ident):
        calls.append(ident)
        return None if len(calls) == 1 else real_get(model, ident)

    monkeypatch.setattr(db, "get", get_missing_once)

    user = get_current_user(db=db, user_id="user-1")

    assert user.timezone == "Europe/Paris"
    assert len(calls) == 2
