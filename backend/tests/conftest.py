import os

# Must be set before db.py builds the engine.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STALE_SESSION_HOURS"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from db import engine
from main import app
from models import User


@pytest.fixture
def db():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def user(db):
    user = User(id="user-1", timezone="UTC")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def headers():
    return {"X-User-Id": "user-1"}
