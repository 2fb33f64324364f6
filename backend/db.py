from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool

from config import settings

DATABASE_URL = settings.database_url

_engine_args = {}
if DATABASE_URL.startswith("sqlite"):
    _engine_args["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases live per connection; share a single one.
        _engine_args["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, echo=settings.database_echo, **_engine_args)


def init_db():
    import models  # noqa: F401  registers the tables

    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
