"""
store.py
========
Database gateway for the API.

1) Creates the engine for ``DB_URL`` (SQLite by default).
2) Creates tables once, based on the SQLModel classes in models.py.
3) Hands out Sessions, one unit of work per request.

Users, their preferences and feedback live here. Dashboard sections are
built per request and never stored.
"""

from sqlmodel import SQLModel, Session, create_engine

from .config import DB_URL

# SQLite connections are used from FastAPI's threadpool, so cross-thread use must be allowed.
_connect_args = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}

# echo=False turns off SQL logging. Set echo=True while debugging queries.
engine = create_engine(DB_URL, echo=False, connect_args=_connect_args)


def init_db() -> None:
    """
    Create all tables for the SQLModel classes in models.py.

    Safe to call on every startup: only missing tables are created, nothing is dropped.
    """
    # Import inside the function so the models register with SQLModel before create_all().
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    """
    Open a Session bound to our engine.

    Usage:
      with get_session() as session:
          session.add(obj)
          session.commit()
    """
    return Session(engine)
