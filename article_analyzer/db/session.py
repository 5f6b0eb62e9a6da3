"""Engine and session factory construction."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

SQLITE_PREFIX = "sqlite:///"


def create_db_engine(database_url: str) -> Engine:
    """Create an engine, making sure the parent directory of a SQLite file exists."""
    connect_args: dict[str, object] = {}
    if database_url.startswith(SQLITE_PREFIX):
        sqlite_path = database_url[len(SQLITE_PREFIX) :]
        if sqlite_path and sqlite_path != ":memory:":
            Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
