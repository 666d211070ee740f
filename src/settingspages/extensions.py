"""Database and extension wiring for Settings Pages."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from flask import Flask
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from . import models  # noqa: F401  # ensure models registered with SQLModel metadata
from .config import BaseConfig

_engine: Engine | None = None


def init_engine(database_url: str, **engine_options: Any) -> Engine:
    """Create the process-wide engine and make sure the option table exists."""

    global _engine
    engine = create_engine(database_url, **engine_options)
    SQLModel.metadata.create_all(engine)
    _engine = engine
    return engine


def init_db(app: Flask) -> None:
    """Initialize the SQLModel engine using configuration from the app."""

    config: BaseConfig = app.config["SETTINGSPAGES_CONFIG"]
    engine_options = app.config.get("SQLALCHEMY_ENGINE_OPTIONS", {})
    init_engine(config.DATABASE_URL, **engine_options)


def get_engine() -> Engine:
    """Return the initialized SQLModel engine."""

    if _engine is None:
        raise RuntimeError("Database engine not initialized")
    return _engine


def reset_engine() -> None:
    """Dispose of the current engine (used between tests)."""

    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around operations."""

    session = Session(get_engine(), expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
