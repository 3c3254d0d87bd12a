"""
Database setup for the FastAPI backend.
Provides SQLAlchemy engine/session utilities; the engine is built at startup
from settings rather than at import time.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


Base = declarative_base()


def make_engine(url: str | URL, echo: bool = False) -> Engine:
    """Create an engine; SQLite URLs get the settings FastAPI threads need."""
    url_text = url if isinstance(url, str) else url.render_as_string(hide_password=False)
    kwargs = {"echo": echo}
    if url_text.startswith("sqlite"):
        # check_same_thread=False allows usage across FastAPI threads
        kwargs["connect_args"] = {"check_same_thread": False}
        if url_text in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise each session sees an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create tables if they don't exist."""
    from repositories import models  # noqa: F401  Ensures models are registered

    Base.metadata.create_all(bind=engine)
