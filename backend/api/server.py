"""
Server bootstrap: owns the store, the app and the listen address.

bootstrap() never exits the process. It hands back a BootstrapResult and the
caller decides whether a failure means exit or retry.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from api.main import create_app
from db import init_db, make_engine, make_session_factory
from domain.errors import BookError, PersistenceError
from domain.models import check_book_mapping
from repositories import BookStore, InMemoryBookStore, SqlBookStore
from repositories.models import BookORM
from settings import STORE_DATABASE, STORE_MEMORY, ConfigError, Settings

logger = logging.getLogger(__name__)


class Server:
    """A store handle plus the FastAPI app routed onto it."""

    def __init__(
        self,
        store: BookStore,
        host: str = "0.0.0.0",
        port: int = 8080,
        engine: Optional[Engine] = None,
    ) -> None:
        self.store = store
        self.host = host
        self.port = port
        self.engine = engine
        self.app: FastAPI = create_app(store)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def start(self) -> None:
        """Serve until interrupted."""
        logger.info("Listening on %s", self.address)
        try:
            uvicorn.run(self.app, host=self.host, port=self.port)
        finally:
            self.close()

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


@dataclass
class BootstrapResult:
    server: Optional[Server] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.server is not None and self.error is None


def connect_database(settings: Settings) -> tuple[Engine, SqlBookStore]:
    """Open the engine, verify the connection and create the books table."""
    check_book_mapping(BookORM)
    engine = make_engine(settings.database_url(), echo=settings.DB_ECHO)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        init_db(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise PersistenceError(f"cannot connect to database: {exc}") from exc
    return engine, SqlBookStore(make_session_factory(engine))


def bootstrap(settings: Settings) -> BootstrapResult:
    """Build a ready-to-start Server from settings."""
    try:
        port = settings.listen_port()
        if settings.BOOK_STORE == STORE_MEMORY:
            logger.info("Using in-memory book store")
            return BootstrapResult(server=Server(InMemoryBookStore(), settings.HOST, port))
        if settings.BOOK_STORE != STORE_DATABASE:
            raise ConfigError(f"unknown BOOK_STORE {settings.BOOK_STORE!r}")
        engine, store = connect_database(settings)
        logger.info("Using database book store (%s)", engine.url.render_as_string(hide_password=True))
        return BootstrapResult(server=Server(store, settings.HOST, port, engine=engine))
    except (ConfigError, BookError) as exc:
        return BootstrapResult(error=exc)
