"""
FastAPI application entry point.

Run with: python -m api.main
(reads backend/.env; set BOOK_STORE=memory to skip the database)
"""
import logging
import sys

from fastapi import FastAPI

from api.errors import register_error_handlers
from api.middleware import JSONContentTypeMiddleware
from api.routes import books
from repositories import BookStore

logger = logging.getLogger(__name__)


def create_app(store: BookStore) -> FastAPI:
    """Build the books API around an already-open store."""
    app = FastAPI(
        title="Book Library API",
        description="CRUD API for a library of books",
        version="0.1.0",
    )
    app.state.store = store
    app.add_middleware(JSONContentTypeMiddleware)
    register_error_handlers(app, decode_messages=books.DECODE_MESSAGES)
    app.include_router(books.router, prefix="/books", tags=["books"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def main() -> int:
    from api.server import bootstrap
    from settings import load_settings

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    result = bootstrap(settings)
    if not result.ok:
        logger.error("startup failed: %s", result.error)
        return 1
    result.server.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
