"""
Book repository backed by SQLAlchemy.

Each operation opens its own session and issues unguarded statements; the
existence check in update/delete and the write itself are separate steps
inside that session, with no wider transaction.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.errors import NotFoundError, PersistenceError
from domain.models import MAX_LIST_SIZE, Book
from repositories.base import BookStore
from repositories.models import MAX_ROW_ID, BookORM, utcnow

logger = logging.getLogger(__name__)


def _book_from_orm(orm: BookORM) -> Book:
    return Book(
        id=orm.id,
        author=orm.author,
        title=orm.title,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


class SqlBookStore(BookStore):
    """CRUD operations for books stored in the `books` table."""

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = utcnow,
        limit: int = MAX_LIST_SIZE,
    ) -> None:
        self.session_factory = session_factory
        self.clock = clock
        self.limit = limit

    def _fault(self, session: Session, op: str, exc: SQLAlchemyError) -> PersistenceError:
        session.rollback()
        logger.exception("books store: %s failed", op)
        return PersistenceError(str(exc))

    @staticmethod
    def _live(session: Session, book_id) -> Optional[BookORM]:
        if isinstance(book_id, int) and not 0 <= book_id <= MAX_ROW_ID:
            # no row can carry an id outside the key range
            return None
        return session.execute(
            select(BookORM).where(BookORM.id == book_id, BookORM.deleted_at.is_(None))
        ).scalar_one_or_none()

    def create(self, book: Book) -> Book:
        now = self.clock()
        with self.session_factory() as session:
            # id and timestamps are always assigned here, never taken from the caller
            orm = BookORM(author=book.author, title=book.title, created_at=now, updated_at=now)
            try:
                session.add(orm)
                session.commit()
                session.refresh(orm)
            except SQLAlchemyError as exc:
                raise self._fault(session, "create", exc) from exc
            return _book_from_orm(orm)

    def get_by_id(self, book_id) -> Book:
        with self.session_factory() as session:
            try:
                orm = self._live(session, book_id)
            except SQLAlchemyError as exc:
                raise self._fault(session, "get_by_id", exc) from exc
            if orm is None:
                raise NotFoundError(book_id)
            return _book_from_orm(orm)

    def get_all(self) -> List[Book]:
        with self.session_factory() as session:
            try:
                rows = session.execute(
                    select(BookORM)
                    .where(BookORM.deleted_at.is_(None))
                    .order_by(BookORM.id)
                    .limit(self.limit)
                ).scalars().all()
            except SQLAlchemyError as exc:
                raise self._fault(session, "get_all", exc) from exc
            return [_book_from_orm(b) for b in rows]

    def update(
        self, book_id, title: Optional[str] = None, author: Optional[str] = None
    ) -> Book:
        with self.session_factory() as session:
            try:
                orm = self._live(session, book_id)
                if orm is None:
                    raise NotFoundError(book_id)
                # empty values leave the column unchanged
                if title:
                    orm.title = title
                if author:
                    orm.author = author
                orm.updated_at = self.clock()
                session.commit()
                session.refresh(orm)
            except SQLAlchemyError as exc:
                raise self._fault(session, "update", exc) from exc
            return _book_from_orm(orm)

    def delete(self, book_id):
        with self.session_factory() as session:
            try:
                orm = self._live(session, book_id)
                if orm is None:
                    raise NotFoundError(book_id)
                orm.deleted_at = self.clock()
                session.commit()
            except SQLAlchemyError as exc:
                raise self._fault(session, "delete", exc) from exc
            return book_id
