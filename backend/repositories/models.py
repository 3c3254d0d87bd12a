"""
SQLAlchemy ORM models for persistence.
"""
from datetime import datetime, timezone
from sqlalchemy import BigInteger, Column, DateTime, Integer, String

from db import Base


# largest id a signed 64-bit key column can hold
MAX_ROW_ID = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BookORM(Base):
    __tablename__ = "books"

    # SQLite only auto-increments a plain INTEGER primary key
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
        index=True,
    )
    author = Column(String(100), nullable=False)
    title = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    # soft-delete marker; rows with a value here are invisible to every query
    deleted_at = Column(DateTime, nullable=True, index=True)
