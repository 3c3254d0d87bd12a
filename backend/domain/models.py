"""
Core domain model for the book library.

The Book entity is framework-agnostic: the same dataclass flows through the
in-memory store, the SQLAlchemy store and the HTTP layer. Wire names, column
names and constraints come from the declared BOOK_FIELDS table instead of
being derived from the ORM class.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from domain.errors import MappingError, ValidationError


@dataclass(frozen=True)
class FieldSpec:
    """How one Book attribute maps onto JSON and onto the books table."""
    name: str
    wire_name: str
    column: str
    max_length: Optional[int] = None
    required: bool = False
    writable: bool = False


BOOK_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("id", "id", "id"),
    FieldSpec("author", "author", "author", max_length=100, required=True, writable=True),
    FieldSpec("title", "title", "title", max_length=100, required=True, writable=True),
    FieldSpec("created_at", "createdAt", "created_at"),
    FieldSpec("updated_at", "updatedAt", "updated_at"),
)

FIELDS_BY_NAME: Dict[str, FieldSpec] = {f.name: f for f in BOOK_FIELDS}

# Upper bound on GetAll for stores that cap their listing
MAX_LIST_SIZE = 100


@dataclass
class Book:
    """
    A book in the library.

    `id` is assigned by the store unless the caller supplies one (in-memory
    tier only). Timestamps stay None in stores that do not track them.
    """
    author: str = ""
    title: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate(self) -> None:
        """Raise ValidationError if a required field is empty."""
        if not self.title:
            raise ValidationError("book: missing required title")
        if not self.author:
            raise ValidationError("book: missing required author")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for entry in BOOK_FIELDS:
            value = getattr(self, entry.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif value is None and entry.name in ("created_at", "updated_at"):
                continue
            data[entry.wire_name] = value
        return data


def check_book_mapping(orm_cls) -> None:
    """
    Verify the ORM table against BOOK_FIELDS.

    Every mapped column must exist, and string columns must carry the declared
    length, so a drifted schema fails at startup instead of mid-request.
    """
    columns = orm_cls.__table__.columns
    for entry in BOOK_FIELDS:
        if entry.column not in columns:
            raise MappingError(
                f"{orm_cls.__tablename__}: missing column {entry.column!r} for field {entry.name!r}"
            )
        if entry.max_length is None:
            continue
        length = getattr(columns[entry.column].type, "length", None)
        if length != entry.max_length:
            raise MappingError(
                f"{orm_cls.__tablename__}.{entry.column}: length {length}, expected {entry.max_length}"
            )
