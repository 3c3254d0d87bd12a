"""
Books API routes.

Each handler calls one store operation and maps the outcome onto a status
code and JSON body. Request bodies are decoded by FastAPI; undecodable ones
are answered by the validation handler in api.errors with DECODE_MESSAGES.
"""
import logging
import re
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from api.errors import api_error
from domain.errors import DecodeError, NotFoundError, PersistenceError, ValidationError
from domain.models import FIELDS_BY_NAME, Book
from repositories import BookStore

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_BOOK_ID = 2**64 - 1
_BOOK_ID_RE = re.compile(r"^[0-9]+$")

# route name -> message for a body that fails to decode
DECODE_MESSAGES = {
    "create_book": "Unable to add new book to library.",
    "update_book": "Unable to update book.",
}


class BookCreate(BaseModel):
    # id and timestamps in the payload are ignored
    author: Optional[str] = Field(None, max_length=FIELDS_BY_NAME["author"].max_length)
    title: Optional[str] = Field(None, max_length=FIELDS_BY_NAME["title"].max_length)


class BookUpdate(BaseModel):
    author: Optional[str] = Field(None, max_length=FIELDS_BY_NAME["author"].max_length)
    title: Optional[str] = Field(None, max_length=FIELDS_BY_NAME["title"].max_length)


def get_store(request: Request) -> BookStore:
    return request.app.state.store


def parse_book_id(raw: str) -> int:
    """Parse a path id as an unsigned 64-bit integer."""
    if not _BOOK_ID_RE.match(raw) or int(raw) > MAX_BOOK_ID:
        raise DecodeError(f"invalid book id {raw!r}: expected an unsigned integer")
    return int(raw)


@router.post("")
async def create_book(data: BookCreate, store: BookStore = Depends(get_store)):
    """Add a new book to the library."""
    logger.info("Endpoint: create_book")
    try:
        book = Book(author=data.author or "", title=data.title or "")
        book.validate()
        saved = store.create(book)
    except (ValidationError, PersistenceError) as exc:
        raise api_error(400, DECODE_MESSAGES["create_book"], exc)
    return JSONResponse(status_code=201, content=saved.to_dict())


@router.get("")
async def list_books(store: BookStore = Depends(get_store)):
    """List books ordered by id."""
    logger.info("Endpoint: list_books")
    try:
        books = store.get_all()
    except PersistenceError as exc:
        raise api_error(500, "Unable to fetch all books from library.", exc)
    return [b.to_dict() for b in books]


@router.get("/{book_id}")
async def get_book(book_id: str, store: BookStore = Depends(get_store)):
    logger.info("Endpoint: get_book")
    message = "Unable to find book."
    try:
        bid = parse_book_id(book_id)
        book = store.get_by_id(bid)
    except DecodeError as exc:
        raise api_error(400, message, exc)
    except NotFoundError as exc:
        raise api_error(404, message, exc)
    except PersistenceError as exc:
        raise api_error(500, message, exc)
    return book.to_dict()


@router.put("/{book_id}")
async def update_book(book_id: str, data: BookUpdate, store: BookStore = Depends(get_store)):
    """Replace title and/or author of an existing book."""
    logger.info("Endpoint: update_book")
    try:
        bid = parse_book_id(book_id)
        store.get_by_id(bid)
    except DecodeError as exc:
        raise api_error(400, DECODE_MESSAGES["update_book"], exc)
    except NotFoundError as exc:
        raise api_error(404, "Unable to find book to update.", exc)
    except PersistenceError as exc:
        raise api_error(400, DECODE_MESSAGES["update_book"], exc)

    try:
        updated = store.update(bid, title=data.title, author=data.author)
    except NotFoundError as exc:
        raise api_error(404, "Unable to find book to update.", exc)
    except PersistenceError as exc:
        raise api_error(400, "Failed to update book record.", exc)
    return updated.to_dict()


@router.delete("/{book_id}")
async def delete_book(book_id: str, store: BookStore = Depends(get_store)):
    """Remove a book; the database store only marks it deleted."""
    logger.info("Endpoint: delete_book")
    try:
        bid = parse_book_id(book_id)
        store.get_by_id(bid)
    except DecodeError as exc:
        raise api_error(400, "Unable to delete book.", exc)
    except NotFoundError as exc:
        raise api_error(404, "Unable to find book to delete.", exc)
    except PersistenceError as exc:
        raise api_error(400, "Unable to delete book.", exc)

    try:
        store.delete(bid)
    except NotFoundError as exc:
        raise api_error(404, "Unable to find book to delete.", exc)
    except PersistenceError as exc:
        raise api_error(400, "Failed to delete book record.", exc)
    return {"id": bid}
