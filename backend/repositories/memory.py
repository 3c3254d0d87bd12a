"""
Book store kept in a plain process-local list.

There is no locking: concurrent writers may interleave. Lookups scan the list
and return the first match, so a duplicate caller-supplied id shadows the
later record.
"""
from dataclasses import replace
from typing import List, Optional

from domain.errors import NotFoundError
from domain.models import Book
from repositories.base import BookStore


class InMemoryBookStore(BookStore):
    """Unsynchronized in-memory library."""

    def __init__(self) -> None:
        self.library: List[Book] = []
        self._last_id = 0

    def _find(self, book_id) -> Optional[int]:
        for idx, book in enumerate(self.library):
            if book.id == book_id:
                return idx
        return None

    def create(self, book: Book) -> Book:
        stored = replace(book)
        if stored.id is None:
            self._last_id += 1
            stored.id = self._last_id
        elif isinstance(stored.id, int) and stored.id > self._last_id:
            self._last_id = stored.id
        self.library.append(stored)
        return replace(stored)

    def get_by_id(self, book_id) -> Book:
        idx = self._find(book_id)
        if idx is None:
            raise NotFoundError(book_id)
        return replace(self.library[idx])

    def get_all(self) -> List[Book]:
        return [replace(b) for b in self.library]

    def update(
        self, book_id, title: Optional[str] = None, author: Optional[str] = None
    ) -> Book:
        idx = self._find(book_id)
        if idx is None:
            raise NotFoundError(book_id)
        book = self.library[idx]
        if title:
            book.title = title
        if author:
            book.author = author
        return replace(book)

    def delete(self, book_id):
        idx = self._find(book_id)
        if idx is None:
            raise NotFoundError(book_id)
        # splice the record out
        self.library = self.library[:idx] + self.library[idx + 1:]
        return book_id
