"""
Capability contract shared by every book store.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from domain.models import Book


class BookStore(ABC):
    """CRUD operations for books, independent of where they live."""

    @abstractmethod
    def create(self, book: Book) -> Book:
        """Persist a new book and return the stored record."""

    @abstractmethod
    def get_by_id(self, book_id) -> Book:
        """Return the live book with this id or raise NotFoundError."""

    @abstractmethod
    def get_all(self) -> List[Book]:
        """Return the live books; capped stores return at most MAX_LIST_SIZE."""

    @abstractmethod
    def update(
        self, book_id, title: Optional[str] = None, author: Optional[str] = None
    ) -> Book:
        """Replace title and/or author; None leaves a field untouched."""

    @abstractmethod
    def delete(self, book_id):
        """Remove the book and return its id."""
