"""
Error taxonomy for the book library.

Repositories and the domain layer raise these; only the API layer turns them
into HTTP responses.
"""


class BookError(Exception):
    """Base class for every book library failure."""


class ValidationError(BookError):
    """A client payload failed the required-field check."""


class DecodeError(BookError):
    """Malformed JSON body or an identifier in the wrong format."""


class NotFoundError(BookError):
    """The referenced id has no live record."""

    def __init__(self, book_id):
        super().__init__(f"book {book_id} not found")
        self.book_id = book_id


class PersistenceError(BookError):
    """The backing store failed (I/O, constraint, connection)."""


class MappingError(BookError):
    """The declared field mapping disagrees with the database table."""
