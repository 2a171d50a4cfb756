"""Entities module.

Each entity has its own package containing the domain model and the errors
that describe it.
"""

from .book import (
    Book,
    BookInput,
    BookNotFoundError,
    BookStatus,
    BookStorageError,
    LibraryError,
)

__all__ = [
    "Book",
    "BookInput",
    "BookStatus",
    "BookNotFoundError",
    "BookStorageError",
    "LibraryError",
]
