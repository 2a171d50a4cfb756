"""Book entity module.

This module contains all Book-related classes organized by responsibility:
- Book: Domain entity stored by every backend
- BookInput: Request body for create and update
- BookStatus: Check-in/check-out state
- Errors: Domain and storage failures
"""

from .entity import Book, BookInput, BookStatus
from .errors import BookNotFoundError, BookStorageError, LibraryError

__all__ = [
    "Book",
    "BookInput",
    "BookStatus",
    "BookNotFoundError",
    "BookStorageError",
    "LibraryError",
]
