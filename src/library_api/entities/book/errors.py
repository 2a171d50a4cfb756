"""Errors raised by the book storage layer."""


class LibraryError(Exception):
    """Base class for library API errors."""


class BookNotFoundError(LibraryError):
    """No book is stored under the requested id."""

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"The book with ID '{book_id}' was not found")


class BookStorageError(LibraryError):
    """The storage backend failed for a reason unrelated to the book itself."""
