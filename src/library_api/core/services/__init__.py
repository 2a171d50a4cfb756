"""Core services exports."""

from .book_service import BOOK_ID_PARAMETER, BookService

__all__ = ["BOOK_ID_PARAMETER", "BookService"]
