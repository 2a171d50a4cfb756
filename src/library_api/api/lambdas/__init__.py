"""Serverless entry points."""

from .cors import CORS_HEADERS, apply_cors, with_cors
from .handlers import (
    HANDLERS,
    check_in_handler,
    check_out_handler,
    create_book_handler,
    delete_book_handler,
    get_book_handler,
    get_book_service,
    get_books_handler,
    update_book_handler,
)

__all__ = [
    "CORS_HEADERS",
    "apply_cors",
    "with_cors",
    "HANDLERS",
    "get_book_service",
    "get_books_handler",
    "get_book_handler",
    "create_book_handler",
    "update_book_handler",
    "delete_book_handler",
    "check_out_handler",
    "check_in_handler",
]
