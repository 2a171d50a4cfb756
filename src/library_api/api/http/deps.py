"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.library_api.api.lambdas.handlers import get_book_service as _process_book_service
from src.library_api.core.services import BookService


def get_book_service(request: Request) -> BookService:
    """Get the book service bound to the application.

    Falls back to the process-wide service when the app was started without
    its lifespan (e.g. a bare ``TestClient(app)``).
    """
    service = getattr(request.app.state, "book_service", None)
    if service is None:
        service = _process_book_service()
        request.app.state.book_service = service
    return service
