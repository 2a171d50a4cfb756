from __future__ import annotations

import json
from collections.abc import Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.library_api.api.lambdas import handlers
from src.library_api.core.models import ApiGatewayRequest
from src.library_api.core.services import BookService
from src.library_api.core.storage import (
    RedisBookStorage,
    StaticBookStorage,
    reset_book_storage,
)
from src.library_api.entities.book import Book

FAHRENHEIT_ID = "448E55A3-E88E-4597-B3CB-11A844EFDA5D"
MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture
def static_storage() -> StaticBookStorage:
    """Static storage seeded with the demo catalog."""
    return StaticBookStorage()


@pytest.fixture
def empty_storage() -> StaticBookStorage:
    return StaticBookStorage(books={})


@pytest.fixture
def book_service(static_storage: StaticBookStorage) -> BookService:
    return BookService(static_storage)


@pytest.fixture
def mock_redis() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def redis_storage(mock_redis: AsyncMock) -> RedisBookStorage:
    return RedisBookStorage(mock_redis, key_prefix="books")


@pytest.fixture
def make_request() -> Callable[..., ApiGatewayRequest]:
    """Factory for request envelopes."""

    def _make(book_id: str | None = None, body: str | dict | None = None) -> ApiGatewayRequest:
        if isinstance(body, dict):
            body = json.dumps(body)
        return ApiGatewayRequest(
            path_parameters={"book_id": book_id} if book_id is not None else None,
            body=body,
        )

    return _make


@pytest.fixture
def lambda_service(static_storage: StaticBookStorage) -> Generator[BookService, None, None]:
    """Install a fresh static-backed service behind the Lambda handlers."""
    service = BookService(static_storage)
    handlers.set_book_service(service)
    yield service
    handlers.set_book_service(None)
    reset_book_storage()


def stored_item(book: Book) -> dict[str, str]:
    """Redis hash contents for a book."""
    return book.to_item()


def mock_pipeline(
    mock_redis: AsyncMock,
    exists: int = 1,
    result: dict | None = None,
    execute_error: Exception | None = None,
) -> MagicMock:
    """Attach a transactional pipeline double to a mocked Redis client."""
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.__aexit__.return_value = False
    pipe.watch = AsyncMock()
    pipe.exists = AsyncMock(return_value=exists)
    if execute_error is not None:
        pipe.execute = AsyncMock(side_effect=execute_error)
    else:
        pipe.execute = AsyncMock(return_value=[4, result or {}])
    mock_redis.pipeline = MagicMock(return_value=pipe)
    return pipe


def mock_read_pipeline(mock_redis: AsyncMock, pages: list[list[dict]]) -> MagicMock:
    """Attach a batching pipeline double; each execute returns the next page."""
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.__aexit__.return_value = False
    pipe.execute = AsyncMock(side_effect=pages)
    mock_redis.pipeline = MagicMock(return_value=pipe)
    return pipe
