"""Book storage abstractions and backends."""

from .book_storage import BookStorage, get_book_storage, reset_book_storage
from .redis_book_storage import RedisBookStorage, create_redis_client
from .static_book_storage import STATIC_BOOKS, StaticBookStorage

__all__ = [
    "BookStorage",
    "get_book_storage",
    "reset_book_storage",
    "RedisBookStorage",
    "create_redis_client",
    "StaticBookStorage",
    "STATIC_BOOKS",
]
