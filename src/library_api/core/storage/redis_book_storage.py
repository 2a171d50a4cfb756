"""Redis-backed book storage.

Each book is a hash stored at ``<key_prefix>:<id>`` whose fields mirror the
book's JSON attributes. The book id doubles as the partition key, so point
lookups, writes and deletes touch exactly one key.
"""

from __future__ import annotations

import uuid
from typing import Any

import redis.asyncio as redis_async
from loguru import logger
from pydantic import ValidationError
from redis.exceptions import RedisError, WatchError

from src.library_api.entities.book import (
    Book,
    BookNotFoundError,
    BookStatus,
    BookStorageError,
)
from src.library_api.runtime.config.config_data import RedisConfig

from .book_storage import BookStorage

SCAN_BATCH_SIZE = 100


def create_redis_client(config: RedisConfig) -> redis_async.Redis:
    """Build a pooled async Redis client from configuration."""
    return redis_async.from_url(
        config.connection_string,
        encoding="utf-8",
        decode_responses=config.decode_responses,
        max_connections=config.max_connections,
        socket_timeout=config.socket_timeout,
        socket_connect_timeout=config.socket_connect_timeout,
        socket_keepalive=True,
        health_check_interval=30,
        client_name="library_api",
    )


def _decode(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class RedisBookStorage(BookStorage):
    """Book storage against a Redis-protocol key-value database."""

    def __init__(self, redis_client, key_prefix: str = "library-api-books"):
        self._redis = redis_client
        self._key_prefix = key_prefix

    def _key(self, book_id: str) -> str:
        return f"{self._key_prefix}:{book_id}"

    @staticmethod
    def _unmarshal(item: dict) -> Book:
        try:
            return Book.model_validate({_decode(k): _decode(v) for k, v in item.items()})
        except ValidationError as e:
            raise BookStorageError(
                f"failed to unmarshal the result from the database: {e}"
            ) from e

    async def _read_page(self, keys: list[str]) -> list[dict]:
        """Fetch the hashes of one SCAN page in a single round trip."""
        async with self._redis.pipeline(transaction=False) as pipe:
            for key in keys:
                pipe.hgetall(key)
            return await pipe.execute()

    async def _exists(self, key: str) -> bool:
        try:
            return bool(await self._redis.exists(key))
        except RedisError as e:
            raise BookStorageError(f"failed to check the book in the database: {e}") from e

    async def get_all(self) -> list[Book]:
        seen: set[str] = set()
        items: list[dict] = []
        cursor = 0
        try:
            while True:
                cursor, batch = await self._redis.scan(
                    cursor, match=f"{self._key_prefix}:*", count=SCAN_BATCH_SIZE
                )
                # SCAN may return a key more than once
                keys = [key for key in dict.fromkeys(map(_decode, batch)) if key not in seen]
                seen.update(keys)
                if keys:
                    items.extend(await self._read_page(keys))
                if cursor == 0:
                    break
        except RedisError as e:
            raise BookStorageError(
                f"failed to retrieve all the books from the database: {e}"
            ) from e

        # A key deleted between SCAN and HGETALL comes back empty
        return [self._unmarshal(item) for item in items if item]

    async def get_by_id(self, book_id: str) -> Book:
        try:
            item = await self._redis.hgetall(self._key(book_id))
        except RedisError as e:
            raise BookStorageError(
                f"failed to retrieve the book from the database: {e}"
            ) from e

        if not item:
            raise BookNotFoundError(book_id)
        return self._unmarshal(item)

    async def create(
        self, title: str, author: str, isbn: str, description: str
    ) -> Book:
        # TODO: reject the insert when another book already carries this ISBN
        new_book = Book(
            id=str(uuid.uuid4()),
            title=title,
            author=author,
            isbn=isbn,
            description=description,
        )
        try:
            await self._redis.hset(self._key(new_book.id), mapping=new_book.to_item())
        except RedisError as e:
            raise BookStorageError(
                f"failed to create the new book in the database: {e}"
            ) from e
        return new_book

    async def update(self, book_id: str, book: Book) -> Book:
        await self.get_by_id(book_id)

        key = self._key(book_id)
        fields = {
            "title": book.title,
            "author": book.author,
            "isbn": book.isbn,
            "description": book.description,
        }
        if book.status != BookStatus.UNSET:
            fields["book_status"] = book.status.value

        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                await pipe.watch(key)
                if not await pipe.exists(key):
                    raise BookNotFoundError(book_id)
                pipe.multi()
                pipe.hset(key, mapping=fields)
                pipe.hgetall(key)
                _, item = await pipe.execute()
        except WatchError as e:
            if not await self._exists(key):
                raise BookNotFoundError(book_id) from e
            logger.bind(book_id=book_id).warning("Book changed during update")
            raise BookStorageError(
                f"the book '{book_id}' was modified while it was being updated"
            ) from e
        except RedisError as e:
            raise BookStorageError(f"failed to update the book in the database: {e}") from e

        if not item:
            raise BookNotFoundError(book_id)
        return self._unmarshal(item)

    async def delete(self, book_id: str) -> None:
        await self.get_by_id(book_id)

        try:
            deleted = await self._redis.delete(self._key(book_id))
        except RedisError as e:
            raise BookStorageError(
                f"failed to delete the book from the database: {e}"
            ) from e

        if not deleted:
            raise BookNotFoundError(book_id)

    async def ping(self) -> bool:
        """Test Redis connection health."""
        try:
            await self._redis.ping()
            return True
        except RedisError:
            logger.warning("Redis ping failed")
            return False

    async def close(self) -> None:
        """Close the client and its connection pool."""
        try:
            await self._redis.aclose()
        except RedisError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Error closing Redis connection: {}", e
            )
