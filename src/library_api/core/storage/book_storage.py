"""Book storage interface and backend selection.

Every backend exposes the same five async operations. Lookups, updates and
deletes of a missing id raise ``BookNotFoundError``; anything else that goes
wrong inside a backend is raised as ``BookStorageError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger

from src.library_api.entities.book import Book, BookStatus


class BookStorage(ABC):
    """Abstract interface for book storage backends."""

    @abstractmethod
    async def get_all(self) -> list[Book]:
        """Return every stored book.

        Returns:
            All books in no particular order; an empty list for an empty store
        """
        pass

    @abstractmethod
    async def get_by_id(self, book_id: str) -> Book:
        """Retrieve a single book.

        Args:
            book_id: Book identifier

        Raises:
            BookNotFoundError: If no book has this id
        """
        pass

    @abstractmethod
    async def create(
        self, title: str, author: str, isbn: str, description: str
    ) -> Book:
        """Store a new book under a freshly generated id.

        The new book's status is unset. ISBNs are not checked for uniqueness.

        Returns:
            The stored book, id included
        """
        pass

    @abstractmethod
    async def update(self, book_id: str, book: Book) -> Book:
        """Replace the stored fields of an existing book.

        Title, author, isbn and description are always replaced. The status
        is replaced only when ``book.status`` is set. The id is never changed,
        whatever ``book.id`` holds.

        Args:
            book_id: Book identifier
            book: Replacement values

        Raises:
            BookNotFoundError: If no book has this id
        """
        pass

    @abstractmethod
    async def delete(self, book_id: str) -> None:
        """Remove a book.

        Raises:
            BookNotFoundError: If no book has this id
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None


def merge_update(current: Book, book_id: str, changes: Book) -> Book:
    """Apply ``BookStorage.update`` semantics to an in-hand record."""
    return Book(
        id=book_id,
        title=changes.title,
        author=changes.author,
        isbn=changes.isbn,
        description=changes.description,
        status=changes.status if changes.status != BookStatus.UNSET else current.status,
    )


# Global storage instance
_storage: BookStorage | None = None


def _create_configured_storage() -> BookStorage:
    from src.library_api.runtime.context import get_config

    config = get_config()
    backend = config.storage.backend

    if backend == "redis":
        from .redis_book_storage import RedisBookStorage, create_redis_client

        logger.info(
            "Book storage: redis at {}", config.redis.sanitized_connection_string
        )
        return RedisBookStorage(
            create_redis_client(config.redis), key_prefix=config.storage.key_prefix
        )

    from .static_book_storage import StaticBookStorage

    logger.info("Book storage: static in-memory catalog")
    return StaticBookStorage()


def get_book_storage() -> BookStorage:
    """Get the configured book storage instance."""
    global _storage

    if _storage is None:
        _storage = _create_configured_storage()

    return _storage


def reset_book_storage() -> None:
    """Reset storage instance (for testing)."""
    global _storage
    _storage = None
