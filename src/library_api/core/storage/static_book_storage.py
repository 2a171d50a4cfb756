"""In-memory book storage seeded with a fixed demo catalog."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Mapping

from src.library_api.entities.book import Book, BookNotFoundError

from .book_storage import BookStorage, merge_update


def _seed(book_id: str, title: str, author: str, isbn: str, description: str) -> Book:
    return Book(id=book_id, title=title, author=author, isbn=isbn, description=description)


STATIC_BOOKS: tuple[Book, ...] = (
    _seed(
        "448E55A3-E88E-4597-B3CB-11A844EFDA5D",
        "Fahrenheit 451",
        "Ray Bradbury",
        "9781451673265",
        "It was a pleasure to burn",
    ),
    _seed(
        "2E09FDF3-9DF2-4320-A86E-E2178262D4E6",
        "1984",
        "George Orwell",
        "9780452284234",
        "It was a bright cold day in April, and the clocks were striking thirteen",
    ),
    _seed(
        "9AEFE32B-0B69-4D9D-BC7B-E4B1C2B8616D",
        "Anna Karenina",
        "Leo Tolstoy",
        "9798560833640",
        "Happy families are all alike; every unhappy family is unhappy in its own way",
    ),
    _seed(
        "EA31C594-CDBB-4740-981F-B77AFA3C0FBA",
        "Moby Dick",
        "Herman Melville",
        "9781514649749",
        "Call me Ishmael",
    ),
    _seed(
        "E7EC1121-8310-4B1D-93C2-BFF01B5F90A2",
        "The Great Gatsby",
        "F. Scott Fitzgerald",
        "9780743273565",
        "In my younger and more vulnerable years my father gave me some advice "
        "that I've been turning over in my mind ever since",
    ),
    _seed(
        "E0805B34-2369-469F-9AE0-81A812229A86",
        "The Catcher in the Rye",
        "J.D. Salinger",
        "9780316769174",
        "If you really want to hear about it, the first thing you'll probably want "
        "to know is where I was born, and what my lousy childhood was like, and how "
        "my parents were occupied and all before they had me, and all that David "
        "Copperfield kind of crap, but I don't feel like going into it, if you want "
        "to know the truth",
    ),
    _seed(
        "0E119988-56A7-487B-AC3A-C867CC4D4353",
        "The Restaurant at the End of the Universe",
        "Douglas Adams",
        "9789123918430",
        "The story so far: in the beginning, the universe was created. This has made "
        "a lot of people very angry and been widely regarded as a bad move",
    ),
    _seed(
        "6B94AEF7-ABEC-483E-82CB-2B6E2B801997",
        "Fear and Loathing in Las Vegas",
        "Hunter S. Thompson",
        "9780679785897",
        "We were somewhere around Barstow on the edge of the desert when the drugs "
        "began to take hold",
    ),
    _seed(
        "3E020259-42AF-4564-BF1F-FC57B0977EE2",
        "Beloved",
        "Toni Morrison",
        "9781400033416",
        "124 was spiteful. Full of Baby's venom",
    ),
    _seed(
        "78D9D95E-EE03-4B0D-8DAA-5E0BB9AC11D7",
        "The Martian",
        "Andy Weir",
        "9781101905005",
        "I'm pretty much f*cked",
    ),
    _seed(
        "33BBCE73-BABF-40D1-BFF9-55DEC242BBEE",
        "Harry Potter and the Sorceror's Stone",
        "J.K. Rowling",
        "9781338596700",
        "Mr and Mrs Dursley, of number four Privet Drive, were proud to say that "
        "they were perfectly normal, thank you very much",
    ),
    _seed(
        "B98C89F1-E8F6-43FD-A3F8-4D5A1DA8E30B",
        "Old Man's War",
        "John Scalzi",
        "9780765348272",
        "On his 75th birthday John Perry did two things. First, he visited his "
        "wife's grave. Then he joined the army",
    ),
)


class StaticBookStorage(BookStorage):
    """Book storage backed by a dict owned by this instance.

    Books are handed out as copies so callers cannot change stored state
    without going through ``update``.
    """

    def __init__(self, books: Mapping[str, Book] | None = None):
        if books is None:
            books = {book.id: book for book in STATIC_BOOKS}
        self._books: dict[str, Book] = {
            book_id: book.model_copy() for book_id, book in books.items()
        }
        self._lock = asyncio.Lock()

    async def get_all(self) -> list[Book]:
        return [book.model_copy() for book in self._books.values()]

    async def get_by_id(self, book_id: str) -> Book:
        book = self._books.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book.model_copy()

    async def create(
        self, title: str, author: str, isbn: str, description: str
    ) -> Book:
        new_book = Book(
            id=str(uuid.uuid4()),
            title=title,
            author=author,
            isbn=isbn,
            description=description,
        )
        async with self._lock:
            self._books[new_book.id] = new_book
        return new_book.model_copy()

    async def update(self, book_id: str, book: Book) -> Book:
        async with self._lock:
            current = self._books.get(book_id)
            if current is None:
                raise BookNotFoundError(book_id)
            updated = merge_update(current, book_id, book)
            self._books[book_id] = updated
        return updated.model_copy()

    async def delete(self, book_id: str) -> None:
        async with self._lock:
            if self._books.pop(book_id, None) is None:
                raise BookNotFoundError(book_id)
