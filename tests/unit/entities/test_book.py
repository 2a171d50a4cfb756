"""Tests for the Book entity and its errors."""

import pytest
from pydantic import ValidationError

from src.library_api.entities.book import (
    Book,
    BookInput,
    BookNotFoundError,
    BookStatus,
    BookStorageError,
    LibraryError,
)


class TestBook:
    def test_defaults(self):
        book = Book()

        assert book.id == ""
        assert book.title == ""
        assert book.status is BookStatus.UNSET

    def test_status_uses_wire_name(self):
        book = Book.model_validate({"id": "1", "title": "T", "book_status": "out"})

        assert book.status is BookStatus.CHECKED_OUT
        assert book.model_dump(mode="json", by_alias=True)["book_status"] == "out"

    def test_status_accepts_python_name(self):
        assert Book(id="1", status=BookStatus.CHECKED_IN).status is BookStatus.CHECKED_IN

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            Book.model_validate({"id": "1", "book_status": "lost"})

    def test_to_item_is_flat_strings(self):
        book = Book(id="1", title="T", author="A", isbn="123", description="D")

        assert book.to_item() == {
            "id": "1",
            "title": "T",
            "author": "A",
            "isbn": "123",
            "description": "D",
            "book_status": "",
        }

    def test_equality_and_hash(self):
        a = Book(id="1", title="T")
        b = Book(id="1", title="T")

        assert a == b
        assert hash(a) == hash(b)
        assert a != Book(id="1", title="Other")
        assert a != "not a book"


class TestBookInput:
    def test_ignores_id_and_unknown_keys(self):
        book_input = BookInput.model_validate_json(
            '{"id": "forged", "title": "T", "shelf": 4}'
        )

        assert book_input.to_book("real").id == "real"
        assert book_input.title == "T"

    def test_partial_body(self):
        book_input = BookInput.model_validate_json('{"isbn": "12345"}')

        assert book_input.isbn == "12345"
        assert book_input.author == ""
        assert book_input.status is BookStatus.UNSET

    def test_malformed_json(self):
        with pytest.raises(ValidationError):
            BookInput.model_validate_json("}")


class TestErrors:
    def test_not_found_carries_id(self):
        err = BookNotFoundError("abc")

        assert err.book_id == "abc"
        assert str(err) == "The book with ID 'abc' was not found"
        assert isinstance(err, LibraryError)

    def test_storage_error_is_not_not_found(self):
        err = BookStorageError("boom")

        assert isinstance(err, LibraryError)
        assert not isinstance(err, BookNotFoundError)
