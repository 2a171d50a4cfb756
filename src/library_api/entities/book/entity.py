"""Entity: Book."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BookStatus(str, Enum):
    """Circulation status of a book.

    ``UNSET`` is the status of a freshly created book and is distinct from
    both real states.
    """

    UNSET = ""
    CHECKED_IN = "in"
    CHECKED_OUT = "out"


class Book(BaseModel):
    """Book entity representing a record in the library catalog.

    The ``id`` is assigned by the storage backend on creation and never
    changes afterwards. ``status`` travels as ``book_status`` on the wire.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="Unique identifier for the book")
    title: str = Field(default="", description="Title")
    author: str = Field(default="", description="Author")
    isbn: str = Field(default="", description="ISBN")
    description: str = Field(default="", description="Description")
    status: BookStatus = Field(
        default=BookStatus.UNSET,
        alias="book_status",
        description="Circulation status",
    )

    def to_item(self) -> dict[str, str]:
        """Flatten the book into string attributes keyed by wire name."""
        return self.model_dump(mode="json", by_alias=True)

    def __eq__(self, other: Any) -> bool:
        """Compare books by their stored attributes."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.isbn == other.isbn
            and self.description == other.description
            and self.status == other.status
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.title,
            self.author,
            self.isbn,
            self.description,
            self.status,
        ))


class BookInput(BaseModel):
    """Request body accepted when creating or updating a book.

    Unknown keys, ``id`` included, are ignored: the id always comes from
    storage or from the request path.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    author: str = ""
    isbn: str = ""
    description: str = ""
    status: BookStatus = Field(default=BookStatus.UNSET, alias="book_status")

    def to_book(self, book_id: str = "") -> Book:
        return Book(
            id=book_id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            description=self.description,
            status=self.status,
        )
