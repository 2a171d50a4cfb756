"""Book request handling.

``BookService`` turns API Gateway request envelopes into storage calls and
storage outcomes into response envelopes. Its operations never raise: every
failure is logged here, at the boundary, and rendered as an error envelope.

Status mapping:
    malformed request body          -> 400
    BookNotFoundError (not delete)  -> 404
    any other storage failure       -> 500
    response encoding failure       -> 500
    success                         -> 200
"""

from __future__ import annotations

from typing import Any

from fastapi import status
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from src.library_api.core.models import (
    ApiGatewayRequest,
    ApiGatewayResponse,
    ErrorResponse,
)
from src.library_api.core.storage import BookStorage
from src.library_api.entities.book import (
    Book,
    BookInput,
    BookNotFoundError,
    BookStatus,
)

BOOK_ID_PARAMETER = "book_id"

_BOOK_LIST = TypeAdapter(list[Book])


def _status_for(err: Exception) -> int:
    if isinstance(err, BookNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe_decode_error(err: ValueError) -> str:
    if not isinstance(err, ValidationError):
        return str(err)

    messages = []
    for detail in err.errors():
        location = ".".join(map(str, detail["loc"]))
        messages.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(messages)


class BookService:
    """Maps request envelopes onto a ``BookStorage`` backend."""

    def __init__(self, storage: BookStorage):
        self._storage = storage

    @property
    def storage(self) -> BookStorage:
        return self._storage

    async def get_books(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        """List every book."""
        try:
            books = await self._storage.get_all()
        except Exception as e:
            return self._error(
                e,
                "failed to retrieve books from the database",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                operation="get_books",
            )

        try:
            body = _BOOK_LIST.dump_json(books, by_alias=True).decode("utf-8")
        except PydanticSerializationError as e:
            return self._error(
                e,
                "failed to encode the books into an http response",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                operation="get_books",
            )

        return ApiGatewayResponse(status_code=status.HTTP_200_OK, body=body)

    async def get_book(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        """Fetch one book by the ``book_id`` path parameter."""
        book_id = request.path_parameter(BOOK_ID_PARAMETER)

        try:
            book = await self._storage.get_by_id(book_id)
        except Exception as e:
            return self._error(
                e,
                "failed to retrieve the book from the database",
                _status_for(e),
                operation="get_book",
                book_id=book_id,
            )

        return self._book_response(book, operation="get_book", book_id=book_id)

    async def create_book(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        """Create a book from the request body; storage assigns the id."""
        book_input = self._decode_body(request)
        if isinstance(book_input, ApiGatewayResponse):
            return book_input

        try:
            book = await self._storage.create(
                book_input.title,
                book_input.author,
                book_input.isbn,
                book_input.description,
            )
        except Exception as e:
            return self._error(
                e,
                "failed to create a new book in the database",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                operation="create_book",
            )

        logger.bind(operation="create_book", book_id=book.id).info("Book created")
        return self._book_response(book, operation="create_book", book_id=book.id)

    async def update_book(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        """Replace a book's fields with the request body."""
        book_id = request.path_parameter(BOOK_ID_PARAMETER)

        book_input = self._decode_body(request, book_id=book_id)
        if isinstance(book_input, ApiGatewayResponse):
            return book_input

        return await self._save(book_id, book_input.to_book(book_id), "update_book")

    async def delete_book(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        """Delete a book. Deleting a book that does not exist succeeds."""
        book_id = request.path_parameter(BOOK_ID_PARAMETER)

        try:
            await self._storage.delete(book_id)
        except BookNotFoundError:
            logger.bind(operation="delete_book", book_id=book_id).debug(
                "Book already absent"
            )
        except Exception as e:
            return self._error(
                e,
                "failed to delete the book from the database",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                operation="delete_book",
                book_id=book_id,
            )

        return ApiGatewayResponse(status_code=status.HTTP_200_OK)

    async def check_out(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        return await self._update_status(request, BookStatus.CHECKED_OUT, "check_out")

    async def check_in(self, request: ApiGatewayRequest) -> ApiGatewayResponse:
        return await self._update_status(request, BookStatus.CHECKED_IN, "check_in")

    async def _update_status(
        self, request: ApiGatewayRequest, new_status: BookStatus, operation: str
    ) -> ApiGatewayResponse:
        book_id = request.path_parameter(BOOK_ID_PARAMETER)

        try:
            book = await self._storage.get_by_id(book_id)
        except Exception as e:
            return self._error(
                e,
                "failed to retrieve the book from the database",
                _status_for(e),
                operation=operation,
                book_id=book_id,
            )

        book.status = new_status
        return await self._save(book_id, book, operation)

    async def _save(self, book_id: str, book: Book, operation: str) -> ApiGatewayResponse:
        try:
            updated = await self._storage.update(book_id, book)
        except Exception as e:
            return self._error(
                e,
                "failed to update the book in the database",
                _status_for(e),
                operation=operation,
                book_id=book_id,
            )

        logger.bind(operation=operation, book_id=book_id).info("Book updated")
        return self._book_response(updated, operation=operation, book_id=book_id)

    def _decode_body(
        self, request: ApiGatewayRequest, **log_fields: Any
    ) -> BookInput | ApiGatewayResponse:
        try:
            return BookInput.model_validate_json(request.decoded_body())
        except ValueError as e:
            return self._error(
                ValueError(_describe_decode_error(e)),
                "failed to decode the request body into a book object",
                status.HTTP_400_BAD_REQUEST,
                **log_fields,
            )

    def _book_response(self, book: Book, **log_fields: Any) -> ApiGatewayResponse:
        try:
            body = book.model_dump_json(by_alias=True)
        except PydanticSerializationError as e:
            return self._error(
                e,
                "failed to encode the book into an http response",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                **log_fields,
            )
        return ApiGatewayResponse(status_code=status.HTTP_200_OK, body=body)

    @staticmethod
    def _error(
        err: Exception, message: str, status_code: int, **log_fields: Any
    ) -> ApiGatewayResponse:
        log = logger.bind(status_code=status_code, error_type=type(err).__name__, **log_fields)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            log.opt(exception=err).error(message)
        else:
            log.warning("{}: {}", message, err)

        return ApiGatewayResponse(
            status_code=status_code,
            body=ErrorResponse(error=f"{message}: {err}").model_dump_json(),
        )
