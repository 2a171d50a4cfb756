"""AWS Lambda entry points.

Each ``*_handler`` is configured as the handler of one Lambda function behind
API Gateway's proxy integration, e.g.
``src.library_api.api.lambdas.handlers.get_books_handler``.

The service and its storage backend are created once per container and
reused by warm invocations. Coroutines run on one process-lifetime event loop
so pooled Redis connections stay bound to a live loop between invocations.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from fastapi import status
from loguru import logger
from pydantic import ValidationError

from src.library_api.api.lambdas.cors import apply_cors, with_cors
from src.library_api.api.utils.app_startup import configure_logging
from src.library_api.core.models import (
    ApiGatewayRequest,
    ApiGatewayResponse,
    ErrorResponse,
)
from src.library_api.core.services import BookService
from src.library_api.core.storage import get_book_storage

T = TypeVar("T")

LambdaHandler = Callable[[dict[str, Any], Any], dict[str, Any]]

_service: BookService | None = None
_loop: asyncio.AbstractEventLoop | None = None


def get_book_service() -> BookService:
    """Get the process-wide book service, building it on first use."""
    global _service

    if _service is None:
        configure_logging()
        _service = BookService(get_book_storage())

    return _service


def set_book_service(service: BookService | None) -> None:
    """Replace the process-wide service (for testing)."""
    global _service
    _service = service


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion on the process-lifetime event loop."""
    global _loop

    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()

    return _loop.run_until_complete(coro)


def _error_event(status_code: int, message: str) -> dict[str, Any]:
    response = ApiGatewayResponse(
        status_code=status_code,
        body=ErrorResponse(error=message).model_dump_json(),
    )
    return apply_cors(response).to_event()


def lambda_handler(operation_name: str) -> LambdaHandler:
    """Build the Lambda entry point for one ``BookService`` operation."""

    def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
        request_id = getattr(context, "aws_request_id", None) or "-"

        with logger.contextualize(request_id=request_id, operation=operation_name):
            try:
                request = ApiGatewayRequest.model_validate(event or {})
            except ValidationError as e:
                logger.warning("Malformed request event: {}", e)
                return _error_event(
                    status.HTTP_400_BAD_REQUEST,
                    f"failed to parse the request event: {e}",
                )

            try:
                operation = with_cors(getattr(get_book_service(), operation_name))
                response = run_sync(operation(request))
            except Exception:
                # The service renders its own failures; this is a crash in wiring
                logger.exception("Unhandled error while handling request")
                return _error_event(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error"
                )

            logger.bind(status_code=response.status_code).info("request.end")
            return response.to_event()

    handler.__name__ = f"{operation_name}_handler"
    handler.__qualname__ = handler.__name__
    return handler


get_books_handler = lambda_handler("get_books")
get_book_handler = lambda_handler("get_book")
create_book_handler = lambda_handler("create_book")
update_book_handler = lambda_handler("update_book")
delete_book_handler = lambda_handler("delete_book")
check_out_handler = lambda_handler("check_out")
check_in_handler = lambda_handler("check_in")

HANDLERS: dict[str, LambdaHandler] = {
    "get_books": get_books_handler,
    "get_book": get_book_handler,
    "create_book": create_book_handler,
    "update_book": update_book_handler,
    "delete_book": delete_book_handler,
    "check_out": check_out_handler,
    "check_in": check_in_handler,
}
