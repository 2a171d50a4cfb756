"""Book routes for local development.

Each route rebuilds the API Gateway envelope from the raw HTTP request and
hands it to the same ``BookService`` operation the Lambda handlers call, so
responses match what the deployed API returns.
"""

import base64

from fastapi import APIRouter, Depends, Request, Response

from src.library_api.api.http.deps import get_book_service
from src.library_api.api.lambdas.cors import with_cors
from src.library_api.core.models import ApiGatewayRequest, ApiGatewayResponse
from src.library_api.core.services import BookService

router = APIRouter()


async def to_envelope(request: Request) -> ApiGatewayRequest:
    """Translate an HTTP request into a proxy request envelope.

    The body is passed base64 encoded; the service decodes it to text.
    """
    raw_body = await request.body()
    return ApiGatewayRequest(
        http_method=request.method,
        path=request.url.path,
        headers=dict(request.headers),
        path_parameters={key: str(value) for key, value in request.path_params.items()} or None,
        query_string_parameters=dict(request.query_params) or None,
        body=base64.b64encode(raw_body).decode("ascii") if raw_body else None,
        is_base64_encoded=bool(raw_body),
    )


def from_envelope(envelope: ApiGatewayResponse) -> Response:
    return Response(
        content=envelope.body,
        status_code=envelope.status_code,
        headers=envelope.headers,
        media_type="application/json" if envelope.body else None,
    )


@router.get("/books")
async def list_books(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """List all books."""
    return from_envelope(await with_cors(service.get_books)(await to_envelope(request)))


@router.post("/books")
async def create_book(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """Create a new book."""
    return from_envelope(await with_cors(service.create_book)(await to_envelope(request)))


@router.get("/books/{book_id}")
async def get_book(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """Get a book by ID."""
    return from_envelope(await with_cors(service.get_book)(await to_envelope(request)))


@router.put("/books/{book_id}")
async def update_book(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """Update a book."""
    return from_envelope(await with_cors(service.update_book)(await to_envelope(request)))


@router.delete("/books/{book_id}")
async def delete_book(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """Delete a book."""
    return from_envelope(await with_cors(service.delete_book)(await to_envelope(request)))


@router.put("/books/{book_id}/checkout")
async def check_out_book(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """Check a book out."""
    return from_envelope(await with_cors(service.check_out)(await to_envelope(request)))


@router.put("/books/{book_id}/checkin")
async def check_in_book(
    request: Request, service: BookService = Depends(get_book_service)
) -> Response:
    """Check a book back in."""
    return from_envelope(await with_cors(service.check_in)(await to_envelope(request)))
