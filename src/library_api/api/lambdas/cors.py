"""Permissive CORS headers for every API response."""

import functools
from collections.abc import Awaitable, Callable

from src.library_api.core.models import ApiGatewayRequest, ApiGatewayResponse

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "OPTIONS,POST,GET,PUT,DELETE",
}

Operation = Callable[[ApiGatewayRequest], Awaitable[ApiGatewayResponse]]


def apply_cors(response: ApiGatewayResponse) -> ApiGatewayResponse:
    """Return a copy of ``response`` carrying the CORS headers.

    Headers already on the response are kept; CORS values win on conflict.
    """
    return response.model_copy(update={"headers": {**response.headers, **CORS_HEADERS}})


def with_cors(operation: Operation) -> Operation:
    """Decorate a service operation so its response always carries CORS headers."""

    @functools.wraps(operation)
    async def wrapper(request: ApiGatewayRequest) -> ApiGatewayResponse:
        return apply_cors(await operation(request))

    return wrapper
